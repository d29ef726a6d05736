"""Technical-term normalization for recognized speech.

Speech engines spell developer vocabulary phonetically ("type script",
"cube c t l"). ``TermNormalizer`` rewrites those misrecognitions into their
canonical spelling with case-insensitive whole-word matching. Word
boundaries are ASCII-only: an accented letter next to a phrase counts as
a boundary, so "éjson" becomes "éJSON".

Entries are applied in declaration order and each one sees the output of
the previous ones, so the table order matters: an early entry can consume
text a later entry was meant to match (``sequel`` runs before
``no sequel``, so "no sequel" becomes "no SQL", never "NoSQL").
"""

import re
from collections.abc import Mapping
from types import MappingProxyType

TERM_CORRECTIONS: Mapping[str, str] = MappingProxyType(
    {
        # JavaScript / TypeScript
        "use state": "useState",
        "use effect": "useEffect",
        "use memo": "useMemo",
        "use ref": "useRef",
        "use callback": "useCallback",
        "use context": "useContext",
        "use reducer": "useReducer",
        "type script": "TypeScript",
        "java script": "JavaScript",
        "node js": "Node.js",
        "next js": "Next.js",
        "react js": "React.js",
        "vue js": "Vue.js",
        "nuxt js": "Nuxt.js",
        "express js": "Express.js",
        "nest js": "NestJS",
        "j query": "jQuery",
        "json": "JSON",
        "ajax": "AJAX",
        "a sync": "async",
        "a wait": "await",
        "const": "const",
        "let": "let",
        "var": "var",
        # .NET / C#
        "c sharp": "C#",
        "dot net": ".NET",
        "asp dot net": "ASP.NET",
        "asp net": "ASP.NET",
        "entity framework": "Entity Framework",
        "ef core": "EF Core",
        "link": "LINQ",
        "new get": "NuGet",
        "nu get": "NuGet",
        "eye enumerable": "IEnumerable",
        "i enumerable": "IEnumerable",
        "i list": "IList",
        "i collection": "ICollection",
        "i queryable": "IQueryable",
        "action result": "ActionResult",
        "i action result": "IActionResult",
        "db context": "DbContext",
        "db set": "DbSet",
        # Python
        "pie thon": "Python",
        "python": "Python",
        "pip": "pip",
        "pi pi": "PyPI",
        "num pie": "NumPy",
        "num pi": "NumPy",
        "pandas": "pandas",
        "psycho pg": "psycopg",
        "django": "Django",
        "flask": "Flask",
        "fast api": "FastAPI",
        "fast a p i": "FastAPI",
        # DevOps / cloud
        "cubectl": "kubectl",
        "cube c t l": "kubectl",
        "kubectl": "kubectl",
        "docker": "Docker",
        "kubernetes": "Kubernetes",
        "k 8 s": "K8s",
        "k8s": "K8s",
        "aws": "AWS",
        "azure": "Azure",
        "gcp": "GCP",
        "terraform": "Terraform",
        "ansible": "Ansible",
        "jenkins": "Jenkins",
        "ci cd": "CI/CD",
        "c i c d": "CI/CD",
        "get hub": "GitHub",
        "git hub": "GitHub",
        "get lab": "GitLab",
        "git lab": "GitLab",
        "bit bucket": "Bitbucket",
        # Databases
        "my sequel": "MySQL",
        "my sql": "MySQL",
        "post gress": "PostgreSQL",
        "postgres": "PostgreSQL",
        "post gres q l": "PostgreSQL",
        "mongo db": "MongoDB",
        "redis": "Redis",
        "elastic search": "Elasticsearch",
        "dynamo db": "DynamoDB",
        "cosmos db": "CosmosDB",
        "fire base": "Firebase",
        "supabase": "Supabase",
        "sequel": "SQL",
        "s q l": "SQL",
        "no sequel": "NoSQL",
        # Package managers / CLI
        "npm": "npm",
        "n p m": "npm",
        "yarn": "yarn",
        "p npm": "pnpm",
        "pnpm": "pnpm",
        "homebrew": "Homebrew",
        "brew": "brew",
        "apt get": "apt-get",
        "apt": "apt",
        "yum": "yum",
        # APIs / protocols
        "rest api": "REST API",
        "rest a p i": "REST API",
        "graph ql": "GraphQL",
        "graph q l": "GraphQL",
        "grpc": "gRPC",
        "g r p c": "gRPC",
        "http": "HTTP",
        "https": "HTTPS",
        "web socket": "WebSocket",
        "web sockets": "WebSockets",
        "o auth": "OAuth",
        "oauth": "OAuth",
        "jwt": "JWT",
        "j w t": "JWT",
        # Common programming terms
        "api": "API",
        "a p i": "API",
        "sdk": "SDK",
        "s d k": "SDK",
        "cli": "CLI",
        "c l i": "CLI",
        "gui": "GUI",
        "g u i": "GUI",
        "ui": "UI",
        "u i": "UI",
        "ux": "UX",
        "u x": "UX",
        "html": "HTML",
        "h t m l": "HTML",
        "css": "CSS",
        "c s s": "CSS",
        "sass": "Sass",
        "scss": "SCSS",
        "regex": "regex",
        "reg ex": "regex",
        "localhost": "localhost",
        "local host": "localhost",
        "dev ops": "DevOps",
        "dev tools": "DevTools",
        "vs code": "VS Code",
        "v s code": "VS Code",
        "visual studio": "Visual Studio",
        "intellij": "IntelliJ",
        # File extensions / formats
        "dot json": ".json",
        "dot yaml": ".yaml",
        "dot yml": ".yml",
        "dot xml": ".xml",
        "dot cs": ".cs",
        "dot js": ".js",
        "dot ts": ".ts",
        "dot tsx": ".tsx",
        "dot jsx": ".jsx",
        "dot py": ".py",
        "dot env": ".env",
        "dot git ignore": ".gitignore",
        "git ignore": ".gitignore",
        # Shell commands
        "cd": "cd",
        "ls": "ls",
        "mkdir": "mkdir",
        "rm": "rm",
        "sudo": "sudo",
        "chmod": "chmod",
        "chown": "chown",
        "grep": "grep",
        "cat": "cat",
        "echo": "echo",
        "curl": "curl",
        "wget": "wget",
        # AI / ML
        "open ai": "OpenAI",
        "open a i": "OpenAI",
        "chat gpt": "ChatGPT",
        "gpt": "GPT",
        "g p t": "GPT",
        "llm": "LLM",
        "l l m": "LLM",
        "whisper": "Whisper",
        "tensor flow": "TensorFlow",
        "pie torch": "PyTorch",
        "pi torch": "PyTorch",
    }
)


class TermNormalizer:
    """Applies an ordered wrong -> canonical phrase table to text fragments.

    Args:
        corrections: Mapping of lowercase misrecognitions to replacements.
            Iteration order is the application order.
    """

    def __init__(self, corrections: Mapping[str, str] = TERM_CORRECTIONS) -> None:
        self._rules = [
            (re.compile(rf"\b{re.escape(wrong)}\b", re.IGNORECASE | re.ASCII), correct)
            for wrong, correct in corrections.items()
        ]

    def normalize(self, text: str, enabled: bool = True) -> str:
        """Rewrite every whole-word, case-insensitive match in table order.

        Args:
            text: A transcript fragment (final or interim).
            enabled: Session-scoped switch; ``False`` returns ``text`` as is.

        Returns:
            The corrected fragment.
        """
        if not enabled:
            return text
        for pattern, correct in self._rules:
            # Callable replacement keeps characters like "\" literal
            text = pattern.sub(lambda _m, c=correct: c, text)
        return text


_default_normalizer = TermNormalizer()


def normalize_terms(text: str, enabled: bool = True) -> str:
    """Normalize ``text`` with the built-in correction table."""
    return _default_normalizer.normalize(text, enabled=enabled)
