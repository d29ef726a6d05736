"""Request-scoped temporary files.

``TempArtifacts`` hands out collision-free paths inside the scratch
directory and deletes every path it issued when the ``with`` block exits,
whether the block succeeded or raised.
"""

import logging
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


class TempArtifacts:
    """Context manager owning the temporary files of one transcription.

    Args:
        temp_dir: Directory for the artifacts; created on entry.
    """

    def __init__(self, temp_dir: str | Path) -> None:
        self.temp_dir = Path(temp_dir)
        self._paths: list[Path] = []

    def __enter__(self) -> "TempArtifacts":
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, *_exc_info) -> None:
        self.cleanup()

    @property
    def paths(self) -> list[Path]:
        """Paths issued so far, in issue order."""
        return list(self._paths)

    def new_path(self, suffix: str = "") -> Path:
        """Reserve a unique path (``<uuid4><suffix>``); the file is not created."""
        path = self.temp_dir / f"{uuid.uuid4()}{suffix}"
        self._paths.append(path)
        return path

    def cleanup(self) -> None:
        """Delete every issued path that exists. Failures are logged only."""
        for path in self._paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Failed to cleanup file %s: %s", path, exc)
        self._paths.clear()
