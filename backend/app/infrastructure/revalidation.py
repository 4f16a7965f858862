"""Path Revalidation — marks rendered views stale after successful mutations.

Invariants:
    - Each view path has a monotonically increasing version, starting at 0
    - revalidate_path() is only called after a mutation committed
    - etag_for() changes whenever the path is revalidated, so upstream
      HTTP caches holding the old response miss on the next read
"""

import logging

logger = logging.getLogger(__name__)


class PathRevalidator:
    """Per-process registry of view versions."""

    def __init__(self) -> None:
        self._versions: dict[str, int] = {}

    def revalidate_path(self, path: str) -> None:
        self._versions[path] = self._versions.get(path, 0) + 1
        logger.info(f"Revalidated {path}", extra={"path": path})

    def version(self, path: str) -> int:
        return self._versions.get(path, 0)

    def etag_for(self, path: str, *parts: object) -> str:
        """Weak ETag for a view of `path`; extra parts distinguish query variants."""
        suffix = "-".join(str(p) for p in parts)
        tag = f"{path.strip('/').replace('/', '.')}-v{self.version(path)}"
        return f'W/"{tag}-{suffix}"' if suffix else f'W/"{tag}"'
