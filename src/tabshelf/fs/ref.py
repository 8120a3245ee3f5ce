# ABOUTME: Opaque file reference type shared by the catalog and the file-access boundary.
# ABOUTME: A FileRef is stored and passed around but only dereferenced by a provider.

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileRef:
    """Opaque reference to a backing document or directory.

    Only a FileAccessProvider knows how to turn a reference into bytes,
    directory listings, or permission answers. Everything else just
    stores and passes it along.
    """

    token: str

    def __str__(self) -> str:
        return self.token


def ref_for_path(path: Path) -> FileRef:
    """Create a reference to a local path."""
    return FileRef(str(path.resolve()))
