# ABOUTME: File-access provider boundary: permissions, directory listing, and document reads.
# ABOUTME: The only place where an opaque FileRef is turned into real filesystem access.

import asyncio
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from tabshelf.fs.ref import FileRef

logger = logging.getLogger(__name__)


class FileAccessError(Exception):
    """Base class for failures at the file-access boundary."""


class PermissionDeniedError(FileAccessError):
    """Raised when read permission for a reference cannot be obtained."""


class StaleReferenceError(FileAccessError):
    """Raised when a catalogued reference no longer resolves (moved, deleted, unreadable)."""


@dataclass(frozen=True)
class DirEntry:
    """One child of a directory reference."""

    name: str
    kind: Literal["file", "directory"]
    ref: FileRef


@dataclass(frozen=True)
class FileStat:
    """Provenance metadata for a file reference."""

    name: str
    size: int
    last_modified: int  # epoch milliseconds


@runtime_checkable
class FileAccessProvider(Protocol):
    """Protocol for anything that can resolve opaque file references.

    Implementations own the mapping from FileRef to real storage. Callers
    never dereference a FileRef themselves.
    """

    def request_permission(self, ref: FileRef) -> bool: ...

    def iter_directory(self, ref: FileRef) -> Iterator[DirEntry]: ...

    def stat(self, ref: FileRef) -> FileStat: ...

    async def read(self, ref: FileRef) -> bytes: ...


class LocalFileAccess:
    """FileAccessProvider backed by the local filesystem.

    References are absolute path strings. Reads run in a worker thread so
    the event loop driving navigation stays responsive.
    """

    def _path(self, ref: FileRef) -> Path:
        return Path(ref.token)

    def request_permission(self, ref: FileRef) -> bool:
        """Report whether the reference exists and is readable by this process."""
        path = self._path(ref)
        mode = os.R_OK | os.X_OK if path.is_dir() else os.R_OK
        granted = path.exists() and os.access(path, mode)
        if not granted:
            logger.warning("Read permission not granted for %s", path)
        return granted

    def iter_directory(self, ref: FileRef) -> Iterator[DirEntry]:
        """Yield the direct children of a directory reference, sorted by name.

        Symlinked directories are skipped so a link back up the tree cannot
        make a recursive walk revisit it.

        Raises:
            StaleReferenceError: If the directory cannot be listed.
        """
        path = self._path(ref)
        try:
            children = sorted(path.iterdir(), key=lambda child: child.name)
        except OSError as exc:
            raise StaleReferenceError(f"Cannot list {path}: {exc}") from exc

        for child in children:
            if child.is_dir() and child.is_symlink():
                logger.debug("Skipping symlinked directory %s", child)
            elif child.is_dir():
                yield DirEntry(name=child.name, kind="directory", ref=FileRef(str(child)))
            elif child.is_file():
                yield DirEntry(name=child.name, kind="file", ref=FileRef(str(child)))

    def stat(self, ref: FileRef) -> FileStat:
        """Return name, size, and modification time (epoch ms) for a file.

        Raises:
            StaleReferenceError: If the file no longer exists.
        """
        path = self._path(ref)
        try:
            info = path.stat()
        except OSError as exc:
            raise StaleReferenceError(f"Cannot stat {path}: {exc}") from exc
        return FileStat(
            name=path.name,
            size=info.st_size,
            last_modified=info.st_mtime_ns // 1_000_000,
        )

    async def read(self, ref: FileRef) -> bytes:
        """Materialize the current byte content of a file reference.

        Raises:
            StaleReferenceError: If the file is missing or unreadable.
        """
        path = self._path(ref)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise StaleReferenceError(f"Cannot read {path}: {exc}") from exc
