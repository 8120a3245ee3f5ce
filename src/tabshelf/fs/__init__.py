# ABOUTME: File-access package: the boundary between opaque references and real files.
# ABOUTME: Exports the reference type, provider protocol, local implementation, and errors.

from tabshelf.fs.access import (
    DirEntry,
    FileAccessError,
    FileAccessProvider,
    FileStat,
    LocalFileAccess,
    PermissionDeniedError,
    StaleReferenceError,
)
from tabshelf.fs.ref import FileRef, ref_for_path

__all__ = [
    "DirEntry",
    "FileAccessError",
    "FileAccessProvider",
    "FileRef",
    "FileStat",
    "LocalFileAccess",
    "PermissionDeniedError",
    "StaleReferenceError",
    "ref_for_path",
]
