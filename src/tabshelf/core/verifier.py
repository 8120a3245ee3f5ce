# ABOUTME: Catalog integrity verification for tabshelf.
# ABOUTME: Finds entries whose file is gone and entries whose file changed since import.

from dataclasses import dataclass, field

from tabshelf.db.catalog import CatalogStore
from tabshelf.fs.access import FileAccessError, FileAccessProvider
from tabshelf.library.types import CatalogEntry


@dataclass
class VerifyResult:
    """Aggregated results from a catalog verification run."""

    ok: int = 0
    missing: list[CatalogEntry] = field(default_factory=list)
    outdated: list[CatalogEntry] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        """Total number of issues found across all categories."""
        return len(self.missing) + len(self.outdated)


def verify_catalog(store: CatalogStore, files: FileAccessProvider) -> VerifyResult:
    """Check every catalog entry against its backing file.

    An entry is missing when its reference no longer resolves. It is
    outdated when the file still exists but its modification time differs
    from the one recorded at import; re-importing such a file adds a new
    entry next to the old one.

    Args:
        store: The loaded catalog to verify.
        files: Provider used to resolve references.

    Returns:
        A VerifyResult with counts and lists of problematic entries.
    """
    result = VerifyResult()

    for entry in store.entries:
        try:
            info = files.stat(entry.file_ref)
        except FileAccessError:
            result.missing.append(entry)
            continue

        if info.last_modified != entry.last_modified:
            result.outdated.append(entry)
        else:
            result.ok += 1

    return result
