# ABOUTME: Shared pytest fixtures for tabshelf tests.
# ABOUTME: Provides Band/Album/Song folder trees, entry factories, and in-memory catalogs.

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from tabshelf.db.catalog import CatalogStore
from tabshelf.db.kvstore import MemoryKeyValueStore
from tabshelf.fs.ref import FileRef
from tabshelf.library.types import CatalogEntry, derive_entry_id

# Fixed modification times (epoch seconds) so entry ids are predictable
BASE_MTIME = 1_700_000_000


def _write_pdf(path: Path, mtime: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"%PDF-1.4 " + path.stem.encode())
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def band_tree(tmp_path: Path) -> Path:
    """Create a Band/Album/Song.pdf tree with every supported depth.

    Layout:
        Library/
            Metallica/
                Ride the Lightning/
                    For Whom the Bell Tolls.pdf
                    Fade to Black.pdf
                Master of Puppets/
                    Battery.pdf
                Orion.pdf
            Solo.pdf
            notes.txt
    """
    root = tmp_path / "Library"
    ride = root / "Metallica" / "Ride the Lightning"
    _write_pdf(ride / "For Whom the Bell Tolls.pdf", BASE_MTIME + 10)
    _write_pdf(ride / "Fade to Black.pdf", BASE_MTIME + 20)
    _write_pdf(root / "Metallica" / "Master of Puppets" / "Battery.pdf", BASE_MTIME + 30)
    _write_pdf(root / "Metallica" / "Orion.pdf", BASE_MTIME + 40)
    _write_pdf(root / "Solo.pdf", BASE_MTIME + 50)
    (root / "notes.txt").write_text("not a document")
    return root


EntryFactory = Callable[..., CatalogEntry]


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory for CatalogEntry values with sensible defaults.

    The id is derived from the file name and modification time, so two
    calls with the same song and last_modified produce the same id.
    """

    def _make(
        band: str = "Metallica",
        album: str | None = "Ride the Lightning",
        song: str = "Fade to Black",
        last_modified: int = 1_000,
        **overrides,
    ) -> CatalogEntry:
        file_name = overrides.pop("file_name", f"{song}.pdf")
        return CatalogEntry(
            id=overrides.pop("id", derive_entry_id(file_name, last_modified)),
            band=band,
            album=album,
            song=song,
            file_ref=overrides.pop("file_ref", FileRef(f"/music/{band}/{album}/{file_name}")),
            file_name=file_name,
            file_size=overrides.pop("file_size", 1024),
            last_modified=last_modified,
            **overrides,
        )

    return _make


@pytest.fixture
def memory_store() -> CatalogStore:
    """A CatalogStore backed by an in-memory key-value store."""
    return CatalogStore(MemoryKeyValueStore())


@pytest.fixture
def metallica(make_entry: EntryFactory) -> list[CatalogEntry]:
    """Three songs across two Metallica albums."""
    return [
        make_entry(album="Ride the Lightning", song="For Whom the Bell Tolls", last_modified=3_000),
        make_entry(album="Ride the Lightning", song="Fade to Black", last_modified=1_000),
        make_entry(album="Master of Puppets", song="Battery", last_modified=2_000),
    ]
