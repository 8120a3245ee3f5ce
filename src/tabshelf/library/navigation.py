# ABOUTME: Navigation controller: opens catalog entries and steps through the visible sequence.
# ABOUTME: A request token discards results of superseded loads; a version counter marks new documents.

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from tabshelf.fs.access import FileAccessProvider
from tabshelf.library.grouping import index_of
from tabshelf.library.types import CatalogEntry

logger = logging.getLogger(__name__)

OPEN_FAILED_NOTICE = "Can't open this file. It may have been moved. Re-import to relink."

SequenceSource = Callable[[], Sequence[CatalogEntry]]


@runtime_checkable
class DocumentSurface(Protocol):
    """Where published documents go.

    A change in `version` means the content is a different document and
    any per-document view state (page, zoom, scroll) must be discarded.
    """

    def show(self, content: bytes, version: int) -> None: ...

    def clear(self) -> None: ...

    def notify(self, message: str) -> None: ...


class NavState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


@dataclass
class NavigationSession:
    """Mutable navigation state owned by one controller.

    `request_token` grows on every navigation attempt; `document_version`
    grows only when content is actually published.
    """

    current_entry_id: str | None = None
    loading: bool = False
    request_token: int = 0
    document_version: int = 0
    content: bytes | None = None


class NavigationController:
    """Opens entries and drives previous/next over the live sequence.

    Loads may overlap. Each one captures the request token at start and
    publishes only if no newer request was issued meanwhile; otherwise its
    result is dropped. In-flight reads are never cancelled, only ignored.

    Args:
        files: Provider used to read the bytes behind an entry's reference.
        surface: Rendering surface receiving published content and notices.
        sequence: Returns the current linearized sequence. Called on every
            navigability check so positions always follow the live view.
    """

    def __init__(
        self,
        files: FileAccessProvider,
        surface: DocumentSurface,
        sequence: SequenceSource,
    ) -> None:
        self._files = files
        self._surface = surface
        self._sequence = sequence
        self.session = NavigationSession()

    @property
    def state(self) -> NavState:
        if self.session.loading:
            return NavState.LOADING
        if self.session.current_entry_id is None and self.session.content is None:
            return NavState.IDLE
        return NavState.READY

    def _next_token(self) -> int:
        self.session.request_token += 1
        return self.session.request_token

    def _publish(self, content: bytes) -> None:
        self.session.content = content
        self.session.document_version += 1
        self._surface.show(content, self.session.document_version)

    async def open_entry(self, entry: CatalogEntry) -> bool:
        """Load and publish an entry's document.

        The entry becomes current immediately so its label can be shown
        while the read is in flight. Any failure of the read clears the view
        and raises a notice, but the entry stays selected.

        Returns:
            True if this call published content, False if it failed or
            was superseded by a newer request.
        """
        token = self._next_token()
        self.session.current_entry_id = entry.id
        self.session.loading = True

        try:
            content = await self._files.read(entry.file_ref)
        except Exception as exc:
            if token != self.session.request_token:
                logger.debug("Dropping failure of superseded request %d", token)
                return False
            logger.warning("Failed to open %s: %s", entry.id, exc)
            self.session.content = None
            self.session.loading = False
            self._surface.clear()
            self._surface.notify(OPEN_FAILED_NOTICE)
            return False

        if token != self.session.request_token:
            logger.debug(
                "Dropping result of request %d; request %d is newer",
                token,
                self.session.request_token,
            )
            return False

        self.session.loading = False
        self._publish(content)
        return True

    def open_raw(self, content: bytes) -> None:
        """Publish content that is not part of the catalog.

        Supersedes any in-flight load and leaves no entry selected.
        """
        self._next_token()
        self.session.current_entry_id = None
        self.session.loading = False
        self._publish(content)

    @property
    def index(self) -> int:
        """Position of the current entry in the live sequence, or -1."""
        return index_of(self._sequence(), self.session.current_entry_id)

    @property
    def can_go_previous(self) -> bool:
        return not self.session.loading and self.index > 0

    @property
    def can_go_next(self) -> bool:
        if self.session.loading:
            return False
        position = self.index
        return 0 <= position < len(self._sequence()) - 1

    @property
    def current_label(self) -> str:
        """'Band - Album - Song' for the current entry, or '' if it is not visible."""
        sequence = self._sequence()
        position = index_of(sequence, self.session.current_entry_id)
        return sequence[position].label if position >= 0 else ""

    async def go_previous(self) -> bool:
        """Open the entry before the current one. No-op while loading or at the start."""
        if not self.can_go_previous:
            return False
        sequence = self._sequence()
        return await self.open_entry(sequence[index_of(sequence, self.session.current_entry_id) - 1])

    async def go_next(self) -> bool:
        """Open the entry after the current one. No-op while loading or at the end."""
        if not self.can_go_next:
            return False
        sequence = self._sequence()
        return await self.open_entry(sequence[index_of(sequence, self.session.current_entry_id) + 1])

    async def go_to(self, position: int) -> bool:
        """Open the entry at a 0-based position. No-op while loading or out of range."""
        sequence = self._sequence()
        if self.session.loading or not 0 <= position < len(sequence):
            return False
        return await self.open_entry(sequence[position])
