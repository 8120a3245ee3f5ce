# ABOUTME: Console rendering surface for the browse and folder commands.
# ABOUTME: Reports published documents and notices, optionally mirroring content to a file.

from pathlib import Path

from rich.console import Console
from rich.markup import escape


class ConsoleSurface:
    """DocumentSurface that prints what was published.

    When `mirror` is set, each published document is written there so an
    external viewer watching that path can render it. A failed mirror
    write is reported as a notice and the session carries on.
    """

    def __init__(self, console: Console, mirror: Path | None = None) -> None:
        self._console = console
        self._mirror = mirror
        self.version = 0

    def show(self, content: bytes, version: int) -> None:
        self.version = version
        if self._mirror is not None:
            try:
                self._mirror.write_bytes(content)
            except OSError as exc:
                self.notify(f"Could not write {self._mirror}: {exc}")
        self._console.print(f"[dim]document v{version}, {len(content)} bytes[/dim]")

    def clear(self) -> None:
        if self._mirror is None:
            return
        try:
            self._mirror.unlink(missing_ok=True)
        except OSError as exc:
            self.notify(f"Could not remove {self._mirror}: {exc}")

    def notify(self, message: str) -> None:
        self._console.print(f"[red]{escape(message)}[/red]")
