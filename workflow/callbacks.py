"""Status callbacks for reporting retry and refinement progress."""

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class StatusCallback(Protocol):
    """Single-slot observer receiving human-readable status messages."""

    def __call__(self, message: str) -> None:
        ...


def safe_status(callback: Optional[StatusCallback]) -> Callable[[str], None]:
    """Wrap a status sink so a failing sink never breaks a generation action."""

    def _emit(message: str) -> None:
        if callback is None:
            return
        try:
            callback(message)
        except Exception:
            logger.exception("Status callback failed for message: %s", message)

    return _emit


class RichStatusCallback:
    """Shows the latest status message on a Rich spinner line."""

    def __init__(self, console=None, initial: str = "Working..."):
        self._console = console
        self._initial = initial
        self._status = None

    def start(self):
        """Start the spinner. Call before running the action."""
        from rich.console import Console

        console = self._console or Console()
        self._status = console.status(f"[dim]{self._initial}[/]", spinner="dots")
        self._status.start()

    def stop(self):
        if self._status:
            self._status.stop()
            self._status = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def __call__(self, message: str) -> None:
        if not self._status:
            return
        self._status.update(f"[dim]{message}[/]")
