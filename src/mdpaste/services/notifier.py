"""Console notifications for the paste command."""

from typing import Optional

from rich.console import Console

_LEVEL_STYLES = {
    "info": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
}


class ConsoleNotifier:
    """Prints toast-style notifications to the terminal.

    Notifications are also kept in `history`, newest last.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.history: list[tuple[str, str, str]] = []

    def notify(
        self,
        title: str,
        message: str,
        *,
        level: str = "info",
        auto_dismiss_ms: Optional[int] = None,
    ) -> None:
        # auto_dismiss_ms has no meaning on a terminal
        self.history.append((level, title, message))
        style = _LEVEL_STYLES.get(level, "bold")
        self.console.print(f"[{style}]{title}[/{style}]: {message}", highlight=False)

    @property
    def failed(self) -> bool:
        """True if any error notification was shown."""
        return any(level == "error" for level, _, _ in self.history)
