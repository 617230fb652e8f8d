"""Console logger with rich markup support"""

from __future__ import annotations

from datetime import datetime

from rich.console import Console


class RichLogger:
    """
    Prefixed logger which prints messages through a rich console.

    Messages may contain rich markup, e.g. `[bold]text[/bold]`.
    Debug messages are hidden unless `debug_enabled` is set.
    """

    def __init__(self, prefix: str, console: Console | None = None) -> None:
        self.prefix = prefix
        self.console = console or Console(stderr=True)
        self.debug_enabled = False

    def _log(self, level: str, style: str, message: str) -> None:
        timestamp = datetime.now().strftime('%H:%M:%S')  # noqa: DTZ005 local time is fine for console output
        self.console.print(
            f'[dim]{timestamp}[/dim] [{style}]{self.prefix}.{level}[/{style}]: {message}'
        )

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self._log('DEBUG', 'magenta', message)

    def info(self, message: str) -> None:
        self._log('INFO', 'cyan', message)

    def success(self, message: str) -> None:
        self._log('SUCCESS', 'green', message)

    def warning(self, message: str) -> None:
        self._log('WARNING', 'yellow', message)

    def error(self, message: str) -> None:
        self._log('ERROR', 'bold red', message)
