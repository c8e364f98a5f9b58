"""jview Console - Themed console singleton with semantic message methods."""

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.theme import Theme

SYMBOLS = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
    "info": "●",
}

CHROME_THEME = Theme({
    "success": "bold #22c55e",
    "error": "bold #ef4444",
    "warning": "bold #eab308",
    "info": "#3b82f6",
    "secondary": "dim #6b7280",
})


class JviewConsole:
    """Console for jview's own messages, separate from the data theme."""

    _instance: Optional["JviewConsole"] = None

    def __new__(cls) -> "JviewConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._console = RichConsole(theme=CHROME_THEME)
        return cls._instance

    @property
    def rich(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        self._console.print(*args, **kwargs)

    def success(self, message: str) -> None:
        self._console.print(f"[success]{SYMBOLS['success']} {escape(message)}[/]")

    def error(self, message: str, details: Optional[str] = None) -> None:
        self._console.print(f"[error]{SYMBOLS['error']} {escape(message)}[/]")
        if details:
            self._console.print(f"  [secondary]{escape(details)}[/]")

    def warning(self, message: str) -> None:
        self._console.print(f"[warning]{SYMBOLS['warning']}  {escape(message)}[/]")

    def info(self, message: str) -> None:
        self._console.print(f"[info]{SYMBOLS['info']} {escape(message)}[/]")


console = JviewConsole()
