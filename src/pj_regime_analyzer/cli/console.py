"""Rich console configuration for CLI output."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Custom theme for PJ Regime Analyzer
THEME = Theme(
    {
        "warning": "yellow",
        "error": "red bold",
        "success": "green",
        "highlight": "magenta",
        "muted": "dim",
        "header": "bold blue",
        "currency": "green",
        "best": "green bold",
    }
)

# Global console instance
console = Console(theme=THEME)

# Log records go to stderr so command output stays clean
log_console = Console(theme=THEME, stderr=True)


def _print_tagged(style: str, rotulo: str, message: str) -> None:
    # Messages may carry user input such as "[1, 2]", which is not markup
    texto = escape(message)
    if rotulo:
        console.print(f"[{style}]{rotulo}[/{style}] {texto}")
    else:
        console.print(f"[{style}]{texto}[/{style}]")


def print_error(message: str) -> None:
    """Domain error shown before a command exits with status 1."""
    _print_tagged("error", "Erro:", message)


def print_warning(message: str) -> None:
    """Non-fatal notice, e.g. a report that could not be saved."""
    _print_tagged("warning", "Aviso:", message)


def print_success(message: str) -> None:
    _print_tagged("success", "", message)
