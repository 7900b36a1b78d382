"""
Rich console output for the calcline CLI.

Results print green on stdout, errors red on stderr.
"""

import sys

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from calcline.core.environment import Environment
from calcline.core.ir.numbers import Number
from calcline.core.ir.tokens import format_tokens

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

# Style definitions
STYLES = {
    "prompt": Style(color="bright_cyan", bold=True),
    "result": Style(color="green"),
    "error": Style(color="red"),
    "muted": Style(color="bright_black"),
    "name": Style(color="bright_cyan"),
}

PROMPT = ">>> "


def is_interactive() -> bool:
    """True when both stdin and stdout are terminals."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def print_prompt() -> None:
    console.print(Text(PROMPT, style=STYLES["prompt"]), end="")


def print_result(result: Number) -> None:
    """Print an evaluation result."""
    console.print(Text(f">> {result}", style=STYLES["result"]))


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(Text(message, style=STYLES["error"]))


def print_variables(environment: Environment) -> None:
    """Print the stored assignments as a table."""
    if not len(environment):
        console.print(Text("No variables defined.", style=STYLES["muted"]))
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Name", style=STYLES["name"])
    table.add_column("Definition")
    for name, tokens in environment.items():
        table.add_row(name, Text(format_tokens(tokens[2:])))
    console.print(table)
