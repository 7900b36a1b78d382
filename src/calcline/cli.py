"""
calcline CLI.

Commands:
    calcline repl              read lines from stdin until end of input
    calcline eval LINE...      run each argument as a line, in order
    calcline --version         show version information
"""

import logging
import platform
import sys

import typer

from calcline import cli_ui
from calcline._version import get_version
from calcline.core.calculator import Calculator
from calcline.core.errors import CalculatorError

logger = logging.getLogger(__name__)

# Commands start with ":", which no identifier can
_QUIT_COMMANDS = {":quit", ":exit"}
_VARS_COMMAND = ":vars"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"calcline version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()}"
            f" on {platform.system()} {platform.machine()}"
        )
        raise typer.Exit()


# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="""calcline – line-oriented calculator

Enter expressions like 2 + 3 * 4 or assignments like total = a + b.
Assigned variables are re-evaluated every time they are used.
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """calcline CLI main callback for global options."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        typer.echo(f"Unknown log level: {log_level}", err=True)
        raise typer.Exit(code=2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_line(calculator: Calculator, line: str) -> bool:
    """Execute one line and print its outcome. Returns False if it failed."""
    try:
        result = calculator.execute(line)
    except CalculatorError as e:
        cli_ui.print_error(str(e))
        return False

    if result is not None:
        cli_ui.print_result(result)
    return True


@app.command("repl")
def repl_command() -> None:
    """Read lines from stdin and evaluate each one.

    ':vars' lists the current variables; ':quit' or ':exit' (or end of input)
    stops the loop. Every other line is executed, so variables may be named
    'vars' or 'quit'.
    """
    calculator = Calculator()
    interactive = cli_ui.is_interactive()

    while True:
        if interactive:
            cli_ui.print_prompt()
        try:
            raw = sys.stdin.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("stdin read failed", exc_info=True)
            cli_ui.print_error(f"unexpected error occurred while reading input: {e}")
            break

        if raw == "":
            break

        text = raw.strip()
        if not text or text.startswith("#"):
            continue
        if text in _QUIT_COMMANDS:
            break
        if text == _VARS_COMMAND:
            cli_ui.print_variables(calculator.environment)
            continue

        run_line(calculator, text)


@app.command("eval", context_settings={"ignore_unknown_options": True})
def eval_command(
    lines: list[str] = typer.Argument(..., help="Lines to run in order, e.g. 'a = 2' 'a * 3'"),
) -> None:
    """Evaluate each argument as a line, sharing variables between them.

    Lines may start with '-', as in 'calcline eval -3'.
    """
    calculator = Calculator()
    failed = 0
    for line in lines:
        if not run_line(calculator, line):
            failed += 1

    if failed:
        raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
