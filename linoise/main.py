"""Click CLI entry point for linoise.

``linoise edit`` runs a line-editing session with persistent history;
``linoise ask`` walks through one question of each type.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .history import HISTORY_CAP, HistorySizeError, HistoryStore
from .question import Question
from .reader import LineReader, PromptLine, PromptToolkitReader

logger = logging.getLogger(__name__)

console = Console()

# Default history file for the editing session.
HISTORY_PATH = os.path.expanduser("~/.linoise_history")


@click.group()
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log debug messages to stderr.",
)
@click.version_option(version=__version__, prog_name="linoise")
def cli(verbose: bool) -> None:
    """Typed terminal questions and persistent line history."""
    if verbose:
        logging.basicConfig(
            stream=sys.stderr,
            level=logging.DEBUG,
            format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        )


@cli.command()
@click.option(
    "--history",
    "history_path",
    default=HISTORY_PATH,
    type=click.Path(dir_okay=False),
    show_default=True,
    help="History file to load and save.",
)
@click.option(
    "--size",
    default=HISTORY_CAP,
    type=int,
    show_default=True,
    help="Maximum number of lines kept in the history.",
)
@click.option(
    "--prompt",
    "prompt_text",
    default="linoise> ",
    show_default=True,
    help="Prompt shown before each line.",
)
def edit(history_path: str, size: int, prompt_text: str) -> None:
    """Edit lines with history recall; Ctrl-D saves and exits.

    Lines starting with a space are recalled during the session but not
    written to the history file.
    """
    try:
        history = HistoryStore(history_path, size)
    except HistorySizeError as exc:
        raise click.BadParameter(str(exc), param_hint="--size")
    except OSError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    try:
        history.load()
        count = run_editor(PromptToolkitReader(history), PromptLine(prompt_text))
        if not history.save():
            console.print("[yellow]Warning:[/yellow] history was only partly saved")
    except OSError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    finally:
        # No-op after save(); releases the file when the session failed.
        history.close()

    logger.info("Session ended after %d lines", count)


def run_editor(reader: LineReader, prompt: PromptLine) -> int:
    """Read lines until end of input, echoing each one.

    Ctrl-C discards the current line; Ctrl-D ends the session.

    Returns:
        The number of non-blank lines entered.
    """
    count = 0

    while True:
        try:
            line = reader.read(prompt)
        except EOFError:
            console.print("\nGoodbye")
            break
        except KeyboardInterrupt:
            continue

        if not line.strip():
            continue

        count += 1
        console.print(line, markup=False, highlight=False)

    return count


@cli.command()
def ask() -> None:
    """Ask one question of each kind and print the answers."""
    try:
        with Question(reader=PromptToolkitReader()) as q:
            answers = [
                ("Name", q.read_string_default("Name", "guest")),
                ("Age", q.read_int("Age")),
                ("Height (m)", q.read_float_default("Height in metres", 1.75)),
                ("Colour", q.read_choice_default("Colour", ["red", "green", "blue"], 1)),
                ("Newsletter", q.read_bool("Subscribe to the newsletter?", True)),
            ]
    except (EOFError, KeyboardInterrupt):
        console.print("\nCancelled")
        sys.exit(1)

    table = Table(title="Answers")
    table.add_column("Question", style="bold")
    table.add_column("Answer")
    for name, value in answers:
        table.add_row(name, str(value))
    console.print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
