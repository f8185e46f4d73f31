"""
Command-line interface for Code Diff Highlighter.

Compares an old and a new version of some code and shows the new version
with added lines in green and changed lines in yellow.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .comparison import compare_texts
from .config import DiffConfig
from .docx_writer import write_diff_docx
from .errors import DiffInputError, InputTooLargeError, StorageError, TextLoadError
from .html_renderer import write_html_report
from .models import ComparisonResult, OperationType
from .storage import SessionStore, restore_session
from .text_input import load_text, prepare_text

console = Console()

LINE_STYLES = {
    OperationType.ADDED: "black on green",
    OperationType.CHANGED: "black on yellow",
}


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@click.group()
def main() -> None:
    """
    Code Diff Highlighter - Line-level diff with changed-line detection.

    Examples:

        code-diff compare old.py new.py

        code-diff compare old.py new.py --html diff.html --threshold 0.8

        code-diff compare          (re-runs the last saved comparison)
    """


@main.command()
@click.argument("old_source", required=False)
@click.argument("new_source", required=False)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Similarity above which an added line counts as changed (default: 0.7).",
)
@click.option(
    "--consume-matches",
    is_flag=True,
    default=False,
    help="Pair each removed line with at most one changed line.",
)
@click.option(
    "--html",
    "html_path",
    type=click.Path(path_type=Path),
    help="Write an HTML report to this path.",
)
@click.option(
    "--docx",
    "docx_path",
    type=click.Path(path_type=Path),
    help="Write a Word document with highlighted lines to this path.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON instead of the highlighted view.",
)
@click.option(
    "--no-save",
    is_flag=True,
    default=False,
    help="Do not store the compared texts for the next run.",
)
@click.option(
    "--storage",
    type=click.Path(path_type=Path),
    envvar="CODE_DIFF_SESSION",
    help="Session file (default: ~/.code_diff_highlighter/session.json).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def compare(
    old_source: Optional[str],
    new_source: Optional[str],
    threshold: Optional[float],
    consume_matches: bool,
    html_path: Optional[Path],
    docx_path: Optional[Path],
    as_json: bool,
    no_save: bool,
    storage: Optional[Path],
    verbose: bool,
) -> None:
    """
    Compare OLD_SOURCE with NEW_SOURCE ("-" reads stdin).

    With no arguments the last saved pair is compared again.
    """
    _configure_logging(verbose)

    if bool(old_source) != bool(new_source):
        console.print("[red]Error:[/red] Provide both OLD_SOURCE and NEW_SOURCE, or neither")
        sys.exit(1)

    overrides = {"consume_on_match": consume_matches, "storage_path": storage}
    if threshold is not None:
        overrides["similarity_threshold"] = threshold
    config = DiffConfig(**overrides)
    store = SessionStore.from_config(config)

    try:
        if old_source:
            old_text = load_text(old_source)
            new_text = load_text(new_source)
            result = compare_texts(old_text, new_text, config)
        else:
            old_text = new_text = None
            result = restore_session(store, config)
            if result is None:
                console.print(f"[red]Error:[/red] No saved session to compare in {store.path}")
                sys.exit(1)
            if verbose:
                console.print(f"  Restored session from: {store.path}")

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            _display_result(result)

        if html_path:
            written = write_html_report(result, html_path)
            console.print(f"[green]HTML report saved to:[/green] {written}")
        if docx_path:
            written = write_diff_docx(result, docx_path)
            console.print(f"[green]Word document saved to:[/green] {written}")

        if old_text is not None and not no_save:
            store.save_pair(prepare_text(old_text), prepare_text(new_text))

    except TextLoadError as e:
        console.print(f"[red]Input error:[/red] {e}")
        sys.exit(1)
    except InputTooLargeError as e:
        console.print(f"[red]Input too large:[/red] {e}")
        sys.exit(1)
    except DiffInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Storage error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@main.command()
@click.option(
    "--storage",
    type=click.Path(path_type=Path),
    envvar="CODE_DIFF_SESSION",
    help="Session file (default: ~/.code_diff_highlighter/session.json).",
)
def clear(storage: Optional[Path]) -> None:
    """Forget the saved old and new texts."""
    store = SessionStore.from_config(DiffConfig(storage_path=storage))
    try:
        store.clear()
    except StorageError as e:
        console.print(f"[red]Storage error:[/red] {e}")
        sys.exit(1)
    console.print("[green]Saved session cleared.[/green]")


@main.command()
@click.option(
    "--storage",
    type=click.Path(path_type=Path),
    envvar="CODE_DIFF_SESSION",
    help="Session file (default: ~/.code_diff_highlighter/session.json).",
)
def show(storage: Optional[Path]) -> None:
    """Print the saved old and new texts."""
    store = SessionStore.from_config(DiffConfig(storage_path=storage))
    old_text, new_text = store.get_pair()

    if old_text is None and new_text is None:
        console.print("[dim]No saved session.[/dim]")
        return

    console.print(Panel(Text(old_text or ""), title="Old code", border_style="red"))
    console.print(Panel(Text(new_text or ""), title="New code", border_style="green"))


def _display_result(result: ComparisonResult) -> None:
    """Display the highlighted new code and the stats table."""
    body = Text()
    for index, line in enumerate(result.rendered):
        if index:
            body.append("\n")
        body.append(line.line or " ", style=LINE_STYLES.get(line.category, ""))

    console.print(Panel(body, title="New code", border_style="blue"))

    stats_table = Table(title="Diff Stats", show_header=True)
    stats_table.add_column("Added", style="green")
    stats_table.add_column("Changed", style="yellow")
    stats_table.add_column("Removed", style="red")
    stats_table.add_row(
        str(result.stats.added),
        str(result.stats.changed),
        str(result.stats.removed),
    )
    console.print(stats_table)


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
