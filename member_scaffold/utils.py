"""Shared utility functions for the member scaffolder.

Provides the Rich console used for all user-facing output, the output
helpers built on it, and member-name validation.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Member name helpers
# ---------------------------------------------------------------------------

MAX_MEMBER_NAME_LENGTH = 64

# The name becomes both a directory and a double-quoted manifest entry, so
# separators, quotes, backslashes and whitespace are all excluded.
MEMBER_NAME_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")


def member_name_problem(name: str | None) -> str:
    """Explain why *name* cannot be used for a new member.

    Returns an empty string when the name is acceptable.

    Examples::

        member_name_problem("18-many-worlds") -> ""
        member_name_problem("a/b")            -> "'a/b' may only contain ..."
    """
    if name is None or name == "":
        return "a member name is required"
    if len(name) > MAX_MEMBER_NAME_LENGTH:
        return f"member name is longer than {MAX_MEMBER_NAME_LENGTH} characters"
    if not MEMBER_NAME_PATTERN.fullmatch(name):
        return (
            f"{name!r} may only contain letters, digits, '_', '-' and '.', "
            "and must start with a letter, digit or '_'"
        )
    return ""


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_copied(source: str, destination: str) -> None:
    """Print one ``'src' -> 'dst'`` line of the copy listing."""
    console.print(
        f"[dim]'{escape(source)}' -> '{escape(destination)}'[/dim]",
        highlight=False,
        soft_wrap=True,
    )


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", soft_wrap=True)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", soft_wrap=True)
