"""Shared utility functions for modgen.

Provides the name derivations used throughout the generator (slugs, class
names) and Rich-based console helpers for reporting results to the user.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Convert a display name to a lowercase, hyphenated slug.

    * Lowercases the input.
    * Replaces every run of non-alphanumeric characters with a hyphen.
    * Strips leading/trailing hyphens.

    Examples::

        slugify("My Module") -> "my-module"
        slugify("  Web Connector 2.0 ") -> "web-connector-2-0"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower())
    return slug.strip("-")


def to_class_name(name: str) -> str:
    """Convert a display name to a PascalCase class name.

    Non-identifier characters act as word separators and are dropped.  Only
    the first letter of each word is upper-cased, so acronyms survive:
    ``"OMRON driver"`` becomes ``"OMRONDriver"``.
    """
    words = re.split(r"[^0-9A-Za-z]+", name)
    return "".join(word[:1].upper() + word[1:] for word in words if word)


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
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
