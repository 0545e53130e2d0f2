"""Pretty-print support for diagram diffs.

Uses rich library for formatted terminal output. Functions accept their
target object and print to a rich Console.

To avoid circular imports, this module does NOT import domain models
at module level. Functions access object attributes dynamically.
"""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape


def _ensure_utf8_stdout() -> None:
    """Reconfigure stdout to UTF-8 on Windows to avoid cp1252 encoding errors."""
    import sys
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        try:
            sys.stdout.reconfigure(encoding="utf-8")
        except (OSError, ValueError):
            pass


def _make_console(file: Any = None) -> Console:
    """Create a Console, optionally writing to a file-like object."""
    if file is not None:
        return Console(file=file, force_terminal=True, width=100, highlight=False)
    _ensure_utf8_stdout()
    return Console(highlight=False)


def _describe(element: Any) -> str:
    """Short one-line rendering of an element for diff output."""
    from diagramkit.operations.diff import element_identifier

    rule, value = element_identifier(element)
    if rule == "value":
        data = element.to_dict() if hasattr(element, "to_dict") else element
        return escape(str(data))
    return escape(f"{rule}={value}")


def pprint_diagram_diff(diff: Any, *, file: Any = None) -> None:
    """Pretty-print a DiagramDiff grouped by element type.

    Args:
        diff: A DiagramDiff instance.
        file: Optional file-like object for output (used in tests).
    """
    console = _make_console(file)

    if not diff.changes:
        console.print("[dim]No changes[/dim]")
        return

    totals = {"added": 0, "removed": 0, "modified": 0}
    for element_type, delta in diff.changes.items():
        console.print(f"[bold]{escape(element_type)}[/bold]")
        for el in delta.added:
            console.print(f"  [green]+ {_describe(el)}[/green]")
        for el in delta.removed:
            console.print(f"  [red]- {_describe(el)}[/red]")
        for mod in delta.modified:
            console.print(f"  [yellow]~ {_describe(mod.old)}[/yellow]")
            old = mod.old.to_dict() if hasattr(mod.old, "to_dict") else mod.old
            new = mod.new.to_dict() if hasattr(mod.new, "to_dict") else mod.new
            if isinstance(old, dict) and isinstance(new, dict):
                for key in sorted(set(old) | set(new)):
                    if old.get(key) != new.get(key):
                        console.print(
                            f"      [yellow]{escape(key)}: "
                            f"{escape(repr(old.get(key)))} → {escape(repr(new.get(key)))}[/yellow]"
                        )
        totals["added"] += len(delta.added)
        totals["removed"] += len(delta.removed)
        totals["modified"] += len(delta.modified)

    console.print()
    parts: list[str] = []
    if totals["added"]:
        parts.append(f"[green]+{totals['added']} added[/green]")
    if totals["removed"]:
        parts.append(f"[red]-{totals['removed']} removed[/red]")
    if totals["modified"]:
        parts.append(f"[yellow]~{totals['modified']} modified[/yellow]")
    console.print("  ".join(parts))
