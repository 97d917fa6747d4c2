"""Rich formatting and display for resolution results."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .diagnostics import ancestry_path
from .models import AnalysisResult, Conflict, ConflictKind, MethodResolution, NoMatchFound, Outcome, Target
from .type_model import TypeRegistry


def format_outcome(outcome: Outcome) -> tuple[Text, str]:
    """Return the styled outcome label and a one-line detail for a table row."""
    match outcome:
        case Target(method=method):
            return Text("target", style="green"), str(method)
        case Conflict(kind=ConflictKind.ABSTRACT_METHOD_ERROR, detail=detail):
            return Text(ConflictKind.ABSTRACT_METHOD_ERROR.value, style="yellow"), detail
        case Conflict(kind=kind, candidates=candidates):
            return Text(kind.value, style="bold red"), f"{len(candidates)} candidates"
        case NoMatchFound():
            return Text("no match", style="dim"), ""


def format_results_table(result: AnalysisResult) -> Table:
    """Create Rich table displaying one row per resolved method."""
    table = Table(title="Default Method Resolution")

    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Signature", style="magenta")
    table.add_column("Outcome")
    table.add_column("Detail")

    for resolution in result.resolutions:
        label, detail = format_outcome(resolution.outcome)
        table.add_row(resolution.name, Text(resolution.signature or "-"), label, Text(detail))

    return table


def display_conflict_details(console: Console, registry: TypeRegistry, result: AnalysisResult) -> None:
    """List every candidate of each incompatible conflict and how the root reaches it."""
    root = registry.get(result.root)
    for resolution in result.conflicts:
        conflict = resolution.outcome
        assert isinstance(conflict, Conflict)
        if not conflict.candidates:
            continue

        method = escape(f"{resolution.name}{resolution.signature}")
        console.print(f"\n[bold red]{method}[/bold red] is ambiguous for {escape(result.root)}:")
        for candidate in conflict.candidates:
            path = ancestry_path(registry, root, candidate.declaring_type)
            via = " -> ".join(path) if path else "?"
            console.print(f"  {candidate}  (via {via})", markup=False, highlight=False)


def print_summary(console: Console, resolutions: tuple[MethodResolution, ...]) -> None:
    """Print counts of each outcome."""
    if not resolutions:
        console.print("[yellow]No methods found to resolve.[/yellow]")
        return

    targets = sum(1 for r in resolutions if isinstance(r.outcome, Target))
    conflicts = sum(1 for r in resolutions if isinstance(r.outcome, Conflict))

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"Methods resolved: {len(resolutions)}")
    console.print(f"Unique targets: {targets}")
    console.print(f"Conflicts: {conflicts}")

    if conflicts == 0:
        console.print("[green]Every method resolved without conflict.[/green]")
    else:
        console.print(f"[yellow]{conflicts} method(s) cannot be linked.[/yellow]")


def display_results(console: Console, registry: TypeRegistry, result: AnalysisResult) -> None:
    """Display complete analysis results with table, conflict details, and summary."""
    if not result.resolutions:
        console.print("[yellow]No methods found to resolve.[/yellow]")
        return

    console.print(format_results_table(result))
    display_conflict_details(console, registry, result)
    print_summary(console, result.resolutions)
