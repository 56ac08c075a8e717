"""Render collection results to the terminal using rich."""

import pandas as pd
from rich import box
from rich.console import Console
from rich.table import Table

from podusage.application.collector import CollectionResult
from podusage.application.namespace_totals import build_namespace_totals

_MAX_PREVIEW_ROWS = 20

_TOTALS_HEADERS = {
    "namespace": "Namespace",
    "pods": "Pods",
    "containers": "Containers",
    "cpu_m": "CPU (m)",
    "memory_mib": "Memory (MiB)",
}


def _totals_table(totals: pd.DataFrame) -> Table:
    table = Table(
        title="Usage by namespace",
        show_lines=False,
        expand=True,
        box=box.SIMPLE_HEAVY,
    )
    for column, header in _TOTALS_HEADERS.items():
        justify = "left" if column == "namespace" else "right"
        table.add_column(header, overflow="fold", justify=justify)
    for record in totals.head(_MAX_PREVIEW_ROWS).itertuples(index=False):
        table.add_row(
            record.namespace,
            str(record.pods),
            str(record.containers),
            f"{record.cpu_m:.1f}",
            f"{record.memory_mib:.1f}",
        )
    return table


def render_collection(result: CollectionResult, console: Console | None = None) -> None:
    """Print namespace totals and skipped units."""
    console = console or Console()
    console.print(
        f"[bold cyan]Collected {result.pod_count} pods "
        f"({result.container_count} containers) "
        f"from {len(result.metrics)} namespaces[/bold cyan]"
    )

    totals = build_namespace_totals(result.metrics)
    if totals.empty:
        console.print("[dim]No pod metrics were collected.[/dim]")
    else:
        console.print(_totals_table(totals))
        if len(totals) > _MAX_PREVIEW_ROWS:
            console.print(
                f"[dim]Showing first {_MAX_PREVIEW_ROWS} of {len(totals)} "
                "namespaces.[/dim]"
            )

    if not result.skipped:
        return
    skipped = Table(title="Skipped units", box=box.SIMPLE_HEAVY, expand=True)
    skipped.add_column("Kind")
    skipped.add_column("Unit", overflow="fold")
    skipped.add_column("Reason", overflow="fold")
    for unit in result.skipped:
        skipped.add_row(unit.kind, unit.label, unit.reason)
    console.print(skipped)
    console.print(f"[yellow]{len(result.skipped)} units skipped[/yellow]")
