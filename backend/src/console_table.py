import os

from rich.console import Console
from rich.table import Table

SHOULD_PRINT = os.environ.get("SHOULD_PRINT", "").lower() in ("1", "true", "yes")

console = Console()


def print_pie_chart(statistic):
    table = Table(*statistic.headings)

    for row in statistic.data:
        table.add_row(
            f"[{row.color}]{row.label}[/{row.color}]",
            str(row.value),
            row.percent,
        )
    console.print(table)
