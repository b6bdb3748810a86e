"""Rich display helpers for terminal output.

Provides formatted display functions for validation reports and
per-item validation results using Rich tables.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from formcheck.validation.outcome import ValidationStatus
from formcheck.validation.report import ValidationReport

_STATUS_STYLES = {
    ValidationStatus.VALID: "green",
    ValidationStatus.INVALID: "bold red",
    ValidationStatus.NOT_VALIDATED: "dim",
}


def display_validation_summary(report: ValidationReport, console: Console) -> None:
    """Print the status counts of a validation report.

    Args:
        report: ValidationReport to display.
        console: Rich Console for output.
    """
    table = Table(title="Validation Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Items Checked", str(len(report.items)))
    table.add_row("Valid", Text(str(report.valid_count), style="green"))

    invalid_style = "bold red" if report.invalid_count > 0 else "green"
    table.add_row("Invalid", Text(str(report.invalid_count), style=invalid_style))
    table.add_row("Not Validated", Text(str(report.not_validated_count), style="dim"))

    warn_style = "yellow" if report.warning_count > 0 else "green"
    table.add_row("Warnings", Text(str(report.warning_count), style=warn_style))

    status_text = (
        Text("VALID", style="bold green")
        if report.is_valid
        else Text("INVALID", style="bold red")
    )
    table.add_row("Response Status", status_text)

    console.print(table)


def display_item_results(
    report: ValidationReport,
    *,
    console: Console,
    show_valid: bool = False,
) -> None:
    """Print one row per item with its status and messages.

    Invalid items and items with warnings are always shown. Valid and
    skipped items are only shown when *show_valid* is set.

    Args:
        report: ValidationReport to display.
        console: Rich Console for output.
        show_valid: Include items without messages.
    """
    rows = [
        item
        for item in report.items
        if show_valid or item.result.messages or item.result.warnings
    ]
    if not rows:
        console.print("[dim]No validation issues found.[/dim]")
        return

    table = Table(title="Item Results", show_lines=True)
    table.add_column("Item", style="bold cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Messages")

    for item in rows:
        status = item.result.status
        lines = [escape(m) for m in item.result.messages]
        lines.extend(f"[yellow]warning:[/yellow] {escape(w)}" for w in item.result.warnings)
        table.add_row(
            Text(item.path),
            Text(status.value, style=_STATUS_STYLES[status]),
            "\n".join(lines) or "-",
        )

    console.print(table)
