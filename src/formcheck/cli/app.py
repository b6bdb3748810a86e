"""formcheck CLI application entry point.

Provides commands for validating a questionnaire response against its
questionnaire and exporting the validation report.

Usage:
    formcheck version
    formcheck validate <questionnaire.json> <response.json> [--expressions values.json]
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from formcheck.errors import ExpressionEvaluationError, ResponseStructureError

app = typer.Typer(
    name="formcheck",
    help="Validate questionnaire responses against questionnaire constraints.",
    no_args_is_help=True,
)

console = Console()

EXIT_INVALID = 1
EXIT_DEFECT = 2


@app.command()
def version() -> None:
    """Show the current version."""
    from formcheck import __version__

    console.print(f"formcheck {__version__}")


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@app.command()
def validate(
    questionnaire_path: Annotated[
        Path,
        typer.Argument(help="Questionnaire JSON file"),
    ],
    response_path: Annotated[
        Path,
        typer.Argument(help="Questionnaire response JSON file"),
    ],
    expressions: Annotated[
        Path | None,
        typer.Option(
            "--expressions",
            "-e",
            help="JSON object of precomputed expression values",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file (.json or .md)"),
    ] = None,
    show_valid: Annotated[
        bool,
        typer.Option("--show-valid", help="List valid and skipped items too"),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level for diagnostic output"),
    ] = "WARNING",
) -> None:
    """Validate a questionnaire response.

    Exits 0 when every item is valid, 1 when an item is invalid or an input
    cannot be read, and 2 when the documents are inconsistent or an
    expression cannot be evaluated.
    """
    from formcheck.cli.display import display_item_results, display_validation_summary
    from formcheck.io.documents import (
        load_expression_values,
        load_questionnaire,
        load_response,
        save_report,
    )
    from formcheck.validation.engine import ItemValidator, QuestionnaireResponseValidator
    from formcheck.validation.expressions import LookupExpressionEvaluator
    from formcheck.validation.report import ValidationReport

    _configure_logging(log_level)

    try:
        questionnaire = load_questionnaire(questionnaire_path)
        response = load_response(response_path)
        values = load_expression_values(expressions) if expressions is not None else {}
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error loading input:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_INVALID) from e

    evaluator = LookupExpressionEvaluator(values)
    logger.info("Validating with {} precomputed expression values", len(evaluator))
    validator = QuestionnaireResponseValidator(ItemValidator(evaluator))

    try:
        items = asyncio.run(validator.validate(questionnaire, response))
    except ExpressionEvaluationError as e:
        console.print(f"[bold red]Expression error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_DEFECT) from e
    except ResponseStructureError as e:
        console.print(f"[bold red]Structure error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_DEFECT) from e

    report = ValidationReport.from_results(
        items,
        questionnaire_id=questionnaire.id,
        response_id=response.id,
    )

    console.print()
    display_validation_summary(report, console)
    console.print()
    display_item_results(report, console=console, show_valid=show_valid)

    if output is not None:
        save_report(report, output)
        console.print(f"\n[green]Report saved to {output}[/green]")

    if not report.is_valid:
        raise typer.Exit(code=EXIT_INVALID)
