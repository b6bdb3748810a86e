"""JSON document loaders and writers.

Questionnaires and responses are read as camelCase JSON and validated into
pydantic models. Expression values are a flat JSON object mapping an
expression (optionally scoped as ``"<linkId>::<expression>"``) to its
precomputed value.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from formcheck.models.questionnaire import Questionnaire
from formcheck.models.response import QuestionnaireResponse
from formcheck.validation.report import ValidationReport


def _read_existing(path: str | Path, kind: str) -> str:
    p = Path(path)
    if not p.exists():
        msg = f"{kind} not found: {p}"
        raise FileNotFoundError(msg)
    return p.read_text(encoding="utf-8")


def load_questionnaire(path: str | Path) -> Questionnaire:
    """Load a questionnaire from JSON.

    Raises:
        FileNotFoundError: If *path* does not exist.
        pydantic.ValidationError: If the document is not a valid questionnaire.
    """
    questionnaire = Questionnaire.model_validate_json(_read_existing(path, "Questionnaire"))
    logger.info(
        "Loaded questionnaire {id} from {path}: {n} items",
        id=questionnaire.id or "<unnamed>",
        path=path,
        n=questionnaire.total_items,
    )
    return questionnaire


def load_response(path: str | Path) -> QuestionnaireResponse:
    """Load a questionnaire response from JSON.

    Raises:
        FileNotFoundError: If *path* does not exist.
        pydantic.ValidationError: If the document is not a valid response.
    """
    response = QuestionnaireResponse.model_validate_json(
        _read_existing(path, "Questionnaire response")
    )
    logger.info(
        "Loaded response {id} from {path}: {n} top-level items",
        id=response.id or "<unnamed>",
        path=path,
        n=len(response.items),
    )
    return response


def load_expression_values(path: str | Path) -> dict[str, Any]:
    """Load precomputed expression values from a JSON object.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the document is not a JSON object.
    """
    data = json.loads(_read_existing(path, "Expression values"))
    if not isinstance(data, dict):
        msg = f"Expression values must be a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    logger.info("Loaded {n} expression values from {path}", n=len(data), path=path)
    return data


def save_report(report: ValidationReport, output_path: str | Path) -> None:
    """Write a report as JSON, or as Markdown when the suffix is ``.md``."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".md":
        path.write_text(report.to_markdown(), encoding="utf-8")
    else:
        path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Saved validation report to {path}", path=path)
