"""Pydantic models for questionnaires and questionnaire responses."""

from formcheck.models.questionnaire import (
    ConstraintSeverity,
    ItemConstraint,
    ItemType,
    Questionnaire,
    QuestionnaireItem,
)
from formcheck.models.response import (
    Answer,
    Coding,
    Quantity,
    QuestionnaireResponse,
    ResponseItem,
)

__all__ = [
    "Answer",
    "Coding",
    "ConstraintSeverity",
    "ItemConstraint",
    "ItemType",
    "Quantity",
    "Questionnaire",
    "QuestionnaireItem",
    "QuestionnaireResponse",
    "ResponseItem",
]
