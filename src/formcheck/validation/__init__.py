"""Constraint validation for questionnaire responses.

Provides ItemValidator, which validates one response item against its
questionnaire item using a fixed registry of node and answer rules, and
QuestionnaireResponseValidator, which applies it across a response tree.
"""

from formcheck.validation.engine import (
    ItemResult,
    ItemValidator,
    QuestionnaireResponseValidator,
    ValidationPhase,
)
from formcheck.validation.expressions import (
    ExpressionEvaluator,
    ExpressionScope,
    LookupExpressionEvaluator,
)
from formcheck.validation.outcome import RuleOutcome, ValidationResult, ValidationStatus
from formcheck.validation.report import ValidationReport

__all__ = [
    "ExpressionEvaluator",
    "ExpressionScope",
    "ItemResult",
    "ItemValidator",
    "LookupExpressionEvaluator",
    "QuestionnaireResponseValidator",
    "RuleOutcome",
    "ValidationPhase",
    "ValidationReport",
    "ValidationResult",
    "ValidationStatus",
]
