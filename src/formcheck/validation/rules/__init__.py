"""Validation rules for questionnaire responses.

Rules are organized by concern:
- presence: Required answers (node level)
- constraint: Named constraint expressions (node level)
- limits: Value bounds, lengths and decimal places (answer level)
- format: Regular expression patterns (answer level)
"""

from formcheck.validation.rules.base import (
    AnswerRule,
    NodeRule,
    RuleKind,
    ValidationRule,
)

__all__ = [
    "AnswerRule",
    "NodeRule",
    "RuleKind",
    "ValidationRule",
]
