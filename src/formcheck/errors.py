"""Exceptions raised by formcheck.

Invalid response data is never reported through exceptions; it produces
INVALID validation results. Exceptions are reserved for defects in the
documents or the evaluation setup that a developer has to fix.
"""

from __future__ import annotations


class FormcheckError(Exception):
    """Base class for errors raised by formcheck."""


class ExpressionEvaluationError(FormcheckError):
    """Raised when an expression is malformed or cannot be evaluated."""

    def __init__(self, expression: str, reason: str, *, link_id: str | None = None) -> None:
        self.expression = expression
        self.reason = reason
        self.link_id = link_id
        where = f" (item '{link_id}')" if link_id else ""
        super().__init__(f"Cannot evaluate expression '{expression}'{where}: {reason}")


class ResponseStructureError(FormcheckError):
    """Raised when a response item has no matching questionnaire item."""

    def __init__(self, link_id: str, parent: str | None = None) -> None:
        self.link_id = link_id
        self.parent = parent
        where = f"under '{parent}'" if parent else "at the top level"
        super().__init__(f"Response item '{link_id}' is not declared {where} of the questionnaire")
