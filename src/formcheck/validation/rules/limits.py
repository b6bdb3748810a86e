"""Answer limit rules.

Validates individual answers against the bounds declared on their item:
minimum/maximum value (literal or expression-derived), minimum/maximum
string length, and maximum decimal places. Empty answers and answers whose
type a rule does not apply to always pass.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Any

from formcheck.errors import ExpressionEvaluationError
from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import Answer
from formcheck.models.values import compare, parse_comparable
from formcheck.validation.expressions import ExpressionScope
from formcheck.validation.outcome import RuleOutcome
from formcheck.validation.rules.base import AnswerRule


def comparable_value(answer: Answer) -> Any:
    """Return the orderable part of an answer, or None if it has none."""
    if answer.value_quantity is not None:
        return answer.value_quantity.value
    for v in (
        answer.value_integer,
        answer.value_decimal,
        answer.value_date_time,
        answer.value_date,
        answer.value_time,
    ):
        if v is not None:
            return v
    return None


def format_bound(bound: Any) -> str:
    if isinstance(bound, (date, time)):
        return bound.isoformat()
    return str(bound)


async def resolve_bound(
    literal: Any,
    expression: str | None,
    scope: ExpressionScope,
) -> Any:
    """Return the effective bound: the evaluated expression if any, else the literal.

    Raises:
        ExpressionEvaluationError: If the expression fails or its value is
            not an orderable scalar.
    """
    if expression is None:
        return literal
    raw = await scope.evaluate(expression)
    if isinstance(raw, (list, tuple)):
        if len(raw) > 1:
            raise ExpressionEvaluationError(
                expression,
                f"bound produced {len(raw)} values, expected one",
                link_id=scope.link_id,
            )
        raw = raw[0] if raw else None
    try:
        return parse_comparable(raw)
    except ValueError as exc:
        raise ExpressionEvaluationError(expression, str(exc), link_id=scope.link_id) from exc


class MinValueRule(AnswerRule):
    """Check that an answer is not below the item's minimum value."""

    rule_id: str = "FC-A001"
    description: str = "Answers must not be below the minimum value"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        value = comparable_value(answer)
        if value is None or not item.has_min_bound:
            return self._valid()

        bound = await resolve_bound(item.min_value, item.min_value_expression, scope)
        if bound is None:
            return self._valid()
        if compare(value, bound) == -1:
            return self._invalid(f"Minimum value allowed is: {format_bound(bound)}")
        return self._valid()


class MaxValueRule(AnswerRule):
    """Check that an answer is not above the item's maximum value."""

    rule_id: str = "FC-A002"
    description: str = "Answers must not exceed the maximum value"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        value = comparable_value(answer)
        if value is None or not item.has_max_bound:
            return self._valid()

        bound = await resolve_bound(item.max_value, item.max_value_expression, scope)
        if bound is None:
            return self._valid()
        if compare(value, bound) == 1:
            return self._invalid(f"Maximum value allowed is: {format_bound(bound)}")
        return self._valid()


class MinLengthRule(AnswerRule):
    """Check the string form of a primitive answer against min_length."""

    rule_id: str = "FC-A003"
    description: str = "Answers must have at least the minimum number of characters"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        text = answer.as_string()
        if item.min_length is None or text is None or answer.is_empty:
            return self._valid()
        if len(text) < item.min_length:
            return self._invalid(
                "The minimum number of characters that are permitted in the answer is: "
                f"{item.min_length}"
            )
        return self._valid()


class MaxLengthRule(AnswerRule):
    """Check the string form of a primitive answer against max_length."""

    rule_id: str = "FC-A004"
    description: str = "Answers must not exceed the maximum number of characters"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        text = answer.as_string()
        if item.max_length is None or text is None or answer.is_empty:
            return self._valid()
        if len(text) > item.max_length:
            return self._invalid(
                "The maximum number of characters that are permitted in the answer is: "
                f"{item.max_length}"
            )
        return self._valid()


def decimal_places(value: Decimal) -> int:
    """Number of fractional digits as written, e.g. 2 for Decimal('1.50')."""
    exponent = value.as_tuple().exponent
    if not isinstance(exponent, int):
        # NaN and infinities
        return 0
    return max(0, -exponent)


class MaxDecimalPlacesRule(AnswerRule):
    """Check that a decimal answer has no more fractional digits than allowed."""

    rule_id: str = "FC-A005"
    description: str = "Decimal answers must not exceed the maximum decimal places"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        if item.max_decimal_places is None or answer.value_decimal is None:
            return self._valid()
        if decimal_places(answer.value_decimal) > item.max_decimal_places:
            return self._invalid(
                "The maximum number of decimal places that are permitted in the answer is: "
                f"{item.max_decimal_places}"
            )
        return self._valid()


def get_limit_rules() -> list[AnswerRule]:
    """Return all limit rules in evaluation order."""
    return [
        MinValueRule(),
        MaxValueRule(),
        MinLengthRule(),
        MaxLengthRule(),
        MaxDecimalPlacesRule(),
    ]
