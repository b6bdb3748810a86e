"""Expression evaluation contract.

Rules that need a dynamically computed value (a constraint that must hold,
a min/max bound derived from other answers) ask an ExpressionEvaluator for
it. Evaluation is asynchronous because a real evaluator may traverse the
whole document or call out to an expression engine.

Rules never see the evaluator directly. They receive an ExpressionScope,
which binds the evaluator to the (item, response item) pair being validated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from loguru import logger

from formcheck.errors import ExpressionEvaluationError
from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import ResponseItem


class ExpressionEvaluator(Protocol):
    """Computes the value of an expression against the live document."""

    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        expression: str,
    ) -> Any:
        """Return the value of *expression*.

        Raises:
            ExpressionEvaluationError: If the expression cannot be evaluated.
        """
        ...


class ExpressionScope:
    """An evaluator bound to the item currently being validated."""

    __slots__ = ("_evaluator", "_item", "_response_item")

    def __init__(
        self,
        evaluator: ExpressionEvaluator,
        item: QuestionnaireItem,
        response_item: ResponseItem,
    ) -> None:
        self._evaluator = evaluator
        self._item = item
        self._response_item = response_item

    @property
    def link_id(self) -> str:
        return self._item.link_id

    async def evaluate(self, expression: str) -> Any:
        """Evaluate *expression* for the bound item and response item."""
        return await self._evaluator.evaluate(self._item, self._response_item, expression)


class UnavailableExpressionEvaluator:
    """Evaluator used when none is configured; every call fails."""

    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        expression: str,
    ) -> Any:
        raise ExpressionEvaluationError(
            expression, "no expression evaluator is configured", link_id=item.link_id
        )


class LookupExpressionEvaluator:
    """Resolves expressions from precomputed values.

    Keys are either a bare expression, which applies to every item, or
    ``"<linkId>::<expression>"``, which applies to one item and takes
    precedence over the bare form. Unknown expressions raise
    ExpressionEvaluationError.
    """

    SCOPE_SEPARATOR = "::"

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)

    def __len__(self) -> int:
        return len(self._values)

    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        expression: str,
    ) -> Any:
        scoped_key = f"{item.link_id}{self.SCOPE_SEPARATOR}{expression}"
        if scoped_key in self._values:
            return self._values[scoped_key]
        if expression in self._values:
            return self._values[expression]
        logger.warning(
            "No precomputed value for expression '{}' on item {}", expression, item.link_id
        )
        raise ExpressionEvaluationError(
            expression, "no precomputed value available", link_id=item.link_id
        )
