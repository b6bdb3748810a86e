"""Shared fixtures for validation tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import ResponseItem
from formcheck.validation.expressions import ExpressionScope


class RecordingEvaluator:
    """Evaluator returning canned values and recording every call.

    Set ``error`` to make every call raise it.
    """

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None

    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        expression: str,
    ) -> Any:
        self.calls.append((item.link_id, expression))
        if self.error is not None:
            raise self.error
        return self.values[expression]


@pytest.fixture()
def evaluator() -> RecordingEvaluator:
    return RecordingEvaluator()


@pytest.fixture()
def scope_for(
    evaluator: RecordingEvaluator,
) -> Callable[[QuestionnaireItem], ExpressionScope]:
    """Build an ExpressionScope for an item with an empty response item."""

    def _make(item: QuestionnaireItem) -> ExpressionScope:
        return ExpressionScope(evaluator, item, ResponseItem(link_id=item.link_id))

    return _make
