"""Tests for expression scopes and the bundled evaluators."""

from __future__ import annotations

import pytest

from formcheck.errors import ExpressionEvaluationError
from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import Answer, ResponseItem
from formcheck.validation.expressions import (
    ExpressionScope,
    LookupExpressionEvaluator,
    UnavailableExpressionEvaluator,
)


class TestExpressionScope:
    async def test_binds_item_and_response_item(self, evaluator) -> None:
        evaluator.values["%x"] = 3
        item = QuestionnaireItem(link_id="q1")
        response_item = ResponseItem(link_id="q1", answers=[Answer(value_integer=1)])
        scope = ExpressionScope(evaluator, item, response_item)

        assert await scope.evaluate("%x") == 3
        assert evaluator.calls == [("q1", "%x")]
        assert scope.link_id == "q1"


class TestLookupExpressionEvaluator:
    async def test_bare_expression(self) -> None:
        evaluator = LookupExpressionEvaluator({"%today": "2024-05-01"})
        value = await evaluator.evaluate(
            QuestionnaireItem(link_id="q1"), ResponseItem(link_id="q1"), "%today"
        )
        assert value == "2024-05-01"

    async def test_scoped_expression_takes_precedence(self) -> None:
        evaluator = LookupExpressionEvaluator({"%max": 10, "dose::%max": 4})
        dose = await evaluator.evaluate(
            QuestionnaireItem(link_id="dose"), ResponseItem(link_id="dose"), "%max"
        )
        other = await evaluator.evaluate(
            QuestionnaireItem(link_id="age"), ResponseItem(link_id="age"), "%max"
        )
        assert (dose, other) == (4, 10)

    async def test_false_and_none_values_are_returned(self) -> None:
        evaluator = LookupExpressionEvaluator({"a": False, "b": None})
        item, response_item = QuestionnaireItem(link_id="q"), ResponseItem(link_id="q")
        assert await evaluator.evaluate(item, response_item, "a") is False
        assert await evaluator.evaluate(item, response_item, "b") is None

    async def test_unknown_expression_raises(self) -> None:
        evaluator = LookupExpressionEvaluator({})
        with pytest.raises(ExpressionEvaluationError) as exc_info:
            await evaluator.evaluate(
                QuestionnaireItem(link_id="q1"), ResponseItem(link_id="q1"), "%missing"
            )
        assert exc_info.value.expression == "%missing"
        assert exc_info.value.link_id == "q1"
        assert "q1" in str(exc_info.value)

    def test_len(self) -> None:
        assert len(LookupExpressionEvaluator({"a": 1, "b": 2})) == 2


class TestUnavailableExpressionEvaluator:
    async def test_always_raises(self) -> None:
        with pytest.raises(ExpressionEvaluationError, match="no expression evaluator"):
            await UnavailableExpressionEvaluator().evaluate(
                QuestionnaireItem(link_id="q1"), ResponseItem(link_id="q1"), "true"
            )


class TestEvaluatorWiring:
    async def test_empty_lookup_evaluator_is_used(self) -> None:
        from formcheck.validation.engine import ItemValidator

        item = QuestionnaireItem(link_id="q1", max_value_expression="%max")
        response_item = ResponseItem(link_id="q1", answers=[Answer(value_integer=1)])
        with pytest.raises(ExpressionEvaluationError, match="no precomputed value"):
            await ItemValidator(LookupExpressionEvaluator({})).validate(item, response_item)
