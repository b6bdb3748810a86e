"""Validation engine orchestrators.

ItemValidator validates one response item against its questionnaire item
by running a fixed registry of node rules and answer rules and aggregating
their outcomes. QuestionnaireResponseValidator walks a whole response tree
and applies ItemValidator to every answerable item.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from formcheck.errors import ResponseStructureError
from formcheck.models.questionnaire import Questionnaire, QuestionnaireItem
from formcheck.models.response import QuestionnaireResponse, ResponseItem
from formcheck.validation.expressions import (
    ExpressionEvaluator,
    ExpressionScope,
    UnavailableExpressionEvaluator,
)
from formcheck.validation.outcome import RuleOutcome, ValidationResult
from formcheck.validation.rules.base import AnswerRule, NodeRule
from formcheck.validation.rules.constraint import get_constraint_rules
from formcheck.validation.rules.format import get_format_rules
from formcheck.validation.rules.limits import get_limit_rules
from formcheck.validation.rules.presence import get_presence_rules

HiddenPredicate = Callable[[QuestionnaireItem], bool]


def get_node_rules() -> list[NodeRule]:
    """Default node rules in evaluation order: presence, then constraints."""
    return [*get_presence_rules(), *get_constraint_rules()]


def get_answer_rules() -> list[AnswerRule]:
    """Default answer rules in evaluation order: limits, then format."""
    return [*get_limit_rules(), *get_format_rules()]


def _is_hidden(item: QuestionnaireItem) -> bool:
    return item.hidden


class ValidationPhase(StrEnum):
    """What the validator does with an item.

    SKIPPED: The item is hidden; no rule runs and the result is NOT_VALIDATED.
    EVALUATED: All rules run and their outcomes are aggregated.
    """

    SKIPPED = "SKIPPED"
    EVALUATED = "EVALUATED"


class ItemValidator:
    """Validates one response item against its questionnaire item.

    Node rules run first, in registry order. Then every answer rule runs
    against every answer, rule by rule and, within a rule, in the answers'
    own order. Every rule runs even after a failure so the result lists
    every violation. Evaluation is sequential, which keeps the message
    order deterministic.

    Errors raised by the expression evaluator are not caught: a broken
    expression is a questionnaire defect, not invalid data.
    """

    def __init__(
        self,
        evaluator: ExpressionEvaluator | None = None,
        *,
        hidden_predicate: HiddenPredicate | None = None,
        node_rules: Sequence[NodeRule] | None = None,
        answer_rules: Sequence[AnswerRule] | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            evaluator: Expression evaluator for constraint and bound
                expressions. Without one, any item that declares an
                expression fails with ExpressionEvaluationError.
            hidden_predicate: Decides whether an item is hidden. Defaults to
                reading ``item.hidden``.
            node_rules: Override of the node rule registry (tests only).
            answer_rules: Override of the answer rule registry (tests only).
        """
        self._evaluator = evaluator if evaluator is not None else UnavailableExpressionEvaluator()
        self._is_hidden = hidden_predicate or _is_hidden
        self._node_rules = tuple(node_rules if node_rules is not None else get_node_rules())
        self._answer_rules = tuple(
            answer_rules if answer_rules is not None else get_answer_rules()
        )
        logger.debug(
            "Item validator ready with node rules {} and answer rules {}",
            [r.rule_id for r in self._node_rules],
            [r.rule_id for r in self._answer_rules],
        )

    @property
    def node_rules(self) -> tuple[NodeRule, ...]:
        return self._node_rules

    @property
    def answer_rules(self) -> tuple[AnswerRule, ...]:
        return self._answer_rules

    def phase(self, item: QuestionnaireItem) -> ValidationPhase:
        """Decide whether *item* is skipped or evaluated."""
        if self._is_hidden(item):
            return ValidationPhase.SKIPPED
        return ValidationPhase.EVALUATED

    async def validate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
    ) -> ValidationResult:
        """Validate *response_item* against *item*.

        Returns:
            NOT_VALIDATED for hidden items; otherwise VALID, or INVALID with
            node-rule messages first and answer-rule messages after.

        Raises:
            ExpressionEvaluationError: Propagated from the evaluator.
        """
        if self.phase(item) is ValidationPhase.SKIPPED:
            logger.debug("Skipping hidden item {}", item.link_id)
            return ValidationResult.not_validated()
        return await self._evaluate(item, response_item)

    async def _evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
    ) -> ValidationResult:
        scope = ExpressionScope(self._evaluator, item, response_item)

        outcomes: list[RuleOutcome] = []
        for node_rule in self._node_rules:
            outcomes.extend(await node_rule.evaluate(item, response_item, scope))
        for answer_rule in self._answer_rules:
            for answer in response_item.answers:
                outcomes.append(await answer_rule.evaluate(item, answer, scope))

        result = ValidationResult.aggregate(outcomes)
        logger.debug(
            "Item {}: {} ({} outcomes, {} messages)",
            item.link_id,
            result.status,
            len(outcomes),
            len(result.messages),
        )
        return result


class ItemResult(BaseModel):
    """Validation result of one item within a response tree."""

    model_config = ConfigDict(frozen=True)

    link_id: str
    path: str = Field(..., description="Slash-separated link ids from the root")
    text: str | None = None
    result: ValidationResult


class QuestionnaireResponseValidator:
    """Validates every answerable item of a questionnaire response.

    Response items are matched to questionnaire items by ``link_id`` at each
    nesting level. Questionnaire items with no response item are validated
    against an empty one so that missing required answers are reported.
    Group and display items are not validated themselves, only their
    children. The children of a hidden item are not visited.
    """

    def __init__(self, item_validator: ItemValidator | None = None) -> None:
        self._item_validator = item_validator if item_validator is not None else ItemValidator()

    @property
    def item_validator(self) -> ItemValidator:
        return self._item_validator

    async def validate(
        self,
        questionnaire: Questionnaire,
        response: QuestionnaireResponse,
    ) -> list[ItemResult]:
        """Validate *response* against *questionnaire*.

        Returns:
            One ItemResult per validated item, in questionnaire order.

        Raises:
            ResponseStructureError: If a response item has no matching
                questionnaire item.
            ExpressionEvaluationError: Propagated from the evaluator.
        """
        results: list[ItemResult] = []
        await self._validate_level(questionnaire.items, response.items, None, results)

        invalid = sum(1 for r in results if r.result.is_invalid)
        logger.info(
            "Validated response {} against questionnaire {}: {} items, {} invalid",
            response.id or "<unnamed>",
            questionnaire.id or "<unnamed>",
            len(results),
            invalid,
        )
        return results

    async def _validate_level(
        self,
        items: list[QuestionnaireItem],
        response_items: list[ResponseItem],
        parent_path: str | None,
        results: list[ItemResult],
    ) -> None:
        declared = {item.link_id for item in items}
        matched: dict[str, list[ResponseItem]] = {}
        for response_item in response_items:
            if response_item.link_id not in declared:
                raise ResponseStructureError(response_item.link_id, parent_path)
            matched.setdefault(response_item.link_id, []).append(response_item)

        for item in items:
            path = f"{parent_path}/{item.link_id}" if parent_path else item.link_id
            instances = matched.get(item.link_id) or [ResponseItem(link_id=item.link_id)]
            for response_item in instances:
                await self._validate_item(item, response_item, path, results)

    async def _validate_item(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        path: str,
        results: list[ItemResult],
    ) -> None:
        if self._item_validator.phase(item) is ValidationPhase.SKIPPED:
            results.append(
                ItemResult(
                    link_id=item.link_id,
                    path=path,
                    text=item.text,
                    result=ValidationResult.not_validated(),
                )
            )
            return

        if not item.type.is_container:
            result = await self._item_validator.validate(item, response_item)
            results.append(
                ItemResult(link_id=item.link_id, path=path, text=item.text, result=result)
            )

        if item.items:
            await self._validate_level(item.items, response_item.items, path, results)
