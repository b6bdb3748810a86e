"""Base models for response validation rules.

Defines the two rule shapes the engine dispatches on:

- NodeRule: checks a response item as a whole (e.g. a required answer,
  named constraint expressions). May produce several outcomes, one per
  check it performs.
- AnswerRule: checks a single answer of a response item (bounds, lengths,
  decimal places, regex). Produces exactly one outcome per answer.

Both receive an ExpressionScope. Rules that compute a value from an
expression await ``scope.evaluate``; purely structural rules never touch it.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import Answer, ResponseItem
from formcheck.validation.expressions import ExpressionScope
from formcheck.validation.outcome import RuleOutcome


class RuleKind(StrEnum):
    """Granularity at which a rule is applied.

    NODE: Once per response item.
    ANSWER: Once per answer of a response item.
    """

    NODE = "NODE"
    ANSWER = "ANSWER"


class ValidationRule(BaseModel):
    """Common fields of all validation rules.

    Rules are stateless: all input arrives through ``evaluate``.
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[RuleKind]

    rule_id: str = Field(..., description="Unique rule identifier")
    description: str = Field(..., description="Human-readable rule description")

    def _valid(self) -> RuleOutcome:
        return RuleOutcome.valid(self.rule_id)

    def _invalid(self, message: str) -> RuleOutcome:
        return RuleOutcome.invalid(self.rule_id, message)


class NodeRule(ValidationRule):
    """A rule evaluated once against a whole response item."""

    kind: ClassVar[RuleKind] = RuleKind.NODE

    @abstractmethod
    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        scope: ExpressionScope,
    ) -> list[RuleOutcome]:
        """Evaluate this rule against a response item.

        Args:
            item: The questionnaire item the response answers.
            response_item: The response item being validated.
            scope: Expression evaluation bound to (item, response_item).

        Returns:
            One RuleOutcome per check performed, in a stable order.
        """
        ...


class AnswerRule(ValidationRule):
    """A rule evaluated once per answer of a response item."""

    kind: ClassVar[RuleKind] = RuleKind.ANSWER

    @abstractmethod
    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        """Evaluate this rule against one answer.

        Args:
            item: The questionnaire item the answer responds to.
            answer: The answer being validated.
            scope: Expression evaluation bound to the enclosing response item.

        Returns:
            The RuleOutcome for this answer. Empty answers are VALID.
        """
        ...
