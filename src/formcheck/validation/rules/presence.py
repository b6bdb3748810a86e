"""Presence rules.

Checks that a required item has at least one non-empty answer.
"""

from __future__ import annotations

from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import ResponseItem
from formcheck.validation.expressions import ExpressionScope
from formcheck.validation.outcome import RuleOutcome
from formcheck.validation.rules.base import NodeRule

REQUIRED_MESSAGE = "Missing answer for required field."


class RequiredRule(NodeRule):
    """Fail a required item whose answers are all empty.

    An answer is empty when it holds no value or only whitespace text.
    Items that are not required always pass.
    """

    rule_id: str = "FC-N001"
    description: str = "Required items must have at least one non-empty answer"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        scope: ExpressionScope,
    ) -> list[RuleOutcome]:
        if not item.required:
            return [self._valid()]
        if any(not answer.is_empty for answer in response_item.answers):
            return [self._valid()]
        return [self._invalid(REQUIRED_MESSAGE)]


def get_presence_rules() -> list[NodeRule]:
    """Return all presence rules in evaluation order."""
    return [RequiredRule()]
