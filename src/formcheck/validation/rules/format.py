"""Answer format rules.

Validates the string form of primitive answers against the regular
expression declared on their item.
"""

from __future__ import annotations

import re

from formcheck.models.questionnaire import QuestionnaireItem
from formcheck.models.response import Answer
from formcheck.validation.expressions import ExpressionScope
from formcheck.validation.outcome import RuleOutcome
from formcheck.validation.rules.base import AnswerRule


class RegexRule(AnswerRule):
    """Check that a primitive answer fully matches the item's regex.

    The whole string form must match, not just a prefix or substring.
    Codings and quantities are not checked.
    """

    rule_id: str = "FC-A006"
    description: str = "Answers must fully match the declared regular expression"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        answer: Answer,
        scope: ExpressionScope,
    ) -> RuleOutcome:
        text = answer.as_string()
        if item.regex is None or text is None or answer.is_empty:
            return self._valid()
        if re.fullmatch(item.regex, text) is None:
            return self._invalid(f"The answer doesn't match regular expression: {item.regex}")
        return self._valid()


def get_format_rules() -> list[AnswerRule]:
    """Return all format rules in evaluation order."""
    return [RegexRule()]
