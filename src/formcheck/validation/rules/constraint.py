"""Constraint expression rules.

Evaluates the named constraint expressions declared on an item. Each
constraint must evaluate to true for the response item; a false
error-severity constraint yields its own failure message, a false
warning-severity constraint is only reported as a warning.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from formcheck.errors import ExpressionEvaluationError
from formcheck.models.questionnaire import ConstraintSeverity, QuestionnaireItem
from formcheck.models.response import ResponseItem
from formcheck.validation.expressions import ExpressionScope
from formcheck.validation.outcome import RuleOutcome
from formcheck.validation.rules.base import NodeRule


def _as_boolean(value: Any, expression: str, link_id: str) -> bool | None:
    """Interpret an evaluation result as a boolean.

    A single-element collection is unwrapped. An empty result (None or an
    empty collection) means the constraint does not apply.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        if len(value) > 1:
            raise ExpressionEvaluationError(
                expression,
                f"constraint produced {len(value)} values, expected one boolean",
                link_id=link_id,
            )
        value = value[0]
    if value is None or isinstance(value, bool):
        return value
    raise ExpressionEvaluationError(
        expression,
        f"constraint must evaluate to a boolean, got {type(value).__name__}",
        link_id=link_id,
    )


class ConstraintExpressionRule(NodeRule):
    """Evaluate every constraint declared on the item, in declared order.

    All constraints are evaluated even after one fails so that every
    violation is reported. Evaluation errors propagate to the caller.
    """

    rule_id: str = "FC-N002"
    description: str = "Declared constraint expressions must evaluate to true"

    async def evaluate(
        self,
        item: QuestionnaireItem,
        response_item: ResponseItem,
        scope: ExpressionScope,
    ) -> list[RuleOutcome]:
        outcomes: list[RuleOutcome] = []
        for constraint in item.constraints:
            raw = await scope.evaluate(constraint.expression)
            holds = _as_boolean(raw, constraint.expression, item.link_id)
            if holds is not False:
                outcomes.append(self._valid())
                continue

            logger.debug(
                "Constraint {} failed on item {} ({})",
                constraint.key,
                item.link_id,
                constraint.severity,
            )
            if constraint.severity == ConstraintSeverity.WARNING:
                outcomes.append(RuleOutcome.valid(self.rule_id, warnings=[constraint.human]))
            else:
                outcomes.append(self._invalid(constraint.human))
        return outcomes


def get_constraint_rules() -> list[NodeRule]:
    """Return all constraint expression rules in evaluation order."""
    return [ConstraintExpressionRule()]
