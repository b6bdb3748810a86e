"""Questionnaire (schema) models.

A questionnaire is a tree of items. Each item declares the constraints a
response to it must satisfy: a required flag, literal or expression-derived
value bounds, length limits, a decimal-place limit, a regex pattern and
named constraint expressions. The hidden flag is computed upstream and
only consumed here.

Field names are snake_case in Python and camelCase in JSON documents.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from formcheck.models.values import ComparableValue


class ItemType(StrEnum):
    """Answer type declared on a questionnaire item."""

    GROUP = "group"
    DISPLAY = "display"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    INTEGER = "integer"
    DATE = "date"
    DATE_TIME = "dateTime"
    TIME = "time"
    STRING = "string"
    TEXT = "text"
    URL = "url"
    CHOICE = "choice"
    QUANTITY = "quantity"

    @property
    def is_container(self) -> bool:
        """True for item types that never carry answers of their own."""
        return self in (ItemType.GROUP, ItemType.DISPLAY)


class ConstraintSeverity(StrEnum):
    """Severity of a named constraint expression.

    ERROR: A false constraint makes the item invalid.
    WARNING: A false constraint is reported but the item stays valid.
    """

    ERROR = "error"
    WARNING = "warning"


class ItemConstraint(BaseModel):
    """A named boolean expression that must hold for the item's response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    key: str = Field(..., min_length=1, description="Constraint identifier, unique per item")
    expression: str = Field(..., min_length=1, description="Expression that must evaluate true")
    severity: ConstraintSeverity = Field(default=ConstraintSeverity.ERROR)
    human: str = Field(..., description="Message shown when the constraint fails")


class QuestionnaireItem(BaseModel):
    """Definition of one question, i.e. one schema node."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    link_id: str = Field(..., min_length=1, description="Identifier shared with response items")
    text: str | None = Field(default=None, description="Question text")
    type: ItemType = Field(default=ItemType.STRING)
    required: bool = Field(default=False)
    min_value: ComparableValue | None = Field(default=None)
    max_value: ComparableValue | None = Field(default=None)
    min_value_expression: str | None = Field(
        default=None,
        description="Expression computing the lower bound; overrides min_value",
    )
    max_value_expression: str | None = Field(
        default=None,
        description="Expression computing the upper bound; overrides max_value",
    )
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    max_decimal_places: int | None = Field(default=None, ge=0)
    regex: str | None = Field(default=None)
    constraints: list[ItemConstraint] = Field(default_factory=list)
    hidden: bool = Field(default=False, description="Precomputed visibility flag")
    items: list[QuestionnaireItem] = Field(default_factory=list, alias="item")

    @field_validator("regex")
    @classmethod
    def regex_must_compile(cls, v: str | None) -> str | None:
        """Reject patterns Python's re module cannot compile."""
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                msg = f"regex is not a valid pattern: {exc}"
                raise ValueError(msg) from exc
        return v

    @property
    def has_min_bound(self) -> bool:
        return self.min_value is not None or self.min_value_expression is not None

    @property
    def has_max_bound(self) -> bool:
        return self.max_value is not None or self.max_value_expression is not None


class Questionnaire(BaseModel):
    """A complete questionnaire definition."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None = Field(default=None)
    title: str | None = Field(default=None)
    items: list[QuestionnaireItem] = Field(default_factory=list, alias="item")

    @property
    def total_items(self) -> int:
        """Number of items at every nesting level."""

        def _count(items: list[QuestionnaireItem]) -> int:
            return sum(1 + _count(item.items) for item in items)

        return _count(self.items)
