"""Questionnaire response models.

A response mirrors the questionnaire tree: each response item carries the
``link_id`` of the item it answers, zero or more answers, and nested
response items. An answer holds at most one typed value, stored in the
``value_<type>`` field matching its type.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_VALUE_FIELDS = (
    "value_boolean",
    "value_integer",
    "value_decimal",
    "value_date",
    "value_date_time",
    "value_time",
    "value_string",
    "value_uri",
    "value_coding",
    "value_quantity",
)


class Coding(BaseModel):
    """A coded answer (e.g. a choice option)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    system: str | None = None
    code: str | None = None
    display: str | None = None


class Quantity(BaseModel):
    """A measured amount with a unit."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    value: Decimal | None = None
    unit: str | None = None
    system: str | None = None
    code: str | None = None


class Answer(BaseModel):
    """One answer to a question, i.e. one response value."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    value_boolean: bool | None = None
    value_integer: int | None = None
    value_decimal: Decimal | None = None
    value_date: date | None = None
    value_date_time: datetime | None = None
    value_time: time | None = None
    value_string: str | None = None
    value_uri: str | None = None
    value_coding: Coding | None = None
    value_quantity: Quantity | None = None

    @model_validator(mode="after")
    def at_most_one_value(self) -> Answer:
        """An answer carries a single typed value."""
        populated = [name for name in _VALUE_FIELDS if getattr(self, name) is not None]
        if len(populated) > 1:
            msg = f"Answer must hold at most one value, got {', '.join(populated)}"
            raise ValueError(msg)
        return self

    @property
    def value(self) -> Any:
        """The populated value, or None for an empty answer."""
        for name in _VALUE_FIELDS:
            v = getattr(self, name)
            if v is not None:
                return v
        return None

    @property
    def is_empty(self) -> bool:
        """True when the answer holds no value or only whitespace text."""
        v = self.value
        if v is None:
            return True
        if isinstance(v, str):
            return not v.strip()
        return False

    @property
    def is_primitive(self) -> bool:
        """True when the value has a plain string form (not a coding or quantity)."""
        return self.value is not None and self.value_coding is None and self.value_quantity is None

    def as_string(self) -> str | None:
        """String form of a primitive value, as used by length and regex checks."""
        if not self.is_primitive:
            return None
        v = self.value
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (date, time)):
            return v.isoformat()
        return str(v)


class ResponseItem(BaseModel):
    """The submitted counterpart of one questionnaire item."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    link_id: str = Field(..., min_length=1)
    text: str | None = None
    answers: list[Answer] = Field(default_factory=list, alias="answer")
    items: list[ResponseItem] = Field(default_factory=list, alias="item")


class QuestionnaireResponse(BaseModel):
    """A submitted set of answers for one questionnaire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None = None
    questionnaire: str | None = Field(default=None, description="Identifier of the questionnaire")
    status: str = Field(default="in-progress")
    items: list[ResponseItem] = Field(default_factory=list, alias="item")
