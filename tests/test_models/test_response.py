"""Tests for questionnaire response models."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from formcheck.models.response import (
    Answer,
    Coding,
    Quantity,
    QuestionnaireResponse,
    ResponseItem,
)


class TestAnswer:
    def test_empty_answer(self) -> None:
        answer = Answer()
        assert answer.value is None
        assert answer.is_empty
        assert not answer.is_primitive
        assert answer.as_string() is None

    def test_at_most_one_value(self) -> None:
        with pytest.raises(ValidationError, match="at most one value"):
            Answer(value_integer=1, value_string="1")

    def test_blank_string_is_empty(self) -> None:
        assert Answer(value_string="   ").is_empty
        assert not Answer(value_string=" x ").is_empty

    def test_false_is_not_empty(self) -> None:
        answer = Answer(value_boolean=False)
        assert not answer.is_empty
        assert answer.value is False

    @pytest.mark.parametrize(
        ("answer", "expected"),
        [
            (Answer(value_boolean=True), "true"),
            (Answer(value_integer=42), "42"),
            (Answer(value_decimal=Decimal("1.50")), "1.50"),
            (Answer(value_date=date(2024, 2, 29)), "2024-02-29"),
            (Answer(value_time=time(8, 30)), "08:30:00"),
            (Answer(value_string="abc"), "abc"),
            (Answer(value_uri="https://example.org"), "https://example.org"),
        ],
    )
    def test_as_string(self, answer: Answer, expected: str) -> None:
        assert answer.is_primitive
        assert answer.as_string() == expected

    def test_coding_and_quantity_are_not_primitive(self) -> None:
        coding = Answer(value_coding=Coding(system="http://loinc.org", code="LA33-6"))
        quantity = Answer(value_quantity=Quantity(value=Decimal("70"), unit="kg"))
        assert not coding.is_primitive
        assert not quantity.is_primitive
        assert coding.as_string() is None
        assert quantity.value.unit == "kg"


class TestResponseJson:
    def test_parses_camel_case_document(self) -> None:
        document = {
            "id": "r1",
            "questionnaire": "intake",
            "status": "completed",
            "item": [
                {
                    "linkId": "vitals",
                    "item": [
                        {"linkId": "weight", "answer": [{"valueDecimal": "70.5"}]},
                        {"linkId": "visit", "answer": [{"valueDateTime": "2024-05-01T10:00:00Z"}]},
                    ],
                }
            ],
        }
        response = QuestionnaireResponse.model_validate(document)

        assert response.status == "completed"
        weight = response.items[0].items[0]
        assert weight.answers[0].value_decimal == Decimal("70.5")
        visit = response.items[0].items[1]
        assert visit.answers[0].value_date_time.tzinfo is not None

    def test_defaults(self) -> None:
        response = QuestionnaireResponse()
        assert response.status == "in-progress"
        assert response.items == []

    def test_response_item_requires_link_id(self) -> None:
        with pytest.raises(ValidationError):
            ResponseItem(link_id="")
