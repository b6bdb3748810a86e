"""End-to-end validation of a realistic questionnaire response.

Loads documents from disk, validates them with the lookup evaluator and
checks the resulting report, including expression-derived bounds, warning
constraints and hidden groups.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from formcheck.io.documents import load_expression_values, load_questionnaire, load_response
from formcheck.validation.engine import ItemValidator, QuestionnaireResponseValidator
from formcheck.validation.expressions import LookupExpressionEvaluator
from formcheck.validation.report import ValidationReport

pytestmark = pytest.mark.integration

QUESTIONNAIRE = {
    "id": "intake",
    "title": "Patient intake",
    "item": [
        {"linkId": "intro", "type": "display", "text": "Please answer every question."},
        {
            "linkId": "patient",
            "type": "group",
            "item": [
                {"linkId": "name", "type": "string", "required": True, "maxLength": 20},
                {
                    "linkId": "postcode",
                    "type": "string",
                    "regex": "[0-9]{5}",
                },
                {
                    "linkId": "birthDate",
                    "type": "date",
                    "required": True,
                    "maxValueExpression": "today()",
                },
            ],
        },
        {
            "linkId": "vitals",
            "type": "group",
            "item": [
                {
                    "linkId": "weight",
                    "type": "decimal",
                    "minValue": 1,
                    "maxValue": 500,
                    "maxDecimalPlaces": 1,
                },
                {
                    "linkId": "bmi",
                    "type": "decimal",
                    "constraints": [
                        {
                            "key": "bmi-range",
                            "expression": "%bmi > 10",
                            "human": "BMI must be above 10",
                        },
                        {
                            "key": "bmi-plausible",
                            "expression": "%bmi < 40",
                            "severity": "warning",
                            "human": "BMI looks unusually high",
                        },
                    ],
                },
            ],
        },
        {
            "linkId": "pregnancy",
            "type": "group",
            "hidden": True,
            "item": [{"linkId": "weeks", "type": "integer", "required": True}],
        },
    ],
}

EXPRESSIONS = {
    "today()": "2024-05-01",
    "bmi::%bmi > 10": True,
    "bmi::%bmi < 40": False,
}


def _write(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


async def _validate(tmp_path: Path, response: dict) -> ValidationReport:
    questionnaire = load_questionnaire(_write(tmp_path / "q.json", QUESTIONNAIRE))
    loaded = load_response(_write(tmp_path / "r.json", response))
    values = load_expression_values(_write(tmp_path / "e.json", EXPRESSIONS))
    validator = QuestionnaireResponseValidator(ItemValidator(LookupExpressionEvaluator(values)))
    items = await validator.validate(questionnaire, loaded)
    return ValidationReport.from_results(
        items, questionnaire_id=questionnaire.id, response_id=loaded.id
    )


class TestQuestionnaireValidation:
    async def test_clean_response_with_warning(self, tmp_path: Path) -> None:
        report = await _validate(
            tmp_path,
            {
                "id": "r-clean",
                "item": [
                    {
                        "linkId": "patient",
                        "item": [
                            {"linkId": "name", "answer": [{"valueString": "Ada"}]},
                            {"linkId": "postcode", "answer": [{"valueString": "12345"}]},
                            {"linkId": "birthDate", "answer": [{"valueDate": "1990-04-12"}]},
                        ],
                    },
                    {
                        "linkId": "vitals",
                        "item": [
                            {"linkId": "weight", "answer": [{"valueDecimal": 72.5}]},
                            {"linkId": "bmi", "answer": [{"valueDecimal": 41.2}]},
                        ],
                    },
                ],
            },
        )

        assert report.is_valid
        assert report.invalid_count == 0
        assert report.not_validated_count == 1
        assert [i.path for i in report.items_with_warnings] == ["vitals/bmi"]
        assert report.items_with_warnings[0].result.warnings == ["BMI looks unusually high"]

    async def test_every_failure_is_reported(self, tmp_path: Path) -> None:
        report = await _validate(
            tmp_path,
            {
                "id": "r-broken",
                "item": [
                    {
                        "linkId": "patient",
                        "item": [
                            {"linkId": "postcode", "answer": [{"valueString": "ABC"}]},
                            {"linkId": "birthDate", "answer": [{"valueDate": "2030-01-01"}]},
                        ],
                    },
                    {
                        "linkId": "vitals",
                        "item": [{"linkId": "weight", "answer": [{"valueDecimal": "612.25"}]}],
                    },
                ],
            },
        )

        by_path = {i.path: i.result for i in report.items}
        assert not report.is_valid
        assert by_path["patient/name"].messages == ["Missing answer for required field."]
        assert by_path["patient/postcode"].messages == [
            "The answer doesn't match regular expression: [0-9]{5}"
        ]
        assert by_path["patient/birthDate"].messages == ["Maximum value allowed is: 2024-05-01"]
        assert by_path["vitals/weight"].messages == [
            "Maximum value allowed is: 500",
            "The maximum number of decimal places that are permitted in the answer is: 1",
        ]
        assert report.invalid_count == 4
        assert "pregnancy/weeks" not in by_path
