"""Validation report model.

Aggregates per-item results for one questionnaire response into a report
with status counts, the list of invalid items and Markdown export.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from formcheck.validation.engine import ItemResult
from formcheck.validation.outcome import ValidationStatus


class ValidationReport(BaseModel):
    """Aggregated validation report for a questionnaire response.

    ``is_valid`` is True when no item is INVALID. Skipped (NOT_VALIDATED)
    items are counted separately and never make a report invalid.
    """

    questionnaire_id: str | None = Field(default=None)
    response_id: str | None = Field(default=None)
    items: list[ItemResult] = Field(default_factory=list, description="Per-item results")
    valid_count: int = Field(default=0)
    invalid_count: int = Field(default=0)
    not_validated_count: int = Field(default=0)
    message_count: int = Field(default=0, description="Failure messages across all items")
    warning_count: int = Field(default=0, description="Warnings across all items")
    generated_at: str = Field(default="", description="ISO 8601 timestamp of report generation")

    @property
    def is_valid(self) -> bool:
        return self.invalid_count == 0

    @property
    def invalid_items(self) -> list[ItemResult]:
        return [i for i in self.items if i.result.status == ValidationStatus.INVALID]

    @property
    def items_with_warnings(self) -> list[ItemResult]:
        return [i for i in self.items if i.result.warnings]

    @classmethod
    def from_results(
        cls,
        items: list[ItemResult],
        *,
        questionnaire_id: str | None = None,
        response_id: str | None = None,
    ) -> ValidationReport:
        """Create a ValidationReport by counting statuses of item results.

        Args:
            items: Results returned by QuestionnaireResponseValidator.
            questionnaire_id: Identifier of the questionnaire validated against.
            response_id: Identifier of the validated response.

        Returns:
            A fully populated ValidationReport.
        """
        statuses = [i.result.status for i in items]
        return cls(
            questionnaire_id=questionnaire_id,
            response_id=response_id,
            items=items,
            valid_count=statuses.count(ValidationStatus.VALID),
            invalid_count=statuses.count(ValidationStatus.INVALID),
            not_validated_count=statuses.count(ValidationStatus.NOT_VALIDATED),
            message_count=sum(len(i.result.messages) for i in items),
            warning_count=sum(len(i.result.warnings) for i in items),
            generated_at=datetime.now(tz=UTC).isoformat(),
        )

    def to_markdown(self) -> str:
        """Render the validation report as a Markdown document."""
        lines: list[str] = []

        title = self.response_id or "Questionnaire Response"
        lines.append(f"# Validation Report: {title}")
        lines.append("")
        if self.questionnaire_id:
            lines.append(f"**Questionnaire:** {self.questionnaire_id}")
            lines.append("")
        lines.append(f"**Generated:** {self.generated_at}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append("| Metric | Value |")
        lines.append("|--------|-------|")
        lines.append(f"| Items Checked | {len(self.items)} |")
        lines.append(f"| Valid | {self.valid_count} |")
        lines.append(f"| Invalid | {self.invalid_count} |")
        lines.append(f"| Not Validated | {self.not_validated_count} |")
        lines.append(f"| Warnings | {self.warning_count} |")
        lines.append(f"| Status | {'VALID' if self.is_valid else 'INVALID'} |")
        lines.append("")

        invalid = self.invalid_items
        if invalid:
            lines.append("## Invalid Items")
            lines.append("")
            for item in invalid:
                label = f" ({item.text})" if item.text else ""
                lines.append(f"- **{item.path}**{label}")
                for message in item.result.messages:
                    lines.append(f"  - {message}")
            lines.append("")

        warned = self.items_with_warnings
        if warned:
            lines.append("## Warnings")
            lines.append("")
            for item in warned:
                for warning in item.result.warnings:
                    lines.append(f"- **{item.path}**: {warning}")
            lines.append("")

        return "\n".join(lines)
