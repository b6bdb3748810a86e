"""Validation outcome models.

RuleOutcome is the result of evaluating a single rule. ValidationResult
is the aggregated outcome for one response item: VALID, INVALID with an
ordered list of messages, or NOT_VALIDATED when the item was skipped.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValidationStatus(StrEnum):
    """Status of a rule outcome or of an aggregated result.

    VALID: Every rule that ran passed.
    INVALID: At least one rule failed.
    NOT_VALIDATED: The item was skipped and no rule ran.
    """

    VALID = "VALID"
    INVALID = "INVALID"
    NOT_VALIDATED = "NOT_VALIDATED"


class RuleOutcome(BaseModel):
    """Outcome of one rule evaluated against one item or one answer.

    ``warnings`` carries messages that are reported without affecting
    validity (warning-severity constraints).
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str
    status: ValidationStatus
    message: str | None = None
    warnings: tuple[str, ...] = ()

    @model_validator(mode="after")
    def message_matches_status(self) -> RuleOutcome:
        if self.status == ValidationStatus.NOT_VALIDATED:
            msg = "A rule outcome is either VALID or INVALID"
            raise ValueError(msg)
        if self.status == ValidationStatus.INVALID and not self.message:
            msg = "An INVALID rule outcome requires a message"
            raise ValueError(msg)
        if self.status == ValidationStatus.VALID and self.message is not None:
            msg = "A VALID rule outcome carries no message"
            raise ValueError(msg)
        return self

    @classmethod
    def valid(cls, rule_id: str, *, warnings: Iterable[str] = ()) -> RuleOutcome:
        return cls(rule_id=rule_id, status=ValidationStatus.VALID, warnings=tuple(warnings))

    @classmethod
    def invalid(
        cls, rule_id: str, message: str, *, warnings: Iterable[str] = ()
    ) -> RuleOutcome:
        return cls(
            rule_id=rule_id,
            status=ValidationStatus.INVALID,
            message=message,
            warnings=tuple(warnings),
        )

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.VALID


class ValidationResult(BaseModel):
    """Aggregated outcome for one response item.

    Invariant: ``status`` is INVALID exactly when ``messages`` is non-empty.
    """

    model_config = ConfigDict(frozen=True)

    status: ValidationStatus
    messages: list[str] = Field(default_factory=list, description="Ordered failure messages")
    warnings: list[str] = Field(default_factory=list, description="Non-blocking messages")

    @model_validator(mode="after")
    def messages_match_status(self) -> ValidationResult:
        if (self.status == ValidationStatus.INVALID) != bool(self.messages):
            msg = "INVALID results and only INVALID results carry messages"
            raise ValueError(msg)
        return self

    @classmethod
    def valid(cls, *, warnings: Iterable[str] = ()) -> ValidationResult:
        return cls(status=ValidationStatus.VALID, warnings=list(warnings))

    @classmethod
    def not_validated(cls) -> ValidationResult:
        return cls(status=ValidationStatus.NOT_VALIDATED)

    @classmethod
    def invalid(
        cls, messages: Iterable[str], *, warnings: Iterable[str] = ()
    ) -> ValidationResult:
        return cls(
            status=ValidationStatus.INVALID,
            messages=list(messages),
            warnings=list(warnings),
        )

    @classmethod
    def aggregate(cls, outcomes: Iterable[RuleOutcome]) -> ValidationResult:
        """Combine rule outcomes, keeping their order.

        The result is VALID only if every outcome is VALID; otherwise it is
        INVALID with the message of each failing outcome, in iteration order.
        """
        messages: list[str] = []
        warnings: list[str] = []
        for outcome in outcomes:
            warnings.extend(outcome.warnings)
            if not outcome.is_valid:
                messages.append(outcome.message)
        if messages:
            return cls.invalid(messages, warnings=warnings)
        return cls.valid(warnings=warnings)

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.VALID

    @property
    def is_invalid(self) -> bool:
        return self.status == ValidationStatus.INVALID

    @property
    def is_skipped(self) -> bool:
        return self.status == ValidationStatus.NOT_VALIDATED
