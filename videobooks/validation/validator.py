"""
Form Validation

DESIGN DECISION: Numeric and presence rules live here, in front of the
store, not in the models. The store accepts anything well-typed; a
submission that fails these checks never reaches it.

Rules:
- Client: name required, non-blank, at most MAX_NAME_LENGTH characters
- Project: number of videos is a positive whole number,
  charge per video is a non-negative amount
- Payment: amount is positive, date is required

IMPORTANT: Validation NEVER silently fixes input.
It reports every problem at once so the user can correct them together.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from videobooks.models.validation import ValidationIssue, ValidationResult


MAX_NAME_LENGTH = 200


class RecordValidationError(Exception):
    """A form submission failed validation; nothing was stored."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.issues if issue.severity == "error")
        super().__init__(f"Invalid {result.subject}: {messages}")


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse user input into a finite Decimal.

    Returns None for anything that is not a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_count(value: Any) -> Optional[int]:
    """Parse user input into a whole number, or None."""
    amount = parse_amount(value)
    if amount is None or amount != amount.to_integral_value():
        return None
    return int(amount)


class RecordValidator:
    """Validates raw form input for clients, projects and payments."""

    def validate_client(self, name: Any) -> ValidationResult:
        issues = []

        if not isinstance(name, str) or not name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Please enter a client name",
                severity="error",
            ))
        elif len(name.strip()) > MAX_NAME_LENGTH:
            issues.append(ValidationIssue(
                field="name",
                issue_type="too_long",
                message=f"Client name must be at most {MAX_NAME_LENGTH} characters",
                severity="error",
                suggested_fix="Use a shorter name",
            ))

        return ValidationResult(subject="client", issues=issues)

    def validate_project(
        self,
        number_of_videos: Any,
        charge_per_video: Any,
    ) -> ValidationResult:
        issues = []

        count = parse_count(number_of_videos)
        if count is None:
            issues.append(ValidationIssue(
                field="number_of_videos",
                issue_type="not_a_number",
                message="Number of videos must be a whole number",
                severity="error",
            ))
        elif count <= 0:
            issues.append(ValidationIssue(
                field="number_of_videos",
                issue_type="invalid_value",
                message="Number of videos must be greater than zero",
                severity="error",
            ))

        rate = parse_amount(charge_per_video)
        if rate is None:
            issues.append(ValidationIssue(
                field="charge_per_video",
                issue_type="not_a_number",
                message="Charge per video must be a number",
                severity="error",
            ))
        elif rate < 0:
            issues.append(ValidationIssue(
                field="charge_per_video",
                issue_type="invalid_value",
                message="Charge per video cannot be negative",
                severity="error",
            ))
        elif rate == 0:
            issues.append(ValidationIssue(
                field="charge_per_video",
                issue_type="zero_value",
                message="Charge per video is zero; this project adds nothing to the balance",
                severity="warning",
            ))

        return ValidationResult(subject="project", issues=issues)

    def validate_payment(self, amount: Any, on: Any) -> ValidationResult:
        issues = []

        parsed = parse_amount(amount)
        if parsed is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_a_number",
                message="Payment amount must be a number",
                severity="error",
            ))
        elif parsed <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Please enter a valid payment amount",
                severity="error",
                suggested_fix="Amounts must be greater than zero",
            ))

        if not isinstance(on, date):
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Payment date is required",
                severity="error",
            ))

        return ValidationResult(subject="payment", issues=issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One message suitable for showing next to the form."""
        if result.is_valid and not result.issues:
            return f"The {result.subject} looks good."

        lines = []
        for issue in result.issues:
            prefix = "Error" if issue.severity == "error" else "Note"
            line = f"{prefix}: {issue.message}"
            if issue.suggested_fix:
                line += f" ({issue.suggested_fix})"
            lines.append(line)
        return "\n".join(lines)
