"""Pure validation of an edit state.

Nothing here touches the store: an invalid state blocks a submission before
any remote call is made.
"""
from __future__ import annotations

import re

from jobtrack.models.application import ApplicationStatus
from jobtrack.models.edit_state import EditState, ValidationIssue

# Status -> the milestone date that becomes mandatory with it
_IMPLIED_DATE_FIELDS = {
    ApplicationStatus.APPLIED: "applied_on",
    ApplicationStatus.INTERVIEW: "interview_on",
    ApplicationStatus.OFFER: "offer_on",
    ApplicationStatus.REJECTED: "rejected_on",
}

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def required_date_field(status: ApplicationStatus | None) -> str | None:
    """Name of the date field a status makes required, if any."""
    if status is None:
        return None
    return _IMPLIED_DATE_FIELDS.get(status)


def _issue(field: str, code: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, code=code, message=message)


def validate(state: EditState) -> list[ValidationIssue]:
    """Return every problem with ``state``; an empty list means it can be saved."""
    issues: list[ValidationIssue] = []

    if not state.job_title.strip():
        issues.append(_issue("job_title", "required", "Job title is required."))
    if state.company_id is None:
        issues.append(_issue("company_id", "required", "Select a company."))
    if state.status is None:
        issues.append(_issue("status", "required", "Status is required."))
    if state.salary_expectation is not None and state.salary_expectation < 0:
        issues.append(
            _issue("salary_expectation", "min", "Salary expectation cannot be negative.")
        )

    date_field = required_date_field(state.status)
    if date_field and getattr(state, date_field) is None:
        issues.append(
            _issue(
                date_field,
                "required",
                f"A date is required for status {state.status.value}.",
            )
        )

    if not state.is_edit:
        return issues

    if state.company is None:
        issues.append(_issue("company", "required", "Company details are missing."))
    else:
        if not state.company.name.strip():
            issues.append(_issue("company.name", "required", "Company name is required."))
        if not state.company.industry.strip():
            issues.append(_issue("company.industry", "required", "Industry is required."))

    contact = state.contact
    if contact is None:
        issues.append(_issue("contact", "required", "Contact details are missing."))
    else:
        if contact.is_incomplete:
            missing = "last_name" if contact.first_name else "first_name"
            issues.append(
                _issue(
                    f"contact.{missing}",
                    "contact_incomplete",
                    "Enter both first and last name for the contact, or neither.",
                )
            )
        if contact.email and not _EMAIL_RE.match(contact.email):
            issues.append(_issue("contact.email", "email", "Enter a valid email address."))

    if state.notes is None:
        issues.append(_issue("notes", "required", "The note list is missing."))

    for index, note in enumerate(state.notes or []):
        if note.id is None and not note.text.strip():
            issues.append(_issue(f"notes.{index}.text", "required", "A new note needs text."))

    return issues
