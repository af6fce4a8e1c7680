"""Tests for edit-state validation and the status -> required date rule."""

from datetime import date

import pytest

from jobtrack.models.application import ApplicationStatus
from jobtrack.models.edit_state import CompanySection, ContactSection, EditState, NoteEntry
from jobtrack.services.validation import required_date_field, validate


def _edit_state(**overrides) -> EditState:
    base = dict(
        mode="edit",
        application_id=1,
        job_title="Backend Engineer",
        company_id=3,
        status=ApplicationStatus.DRAFT,
        company=CompanySection(name="Acme", industry="Software"),
        contact=ContactSection(),
        notes=[],
    )
    base.update(overrides)
    return EditState(**base)


def _codes(state: EditState) -> dict[str, str]:
    return {issue.field: issue.code for issue in validate(state)}


@pytest.mark.parametrize(
    "status, field",
    [
        (ApplicationStatus.DRAFT, None),
        (ApplicationStatus.APPLIED, "applied_on"),
        (ApplicationStatus.INTERVIEW, "interview_on"),
        (ApplicationStatus.OFFER, "offer_on"),
        (ApplicationStatus.REJECTED, "rejected_on"),
        (ApplicationStatus.WITHDRAWN, None),
        (None, None),
    ],
)
def test_required_date_field(status, field):
    assert required_date_field(status) == field


def test_valid_edit_state_has_no_issues():
    assert validate(_edit_state()) == []


def test_create_state_requires_title_and_company():
    codes = _codes(EditState())

    assert codes == {"job_title": "required", "company_id": "required"}


def test_status_requires_matching_date():
    assert _codes(_edit_state(status=ApplicationStatus.OFFER)) == {"offer_on": "required"}
    assert validate(_edit_state(status=ApplicationStatus.OFFER, offer_on=date(2024, 6, 1))) == []


def test_half_filled_contact_is_rejected():
    codes = _codes(_edit_state(contact=ContactSection(first_name="Ada")))

    assert codes == {"contact.last_name": "contact_incomplete"}


def test_only_last_name_is_rejected():
    codes = _codes(_edit_state(contact=ContactSection(last_name="Lovelace")))

    assert codes == {"contact.first_name": "contact_incomplete"}


def test_contact_email_format():
    contact = ContactSection(first_name="Ada", last_name="Lovelace", email="not-an-email")

    assert _codes(_edit_state(contact=contact)) == {"contact.email": "email"}


def test_company_section_required_fields():
    codes = _codes(_edit_state(company=CompanySection(name="", industry=" ")))

    assert codes == {"company.name": "required", "company.industry": "required"}


@pytest.mark.parametrize("section", ["company", "contact", "notes"])
def test_missing_section_in_edit_mode(section):
    assert _codes(_edit_state(**{section: None})) == {section: "required"}


def test_new_note_needs_text_but_stored_note_does_not():
    notes = [NoteEntry(id=11, text=""), NoteEntry(text="  ")]

    assert _codes(_edit_state(notes=notes)) == {"notes.1.text": "required"}


def test_negative_salary():
    assert _codes(_edit_state(salary_expectation=-1)) == {"salary_expectation": "min"}
