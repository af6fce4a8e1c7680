"""Decide which store calls a submission needs.

``resolve`` compares the original snapshot (``None`` when creating) with the
edited state and returns an ``OperationSet``. It is a pure function: no I/O,
and the same inputs always give the same result.

Per entity:

- contact: create / update / delete / no-op depending on whether the
  original had a contact and whether the edit has both names filled in.
  Updates only carry non-empty fields that differ from the stored contact,
  so clearing an optional field never wipes the stored value.
- company: always updated in edit mode (the company of an existing
  application is fixed, so it is the one already referenced).
- application: created or updated with the full field set and the contact
  id that will be valid once the contact operation has run. Notes travel
  inside the application payload, in edit mode only.
"""
from __future__ import annotations

from jobtrack.models.application import Application, ApplicationPayload, NotePayload
from jobtrack.models.company import CompanyPayload
from jobtrack.models.contact import CONTACT_FIELDS, Contact, ContactCreatePayload
from jobtrack.models.edit_state import ContactSection, EditState
from jobtrack.models.operations import (
    ApplicationOperation,
    CompanyOperation,
    ContactOperation,
    OperationKind,
    OperationSet,
)


def _contact_changes(edited: ContactSection, stored: Contact) -> dict[str, str]:
    changes: dict[str, str] = {}
    for field in CONTACT_FIELDS:
        value = getattr(edited, field)
        if value and value != getattr(stored, field):
            changes[field] = value
    return changes


def _resolve_contact(
    stored: Contact | None, edited: ContactSection, company_id: int
) -> ContactOperation:
    if edited.is_incomplete:
        raise ValueError("Contact has only one of first/last name; validate before resolving")

    if stored is None:
        if not edited.has_data:
            return ContactOperation()
        return ContactOperation(
            kind=OperationKind.CREATE,
            create=ContactCreatePayload(
                first_name=edited.first_name,
                last_name=edited.last_name,
                email=edited.email or None,
                phone=edited.phone or None,
                position=edited.position or None,
                company_id=company_id,
            ),
        )

    if not edited.has_data:
        return ContactOperation(kind=OperationKind.DELETE, contact_id=stored.id)

    changes = _contact_changes(edited, stored)
    if not changes:
        return ContactOperation(contact_id=stored.id)
    return ContactOperation(kind=OperationKind.UPDATE, contact_id=stored.id, changes=changes)


def _application_payload(
    edited: EditState, contact_id: int | None, notes: list[NotePayload] | None
) -> ApplicationPayload:
    return ApplicationPayload(
        job_title=edited.job_title,
        company_id=edited.company_id,
        contact_id=contact_id,
        status=edited.status,
        applied_on=edited.applied_on,
        interview_on=edited.interview_on,
        offer_on=edited.offer_on,
        rejected_on=edited.rejected_on,
        follow_up_on=edited.follow_up_on,
        job_posting_link=edited.job_posting_link,
        salary_expectation=edited.salary_expectation,
        notes=notes,
    )


def _resolve_create(edited: EditState) -> OperationSet:
    payload = _application_payload(edited, edited.contact_id, notes=None)
    return OperationSet(
        application=ApplicationOperation(kind=OperationKind.CREATE, payload=payload),
    )


def _resolve_edit(original: Application, edited: EditState) -> OperationSet:
    if edited.application_id != original.id:
        raise ValueError(
            f"Edit state belongs to application {edited.application_id}, "
            f"original is {original.id}"
        )

    contact_op = _resolve_contact(
        original.contact, edited.contact or ContactSection(), edited.company_id
    )
    if contact_op.kind in (OperationKind.CREATE, OperationKind.DELETE):
        # CREATE: placeholder, the sequencer fills in the created contact's id
        contact_id = None
    else:
        contact_id = contact_op.contact_id

    company = edited.company
    if company is None or edited.notes is None:
        raise ValueError("Edit state lost its company or notes section; validate before resolving")
    company_op = CompanyOperation(
        company_id=edited.company_id,
        payload=CompanyPayload(
            name=company.name,
            industry=company.industry,
            website=company.website or None,
        ),
    )

    notes = [NotePayload(id=note.id, text=note.text) for note in edited.notes]
    return OperationSet(
        contact=contact_op,
        company=company_op,
        application=ApplicationOperation(
            kind=OperationKind.UPDATE,
            application_id=original.id,
            payload=_application_payload(edited, contact_id, notes),
            link_created_contact=contact_op.kind == OperationKind.CREATE,
        ),
    )


def resolve(original: Application | None, edited: EditState) -> OperationSet:
    """Map ``(original, edited)`` to the operations one submission must run.

    Raises ValueError when ``edited`` breaks a precondition that validation
    should have caught (missing company, half-filled contact, edit state with
    no original).
    """
    if edited.company_id is None or edited.status is None:
        raise ValueError("Edit state has no company or status; validate before resolving")
    if not edited.is_edit:
        return _resolve_create(edited)
    if original is None:
        raise ValueError("Edit mode requires the original application snapshot")
    return _resolve_edit(original, edited)
