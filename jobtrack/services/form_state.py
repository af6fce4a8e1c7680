"""Owner of the in-memory edit state for one edit session.

Every ``reset`` builds a brand-new ``EditState`` from scratch, so nothing
populated for one application can survive into the session of another.
"""
from __future__ import annotations

import logging
from typing import Any

from jobtrack.errors import FieldLockedError, NoActiveSessionError
from jobtrack.models.application import Application
from jobtrack.models.edit_state import CompanySection, ContactSection, EditState, NoteEntry

logger = logging.getLogger(__name__)

_LOCKED_FIELDS = ("mode", "application_id")
_SECTION_FIELDS = ("company", "contact", "notes")


def _build_edit_state(target: Application) -> EditState:
    company = target.company
    contact = target.contact
    return EditState(
        mode="edit",
        application_id=target.id,
        job_title=target.job_title,
        salary_expectation=target.salary_expectation,
        company_id=company.id,
        status=target.status,
        applied_on=target.applied_on,
        interview_on=target.interview_on,
        offer_on=target.offer_on,
        rejected_on=target.rejected_on,
        follow_up_on=target.follow_up_on,
        job_posting_link=target.job_posting_link,
        company=CompanySection(
            name=company.name,
            industry=company.industry,
            website=company.website or "",
        ),
        contact=(
            ContactSection(
                first_name=contact.first_name,
                last_name=contact.last_name,
                email=contact.email,
                position=contact.position,
                phone=contact.phone,
            )
            if contact is not None
            else ContactSection()
        ),
        notes=[NoteEntry(id=note.id, text=note.text) for note in target.notes],
    )


class FormStateManager:
    def __init__(self) -> None:
        self._state: EditState | None = None
        self._original: Application | None = None

    @property
    def has_session(self) -> bool:
        return self._state is not None

    @property
    def is_edit_mode(self) -> bool:
        return self._state is not None and self._state.is_edit

    def reset(self, target: Application | None = None) -> EditState:
        """Start a new session: edit ``target``, or create a new application when None."""
        if target is None:
            self._state = EditState()
            self._original = None
            logger.debug("Edit state reset for a new application")
        else:
            self._state = _build_edit_state(target)
            self._original = target.model_copy(deep=True)
            logger.debug(
                "Edit state reset for application %d (%d notes, contact=%s)",
                target.id,
                len(target.notes),
                target.contact.id if target.contact else None,
            )
        return self.current_edit_state()

    def clear(self) -> None:
        """Discard the session entirely."""
        self._state = None
        self._original = None

    def current_edit_state(self) -> EditState:
        return self._require_state().model_copy(deep=True)

    def current_original_state(self) -> Application | None:
        self._require_state()
        return self._original

    def apply_changes(self, changes: dict[str, Any]) -> EditState:
        """Merge user input into the state.

        Nested ``company`` / ``contact`` dicts are merged field by field;
        ``notes`` replaces the whole list. Sections exist only in edit mode and
        cannot be removed there. The company of an existing application cannot
        be changed. In create mode, picking another company drops the contact
        selection, since contacts belong to a company.
        """
        state = self._require_state()
        for field in _LOCKED_FIELDS:
            if field in changes:
                raise FieldLockedError(field)

        data = state.model_dump()
        for key, value in changes.items():
            if key in _SECTION_FIELDS and (data.get(key) is None or value is None):
                raise FieldLockedError(key)
            if key in ("company", "contact") and isinstance(value, dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

        # Compare after validation so "3" and 3 are the same company
        candidate = EditState.model_validate(data)
        if candidate.company_id != state.company_id:
            if state.is_edit:
                raise FieldLockedError("company_id")
            if "contact_id" not in changes:
                candidate.contact_id = None

        self._state = candidate
        return self.current_edit_state()

    def add_note(self, text: str = "") -> EditState:
        state = self._require_state()
        if state.notes is None:
            raise FieldLockedError("notes")
        state.notes.append(NoteEntry(text=text))
        return self.current_edit_state()

    def remove_note(self, index: int) -> EditState:
        state = self._require_state()
        if state.notes is None:
            raise FieldLockedError("notes")
        if not 0 <= index < len(state.notes):
            raise IndexError(f"No note at index {index}")
        del state.notes[index]
        return self.current_edit_state()

    def _require_state(self) -> EditState:
        if self._state is None:
            raise NoActiveSessionError("No edit session; load an application or start a new one")
        return self._state
