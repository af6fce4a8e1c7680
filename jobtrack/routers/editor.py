"""Editor REST endpoints used by the form-hosting shell."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, ValidationError

from jobtrack.config import settings
from jobtrack.errors import (
    ApplicationNotFound,
    EditStateInvalid,
    FieldLockedError,
    LoadError,
    LoadSuperseded,
    NoActiveSessionError,
    SubmissionInProgressError,
)
from jobtrack.models.application import Application
from jobtrack.models.contact import Contact
from jobtrack.models.edit_state import EditState, ValidationIssue
from jobtrack.services.editor_service import editor_service
from jobtrack.services.sequencer import SubmissionState

router = APIRouter(prefix="/api/editor", tags=["editor"])


class ValidationReport(BaseModel):
    valid: bool
    required_date_field: str | None = None
    issues: list[ValidationIssue] = []


class SubmitResponse(BaseModel):
    state: SubmissionState
    application: Application | None = None
    contact_id: int | None = None


class NewNote(BaseModel):
    text: str = ""


def _session_error(e: Exception) -> HTTPException:
    """Map editor session errors; everything else is a 409 conflict with the session."""
    if isinstance(e, FieldLockedError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))


@router.post("/edit/{application_id}", response_model=EditState)
async def load_for_edit(application_id: int) -> EditState:
    """Start editing an existing application."""
    try:
        return await editor_service.load_for_edit(application_id)
    except ApplicationNotFound as e:
        raise HTTPException(
            status_code=404, detail={"message": str(e), "navigate_to": settings.list_route}
        )
    except LoadError as e:
        raise HTTPException(
            status_code=502,
            detail={
                "message": "The application details could not be loaded.",
                "navigate_to": settings.list_route,
            },
        ) from e
    except (LoadSuperseded, SubmissionInProgressError) as e:
        raise _session_error(e)


@router.post("/new", response_model=EditState)
async def reset_for_create() -> EditState:
    """Start a fresh create session."""
    try:
        return editor_service.reset_for_create()
    except SubmissionInProgressError as e:
        raise _session_error(e)


@router.delete("/session", status_code=204)
async def close_session() -> None:
    try:
        editor_service.close()
    except SubmissionInProgressError as e:
        raise _session_error(e)


@router.get("/state", response_model=EditState)
async def get_state() -> EditState:
    try:
        return editor_service.edit_state()
    except NoActiveSessionError as e:
        raise _session_error(e)


@router.patch("/state", response_model=EditState)
async def patch_state(changes: dict[str, Any] = Body(...)) -> EditState:
    try:
        return editor_service.apply_changes(changes)
    except (NoActiveSessionError, SubmissionInProgressError, FieldLockedError, ValidationError) as e:
        raise _session_error(e)


@router.post("/notes", response_model=EditState)
async def add_note(note: NewNote) -> EditState:
    try:
        return editor_service.add_note(note.text)
    except (NoActiveSessionError, SubmissionInProgressError, FieldLockedError) as e:
        raise _session_error(e)


@router.delete("/notes/{index}", response_model=EditState)
async def remove_note(index: int) -> EditState:
    try:
        return editor_service.remove_note(index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"No note at index {index}")
    except (NoActiveSessionError, SubmissionInProgressError, FieldLockedError) as e:
        raise _session_error(e)


@router.get("/validation", response_model=ValidationReport)
async def get_validation() -> ValidationReport:
    try:
        issues = editor_service.validation_issues()
        return ValidationReport(
            valid=not issues,
            required_date_field=editor_service.required_date_field(),
            issues=issues,
        )
    except NoActiveSessionError as e:
        raise _session_error(e)


@router.get("/contacts", response_model=list[Contact])
async def contacts_for_selected_company() -> list[Contact]:
    """Contacts of the currently selected company (create-mode picker)."""
    try:
        return await editor_service.contacts_for_selected_company()
    except NoActiveSessionError as e:
        raise _session_error(e)


@router.post("/submit", response_model=SubmitResponse)
async def submit() -> SubmitResponse:
    try:
        result = await editor_service.submit()
    except EditStateInvalid as e:
        raise HTTPException(
            status_code=422, detail=[issue.model_dump() for issue in e.issues]
        )
    except (NoActiveSessionError, SubmissionInProgressError) as e:
        raise _session_error(e)

    if not result.ok:
        error = result.error
        raise HTTPException(
            status_code=502,
            detail={
                "message": "An error occurred while saving.",
                "phase": error.phase.value,
                "upstream_status": error.status_code,
            },
        )
    return SubmitResponse(
        state=result.state, application=result.application, contact_id=result.contact_id
    )
