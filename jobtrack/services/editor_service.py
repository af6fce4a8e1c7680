"""Editor facade for the host shell: load, edit, validate and submit an application."""
from __future__ import annotations

import logging
from typing import Any

from jobtrack.errors import (
    ApplicationNotFound,
    EditStateInvalid,
    LoadError,
    LoadSuperseded,
    NoActiveSessionError,
    SubmissionInProgressError,
)
from jobtrack.models.application import Application
from jobtrack.models.company import Company
from jobtrack.models.contact import Contact
from jobtrack.models.edit_state import EditState, ValidationIssue
from jobtrack.services.diff_resolver import resolve
from jobtrack.services.form_state import FormStateManager
from jobtrack.services.sequencer import ExecutionResult, OperationSequencer, SubmissionState
from jobtrack.services.store_client import StoreClient
from jobtrack.services.validation import required_date_field, validate

logger = logging.getLogger(__name__)


class EditorService:
    def __init__(self, store: StoreClient | None = None) -> None:
        self._store = store
        self._form = FormStateManager()
        self._sequencer: OperationSequencer | None = None
        # Bumped on every navigation; a load that returns after a newer
        # navigation is dropped.
        self._generation = 0

    def initialize(self, store: StoreClient) -> None:
        self._store = store
        logger.info("Editor service initialized")

    @property
    def store(self) -> StoreClient:
        if self._store is None:
            raise RuntimeError("Editor service has no store client; call initialize() first")
        return self._store

    @property
    def submission_state(self) -> SubmissionState:
        if self._sequencer is None:
            return SubmissionState.IDLE
        return self._sequencer.state

    # --- Session lifecycle ---

    def _begin_navigation(self) -> int:
        # The in-flight submission belongs to the current session
        self._guard_not_submitting()
        self._generation += 1
        self._form.clear()
        self._sequencer = None
        return self._generation

    async def load_for_edit(self, application_id: int) -> EditState:
        """Fetch an application and start editing it.

        The previous session is discarded before the fetch. On failure the
        editor is left without a session and LoadError is raised; the host is
        expected to navigate away.
        """
        generation = self._begin_navigation()
        try:
            application = await self.store.get_application(application_id)
        except ApplicationNotFound:
            logger.warning("Application %d not found", application_id)
            raise
        except Exception as e:
            logger.error("Loading application %d failed: %s", application_id, e)
            raise LoadError(application_id, e) from e

        if generation != self._generation:
            logger.info("Dropping stale load of application %d", application_id)
            raise LoadSuperseded(application_id)

        state = self._form.reset(application)
        logger.info("Editing application %d (%s)", application.id, application.job_title)
        return state

    def reset_for_create(self) -> EditState:
        self._begin_navigation()
        return self._form.reset(None)

    def close(self) -> None:
        """Tear the session down (editor left)."""
        self._begin_navigation()

    # --- Read accessors ---

    def edit_state(self) -> EditState:
        return self._form.current_edit_state()

    def original_state(self) -> Application | None:
        return self._form.current_original_state()

    def validation_issues(self) -> list[ValidationIssue]:
        return validate(self._form.current_edit_state())

    def required_date_field(self) -> str | None:
        return required_date_field(self._form.current_edit_state().status)

    # --- Input path ---

    def apply_changes(self, changes: dict[str, Any]) -> EditState:
        self._guard_not_submitting()
        return self._form.apply_changes(changes)

    def add_note(self, text: str = "") -> EditState:
        self._guard_not_submitting()
        return self._form.add_note(text)

    def remove_note(self, index: int) -> EditState:
        self._guard_not_submitting()
        return self._form.remove_note(index)

    # --- Selection lists ---

    async def companies(self) -> list[Company]:
        return await self.store.list_companies()

    async def contacts_for_selected_company(self) -> list[Contact]:
        company_id = self._form.current_edit_state().company_id
        if company_id is None:
            return []
        return await self.store.list_contacts_for_company(company_id)

    # --- Submission ---

    async def submit(self) -> ExecutionResult:
        """Validate, resolve and execute the current edit state.

        Raises EditStateInvalid (no store call made) when the state does not
        validate, and SubmissionInProgressError while a previous submit runs.
        A successful submit ends the session; a failed one keeps it so the
        user can retry.
        """
        self._guard_not_submitting()
        if not self._form.has_session:
            raise NoActiveSessionError("Nothing to submit; no edit session")

        # One snapshot for validation, resolution and execution
        snapshot = self._form.current_edit_state()
        issues = validate(snapshot)
        if issues:
            raise EditStateInvalid(issues)

        ops = resolve(self._form.current_original_state(), snapshot)
        sequencer = OperationSequencer(self.store)
        self._sequencer = sequencer
        logger.info(
            "Submitting %s application %s (contact: %s)",
            snapshot.mode,
            snapshot.application_id or "(new)",
            ops.contact.kind.value,
        )
        result = await sequencer.execute(ops)
        if result.ok:
            # Saved: the session is finished and its snapshot is now stale
            self._generation += 1
            self._form.clear()
        return result

    def _guard_not_submitting(self) -> None:
        if self.submission_state == SubmissionState.SUBMITTING:
            raise SubmissionInProgressError("A submission is still in flight")


editor_service = EditorService()
