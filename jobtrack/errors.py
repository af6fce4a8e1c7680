"""Error taxonomy for the application editor.

Validation problems are local and never reach the store. Operation errors
come from a failed remote call during a submission and name the phase that
failed. Load errors end the edit session.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobtrack.models.edit_state import ValidationIssue
    from jobtrack.models.operations import Phase


class JobtrackError(Exception):
    """Base class for all editor errors."""


class EditStateInvalid(JobtrackError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        fields = ", ".join(issue.field for issue in issues)
        super().__init__(f"Edit state is invalid: {fields}")


class OperationError(JobtrackError):
    """A remote call failed while executing a submission."""

    def __init__(self, phase: Phase, cause: BaseException) -> None:
        self.phase = phase
        self.cause = cause
        super().__init__(f"{phase.value} failed: {cause}")

    @property
    def status_code(self) -> int | None:
        response = getattr(self.cause, "response", None)
        return getattr(response, "status_code", None)


class LoadError(JobtrackError):
    """Fetching an application for editing failed; the session was discarded."""

    def __init__(self, application_id: int, cause: BaseException) -> None:
        self.application_id = application_id
        self.cause = cause
        super().__init__(f"Could not load application {application_id}: {cause}")


class ApplicationNotFound(JobtrackError):
    def __init__(self, application_id: int) -> None:
        self.application_id = application_id
        super().__init__(f"Application {application_id} not found")


class NoActiveSessionError(JobtrackError):
    """An editor operation needs a loaded or freshly reset session."""


class SubmissionInProgressError(JobtrackError):
    """A submit was requested while the previous one is still running."""


class SubmissionStateError(JobtrackError):
    """A sequencer was asked to execute outside of its idle state."""


class FieldLockedError(JobtrackError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Field '{field}' cannot be changed while editing")


class LoadSuperseded(JobtrackError):
    """A load finished after the editor had already navigated elsewhere."""

    def __init__(self, application_id: int) -> None:
        self.application_id = application_id
        super().__init__(f"Load of application {application_id} was superseded")
