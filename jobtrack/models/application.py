from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from jobtrack.models.company import Company
from jobtrack.models.contact import Contact


class ApplicationStatus(str, Enum):
    DRAFT = "DRAFT"
    APPLIED = "APPLIED"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


MILESTONE_DATE_FIELDS = ("applied_on", "interview_on", "offer_on", "rejected_on", "follow_up_on")


class Note(BaseModel):
    id: int
    text: str
    created_at: str | None = None

    model_config = {"frozen": True}


class Application(BaseModel):
    """An application as returned by the store, with company, contact and notes embedded."""

    id: int
    job_title: str
    company: Company
    contact: Contact | None = None
    status: ApplicationStatus = ApplicationStatus.DRAFT
    status_display: str = ""
    applied_on: date | None = None
    interview_on: date | None = None
    offer_on: date | None = None
    rejected_on: date | None = None
    follow_up_on: date | None = None
    job_posting_link: str = ""
    salary_expectation: float | None = None
    created_at: str | None = None
    notes: tuple[Note, ...] = ()

    model_config = {"frozen": True}


class NotePayload(BaseModel):
    id: int | None = None
    text: str


class ApplicationPayload(BaseModel):
    """Write body for creating or updating an application.

    Relations are sent as ids. ``notes`` is only part of the body when it is
    set (edit mode); a ``None`` value is left out of the JSON entirely.
    """

    job_title: str
    company_id: int
    contact_id: int | None = None
    status: ApplicationStatus
    applied_on: date | None = None
    interview_on: date | None = None
    offer_on: date | None = None
    rejected_on: date | None = None
    follow_up_on: date | None = None
    job_posting_link: str = ""
    salary_expectation: float | None = None
    notes: list[NotePayload] | None = Field(default=None)

    def to_json(self) -> dict:
        body = self.model_dump(mode="json")
        if self.notes is None:
            body.pop("notes")
        return body
