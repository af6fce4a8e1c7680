from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from jobtrack.models.application import ApplicationStatus


class CompanySection(BaseModel):
    name: str = ""
    industry: str = ""
    website: str = ""

    model_config = {"extra": "forbid"}


class ContactSection(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    position: str = ""
    phone: str = ""

    model_config = {"extra": "forbid"}

    @property
    def has_data(self) -> bool:
        """Both names filled: the contact should exist after saving."""
        return bool(self.first_name and self.last_name)

    @property
    def is_incomplete(self) -> bool:
        return bool(self.first_name) != bool(self.last_name)


class NoteEntry(BaseModel):
    id: int | None = Field(None, description="Store id; None for notes added in this session")
    text: str = ""

    model_config = {"extra": "forbid"}


class EditState(BaseModel):
    """Everything the user can edit in one session, as a plain value.

    ``company``, ``contact`` and ``notes`` only exist in edit mode. In create
    mode the user picks an existing company and, optionally, one of its
    contacts (``contact_id``).
    """

    mode: Literal["create", "edit"] = "create"
    application_id: int | None = None

    job_title: str = ""
    salary_expectation: float | None = None
    company_id: int | None = None
    contact_id: int | None = None
    status: ApplicationStatus | None = ApplicationStatus.DRAFT
    applied_on: date | None = None
    interview_on: date | None = None
    offer_on: date | None = None
    rejected_on: date | None = None
    follow_up_on: date | None = None
    job_posting_link: str = ""

    company: CompanySection | None = None
    contact: ContactSection | None = None
    notes: list[NoteEntry] | None = None

    model_config = {"extra": "forbid"}

    @property
    def is_edit(self) -> bool:
        return self.mode == "edit"


class ValidationIssue(BaseModel):
    field: str = Field(description="Dotted path of the offending field, e.g. 'contact.last_name'")
    code: str
    message: str
