from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from jobtrack.models.application import ApplicationPayload
from jobtrack.models.company import CompanyPayload
from jobtrack.models.contact import ContactCreatePayload


class OperationKind(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Phase(str, Enum):
    """Names of the individual store calls a submission can issue."""

    CONTACT_CREATE = "contact.create"
    CONTACT_UPDATE = "contact.update"
    CONTACT_DELETE = "contact.delete"
    COMPANY_UPDATE = "company.update"
    APPLICATION_CREATE = "application.create"
    APPLICATION_UPDATE = "application.update"


class ContactOperation(BaseModel):
    kind: OperationKind = OperationKind.NOOP
    contact_id: int | None = None
    create: ContactCreatePayload | None = None
    changes: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


class CompanyOperation(BaseModel):
    company_id: int
    payload: CompanyPayload

    model_config = {"frozen": True}


class ApplicationOperation(BaseModel):
    kind: OperationKind
    application_id: int | None = None
    payload: ApplicationPayload
    link_created_contact: bool = Field(
        False,
        description="payload.contact_id is a placeholder for the contact created in phase 1",
    )

    model_config = {"frozen": True}


class OperationSet(BaseModel):
    """Everything one submission has to do against the store."""

    contact: ContactOperation = Field(default_factory=ContactOperation)
    company: CompanyOperation | None = None
    application: ApplicationOperation

    model_config = {"frozen": True}
