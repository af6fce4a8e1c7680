from .company import Company, CompanyPayload
from .contact import Contact, ContactCreatePayload
from .application import Application, ApplicationPayload, ApplicationStatus, Note, NotePayload
from .edit_state import EditState, CompanySection, ContactSection, NoteEntry, ValidationIssue
from .operations import (
    ApplicationOperation,
    CompanyOperation,
    ContactOperation,
    OperationKind,
    OperationSet,
    Phase,
)

__all__ = [
    "Company",
    "CompanyPayload",
    "Contact",
    "ContactCreatePayload",
    "Application",
    "ApplicationPayload",
    "ApplicationStatus",
    "Note",
    "NotePayload",
    "EditState",
    "CompanySection",
    "ContactSection",
    "NoteEntry",
    "ValidationIssue",
    "ApplicationOperation",
    "CompanyOperation",
    "ContactOperation",
    "OperationKind",
    "OperationSet",
    "Phase",
]
