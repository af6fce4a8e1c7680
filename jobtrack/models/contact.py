from __future__ import annotations

from pydantic import BaseModel, Field

# Contact fields the editor can send in a partial update, in form order
CONTACT_FIELDS = ("first_name", "last_name", "email", "position", "phone")


class Contact(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    position: str = ""
    company: int = Field(description="Id of the company the contact works for")

    model_config = {"frozen": True}


class ContactCreatePayload(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    position: str | None = None
    company_id: int
