from __future__ import annotations

from pydantic import BaseModel


class Company(BaseModel):
    id: int
    name: str
    industry: str
    website: str | None = None

    model_config = {"frozen": True}


class CompanyPayload(BaseModel):
    """Body for creating or updating a company."""

    name: str
    industry: str
    website: str | None = None
