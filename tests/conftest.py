"""
Shared fixtures for the jobtrack test suite.

Provides:
- Store payloads for two applications (one with a contact and notes, one bare)
- FakeStore: an in-memory stand-in for StoreClient that records every call
  with start/end events, so tests can check ordering and concurrency
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from jobtrack.models.application import Application, ApplicationPayload, Note
from jobtrack.models.company import Company, CompanyPayload
from jobtrack.models.contact import Contact, ContactCreatePayload


# ============== Store payloads ==============

@pytest.fixture
def application_a_data() -> dict[str, Any]:
    """Application with contact, dates and notes."""
    return {
        "id": 1,
        "job_title": "Backend Engineer",
        "company": {"id": 3, "name": "Acme", "industry": "Software", "website": "https://acme.example"},
        "contact": {
            "id": 9,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@acme.example",
            "phone": "+49 30 1234",
            "position": "Recruiter",
            "company": 3,
        },
        "status": "INTERVIEW",
        "status_display": "Interview",
        "applied_on": "2024-03-01",
        "interview_on": "2024-03-12",
        "offer_on": None,
        "rejected_on": None,
        "follow_up_on": "2024-03-20",
        "job_posting_link": "https://acme.example/jobs/42",
        "salary_expectation": 72000,
        "created_at": "2024-02-28T09:00:00Z",
        "notes": [
            {"id": 11, "text": "Called the recruiter", "created_at": "2024-03-02T10:00:00Z"},
            {"id": 12, "text": "Sent portfolio", "created_at": "2024-03-05T16:30:00Z"},
        ],
    }


@pytest.fixture
def application_b_data() -> dict[str, Any]:
    """Bare application: no contact, no notes, no dates."""
    return {
        "id": 2,
        "job_title": "Data Analyst",
        "company": {"id": 4, "name": "Globex", "industry": "Logistics", "website": None},
        "contact": None,
        "status": "DRAFT",
        "status_display": "Draft",
        "applied_on": None,
        "interview_on": None,
        "offer_on": None,
        "rejected_on": None,
        "follow_up_on": None,
        "job_posting_link": "",
        "salary_expectation": None,
        "created_at": "2024-04-01T08:00:00Z",
        "notes": [],
    }


@pytest.fixture
def application_a(application_a_data) -> Application:
    return Application.model_validate(application_a_data)


@pytest.fixture
def application_b(application_b_data) -> Application:
    return Application.model_validate(application_b_data)


# ============== Fake store ==============

def http_error(status_code: int, url: str = "http://store.test/api/") -> httpx.HTTPStatusError:
    request = httpx.Request("POST", url)
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"{status_code} error", request=request, response=response)


class FakeStore:
    """Records calls as (name, *args) and start/end events in order."""

    def __init__(self, applications: list[Application] | None = None, delay: float = 0.01):
        self.applications = {a.id: a for a in applications or []}
        self.companies: list[Company] = [
            Company(id=3, name="Acme", industry="Software"),
            Company(id=4, name="Globex", industry="Logistics"),
        ]
        self.calls: list[tuple] = []
        self.events: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self.delay = delay
        self.next_id = 100

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    async def _step(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        self.events.append(f"start:{name}")
        await asyncio.sleep(self.delays.get(name, self.delay))
        self.events.append(f"end:{name}")
        if name in self.failures:
            raise self.failures[name]

    def _new_id(self) -> int:
        self.next_id += 1
        return self.next_id

    def _application_from(self, application_id: int, payload: ApplicationPayload) -> Application:
        company = next(c for c in self.companies if c.id == payload.company_id)
        notes = [
            Note(id=n.id if n.id is not None else self._new_id(), text=n.text)
            for n in payload.notes or []
        ]
        return Application(
            id=application_id,
            job_title=payload.job_title,
            company=company,
            status=payload.status,
            notes=notes,
        )

    async def get_application(self, application_id: int) -> Application:
        await self._step("get_application", application_id)
        return self.applications[application_id]

    async def list_applications(self) -> list[Application]:
        await self._step("list_applications")
        return list(self.applications.values())

    async def create_application(self, payload: ApplicationPayload) -> Application:
        await self._step("create_application", payload)
        return self._application_from(self._new_id(), payload)

    async def update_application(self, application_id: int, payload: ApplicationPayload) -> Application:
        await self._step("update_application", application_id, payload)
        return self._application_from(application_id, payload)

    async def list_companies(self) -> list[Company]:
        await self._step("list_companies")
        return list(self.companies)

    async def create_company(self, payload: CompanyPayload) -> Company:
        await self._step("create_company", payload)
        company = Company(id=self._new_id(), **payload.model_dump())
        self.companies.append(company)
        return company

    async def update_company(self, company_id: int, payload: CompanyPayload) -> Company:
        await self._step("update_company", company_id, payload)
        return Company(id=company_id, **payload.model_dump())

    async def list_contacts_for_company(self, company_id: int) -> list[Contact]:
        await self._step("list_contacts_for_company", company_id)
        return [Contact(id=9, first_name="Ada", last_name="Lovelace", company=company_id)]

    async def create_contact(self, payload: ContactCreatePayload) -> Contact:
        await self._step("create_contact", payload)
        fields = payload.model_dump(exclude_none=True)
        company_id = fields.pop("company_id")
        return Contact(id=self._new_id(), company=company_id, **fields)

    async def update_contact(self, contact_id: int, fields: dict[str, str]) -> Contact:
        await self._step("update_contact", contact_id, fields)
        return Contact(id=contact_id, first_name="Ada", last_name="Lovelace", company=3, **{
            k: v for k, v in fields.items() if k not in ("first_name", "last_name")
        })

    async def delete_contact(self, contact_id: int) -> None:
        await self._step("delete_contact", contact_id)


@pytest.fixture
def fake_store(application_a, application_b) -> FakeStore:
    return FakeStore([application_a, application_b])
