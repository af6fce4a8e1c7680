"""Async client for the remote application store (Django REST backend).

Each resource lives behind its own endpoint; there are no multi-entity
transactions. Failed calls surface as ``httpx.HTTPStatusError`` (or another
``httpx.HTTPError`` for transport problems) so callers can decide how to
aggregate them.
"""
from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Protocol

import httpx

from jobtrack.config import settings
from jobtrack.errors import ApplicationNotFound
from jobtrack.models.application import Application, ApplicationPayload
from jobtrack.models.company import Company, CompanyPayload
from jobtrack.models.contact import Contact, ContactCreatePayload

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    def get_token(self) -> str | None: ...


class StaticCredentials:
    """Credential provider holding a fixed token (e.g. from settings)."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token


class TokenAuth(httpx.Auth):
    """Attach ``Authorization: Token <token>`` when the provider has a token."""

    def __init__(self, credentials: CredentialProvider) -> None:
        self._credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._credentials.get_token()
        if token:
            request.headers["Authorization"] = f"Token {token}"
        yield request


class StoreClient:
    def __init__(
        self,
        base_url: str | None = None,
        credentials: CredentialProvider | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base_url = (base_url or settings.api_base_url).rstrip("/")
        credentials = credentials or StaticCredentials(settings.api_token)
        self._http = httpx.AsyncClient(
            base_url=base_url,
            auth=TokenAuth(credentials),
            headers={"Content-Type": "application/json"},
            timeout=timeout or settings.request_timeout,
            transport=transport,
        )
        logger.info("Store client initialized for %s", base_url)

    # --- Applications ---

    async def get_application(self, application_id: int) -> Application:
        response = await self._http.get(f"/applications/{application_id}/")
        if response.status_code == 404:
            raise ApplicationNotFound(application_id)
        response.raise_for_status()
        return Application.model_validate(response.json())

    async def list_applications(self) -> list[Application]:
        response = await self._http.get("/applications/")
        response.raise_for_status()
        return [Application.model_validate(a) for a in response.json()]

    async def create_application(self, payload: ApplicationPayload) -> Application:
        response = await self._http.post("/applications/", json=payload.to_json())
        response.raise_for_status()
        return Application.model_validate(response.json())

    async def update_application(
        self, application_id: int, payload: ApplicationPayload
    ) -> Application:
        response = await self._http.put(
            f"/applications/{application_id}/", json=payload.to_json()
        )
        response.raise_for_status()
        return Application.model_validate(response.json())

    # --- Companies ---

    async def list_companies(self) -> list[Company]:
        response = await self._http.get("/companies/")
        response.raise_for_status()
        return [Company.model_validate(c) for c in response.json()]

    async def create_company(self, payload: CompanyPayload) -> Company:
        response = await self._http.post("/companies/", json=payload.model_dump(mode="json"))
        response.raise_for_status()
        return Company.model_validate(response.json())

    async def update_company(self, company_id: int, payload: CompanyPayload) -> Company:
        response = await self._http.put(
            f"/companies/{company_id}/", json=payload.model_dump(mode="json")
        )
        response.raise_for_status()
        return Company.model_validate(response.json())

    # --- Contacts ---

    async def list_contacts_for_company(self, company_id: int) -> list[Contact]:
        response = await self._http.get("/contacts/", params={"company": company_id})
        response.raise_for_status()
        return [Contact.model_validate(c) for c in response.json()]

    async def create_contact(self, payload: ContactCreatePayload) -> Contact:
        response = await self._http.post(
            "/contacts/", json=payload.model_dump(mode="json", exclude_none=True)
        )
        response.raise_for_status()
        return Contact.model_validate(response.json())

    async def update_contact(self, contact_id: int, fields: dict[str, str]) -> Contact:
        """Partial update: only the given fields are touched."""
        response = await self._http.patch(f"/contacts/{contact_id}/", json=fields)
        response.raise_for_status()
        return Contact.model_validate(response.json())

    async def delete_contact(self, contact_id: int) -> None:
        response = await self._http.delete(f"/contacts/{contact_id}/")
        response.raise_for_status()

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> StoreClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
