from __future__ import annotations

import logging

from jobtrack.models.application import Application
from jobtrack.models.company import Company, CompanyPayload
from jobtrack.models.contact import Contact, ContactCreatePayload
from jobtrack.services.store_client import StoreClient

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-mostly access to companies, contacts and the application list."""

    def __init__(self, store: StoreClient | None = None) -> None:
        self._store = store

    def initialize(self, store: StoreClient) -> None:
        self._store = store

    @property
    def store(self) -> StoreClient:
        if self._store is None:
            raise RuntimeError("Catalog service has no store client; call initialize() first")
        return self._store

    async def list_applications(self) -> list[Application]:
        applications = await self.store.list_applications()
        logger.info("Loaded %d applications", len(applications))
        return applications

    async def list_companies(self) -> list[Company]:
        return await self.store.list_companies()

    async def contacts_for_company(self, company_id: int) -> list[Contact]:
        return await self.store.list_contacts_for_company(company_id)

    async def create_company_with_contact(
        self,
        company: CompanyPayload,
        first_name: str,
        last_name: str,
        email: str = "",
        phone: str = "",
        position: str = "",
    ) -> tuple[Company, Contact]:
        """Create a company, then its first contact using the new company's id.

        If the contact fails the company stays created; the error propagates.
        """
        created = await self.store.create_company(company)
        logger.info("Created company %d (%s)", created.id, created.name)
        contact = await self.store.create_contact(
            ContactCreatePayload(
                first_name=first_name,
                last_name=last_name,
                email=email or None,
                phone=phone or None,
                position=position or None,
                company_id=created.id,
            )
        )
        logger.info("Created contact %d for company %d", contact.id, created.id)
        return created, contact


catalog_service = CatalogService()
