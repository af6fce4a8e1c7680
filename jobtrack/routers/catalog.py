"""Company, contact and application list endpoints."""
from __future__ import annotations

import httpx
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from jobtrack.models.application import Application
from jobtrack.models.company import Company, CompanyPayload
from jobtrack.models.contact import Contact
from jobtrack.services.catalog_service import catalog_service

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


class NewCompany(BaseModel):
    company: CompanyPayload
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    position: str = ""


class NewCompanyResult(BaseModel):
    company: Company
    contact: Contact


def _upstream_error(e: httpx.HTTPError) -> HTTPException:
    status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
    return HTTPException(
        status_code=502, detail={"message": str(e), "upstream_status": status}
    )


@router.get("/applications", response_model=list[Application])
async def list_applications() -> list[Application]:
    try:
        return await catalog_service.list_applications()
    except httpx.HTTPError as e:
        raise _upstream_error(e)


@router.get("/companies", response_model=list[Company])
async def list_companies() -> list[Company]:
    try:
        return await catalog_service.list_companies()
    except httpx.HTTPError as e:
        raise _upstream_error(e)


@router.get("/companies/{company_id}/contacts", response_model=list[Contact])
async def contacts_for_company(company_id: int) -> list[Contact]:
    try:
        return await catalog_service.contacts_for_company(company_id)
    except httpx.HTTPError as e:
        raise _upstream_error(e)


@router.post("/companies", response_model=NewCompanyResult, status_code=201)
async def create_company(body: NewCompany) -> NewCompanyResult:
    """Create a company together with its first contact."""
    try:
        company, contact = await catalog_service.create_company_with_contact(
            body.company,
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            phone=body.phone,
            position=body.position,
        )
    except httpx.HTTPError as e:
        raise _upstream_error(e)
    return NewCompanyResult(company=company, contact=contact)
