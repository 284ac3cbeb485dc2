"""Company API endpoints."""
import uuid

from fastapi import APIRouter, status

from app.api.deps import DB
from app.core.exceptions import operation_failed
from app.schemas.base import APIResponse, APIListResponse, success_response
from app.schemas.company import CompanyCreate, CompanyResponse
from app.services.company_service import CompanyService


router = APIRouter()


@router.get("", response_model=APIListResponse[CompanyResponse])
async def list_companies(db: DB):
    """Companies in name order."""
    with operation_failed("Failed to fetch companies"):
        companies = await CompanyService(db).get_companies()
    data = [CompanyResponse.model_validate(c) for c in companies]
    return success_response(data, count=len(data))


@router.post(
    "",
    response_model=APIResponse[CompanyResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_company(data: CompanyCreate, db: DB):
    """Register a shipper company. Names are unique regardless of case."""
    with operation_failed("Failed to create company"):
        company = await CompanyService(db).create_company(data)
    return success_response(CompanyResponse.model_validate(company))


@router.get("/{company_id}", response_model=APIResponse[CompanyResponse])
async def get_company(company_id: uuid.UUID, db: DB):
    with operation_failed("Failed to fetch company"):
        company = await CompanyService(db).get_company(company_id)
    return success_response(CompanyResponse.model_validate(company))
