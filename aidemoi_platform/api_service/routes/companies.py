"""Company CRUD route handlers."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_company_store
from ..errors import CompanyNotFound
from ..schemas import CompanyCreate, CompanyOut, CompanyUpdate, ErrorResponse
from ..stores import CompanyStore

router = APIRouter(prefix="/companies", tags=["companies"])
logger = logging.getLogger(__name__)

_not_found = {404: {"model": ErrorResponse}}


@router.get("", response_model=List[CompanyOut], summary="List all companies")
def list_companies(companies: CompanyStore = Depends(get_company_store)):
    return [company.to_dict() for company in companies.find_all()]


@router.get("/{company_id}", response_model=CompanyOut, responses=_not_found, summary="Get company by ID")
def get_company(company_id: str, companies: CompanyStore = Depends(get_company_store)):
    company = companies.find_by_id(company_id)
    if not company:
        raise CompanyNotFound()
    return company.to_dict()


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED, summary="Create a company")
def create_company(payload: CompanyCreate, companies: CompanyStore = Depends(get_company_store)):
    company = companies.create(**payload.model_dump())
    logger.info("Company created: company_id=%s name=%s", company.id, company.name)
    return company.to_dict()


@router.put("/{company_id}", response_model=CompanyOut, responses=_not_found, summary="Update a company")
def update_company(
    company_id: str,
    payload: CompanyUpdate,
    companies: CompanyStore = Depends(get_company_store),
):
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("name") is None:
        fields.pop("name", None)
    company = companies.update(company_id, **fields)
    if not company:
        raise CompanyNotFound()
    logger.info("Company updated: company_id=%s", company_id)
    return company.to_dict()


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_not_found,
    summary="Delete a company",
)
def delete_company(company_id: str, companies: CompanyStore = Depends(get_company_store)):
    if not companies.delete(company_id):
        raise CompanyNotFound()
    logger.info("Company deleted: company_id=%s", company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
