from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from logimaster.api.deps import get_company_service
from logimaster.components.company import CompanyService

router = APIRouter()


@router.get("")
def get_company(service: CompanyService = Depends(get_company_service)) -> dict[str, Any]:
    profile = service.get_profile()
    return {**profile.model_dump(by_alias=True), "summary": service.profile_summary()}


@router.put("")
def update_company(
    data: dict[str, Any] = Body(...),
    service: CompanyService = Depends(get_company_service),
) -> dict[str, Any]:
    try:
        profile = service.save_profile(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {**profile.model_dump(by_alias=True), "summary": service.profile_summary()}
