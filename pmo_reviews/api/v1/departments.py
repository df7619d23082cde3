"""
Department endpoints. Reads for any signed-in user, writes for admins.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from pmo_reviews.api.deps import get_current_user, get_reference_service, require_admin
from pmo_reviews.api.v1.common import MessageResponse, NameField
from pmo_reviews.domain.base import CamelModel
from pmo_reviews.domain.reference import Department
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.services.reference_service import ReferenceService

router = APIRouter()


class DepartmentCreateRequest(CamelModel):
    name: NameField
    description: Optional[str] = None


class DepartmentUpdateRequest(CamelModel):
    name: Optional[NameField] = None
    description: Optional[str] = None


@router.get("/departments", response_model=list[Department])
async def list_departments(
    _: CurrentUser = Depends(get_current_user),
    service: ReferenceService = Depends(get_reference_service),
) -> list[Department]:
    return await service.list_departments()


@router.post("/departments", response_model=Department, status_code=status.HTTP_201_CREATED)
async def create_department(
    request: DepartmentCreateRequest,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> Department:
    return await service.create_department(request.name, request.description)


@router.get("/departments/{department_id}", response_model=Department)
async def get_department(
    department_id: str,
    _: CurrentUser = Depends(get_current_user),
    service: ReferenceService = Depends(get_reference_service),
) -> Department:
    return await service.get_department(department_id)


@router.put("/departments/{department_id}", response_model=Department)
async def update_department(
    department_id: str,
    request: DepartmentUpdateRequest,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> Department:
    """
    Update a department. Reviews and questions keep the name they were
    recorded with.
    """
    return await service.update_department(department_id, request.model_dump(exclude_unset=True))


@router.delete("/departments/{department_id}", response_model=MessageResponse)
async def delete_department(
    department_id: str,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> MessageResponse:
    await service.delete_department(department_id)
    return MessageResponse(message="Department deleted successfully")
