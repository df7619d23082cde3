"""
Zone endpoints. Reads for any signed-in user, writes for admins.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from pmo_reviews.api.deps import get_current_user, get_reference_service, require_admin
from pmo_reviews.api.v1.common import MessageResponse, NameField
from pmo_reviews.core.logging import get_logger
from pmo_reviews.domain.base import CamelModel
from pmo_reviews.domain.reference import Zone
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.services.reference_service import ReferenceService

logger = get_logger(__name__)

router = APIRouter()


class ZoneCreateRequest(CamelModel):
    name: NameField
    description: Optional[str] = None


class ZoneUpdateRequest(CamelModel):
    name: Optional[NameField] = None
    description: Optional[str] = None


@router.get("/zones", response_model=list[Zone])
async def list_zones(
    _: CurrentUser = Depends(get_current_user),
    service: ReferenceService = Depends(get_reference_service),
) -> list[Zone]:
    """List zones sorted by name."""
    return await service.list_zones()


@router.post("/zones", response_model=Zone, status_code=status.HTTP_201_CREATED)
async def create_zone(
    request: ZoneCreateRequest,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> Zone:
    return await service.create_zone(request.name, request.description)


@router.get("/zones/{zone_id}", response_model=Zone)
async def get_zone(
    zone_id: str,
    _: CurrentUser = Depends(get_current_user),
    service: ReferenceService = Depends(get_reference_service),
) -> Zone:
    return await service.get_zone(zone_id)


@router.put("/zones/{zone_id}", response_model=Zone)
async def update_zone(
    zone_id: str,
    request: ZoneUpdateRequest,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> Zone:
    """
    Update a zone. Existing reviews keep the zone name they were recorded with.
    """
    return await service.update_zone(zone_id, request.model_dump(exclude_unset=True))


@router.delete("/zones/{zone_id}", response_model=MessageResponse)
async def delete_zone(
    zone_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> MessageResponse:
    logger.info("Deleting zone", zone_id=zone_id, admin_id=admin.id)
    await service.delete_zone(zone_id)
    return MessageResponse(message="Zone deleted successfully")
