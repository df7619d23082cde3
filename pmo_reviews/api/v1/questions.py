"""
Question endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from pmo_reviews.api.deps import get_current_user, get_reference_service, require_admin
from pmo_reviews.api.v1.common import MessageResponse, NameField
from pmo_reviews.core.exceptions import AuthorizationError
from pmo_reviews.domain.base import CamelModel
from pmo_reviews.domain.reference import Question
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.services.reference_service import ReferenceService

router = APIRouter()


class QuestionCreateRequest(CamelModel):
    text: NameField
    department_id: str
    order: int = 0
    is_active: bool = True


class QuestionUpdateRequest(CamelModel):
    text: Optional[NameField] = None
    department_id: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


@router.get("/questions", response_model=list[Question])
async def list_questions(
    department_id: Optional[str] = Query(default=None, alias="departmentId"),
    include_inactive: bool = Query(default=False, alias="includeInactive"),
    user: CurrentUser = Depends(get_current_user),
    service: ReferenceService = Depends(get_reference_service),
) -> list[Question]:
    """
    List active questions, optionally for one department.

    Admins may pass ``includeInactive=true`` to see deactivated questions.
    """
    if include_inactive and not user.is_admin:
        raise AuthorizationError()
    return await service.list_questions(department_id, include_inactive=include_inactive)


@router.post("/questions", response_model=Question, status_code=status.HTTP_201_CREATED)
async def create_question(
    request: QuestionCreateRequest,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> Question:
    return await service.create_question(
        text=request.text,
        department_id=request.department_id,
        order=request.order,
        is_active=request.is_active,
    )


@router.get("/questions/{question_id}", response_model=Question)
async def get_question(
    question_id: str,
    _: CurrentUser = Depends(get_current_user),
    service: ReferenceService = Depends(get_reference_service),
) -> Question:
    return await service.get_question(question_id)


@router.put("/questions/{question_id}", response_model=Question)
async def update_question(
    question_id: str,
    request: QuestionUpdateRequest,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> Question:
    return await service.update_question(question_id, request.model_dump(exclude_unset=True))


@router.delete("/questions/{question_id}", response_model=MessageResponse)
async def delete_question(
    question_id: str,
    _: CurrentUser = Depends(require_admin),
    service: ReferenceService = Depends(get_reference_service),
) -> MessageResponse:
    await service.delete_question(question_id)
    return MessageResponse(message="Question deleted successfully")
