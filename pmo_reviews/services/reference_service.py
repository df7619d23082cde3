"""
Reference data service: zones, departments and questions.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar, Union

from pmo_reviews.core.exceptions import (
    ConflictError,
    DepartmentNotFoundError,
    NotFoundError,
    QuestionNotFoundError,
    ZoneNotFoundError,
)
from pmo_reviews.core.logging import get_logger
from pmo_reviews.core.security import generate_id
from pmo_reviews.domain.reference import Department, Question, Zone
from pmo_reviews.repositories.base import BaseRepository

logger = get_logger(__name__)

NamedEntity = TypeVar("NamedEntity", Zone, Department)


class ReferenceService:
    """
    Service for maintaining zones, departments and questions.

    Renaming a zone or department does not touch reviews or questions that
    already carry the old name; those fields are historical snapshots.
    """

    def __init__(
        self,
        zone_repository: BaseRepository[Zone],
        department_repository: BaseRepository[Department],
        question_repository: BaseRepository[Question],
    ) -> None:
        self.zone_repository = zone_repository
        self.department_repository = department_repository
        self.question_repository = question_repository

    # -------------------------------------------------------------------------
    # Shared helpers for named entities
    # -------------------------------------------------------------------------

    async def _get_named(
        self,
        repository: BaseRepository[NamedEntity],
        entity_id: str,
        not_found: Callable[[str], NotFoundError],
    ) -> NamedEntity:
        entity = await repository.get(entity_id)
        if entity is None:
            raise not_found(entity_id)
        return entity

    async def _check_unique_name(
        self,
        repository: BaseRepository[NamedEntity],
        resource_type: str,
        name: str,
        current_id: Optional[str] = None,
    ) -> None:
        existing = await repository.find_one(name=name.strip())
        if existing is not None and existing.id != current_id:
            raise ConflictError(resource_type, "name", name.strip())

    async def _create_named(
        self,
        repository: BaseRepository[NamedEntity],
        model: type[NamedEntity],
        kind: str,
        name: str,
        description: Optional[str],
    ) -> NamedEntity:
        entity = model(id=generate_id(kind), name=name, description=description)
        await self._check_unique_name(repository, model.__name__, entity.name)
        await repository.save(entity)
        logger.info(f"{model.__name__} created", entity_id=entity.id, name=entity.name)
        return entity

    async def _update_named(
        self,
        repository: BaseRepository[NamedEntity],
        entity: NamedEntity,
        changes: dict[str, Any],
    ) -> NamedEntity:
        updated = type(entity).model_validate({**entity.model_dump(), **changes})
        if updated.name != entity.name:
            await self._check_unique_name(repository, type(entity).__name__, updated.name, entity.id)
        await repository.save(updated)
        logger.info(f"{type(entity).__name__} updated", entity_id=entity.id, fields=sorted(changes))
        return updated

    # -------------------------------------------------------------------------
    # Zones
    # -------------------------------------------------------------------------

    async def list_zones(self) -> list[Zone]:
        return await self.zone_repository.list()

    async def get_zone(self, zone_id: str) -> Zone:
        return await self._get_named(self.zone_repository, zone_id, ZoneNotFoundError)

    async def create_zone(self, name: str, description: Optional[str] = None) -> Zone:
        return await self._create_named(self.zone_repository, Zone, "zone", name, description)

    async def update_zone(self, zone_id: str, changes: dict[str, Any]) -> Zone:
        zone = await self.get_zone(zone_id)
        return await self._update_named(self.zone_repository, zone, changes)

    async def delete_zone(self, zone_id: str) -> None:
        if not await self.zone_repository.delete(zone_id):
            raise ZoneNotFoundError(zone_id)
        logger.info("Zone deleted", zone_id=zone_id)

    # -------------------------------------------------------------------------
    # Departments
    # -------------------------------------------------------------------------

    async def list_departments(self) -> list[Department]:
        return await self.department_repository.list()

    async def get_department(self, department_id: str) -> Department:
        return await self._get_named(
            self.department_repository, department_id, DepartmentNotFoundError
        )

    async def create_department(self, name: str, description: Optional[str] = None) -> Department:
        return await self._create_named(
            self.department_repository, Department, "department", name, description
        )

    async def update_department(self, department_id: str, changes: dict[str, Any]) -> Department:
        department = await self.get_department(department_id)
        return await self._update_named(self.department_repository, department, changes)

    async def delete_department(self, department_id: str) -> None:
        if not await self.department_repository.delete(department_id):
            raise DepartmentNotFoundError(department_id)
        logger.info("Department deleted", department_id=department_id)

    # -------------------------------------------------------------------------
    # Questions
    # -------------------------------------------------------------------------

    async def list_questions(
        self,
        department_id: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[Question]:
        """
        List questions ordered by ``order`` then creation time.

        Args:
            department_id: Only questions for this department
            include_inactive: Also return deactivated questions
        """
        filters: dict[str, Union[str, bool]] = {}
        if not include_inactive:
            filters["is_active"] = True
        if department_id:
            filters["department_id"] = department_id
        return await self.question_repository.list(filters=filters)

    async def get_question(self, question_id: str) -> Question:
        question = await self.question_repository.get(question_id)
        if question is None:
            raise QuestionNotFoundError(question_id)
        return question

    async def create_question(
        self,
        text: str,
        department_id: str,
        order: int = 0,
        is_active: bool = True,
    ) -> Question:
        department = await self.get_department(department_id)
        question = Question(
            id=generate_id("question"),
            text=text,
            department_id=department.id,
            department_name=department.name,
            order=order,
            is_active=is_active,
        )
        await self.question_repository.save(question)
        logger.info("Question created", question_id=question.id, department=department.name)
        return question

    async def update_question(self, question_id: str, changes: dict[str, Any]) -> Question:
        question = await self.get_question(question_id)
        changes = dict(changes)

        if changes.get("department_id") and changes["department_id"] != question.department_id:
            department = await self.get_department(changes["department_id"])
            changes["department_name"] = department.name

        updated = Question.model_validate({**question.model_dump(), **changes})
        await self.question_repository.save(updated)
        logger.info("Question updated", question_id=question_id, fields=sorted(changes))
        return updated

    async def delete_question(self, question_id: str) -> None:
        if not await self.question_repository.delete(question_id):
            raise QuestionNotFoundError(question_id)
        logger.info("Question deleted", question_id=question_id)
