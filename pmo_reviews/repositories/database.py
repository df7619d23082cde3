"""
PostgreSQL connection handle and JSONB document-store repository.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import asyncpg
from pydantic.alias_generators import to_camel

from pmo_reviews.core.exceptions import DatabaseError
from pmo_reviews.core.logging import get_logger
from pmo_reviews.repositories.base import BaseRepository, T

logger = get_logger(__name__)

COLLECTIONS = ("zones", "departments", "questions", "reviews", "users")

UNIQUE_INDEXES = {
    "zones": "name",
    "departments": "name",
    "users": "email",
}


class Database:
    """
    Lazily-initialized asyncpg pool.

    ``ensure_connected`` is idempotent and safe to call from concurrent
    requests; the first caller creates the pool and the collection tables.
    """

    def __init__(self, url: str, min_size: int = 1, max_size: int = 10) -> None:
        self.url = url
        self.min_size = min_size
        self.max_size = max_size
        self._pool: Optional[asyncpg.Pool] = None
        self._lock = asyncio.Lock()

    async def ensure_connected(self) -> asyncpg.Pool:
        """Return the pool, creating it and the schema on first use."""
        if self._pool is not None:
            return self._pool

        async with self._lock:
            if self._pool is None:
                try:
                    pool = await asyncpg.create_pool(
                        self.url, min_size=self.min_size, max_size=self.max_size
                    )
                    await self._create_schema(pool)
                except (OSError, asyncpg.PostgresError) as e:
                    raise DatabaseError(f"Could not connect: {e}") from e
                self._pool = pool
                logger.info("Database connected", pool_max_size=self.max_size)

        return self._pool

    async def _create_schema(self, pool: asyncpg.Pool) -> None:
        async with pool.acquire() as conn:
            for table in COLLECTIONS:
                await conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id TEXT PRIMARY KEY,
                        data JSONB NOT NULL,
                        created_at TIMESTAMPTZ NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL
                    )
                    """
                )
            for table, field in UNIQUE_INDEXES.items():
                await conn.execute(
                    f"CREATE UNIQUE INDEX IF NOT EXISTS {table}_{field}_key "
                    f"ON {table} ((data->>'{field}'))"
                )

    async def close(self) -> None:
        """Close the pool if it was ever opened."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection closed")


def _sql_value(value: Any) -> str:
    """Text form of a filter value as stored under ``data->>``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


class PostgresRepository(BaseRepository[T]):
    """
    PostgreSQL repository storing each entity as one JSONB document.

    Subclasses set ``collection``, ``model`` and ``order_by``.
    """

    collection: str = "entities"
    model: type[T]
    order_by: str = "created_at ASC"

    def __init__(self, database: Database) -> None:
        """
        Initialize with a database handle.

        Args:
            database: Shared connection handle
        """
        self.database = database

    def _to_document(self, entity: T) -> dict[str, Any]:
        return entity.model_dump(mode="json", by_alias=True)

    def _from_document(self, data: dict[str, Any]) -> T:
        return self.model.model_validate(data)

    def _row_to_entity(self, row: Any) -> T:
        return self._from_document(json.loads(row["data"]))

    async def get(self, id: str) -> Optional[T]:
        """Get an entity by ID."""
        pool = await self.database.ensure_connected()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT data FROM {self.collection} WHERE id = $1", id
            )
        return self._row_to_entity(row) if row else None

    async def save(self, entity: T) -> T:
        """Save an entity."""
        entity.touch()
        pool = await self.database.ensure_connected()
        try:
            async with pool.acquire() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO {self.collection} (id, data, created_at, updated_at)
                    VALUES ($1, $2::jsonb, $3, $4)
                    ON CONFLICT (id) DO UPDATE SET
                        data = EXCLUDED.data,
                        updated_at = EXCLUDED.updated_at
                    """,
                    entity.id,
                    json.dumps(self._to_document(entity)),
                    entity.created_at,
                    entity.updated_at,
                )
        except asyncpg.UniqueViolationError as e:
            raise DatabaseError(
                "Unique constraint violated", details={"collection": self.collection}
            ) from e
        return entity

    async def delete(self, id: str) -> bool:
        """Delete an entity by ID."""
        pool = await self.database.ensure_connected()
        async with pool.acquire() as conn:
            result = await conn.execute(f"DELETE FROM {self.collection} WHERE id = $1", id)
        return result == "DELETE 1"

    async def list(
        self,
        filters: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[T]:
        """List entities with optional filters."""
        query = f"SELECT data FROM {self.collection} WHERE 1=1"
        params: list[Any] = []

        for key, value in (filters or {}).items():
            params.append(_sql_value(value))
            query += f" AND data->>'{to_camel(key)}' = ${len(params)}"

        query += f" ORDER BY {self.order_by}"
        if limit is not None:
            params.append(limit)
            query += f" LIMIT ${len(params)}"
        params.append(offset)
        query += f" OFFSET ${len(params)}"

        pool = await self.database.ensure_connected()
        async with pool.acquire() as conn:
            rows = await conn.fetch(query, *params)
        return [self._row_to_entity(row) for row in rows]

    async def exists(self, id: str) -> bool:
        """Check if an entity exists."""
        pool = await self.database.ensure_connected()
        async with pool.acquire() as conn:
            return await conn.fetchval(
                f"SELECT EXISTS(SELECT 1 FROM {self.collection} WHERE id = $1)", id
            )
