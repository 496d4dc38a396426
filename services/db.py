"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for the two collections (users, goals)
* `DocumentStore` – small by-id / exact-filter DAO used by the routers
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Iterable

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

_LOG = logging.getLogger(__name__)

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


async def _create_engine() -> AsyncEngine:
    # 1) plain URL
    if settings.database_url:
        return create_async_engine(settings.database_url, pool_pre_ping=True)

    # 2) Cloud SQL connector (only if URL not supplied)
    if not settings.cloud_sql_connection_name:
        raise RuntimeError(
            "Set either DATABASE_URL or CLOUD_SQL_CONNECTION_NAME env var"
        )

    # lazy import here
    try:
        from google.cloud.sql.connector import Connector, IPTypes, create_async_connector  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "cloud-sql-python-connector missing. Run:\n"
            "pip install 'wellness-portal[cloudsql]'"
        ) from exc

    connector: Connector = await create_async_connector()

    async def _getconn():  # type: ignore[name-defined]
        return await connector.connect_async(
            settings.cloud_sql_connection_name,
            "asyncpg",
            user=settings.db_user,
            password=settings.db_pass,
            db=settings.db_name,
            ip_type=IPTypes.PRIVATE,
        )

    return create_async_engine(
        "postgresql+asyncpg://",
        async_creator=_getconn,
        pool_pre_ping=True,
    )


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = await _create_engine()
    return _ENGINE


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String)
    role: Mapped[str] = mapped_column(String(16), index=True)
    profile_complete: Mapped[bool] = mapped_column(Boolean, default=False)

    # patient only
    age: Mapped[int | None] = mapped_column(Integer)
    gender: Mapped[str | None] = mapped_column(String)
    health_conditions: Mapped[list] = mapped_column(JSON, default=list)
    assigned_provider: Mapped[str | None] = mapped_column(String(32))

    # provider only
    specialization: Mapped[str | None] = mapped_column(String)
    license_number: Mapped[str | None] = mapped_column(String)
    years_of_experience: Mapped[int | None] = mapped_column(Integer)
    bio: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(32), index=True)
    title: Mapped[str] = mapped_column(String)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(32), default="other")
    target_value: Mapped[float | None] = mapped_column(Float)
    current_value: Mapped[float] = mapped_column(Float, default=0)
    unit: Mapped[str] = mapped_column(String, default="")
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[str] = mapped_column(String(16), default="active")
    progress: Mapped[float] = mapped_column(Float, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


COLLECTIONS: dict[str, type[Base]] = {
    "users": User,
    "goals": Goal,
}


# ───────── DAO ───────────────────────────────────────────────────────
class DocumentStore:
    """
    Collection-addressed access on top of one `AsyncSession`.

    Filters are exact-match on column name; `sort` is a list of
    `(field, 1 | -1)` pairs.  Every write commits on its own, so
    concurrent writers to the same row get last-write-wins.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._db = session

    @staticmethod
    def _model(collection: str) -> type[Base]:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"unknown collection {collection!r}") from None

    async def find_by_id(self, collection: str, doc_id: str) -> Any | None:
        return await self._db.get(self._model(collection), doc_id)

    async def find_one(self, collection: str, **filters: Any) -> Any | None:
        rows = await self.find(collection, filters)
        return rows[0] if rows else None

    async def find(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        sort: Iterable[tuple[str, int]] = (),
    ) -> list[Any]:
        model = self._model(collection)
        stmt = select(model)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, field) == value)
        for field, direction in sort:
            col = getattr(model, field)
            stmt = stmt.order_by(col.desc() if direction < 0 else col.asc())
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def insert(self, collection: str, doc: dict[str, Any]) -> Any:
        row = self._model(collection)(**doc)
        self._db.add(row)
        try:
            await self._db.commit()
        except SQLAlchemyError:
            await self._db.rollback()
            raise
        await self._db.refresh(row)
        return row

    async def update_by_id(
        self, collection: str, doc_id: str, partial: dict[str, Any]
    ) -> Any | None:
        row = await self.find_by_id(collection, doc_id)
        if row is None:
            return None
        for field, value in partial.items():
            setattr(row, field, value)
        await self._db.commit()
        await self._db.refresh(row)
        return row

    async def delete_by_id(self, collection: str, doc_id: str) -> bool:
        row = await self.find_by_id(collection, doc_id)
        if row is None:
            return False
        await self._db.delete(row)
        await self._db.commit()
        return True


# ───────── session helpers ───────────────────────────────────────────

async def init_models(eng: AsyncEngine | None = None) -> None:
    eng = eng or await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    _LOG.info("tables ready: %s", ", ".join(Base.metadata.tables))


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    eng = await engine()
    async_session = async_sessionmaker(eng, expire_on_commit=False)
    async with async_session() as session:
        yield session

