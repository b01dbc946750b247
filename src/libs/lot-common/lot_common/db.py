# src/libs/lot-common/lot_common/db.py
import json
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from .config import (
    POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DB,
    CATALOG_CALLER_ROLE,
)


def _as_async_url(url: str) -> str:
    if "asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://")
    return url


def get_async_database_url():
    """
    Determines the async database URL for privileged (service credential) access.
    """
    url = os.getenv("DATABASE_URL") or f"postgresql+asyncpg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
    return _as_async_url(url)


def get_caller_database_url():
    """
    Determines the async database URL used for caller-scoped access.
    Falls back to the privileged URL; the role switch applied per session
    is what subjects caller-scoped reads to row-level security.
    """
    url = os.getenv("CALLER_DATABASE_URL")
    return _as_async_url(url) if url else get_async_database_url()


async_engine = create_async_engine(
    get_async_database_url(),
    pool_pre_ping=True,
)

caller_async_engine = create_async_engine(
    get_caller_database_url(),
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)

CallerAsyncSessionLocal = async_sessionmaker(
    bind=caller_async_engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


@asynccontextmanager
async def caller_scoped_session(authorization: Optional[str]) -> AsyncIterator[AsyncSession]:
    """
    Opens a session that reads on behalf of the calling client.

    The session runs inside a transaction that assumes CATALOG_CALLER_ROLE and
    exposes the caller's Authorization header through the `request.headers`
    setting, the same way the hosted REST layer forwards it to row-level
    security policies. Both settings are transaction-local and vanish when
    the session closes.
    """
    headers = {"authorization": authorization} if authorization else {}
    async with CallerAsyncSessionLocal() as session:
        async with session.begin():
            await session.execute(text(f'SET LOCAL ROLE "{CATALOG_CALLER_ROLE}"'))
            await session.execute(
                select(func.set_config("request.headers", json.dumps(headers), True))
            )
            yield session
