# src/services/autocomplete_service/app/dependencies.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession
from lot_common.db import AsyncSessionLocal, caller_scoped_session

from .repositories.catalog_repository import CatalogReader, CatalogRepository

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]


class CatalogAccess:
    """
    One credential configuration for reading the catalog.

    Endpoints receive an access object rather than an open session so a
    request that never reaches the catalog (for example a query that is too
    short) does not open a connection at all.
    """
    def __init__(self, name: str, session_factory: SessionFactory):
        self.name = name
        self._session_factory = session_factory

    @asynccontextmanager
    async def open(self) -> AsyncIterator[CatalogReader]:
        logger.debug(f"Opening catalog session with {self.name} access.")
        async with self._session_factory() as session:
            yield CatalogRepository(session)


def get_privileged_catalog() -> CatalogAccess:
    """Service credentials; reads bypass row-level security."""
    return CatalogAccess("privileged", AsyncSessionLocal)


def get_caller_scoped_catalog(
    authorization: Optional[str] = Header(default=None),
) -> CatalogAccess:
    """Reads run as the restricted caller role with the caller's credentials forwarded."""
    return CatalogAccess("caller_scoped", lambda: caller_scoped_session(authorization))
