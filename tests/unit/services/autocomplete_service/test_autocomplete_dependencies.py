import logging
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.services.autocomplete_service.app.dependencies import (
    CatalogAccess,
    get_caller_scoped_catalog,
    get_privileged_catalog,
)
from src.services.autocomplete_service.app.repositories.catalog_repository import CatalogRepository

pytestmark = pytest.mark.asyncio


async def test_catalog_access_opens_repository_over_session():
    session = AsyncMock(spec=AsyncSession)
    opened = []

    @asynccontextmanager
    async def factory():
        opened.append(True)
        yield session

    access = CatalogAccess("test", factory)
    assert opened == []

    async with access.open() as repo:
        assert isinstance(repo, CatalogRepository)
        assert repo.db is session
    assert opened == [True]


async def test_privileged_and_caller_scoped_configurations_are_distinct():
    privileged = get_privileged_catalog()
    caller = get_caller_scoped_catalog(authorization="Bearer user-token")

    assert privileged.name == "privileged"
    assert caller.name == "caller_scoped"


async def test_caller_scoped_catalog_forwards_authorization_header():
    session = AsyncMock(spec=AsyncSession)
    seen_authorization = []

    @asynccontextmanager
    async def fake_caller_scoped_session(authorization):
        seen_authorization.append(authorization)
        yield session

    with patch(
        "src.services.autocomplete_service.app.dependencies.caller_scoped_session",
        side_effect=fake_caller_scoped_session,
    ):
        access = get_caller_scoped_catalog(authorization="Bearer user-token")
        async with access.open() as repo:
            assert repo.db is session

    assert seen_authorization == ["Bearer user-token"]


async def test_catalog_access_logs_configuration_when_opening(caplog):
    session = AsyncMock(spec=AsyncSession)

    @asynccontextmanager
    async def factory():
        yield session

    with caplog.at_level(
        logging.DEBUG, logger="src.services.autocomplete_service.app.dependencies"
    ):
        async with CatalogAccess("caller_scoped", factory).open():
            pass

    assert "Opening catalog session with caller_scoped access." in caplog.messages
