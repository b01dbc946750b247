# tests/unit/services/autocomplete_service/services/test_color_lookup_service.py
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from lot_common.exceptions import CatalogReadError
from src.services.autocomplete_service.app.repositories.catalog_repository import CatalogRepository
from src.services.autocomplete_service.app.services.color_lookup_service import ColorLookupService
from tests.test_support.in_memory_catalog import InMemoryCatalog, color

pytestmark = pytest.mark.asyncio


async def test_lookup_scoped_to_quality_returns_only_that_quality(seeded_catalog: InMemoryCatalog):
    """
    GIVEN 'Royal Blue' under SLK200 and 'Sky Blue' under COT100
    WHEN looking up 'blue' scoped to COT100
    THEN only 'Sky Blue' is returned.
    """
    results = await ColorLookupService(seeded_catalog).lookup("blue", "COT100")

    assert [r.model_dump() for r in results] == [
        {"quality_code": "COT100", "color_label": "Sky Blue", "color_code": "SB-02"}
    ]


async def test_lookup_without_scope_searches_all_qualities(seeded_catalog: InMemoryCatalog):
    results = await ColorLookupService(seeded_catalog).lookup("blue")

    assert {r.color_label for r in results} == {"Royal Blue", "Sky Blue", "Navy blue", "Blue 100%"}


async def test_lookup_scope_is_exact_and_case_sensitive(seeded_catalog: InMemoryCatalog):
    assert await ColorLookupService(seeded_catalog).lookup("blue", "cot100") == []
    assert await ColorLookupService(seeded_catalog).lookup("blue", "COT") == []


async def test_lookup_passes_scope_and_limit_to_repository():
    repo = AsyncMock(spec=CatalogRepository)
    repo.find_colors.return_value = [
        SimpleNamespace(quality_code="COT100", color_label="Sky Blue", color_code=None),
    ]

    results = await ColorLookupService(repo).lookup("sky", "COT100")

    repo.find_colors.assert_awaited_once_with(label_contains="sky", quality_code="COT100", limit=10)
    assert results[0].color_code is None


async def test_lookup_empty_scope_is_treated_as_absent():
    repo = AsyncMock(spec=CatalogRepository)
    repo.find_colors.return_value = []

    await ColorLookupService(repo).lookup("sky", "")

    repo.find_colors.assert_awaited_once_with(label_contains="sky", quality_code=None, limit=10)


async def test_lookup_caps_results_at_ten():
    catalog = InMemoryCatalog(colors=[color("COT100", f"Blue {i}") for i in range(25)])

    results = await ColorLookupService(catalog).lookup("blue")

    assert len(results) == 10


async def test_lookup_propagates_catalog_errors():
    catalog = InMemoryCatalog(fail_with=CatalogReadError("connection refused"))

    with pytest.raises(CatalogReadError):
        await ColorLookupService(catalog).lookup("blue")
