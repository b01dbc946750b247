from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from src.services.autocomplete_service.app.dtos.autocomplete_dto import (
    ColorSuggestion,
    QualitySuggestion,
)
from src.services.autocomplete_service.app.repositories.catalog_repository import ALIAS_SEPARATOR
from src.services.autocomplete_service.app.services.matching import matches_substring


class InMemoryCatalog:
    """Catalog fixture holding quality/color rows in read order."""

    def __init__(
        self,
        qualities: list[QualitySuggestion] | None = None,
        colors: list[ColorSuggestion] | None = None,
        fail_with: Exception | None = None,
    ):
        self.qualities = list(qualities or [])
        self.colors = list(colors or [])
        self.fail_with = fail_with
        self.reads: list[tuple[str, dict]] = []

    async def find_colors(
        self, label_contains: str, quality_code: str | None, limit: int
    ) -> list[ColorSuggestion]:
        self._record("find_colors", label_contains=label_contains, quality_code=quality_code, limit=limit)
        rows = [
            color
            for color in self.colors
            if matches_substring(color.color_label, label_contains)
            and (quality_code is None or color.quality_code == quality_code)
        ]
        return rows[:limit]

    async def list_quality_candidates(self, needle: str, limit: int) -> list[QualitySuggestion]:
        # Same coarse filter as CatalogRepository: code or the joined aliases.
        self._record("list_quality_candidates", needle=needle, limit=limit)
        rows = [
            record
            for record in self.qualities
            if matches_substring(record.code, needle)
            or matches_substring(ALIAS_SEPARATOR.join(record.aliases), needle)
        ]
        return rows[:limit]

    def _record(self, operation: str, **kwargs) -> None:
        self.reads.append((operation, kwargs))
        if self.fail_with is not None:
            raise self.fail_with


class InMemoryCatalogAccess:
    """Stands in for CatalogAccess, handing out the same in-memory catalog."""

    def __init__(self, catalog: InMemoryCatalog, name: str = "in_memory"):
        self.catalog = catalog
        self.name = name
        self.open_count = 0

    @asynccontextmanager
    async def open(self) -> AsyncIterator[InMemoryCatalog]:
        self.open_count += 1
        yield self.catalog


def quality(code: str, *aliases: str) -> QualitySuggestion:
    return QualitySuggestion(code=code, aliases=list(aliases))


def color(quality_code: str, color_label: str, color_code: str | None = None) -> ColorSuggestion:
    return ColorSuggestion(quality_code=quality_code, color_label=color_label, color_code=color_code)
