# src/services/autocomplete_service/app/repositories/catalog_repository.py
import logging
from typing import Any, List, Optional, Protocol, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from lot_common.database_models import Quality, QualityColor
from lot_common.exceptions import CatalogReadError
from lot_common.utils import async_timed

from ..services.matching import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

# Joins alias arrays for the coarse SQL pre-filter. A unit separator cannot
# be typed into the search box, so a pattern never straddles two aliases.
ALIAS_SEPARATOR = "\x1f"


class CatalogReader(Protocol):
    """Read-only view of the quality/color master data used by lookups."""

    async def find_colors(
        self, label_contains: str, quality_code: Optional[str], limit: int
    ) -> Sequence[Any]:
        ...

    async def list_quality_candidates(self, needle: str, limit: int) -> Sequence[Any]:
        ...


class CatalogRepository:
    """
    Handles read-only database queries against the quality/color catalog.
    Rows are returned as SQLAlchemy Row objects exposing only the projected columns.
    """
    def __init__(self, db: AsyncSession):
        self.db = db

    @async_timed(repository="CatalogRepository", method="find_colors")
    async def find_colors(
        self, label_contains: str, quality_code: Optional[str], limit: int
    ) -> List[Any]:
        """
        Returns colors whose label contains `label_contains` (case-insensitive),
        restricted to `quality_code` by exact match when one is given.
        """
        stmt = select(
            QualityColor.quality_code, QualityColor.color_label, QualityColor.color_code
        ).where(
            QualityColor.color_label.ilike(contains_pattern(label_contains), escape=LIKE_ESCAPE)
        )
        if quality_code:
            stmt = stmt.where(QualityColor.quality_code == quality_code)
        stmt = stmt.order_by(
            QualityColor.color_label.asc(), QualityColor.quality_code.asc()
        ).limit(limit)

        rows = await self._fetch(stmt, operation="find_colors")
        logger.info(f"Found {len(rows)} colors with given filters.")
        return rows

    @async_timed(repository="CatalogRepository", method="list_quality_candidates")
    async def list_quality_candidates(self, needle: str, limit: int) -> List[Any]:
        """
        Returns up to `limit` qualities that may match `needle` on their code or
        any alias. The SQL filter is a superset test over the joined alias array;
        exact per-alias matching is left to the caller.
        """
        pattern = contains_pattern(needle)
        stmt = (
            select(Quality.code, Quality.aliases)
            .where(
                or_(
                    Quality.code.ilike(pattern, escape=LIKE_ESCAPE),
                    func.array_to_string(Quality.aliases, ALIAS_SEPARATOR).ilike(
                        pattern, escape=LIKE_ESCAPE
                    ),
                )
            )
            .order_by(Quality.code.asc())
            .limit(limit)
        )

        rows = await self._fetch(stmt, operation="list_quality_candidates")
        logger.info(f"Found {len(rows)} quality candidates with given filters.")
        return rows

    async def _fetch(self, stmt, operation: str) -> List[Any]:
        try:
            result = await self.db.execute(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            # Prefer the driver's message over SQLAlchemy's wrapped repr.
            message = str(getattr(e, "orig", None) or e)
            raise CatalogReadError(message, operation=operation) from e
