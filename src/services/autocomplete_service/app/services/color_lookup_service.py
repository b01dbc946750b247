# src/services/autocomplete_service/app/services/color_lookup_service.py
import logging
from typing import List, Optional

from lot_common.config import AUTOCOMPLETE_MAX_RESULTS

from ..dtos.autocomplete_dto import ColorSuggestion
from ..repositories.catalog_repository import CatalogReader

logger = logging.getLogger(__name__)


class ColorLookupService:
    """
    Resolves partial color labels to catalog colors, optionally scoped to one quality.
    """
    def __init__(self, repo: CatalogReader, max_results: int = AUTOCOMPLETE_MAX_RESULTS):
        self.repo = repo
        self.max_results = max_results

    async def lookup(self, text: str, scope: Optional[str] = None) -> List[ColorSuggestion]:
        logger.info(f"Color lookup for query '{text}', quality '{scope or 'all'}'.")
        rows = await self.repo.find_colors(
            label_contains=text, quality_code=scope or None, limit=self.max_results
        )
        colors = [ColorSuggestion.model_validate(row, from_attributes=True) for row in rows]
        return colors[: self.max_results]
