# src/services/autocomplete_service/app/services/quality_lookup_service.py
import logging
from typing import List

from lot_common.config import AUTOCOMPLETE_MAX_RESULTS, QUALITY_CANDIDATE_WINDOW

from ..dtos.autocomplete_dto import QualitySuggestion
from ..repositories.catalog_repository import CatalogReader
from .matching import matches_alias

logger = logging.getLogger(__name__)


class QualityLookupService:
    """
    Resolves partial text to qualities by matching the code or any alias.

    Alias lists are free-form, so the service reads a bounded window of
    candidates and decides the final match in process. The first
    `max_results` matches are kept in the order the catalog returned them.
    """
    def __init__(
        self,
        repo: CatalogReader,
        max_results: int = AUTOCOMPLETE_MAX_RESULTS,
        candidate_window: int = QUALITY_CANDIDATE_WINDOW,
    ):
        self.repo = repo
        self.max_results = max_results
        self.candidate_window = candidate_window

    async def lookup(self, text: str) -> List[QualitySuggestion]:
        rows = await self.repo.list_quality_candidates(needle=text, limit=self.candidate_window)
        candidates = [QualitySuggestion.model_validate(row, from_attributes=True) for row in rows]

        matches = [record for record in candidates if matches_alias(record, text)]
        logger.info(
            f"Quality lookup for query '{text}' matched {len(matches)} of "
            f"{len(candidates)} candidates."
        )
        return matches[: self.max_results]
