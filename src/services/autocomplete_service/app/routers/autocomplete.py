# src/services/autocomplete_service/app/routers/autocomplete.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from lot_common.config import AUTOCOMPLETE_MIN_QUERY_LENGTH, CORS_HEADERS
from lot_common.monitoring import observe_autocomplete

from ..dependencies import CatalogAccess, get_caller_scoped_catalog, get_privileged_catalog
from ..dtos.autocomplete_dto import (
    AutocompleteRequest,
    ColorSuggestion,
    ErrorResponse,
    QualitySuggestion,
)
from ..services.color_lookup_service import ColorLookupService
from ..services.matching import normalize_query
from ..services.quality_lookup_service import QualityLookupService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Autocomplete"])

COLORS_PATH = "/autocomplete-colors"
QUALITIES_PATH = "/autocomplete-qualities"

_ERROR_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorResponse,
        "description": "The catalog read failed or the request could not be processed.",
    }
}


def _too_short(text: str) -> bool:
    return len(text) < AUTOCOMPLETE_MIN_QUERY_LENGTH


async def _complete_colors(
    query: Optional[str], quality: Optional[str], catalog: CatalogAccess
) -> List[ColorSuggestion]:
    text = normalize_query(query)
    scope = quality or None
    if _too_short(text):
        logger.info(f"Color query '{text}' below minimum length; returning no suggestions.")
        observe_autocomplete("colors", "short_circuit")
        return []

    try:
        async with catalog.open() as repo:
            colors = await ColorLookupService(repo).lookup(text, scope)
    except Exception:
        observe_autocomplete("colors", "error")
        logger.error(
            f"Color autocomplete failed for query '{text}', quality '{scope or 'all'}'.",
            exc_info=True,
        )
        raise

    observe_autocomplete("colors", "ok", len(colors))
    logger.info(f"Returned {len(colors)} colors for '{text}', quality '{scope or 'all'}'.")
    return colors


async def _complete_qualities(
    query: Optional[str], catalog: CatalogAccess
) -> List[QualitySuggestion]:
    text = normalize_query(query)
    if _too_short(text):
        logger.info(f"Quality query '{text}' below minimum length; returning no suggestions.")
        observe_autocomplete("qualities", "short_circuit")
        return []

    try:
        async with catalog.open() as repo:
            qualities = await QualityLookupService(repo).lookup(text)
    except Exception:
        observe_autocomplete("qualities", "error")
        logger.error(f"Quality autocomplete failed for query '{text}'.", exc_info=True)
        raise

    observe_autocomplete("qualities", "ok", len(qualities))
    logger.info(f"Returned {len(qualities)} qualities for '{text}'.")
    return qualities


@router.options(COLORS_PATH, include_in_schema=False)
@router.options(QUALITIES_PATH, include_in_schema=False)
async def preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.get(
    COLORS_PATH,
    response_model=List[ColorSuggestion],
    summary="Color Autocomplete",
    description=(
        "Returns up to 10 colors whose label contains the query (case-insensitive), "
        "optionally restricted to one quality code."
    ),
    responses=_ERROR_RESPONSES,
)
async def autocomplete_colors(
    query: Optional[str] = Query(default="", description="Search text; fewer than 3 characters yields []."),
    quality: Optional[str] = Query(default=None, description="Exact quality code to scope colors to."),
    catalog: CatalogAccess = Depends(get_privileged_catalog),
):
    return await _complete_colors(query, quality, catalog)


@router.post(
    COLORS_PATH,
    response_model=List[ColorSuggestion],
    summary="Color Autocomplete (JSON body)",
    description="Same as the GET form, with `query` and `quality` read from a JSON body.",
    responses=_ERROR_RESPONSES,
)
async def autocomplete_colors_body(
    payload: Optional[AutocompleteRequest] = Body(default=None),
    catalog: CatalogAccess = Depends(get_privileged_catalog),
):
    payload = payload or AutocompleteRequest()
    return await _complete_colors(payload.query, payload.quality, catalog)


@router.get(
    QUALITIES_PATH,
    response_model=List[QualitySuggestion],
    summary="Quality Autocomplete",
    description=(
        "Returns up to 10 qualities whose code or any alias contains the query "
        "(case-insensitive)."
    ),
    responses=_ERROR_RESPONSES,
)
async def autocomplete_qualities(
    query: Optional[str] = Query(default="", description="Search text; fewer than 3 characters yields []."),
    catalog: CatalogAccess = Depends(get_caller_scoped_catalog),
):
    return await _complete_qualities(query, catalog)


@router.post(
    QUALITIES_PATH,
    response_model=List[QualitySuggestion],
    summary="Quality Autocomplete (JSON body)",
    description="Same as the GET form, with `query` read from a JSON body.",
    responses=_ERROR_RESPONSES,
)
async def autocomplete_qualities_body(
    payload: Optional[AutocompleteRequest] = Body(default=None),
    catalog: CatalogAccess = Depends(get_caller_scoped_catalog),
):
    payload = payload or AutocompleteRequest()
    return await _complete_qualities(payload.query, catalog)
