# src/libs/lot-common/lot_common/health.py
import asyncio
import logging
from typing import Awaitable, Callable, Dict, Tuple

from fastapi import APIRouter, status, HTTPException
from sqlalchemy import text

from .db import AsyncSessionLocal

logger = logging.getLogger(__name__)

DependencyCheck = Callable[[], Awaitable[bool]]


async def check_db_health() -> bool:
    """Checks that the catalog database answers a trivial query."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Health Check: Database connection failed: {e}", exc_info=False)
        return False


def create_health_router(*dependencies: str) -> APIRouter:
    """
    Creates the standard liveness/readiness router.

    Args:
        *dependencies: names of dependencies to probe for readiness ('db').
    """
    router = APIRouter(tags=["Health"])

    dep_map: Dict[str, Tuple[str, DependencyCheck]] = {
        'db': ('database', check_db_health),
    }
    selected = [dep for dep in dependencies if dep in dep_map]

    @router.get("/health/live", status_code=status.HTTP_200_OK)
    async def liveness_probe():
        return {"status": "alive"}

    @router.get("/health/ready", status_code=status.HTTP_200_OK)
    async def readiness_probe():
        results = await asyncio.gather(*[dep_map[dep][1]() for dep in selected])
        dep_status = {
            dep_map[dep][0]: "ok" if ok else "unavailable"
            for dep, ok in zip(selected, results)
        }
        if all(results):
            return {"status": "ready", "dependencies": dep_status}

        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "dependencies": dep_status},
        )

    return router
