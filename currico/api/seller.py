"""
GET /api/seller/level

Returns the current seller's points, level, stats, progress and verified-
seller progress. Access: authenticated seller only.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from currico.api.deps import get_current_user_id, get_rate_limiter, get_seller_level_service
from currico.api.schemas import SellerLevelResponse
from currico.errors import CurricoError
from currico.services.rate_limit import SlidingWindowRateLimiter
from currico.services.seller_level import SellerLevelService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/seller", tags=["Seller"])


@router.get("/level", response_model=SellerLevelResponse)
async def get_seller_level(
    user_id: uuid.UUID = Depends(get_current_user_id),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
    service: SellerLevelService = Depends(get_seller_level_service),
):
    rate_limiter.hit("seller:level", str(user_id))

    try:
        report = await service.compute(user_id)
    except CurricoError:
        raise
    except Exception as exc:
        logger.error(
            "seller_level_failed",
            user_id=str(user_id),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Fehler beim Laden der Level-Daten", "code": "INTERNAL_ERROR"},
        )

    return SellerLevelResponse.from_report(report)
