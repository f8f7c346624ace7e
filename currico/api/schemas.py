"""
Currico - API response models

Field names are camelCase to match the JSON contract consumed by the web
client.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from currico.engine.eligibility import TOTAL_CRITERIA
from currico.services.seller_level import SellerLevelReport


class LevelBlocker(BaseModel):
    key: str
    current: int
    required: int


class LevelRequirement(BaseModel):
    key: str
    current: int
    required: int
    met: bool


class VerificationProgress(BaseModel):
    eligible: bool
    metCount: int
    totalCriteria: int = TOTAL_CRITERIA
    failedCriteria: list[str]


class SellerLevelResponse(BaseModel):
    points: int
    level: int
    levelName: str
    uploads: int
    downloads: int
    reviews: int
    avgRating: float | None
    downloadMultiplier: float
    progressPercent: int
    pointsNeeded: int
    nextLevelName: str | None
    blockers: list[LevelBlocker]
    requirements: list[LevelRequirement]
    isVerifiedSeller: bool
    verification: VerificationProgress

    @classmethod
    def from_report(cls, report: SellerLevelReport) -> SellerLevelResponse:
        progress = report.progress
        avg = report.stats.avg_rating
        return cls(
            points=report.points,
            level=report.level.level,
            levelName=report.level.name,
            uploads=report.stats.uploads,
            downloads=report.stats.downloads,
            reviews=report.stats.reviews,
            avgRating=round(avg, 1) if avg is not None else None,
            downloadMultiplier=report.download_multiplier,
            progressPercent=progress.progress_percent,
            pointsNeeded=progress.points_needed,
            nextLevelName=progress.next.name if progress.next else None,
            blockers=[
                LevelBlocker(key=g.key, current=g.current, required=g.required)
                for g in progress.blockers
            ],
            requirements=[
                LevelRequirement(key=g.key, current=g.current, required=g.required, met=g.met)
                for g in progress.requirements
            ],
            isVerifiedSeller=report.is_verified_seller,
            verification=VerificationProgress(
                eligible=report.eligibility.eligible,
                metCount=report.eligibility.met_count,
                failedCriteria=list(report.eligibility.failed_criteria),
            ),
        )


class VerifiedUser(BaseModel):
    id: uuid.UUID
    email: str | None
    display_name: str | None
    is_verified_seller: bool
    verified_seller_at: datetime | None
    verified_seller_method: str | None


class VerifySellerResponse(BaseModel):
    message: str
    user: VerifiedUser
