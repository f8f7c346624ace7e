"""
Currico - Seller Level Resolver

A seller sits at the highest level whose point threshold AND upload/download
minimums are all satisfied. Points alone are not enough: a seller with the
points for "gold" but too few uploads stays at "silber" until the upload
gate is met, and the gap is reported as a blocker.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from currico.engine.stats import SellerStats


@dataclass(frozen=True)
class LevelDefinition:
    level: int
    name: str
    min_points: int
    min_uploads: int
    min_downloads: int


# Ordered ascending; thresholds strictly increase with level.
SELLER_LEVELS: tuple[LevelDefinition, ...] = (
    LevelDefinition(level=0, name="bronze", min_points=0, min_uploads=0, min_downloads=0),
    LevelDefinition(level=1, name="silber", min_points=50, min_uploads=3, min_downloads=5),
    LevelDefinition(level=2, name="gold", min_points=250, min_uploads=8, min_downloads=25),
    LevelDefinition(level=3, name="platin", min_points=750, min_uploads=15, min_downloads=75),
    LevelDefinition(level=4, name="diamant", min_points=2500, min_uploads=30, min_downloads=200),
)

MAX_LEVEL: LevelDefinition = SELLER_LEVELS[-1]


@dataclass(frozen=True)
class LevelGate:
    """One requirement of a level: current value vs required minimum."""

    key: str
    current: int
    required: int

    @property
    def met(self) -> bool:
        return self.current >= self.required


@dataclass(frozen=True)
class LevelProgress:
    current: LevelDefinition
    next: LevelDefinition | None
    progress_percent: int
    points_needed: int
    points_into_level: int
    blockers: list[LevelGate] = field(default_factory=list)
    requirements: list[LevelGate] = field(default_factory=list)


def _meets_minimums(level: LevelDefinition, stats: SellerStats | None) -> bool:
    if stats is None:
        return True
    return stats.uploads >= level.min_uploads and stats.downloads >= level.min_downloads


def get_current_level(points: int, stats: SellerStats | None = None) -> LevelDefinition:
    """
    Resolve the level for a point score.

    When stats is None only point thresholds are checked.
    """
    for level in reversed(SELLER_LEVELS):
        if points >= level.min_points and _meets_minimums(level, stats):
            return level
    return SELLER_LEVELS[0]


def get_next_level(points: int, stats: SellerStats | None = None) -> LevelDefinition | None:
    """Level directly above the current one, or None at the top."""
    current = get_current_level(points, stats)
    next_index = current.level + 1
    if next_index >= len(SELLER_LEVELS):
        return None
    return SELLER_LEVELS[next_index]


def _requirements_for(
    level: LevelDefinition, points: int, stats: SellerStats | None
) -> list[LevelGate]:
    uploads = stats.uploads if stats is not None else 0
    downloads = stats.downloads if stats is not None else 0
    return [
        LevelGate(key="needMorePoints", current=points, required=level.min_points),
        LevelGate(key="needMoreUploads", current=uploads, required=level.min_uploads),
        LevelGate(key="needMoreDownloads", current=downloads, required=level.min_downloads),
    ]


def get_progress_to_next_level(
    points: int, stats: SellerStats | None = None
) -> LevelProgress:
    """
    Progress from the current level's threshold toward the next one.

    Progress is clamped to [0, 100]. A seller can have 100% point progress
    and still be held back by upload/download blockers. At the top level
    next is None and progress is reported as 100.
    """
    current = get_current_level(points, stats)
    nxt = get_next_level(points, stats)

    if nxt is None:
        return LevelProgress(
            current=current,
            next=None,
            progress_percent=100,
            points_needed=0,
            points_into_level=0,
        )

    level_range = nxt.min_points - current.min_points
    points_into_level = points - current.min_points
    progress_percent = max(0, min(100, round(points_into_level / level_range * 100)))
    points_needed = max(0, nxt.min_points - points)

    # Upload/download gates only apply when stats are known
    requirements = _requirements_for(nxt, points, stats)
    if stats is None:
        requirements = requirements[:1]
    blockers = [gate for gate in requirements if not gate.met]

    return LevelProgress(
        current=current,
        next=nxt,
        progress_percent=progress_percent,
        points_needed=points_needed,
        points_into_level=points_into_level,
        blockers=blockers,
        requirements=requirements,
    )
