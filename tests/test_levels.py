"""Tests for the seller level resolver."""

from __future__ import annotations

from currico.engine.levels import (
    MAX_LEVEL,
    SELLER_LEVELS,
    get_current_level,
    get_next_level,
    get_progress_to_next_level,
)
from currico.engine.stats import SellerStats


def _stats(uploads: int, downloads: int) -> SellerStats:
    return SellerStats(uploads=uploads, downloads=downloads)


class TestLevelLadder:
    def test_names_in_order(self) -> None:
        assert [lvl.name for lvl in SELLER_LEVELS] == [
            "bronze",
            "silber",
            "gold",
            "platin",
            "diamant",
        ]

    def test_thresholds_strictly_increase(self) -> None:
        for lower, higher in zip(SELLER_LEVELS, SELLER_LEVELS[1:]):
            assert higher.min_points > lower.min_points
            assert higher.min_uploads >= lower.min_uploads
            assert higher.min_downloads >= lower.min_downloads

    def test_level_zero_has_no_requirements(self) -> None:
        base = SELLER_LEVELS[0]
        assert (base.level, base.min_points, base.min_uploads, base.min_downloads) == (0, 0, 0, 0)


class TestGetCurrentLevel:
    def test_zero_is_bronze(self) -> None:
        assert get_current_level(0).name == "bronze"
        assert get_current_level(0, _stats(0, 0)).level == 0

    def test_silber_when_all_gates_met(self) -> None:
        assert get_current_level(50, _stats(3, 5)).name == "silber"

    def test_upload_gate_holds_back(self) -> None:
        assert get_current_level(50, _stats(1, 5)).name == "bronze"

    def test_download_gate_holds_back(self) -> None:
        assert get_current_level(50, _stats(3, 2)).name == "bronze"

    def test_points_only_without_stats(self) -> None:
        assert get_current_level(750).name == "platin"

    def test_diamant_with_points_but_too_few_uploads_is_platin(self) -> None:
        assert get_current_level(2500, _stats(20, 200)).name == "platin"

    def test_diamant_when_everything_met(self) -> None:
        assert get_current_level(2500, _stats(30, 200)) == MAX_LEVEL

    def test_non_decreasing_in_points(self) -> None:
        for stats in [_stats(0, 0), _stats(3, 5), _stats(8, 30), _stats(100, 1000)]:
            previous = 0
            for points in range(0, 4000, 25):
                level = get_current_level(points, stats).level
                assert level >= previous
                previous = level

    def test_capped_by_minimums_regardless_of_points(self) -> None:
        stats = _stats(8, 30)
        allowed = max(
            lvl.level
            for lvl in SELLER_LEVELS
            if stats.uploads >= lvl.min_uploads and stats.downloads >= lvl.min_downloads
        )
        assert get_current_level(10**9, stats).level == allowed == 2


class TestGetNextLevel:
    def test_next_after_bronze(self) -> None:
        nxt = get_next_level(0)
        assert nxt is not None and nxt.name == "silber"

    def test_none_at_top(self) -> None:
        assert get_next_level(2500, _stats(30, 200)) is None


class TestProgressToNextLevel:
    def test_max_level_is_complete(self) -> None:
        progress = get_progress_to_next_level(2500, _stats(30, 200))
        assert progress.current.name == "diamant"
        assert progress.next is None
        assert progress.progress_percent == 100
        assert progress.points_needed == 0
        assert progress.blockers == []

    def test_progress_between_levels(self) -> None:
        progress = get_progress_to_next_level(150, _stats(5, 15))
        assert progress.current.name == "silber"
        assert progress.next is not None and progress.next.name == "gold"
        assert progress.points_needed == 100
        assert progress.points_into_level == 100
        assert progress.progress_percent == 50

    def test_blocker_for_missing_uploads(self) -> None:
        progress = get_progress_to_next_level(250, _stats(5, 25))
        assert progress.current.name == "silber"
        assert [b.key for b in progress.blockers] == ["needMoreUploads"]
        blocker = progress.blockers[0]
        assert (blocker.current, blocker.required) == (5, 8)
        # Points are past the threshold but the level is blocked
        assert progress.progress_percent == 100
        assert progress.points_needed == 0

    def test_requirements_list_every_gate(self) -> None:
        progress = get_progress_to_next_level(10, _stats(1, 0))
        assert [(r.key, r.met) for r in progress.requirements] == [
            ("needMorePoints", False),
            ("needMoreUploads", False),
            ("needMoreDownloads", False),
        ]
        assert len(progress.blockers) == 3

    def test_zero_case(self) -> None:
        progress = get_progress_to_next_level(0, _stats(0, 0))
        assert progress.current.level == 0
        assert progress.progress_percent == 0
        assert progress.points_needed == 50

    def test_without_stats_only_points_gate_is_reported(self) -> None:
        progress = get_progress_to_next_level(10)
        assert [r.key for r in progress.requirements] == ["needMorePoints"]
