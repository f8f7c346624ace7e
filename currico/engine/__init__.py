from currico.engine.eligibility import check_verification_eligibility
from currico.engine.levels import (
    get_current_level,
    get_next_level,
    get_progress_to_next_level,
)
from currico.engine.points import calculate_points, get_download_multiplier
from currico.engine.verification import (
    decide_verification_transition,
    resolve_verification_state,
)

__all__ = [
    "calculate_points",
    "check_verification_eligibility",
    "decide_verification_transition",
    "get_current_level",
    "get_download_multiplier",
    "get_next_level",
    "get_progress_to_next_level",
    "resolve_verification_state",
]
