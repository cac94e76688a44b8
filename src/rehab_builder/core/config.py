"""
Configuration constants for the exercise program builder.

Enumerated field values, entry defaults, schedule defaults and API defaults
are centralized here.  Runtime-overridable values (API URL, timeout, schedule
defaults) are read through core/settings.py, which falls back to these.
"""

from typing import Final

# =============================================================================
# EXERCISE ENTRY ENUMERATIONS
# =============================================================================

SIDES: Final[tuple[str, ...]] = ("left", "right", "both")
STAGES: Final[tuple[str, ...]] = ("Stage 1", "Stage 2", "Stage 3")
EQUIPMENT: Final[tuple[str, ...]] = ("dumbbell", "bodyweight", "machine")

# Side flip used when duplicating a unilateral exercise
OPPOSITE_SIDE: Final[dict[str, str]] = {
    "left": "right",
    "right": "left",
}

# =============================================================================
# ENTRY DEFAULTS
# =============================================================================

DEFAULT_SIDE: Final[str] = "both"
DEFAULT_STAGE: Final[str] = "Stage 1"
DEFAULT_EQUIPMENT: Final[str] = "bodyweight"
DEFAULT_WEIGHT: Final[int] = 0

ENTRY_ID_PREFIX: Final[str] = "exercise"

# =============================================================================
# PROGRAM SCHEDULE
# =============================================================================

WEEKDAYS: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DEFAULT_FREQUENCY: Final[int] = 1  # Sessions per day
MIN_FREQUENCY: Final[int] = 1
DEFAULT_BREAK_INTERVAL: Final[int] = 30  # Minutes between daily sessions
MIN_BREAK_INTERVAL: Final[int] = 0

# =============================================================================
# PROGRAMS API
# =============================================================================

DEFAULT_API_BASE_URL: Final[str] = "http://localhost:3001/api"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

API_URL_ENV: Final[str] = "REHAB_BUILDER_API_URL"
API_TIMEOUT_ENV: Final[str] = "REHAB_BUILDER_TIMEOUT"
