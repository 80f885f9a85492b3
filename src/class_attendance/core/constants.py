"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_TTL_MINUTES = 60
DEFAULT_LATE_AFTER_MINUTES = 15
MIN_SEARCH_TERM_LENGTH = 2
SEARCH_RESULT_LIMIT = 20

YEAR_LEVELS = (1, 2, 3, 4)

DAYS_OF_WEEK = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

SEMESTERS = ("First", "Second", "Summer")
