"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CHECKIN_WINDOW_MINUTES = 60
DEFAULT_INVITE_TTL_HOURS = 4
DEFAULT_CHECKIN_RADIUS_METERS = 100
DEFAULT_CLASS_TIMEZONE = "America/New_York"

INVITE_CODE_PREFIX = "INV-"
INVITE_CODE_LENGTH = 9

CSV_DATES_HEADER = "dates"
DATE_FORMAT = "%Y-%m-%d"
