"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000

DEFAULT_OFFICE_LATITUDE = 28.6273928
DEFAULT_OFFICE_LONGITUDE = 77.3725545
DEFAULT_OFFICE_RADIUS_M = 300
DEFAULT_OFFICE_NAME = "Logix Cyber Park (Default)"

DEFAULT_HISTORY_LIMIT = 5
WEEKLY_HISTORY_LIMIT = 14
DEFAULT_GEOLOCATION_TIMEOUT_SECONDS = 10
DEFAULT_ANNUAL_LEAVE_ALLOWANCE = 24
MIN_PASSWORD_LENGTH = 4
DEFAULT_THEME = "emerald"

BREAK_LIMIT_MINUTES = {
    "lunch": 60,
    "short1": 15,
    "short2": 15,
}
