"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

MIN_PASSWORD_LENGTH = 6
MAX_REASON_LENGTH = 500
MAX_ADDRESS_LENGTH = 500

DEFAULT_BUSINESS_NAME = "New Business"
DEFAULT_BUSINESS_LOGO_URL = "https://cdn-icons-png.flaticon.com/512/3135/3135715.png"

DEFAULT_WORKING_HOURS_PER_DAY = 8.0
MINUTES_PER_DAY = 24 * 60
