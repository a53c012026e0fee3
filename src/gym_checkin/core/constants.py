"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MEMBER_ID_LENGTH = 6
MEMBER_ID_PATTERN = rf"^\d{{{MEMBER_ID_LENGTH}}}$"
MAX_MEMBER_NUMBER = 10**MEMBER_ID_LENGTH - 1

DEFAULT_TIMEZONE = "Asia/Beirut"
DEFAULT_LOCATION = "skygym"
DEFAULT_EMAIL_DOMAIN = "skygym.local"

DAILY_PASS_HOURS = 24
DEFAULT_MONTHS = 1
MAX_MONTHS = 120

DEFAULT_SESSION_HOURS = 8
DEFAULT_MAX_PHOTO_BYTES = 8 * 1024 * 1024
IDENTITY_PAGE_SIZE = 100

AUTO_RESTART_MS = 3000
DEFAULT_HTTP_TIMEOUT = 10.0
CAMERA_LABEL_PATTERN = r"back|rear|environment"
# Consecutive failed frame reads before a camera session gives up.
CAMERA_MAX_READ_FAILURES = 30
