"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

LATE_THRESHOLD = time(9, 0, 0)
NOTES_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 500
MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_DAYS = 7
DASHBOARD_TOP_DEPARTMENTS = 5
DASHBOARD_RECENT_HIRES = 5
PASSWORD_MAX_LENGTH = 100
NAME_MIN_LENGTH = 2
PERSON_NAME_MAX_LENGTH = 50
USER_NAME_MAX_LENGTH = 100
POSITION_MAX_LENGTH = 100
DEPARTMENT_NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 20
SEARCH_MAX_LENGTH = 100
