"""Constants, storage keys and cache lifetimes."""

from .enums import StatsPeriod

LOW_ATTENDANCE_THRESHOLD = 75

DEFAULT_HTTP_TIMEOUT_SECONDS = 15

# Sentinel written into cache keys for a missing date bound.
NO_DATE_SENTINEL = "none"

# Storage keys
COURSES_STORAGE_KEY = "@teacher_courses"
TA_COURSES_STORAGE_KEY = "@teacher_courses_with_ta"
LOW_ATTENDANCE_KEY_PREFIX = "@low_attendance"
GRIEVANCES_STORAGE_KEY = "cached_grievances"
COMMENTS_KEY_PREFIX = "comments_"

ACCESS_TOKEN_KEY = "@auth_token"
REFRESH_TOKEN_KEY = "@refresh_token"
USER_ID_KEY = "@user_id"
USER_EMAIL_KEY = "@user_email"
USER_NAME_KEY = "@user_name"
USER_ROLE_KEY = "@user_role"

AUTH_SESSION_KEYS = (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_ID_KEY,
    USER_EMAIL_KEY,
    USER_NAME_KEY,
    USER_ROLE_KEY,
)

# Cache lifetimes (seconds)
GRIEVANCES_TTL_SECONDS = 2 * 60 * 60
COMMENTS_TTL_SECONDS = 60 * 60
COMMENTS_PURGE_AFTER_SECONDS = 2 * 60 * 60

STATS_PERIOD_DAYS = {
    StatsPeriod.WEEK: 7,
    StatsPeriod.MONTH: 30,
    StatsPeriod.SEMESTER: 120,
}
