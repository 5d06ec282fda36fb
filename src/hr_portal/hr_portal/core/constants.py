"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
ROOT_PATH = "/"
EMPLOYEE_HOME_PATH = "/dashboard"
ADMIN_HOME_PATH = "/admin"
PROFILE_SETUP_PATH = "/profile-setup"

DEFAULT_SESSION_HOURS = 12
SESSION_REFRESH_MINUTES = 60
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_PAYMENT_HISTORY_LIMIT = 50
DEFAULT_LATE_GRACE_MINUTES = 5
