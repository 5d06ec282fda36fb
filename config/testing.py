import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_HOURS = 12

WORK_START = "08:00"
WORK_END = "17:00"
LATE_GRACE_MINUTES = 5

AUTO_INIT_DB = False
AUTO_SEED_DB = False
