import os

from ..core.constants import DEFAULT_LOCAL_TIMEZONE, DEFAULT_POINTS_TAB_NAME, MIN_BREAK_MINUTES

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

# Where attendance events are appended: "sheets" or "mysql".
# User profiles are always read from MySQL.
EVENT_LOG_BACKEND = os.getenv("EVENT_LOG_BACKEND", "sheets").strip().lower()

GOOGLE_SHEETS_SPREADSHEET_ID = os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID", "")
GOOGLE_SHEETS_POINTS_TAB_NAME = os.getenv("GOOGLE_SHEETS_POINTS_TAB_NAME", DEFAULT_POINTS_TAB_NAME)
GOOGLE_SERVICE_ACCOUNT_EMAIL = os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", "")
GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY = os.getenv("GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY", "")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS", "")

LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", DEFAULT_LOCAL_TIMEZONE)
MIN_BREAK_MINUTES = int(os.getenv("MIN_BREAK_MINUTES", str(MIN_BREAK_MINUTES)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

BOOTSTRAP_ADMIN_EMAIL = os.getenv("BOOTSTRAP_ADMIN_EMAIL", "")
BOOTSTRAP_ADMIN_NAME = os.getenv("BOOTSTRAP_ADMIN_NAME", "Admin")
