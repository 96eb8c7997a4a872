from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

EVENT_LOG_BACKEND = "mysql"
LOCAL_TIMEZONE = "America/Sao_Paulo"
MIN_BREAK_MINUTES = 20

AUTO_INIT_DB = False
