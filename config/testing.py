from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
SESSION_COOKIE_SECURE = False
LOG_DIR = None

ADMIN_EMAIL = "admin@skygym.local"
ADMIN_PASSWORD = "test-password"
GYM_TIMEZONE = "Asia/Beirut"

AUTO_INIT_DB = False
