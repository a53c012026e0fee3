import os

from .config import *  # noqa: F401,F403
from .config import env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
SESSION_COOKIE_SECURE = False
LOG_DIR = os.getenv("LOG_DIR", "logs")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
