import os

from .config import *  # noqa: F401,F403
from .config import env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
# Set after deploying behind HTTPS.
SESSION_COOKIE_SECURE = env_bool("SESSION_COOKIE_SECURE", "0")
LOG_DIR = os.getenv("LOG_DIR", "logs")

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
