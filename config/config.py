import os


def env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev"

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "gym_checkin")

    # Front-desk admin
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "")

    # Gym
    GYM_TIMEZONE = os.environ.get("GYM_TIMEZONE", "Asia/Beirut")
    GYM_LOCATION = os.environ.get("GYM_LOCATION", "skygym")
    MEMBER_EMAIL_DOMAIN = os.environ.get("MEMBER_EMAIL_DOMAIN", "skygym.local")

    # Uploads / sessions
    PHOTO_DIR = os.environ.get("PHOTO_DIR", os.path.join(os.getcwd(), "storage", "photos"))
    MAX_PHOTO_BYTES = int(os.environ.get("MAX_PHOTO_BYTES", str(8 * 1024 * 1024)))  # 8MB
    SESSION_HOURS = int(os.environ.get("SESSION_HOURS", "8"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Kiosk scanner
    KIOSK_SERVER_URL = os.environ.get("KIOSK_SERVER_URL", "http://127.0.0.1:5000")
    KIOSK_HTTP_TIMEOUT = float(os.environ.get("KIOSK_HTTP_TIMEOUT", "10"))
    KIOSK_RESTART_MS = int(os.environ.get("KIOSK_RESTART_MS", "3000"))
    KIOSK_MAX_CAMERAS = int(os.environ.get("KIOSK_MAX_CAMERAS", "4"))
    KIOSK_CAMERA_LABELS = os.environ.get("KIOSK_CAMERA_LABELS", "")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

ADMIN_EMAIL = Config.ADMIN_EMAIL
ADMIN_PASSWORD = Config.ADMIN_PASSWORD
GYM_TIMEZONE = Config.GYM_TIMEZONE
GYM_LOCATION = Config.GYM_LOCATION
MEMBER_EMAIL_DOMAIN = Config.MEMBER_EMAIL_DOMAIN
PHOTO_DIR = Config.PHOTO_DIR
MAX_PHOTO_BYTES = Config.MAX_PHOTO_BYTES
SESSION_HOURS = Config.SESSION_HOURS
LOG_LEVEL = Config.LOG_LEVEL
KIOSK_SERVER_URL = Config.KIOSK_SERVER_URL
KIOSK_HTTP_TIMEOUT = Config.KIOSK_HTTP_TIMEOUT
KIOSK_RESTART_MS = Config.KIOSK_RESTART_MS
KIOSK_MAX_CAMERAS = Config.KIOSK_MAX_CAMERAS
KIOSK_CAMERA_LABELS = Config.KIOSK_CAMERA_LABELS
