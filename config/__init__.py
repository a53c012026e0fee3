"""Settings modules for the check-in API and the kiosk scanner.

Both processes read the same `.env`; `APP_ENV` selects which module layers
its defaults on top of `config.config`. `GYM_SETTINGS_MODULE` names a module
directly, for a site that keeps its own settings file.
"""

import os

_ENVIRONMENTS = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module() -> str:
    explicit = os.getenv("GYM_SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENVIRONMENTS.get(env, "config.development")
