from __future__ import annotations

import importlib
from types import ModuleType

from dotenv import load_dotenv

from config import get_settings_module


def load_settings() -> ModuleType:
    """Load .env, then import config.<environment> chosen by APP_ENV."""
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())
