from __future__ import annotations

import io
from zoneinfo import ZoneInfo

from PIL import Image

import config.testing as testing_settings
from gym_checkin.container import wire_container
from gym_checkin.main import create_app

ADMIN_LOGIN = {"email": testing_settings.ADMIN_EMAIL, "password": testing_settings.ADMIN_PASSWORD}


def make_app(stores: dict):
    container = wire_container(
        **stores,
        admin_email=testing_settings.ADMIN_EMAIL,
        admin_password=testing_settings.ADMIN_PASSWORD,
        tz=ZoneInfo(testing_settings.GYM_TIMEZONE),
    )
    return create_app(settings=testing_settings, container=container)


def image_bytes(fmt: str = "PNG", size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()
