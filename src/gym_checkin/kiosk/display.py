from __future__ import annotations

import logging
from typing import Optional, Protocol

import click

from ..core.enums import Badge

logger = logging.getLogger(__name__)


class ResultDisplay(Protocol):
    def show_result(self, message: str, badge: Optional[Badge] = None) -> None:
        raise NotImplementedError

    def show_photo(self, url: str) -> None:
        raise NotImplementedError

    def hide_photo(self) -> None:
        raise NotImplementedError


class ConsoleDisplay(ResultDisplay):
    """Terminal rendering: colored badge pill plus the member photo link."""

    def __init__(self):
        self.last_message: Optional[str] = None
        self.photo_url: Optional[str] = None

    def show_result(self, message: str, badge: Optional[Badge] = None) -> None:
        self.last_message = message
        text = message
        if badge is not None:
            color = "green" if badge == Badge.OK else "red"
            text += " " + click.style(f"[{badge.value}]", fg=color, bold=True)
        click.echo(text)
        logger.debug("result: %s (%s)", message, badge.value if badge else "-")

    def show_photo(self, url: str) -> None:
        if not url:
            self.hide_photo()
            return
        self.photo_url = url
        click.echo(f"  photo: {url}")

    def hide_photo(self) -> None:
        self.photo_url = None
