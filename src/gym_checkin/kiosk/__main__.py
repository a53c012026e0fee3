"""Run the front-desk scanner: ``python -m gym_checkin.kiosk``."""

from __future__ import annotations

import logging

import click

from ..core.constants import AUTO_RESTART_MS, DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import AuthenticationError, UpstreamError
from ..logging_setup import setup_logging
from ..settings import load_settings
from .camera import OpenCVCameraBackend
from .client import CheckInClient
from .controller import ScanLoopController
from .devices import parse_camera_labels
from .display import ConsoleDisplay

logger = logging.getLogger(__name__)

HELP = "Commands: [s] stop/start  [n] next camera  [q] quit"


def _prompt(controller: ScanLoopController) -> str:
    return f"[s] {controller.toggle_label}  [n] next camera  [q] quit > "


@click.command()
@click.option("--server", "server_url", default=None, help="Check-in API base URL (KIOSK_SERVER_URL).")
@click.option("--email", default=None, help="Admin email used for the kiosk session.")
@click.option("--password", default=None, help="Admin password used for the kiosk session.")
def main(server_url, email, password):
    settings = load_settings()
    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    client = CheckInClient(
        server_url or getattr(settings, "KIOSK_SERVER_URL", "http://127.0.0.1:5000"),
        timeout=float(getattr(settings, "KIOSK_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
    )
    try:
        client.login(email or getattr(settings, "ADMIN_EMAIL", ""), password or getattr(settings, "ADMIN_PASSWORD", ""))
    except (AuthenticationError, UpstreamError) as e:
        raise click.ClickException(str(e))

    camera = OpenCVCameraBackend(
        max_devices=int(getattr(settings, "KIOSK_MAX_CAMERAS", 4)),
        labels=parse_camera_labels(getattr(settings, "KIOSK_CAMERA_LABELS", "")),
    )
    controller = ScanLoopController(
        camera,
        client,
        ConsoleDisplay(),
        restart_ms=int(getattr(settings, "KIOSK_RESTART_MS", AUTO_RESTART_MS)),
    )

    click.echo(HELP)
    controller.start()
    try:
        while True:
            command = click.prompt(_prompt(controller), default="", show_default=False, prompt_suffix="").strip().lower()
            if command == "s":
                controller.toggle()
            elif command == "n":
                controller.switch_camera()
            elif command == "q":
                break
            elif command:
                click.echo(HELP)
    except (KeyboardInterrupt, click.Abort):
        pass
    finally:
        controller.shutdown()


if __name__ == "__main__":
    main()
