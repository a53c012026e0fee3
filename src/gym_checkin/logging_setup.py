from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s : %(message)s"


def setup_logging(*, level: str = "INFO", log_dir: str | None = None) -> None:
    """Console handler always; rotating file handler when log_dir is given."""
    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger("gym_checkin")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler) for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    if log_dir and not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "app.log"),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # mysql-connector is chatty at DEBUG
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
