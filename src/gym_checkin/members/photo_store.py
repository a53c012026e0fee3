from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from werkzeug.utils import secure_filename

from ..common.validators import is_member_id
from ..core.exceptions import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class PhotoStore(Protocol):
    def upload(self, key: str, data: bytes) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        """Best-effort removal; False when nothing was deleted."""

        raise NotImplementedError

    def reference(self, key: str) -> Optional[str]:
        """Public URL of the photo, or None when there is none."""

        raise NotImplementedError

    def path_for(self, key: str) -> Optional[Path]:
        raise NotImplementedError


class FilesystemPhotoStore(PhotoStore):
    """Member photos as <PHOTO_DIR>/<member_id>.jpg, served under url_prefix."""

    def __init__(self, root: str | Path, *, url_prefix: str = "/photos"):
        self._root = Path(root)
        self._url_prefix = url_prefix.rstrip("/")

    def _file(self, key: str) -> Path:
        if not is_member_id(key):
            raise ValidationError("photo key must be a 6-digit member id")
        return self._root / secure_filename(f"{key}.jpg")

    def upload(self, key: str, data: bytes) -> None:
        target = self._file(key)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            tmp = target.with_suffix(".part")
            tmp.write_bytes(data)
            tmp.replace(target)
        except OSError as e:
            raise UpstreamError(f"Cannot store photo {key}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            self._file(key).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not delete old photo %s: %s", key, e)
            return False

    def reference(self, key: str) -> Optional[str]:
        if not self._file(key).is_file():
            return None
        return f"{self._url_prefix}/{key}"

    def path_for(self, key: str) -> Optional[Path]:
        path = self._file(key)
        return path if path.is_file() else None
