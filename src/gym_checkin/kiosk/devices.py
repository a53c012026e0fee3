from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

DecodeCallback = Callable[[str], None]
ErrorCallback = Callable[[Exception], None]


@dataclass(frozen=True)
class CameraDevice:
    device_id: int
    label: str


class CameraSession(Protocol):
    def stop(self) -> None:
        raise NotImplementedError


class CameraBackend(Protocol):
    def list_devices(self) -> Sequence[CameraDevice]:
        raise NotImplementedError

    def start(
        self,
        device_id: Optional[int],
        on_decoded: DecodeCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> CameraSession:
        """Open the device (None = default) and feed decoded QR text to on_decoded.

        on_error receives a DeviceError if the camera fails after starting.

        Raises DeviceError when the camera cannot be opened.
        """

        raise NotImplementedError


def parse_camera_labels(value: str) -> dict[int, str]:
    """'0:front,1:back' -> {0: 'front', 1: 'back'}."""
    labels: dict[int, str] = {}
    for part in (value or "").split(","):
        if ":" not in part:
            continue
        index, label = part.split(":", 1)
        if index.strip().isdigit():
            labels[int(index.strip())] = label.strip()
    return labels
