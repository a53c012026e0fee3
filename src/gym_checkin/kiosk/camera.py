from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional, Sequence

import cv2
from pyzbar.pyzbar import ZBarSymbol, decode
from pyzbar.pyzbar_error import PyZbarError

from ..core.constants import CAMERA_MAX_READ_FAILURES
from ..core.exceptions import DeviceError
from .devices import CameraBackend, CameraDevice, CameraSession, DecodeCallback, ErrorCallback

logger = logging.getLogger(__name__)


class OpenCVCameraSession(CameraSession):
    """Reads frames on a daemon thread and decodes QR symbols with pyzbar.

    A bad frame or a failing decode handler is logged and skipped. After
    `max_read_failures` consecutive failed reads the session gives up,
    releases the device and reports a DeviceError through `on_error`.
    """

    def __init__(
        self,
        capture,
        on_decoded: DecodeCallback,
        *,
        fps: int,
        on_error: Optional[ErrorCallback] = None,
        max_read_failures: int = CAMERA_MAX_READ_FAILURES,
    ):
        self._capture = capture
        self._on_decoded = on_decoded
        self._on_error = on_error
        self._interval = 1.0 / max(1, int(fps))
        self._max_read_failures = max(1, int(max_read_failures))
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="camera-reader", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        failures = 0
        try:
            while not self._stop.is_set():
                frame, reason = self._read()
                if frame is None:
                    failures += 1
                    if failures >= self._max_read_failures:
                        self._fail(DeviceError(f"Camera stopped delivering frames ({reason})"))
                        return
                    self._stop.wait(self._interval)
                    continue

                failures = 0
                for text in self._decode(frame):
                    if self._stop.is_set():
                        break
                    try:
                        self._on_decoded(text)
                    except Exception:
                        logger.exception("Scan handler failed for %r", text)
                self._stop.wait(self._interval)
        finally:
            self._capture.release()

    def _read(self):
        try:
            ok, frame = self._capture.read()
        except Exception as e:
            logger.warning("Camera read failed: %s", e)
            return None, str(e)
        if not ok or frame is None:
            return None, "no frame"
        return frame, None

    @staticmethod
    def _decode(frame) -> list[str]:
        # Unreadable frames are the normal case; nothing to report.
        try:
            gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
            symbols = decode(gray, symbols=[ZBarSymbol.QRCODE])
        except (cv2.error, PyZbarError) as e:
            logger.debug("Frame skipped: %s", e)
            return []

        texts = []
        for symbol in symbols:
            try:
                texts.append(symbol.data.decode("utf-8"))
            except UnicodeDecodeError:
                continue
        return texts

    def _fail(self, error: DeviceError) -> None:
        if self._stop.is_set():
            return
        logger.warning("%s", error)
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            logger.exception("Camera error handler failed")

    def stop(self) -> None:
        self._stop.set()
        if threading.current_thread() is not self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)


class OpenCVCameraBackend(CameraBackend):
    def __init__(
        self,
        *,
        max_devices: int = 4,
        fps: int = 10,
        default_device: int = 0,
        labels: Optional[Mapping[int, str]] = None,
    ):
        self._max_devices = int(max_devices)
        self._fps = int(fps)
        self._default_device = int(default_device)
        self._labels = dict(labels or {})

    def list_devices(self) -> Sequence[CameraDevice]:
        devices = []
        for index in range(self._max_devices):
            capture = cv2.VideoCapture(index)
            try:
                if capture.isOpened():
                    devices.append(CameraDevice(device_id=index, label=self._labels.get(index, f"Camera {index}")))
            finally:
                capture.release()
        logger.info("Found %d camera(s)", len(devices))
        return devices

    def start(
        self,
        device_id: Optional[int],
        on_decoded: DecodeCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> CameraSession:
        index = self._default_device if device_id is None else int(device_id)
        try:
            capture = cv2.VideoCapture(index)
        except cv2.error as e:
            raise DeviceError(f"Cannot open camera {index}: {e}") from e
        if not capture.isOpened():
            capture.release()
            raise DeviceError(f"Cannot open camera {index}")

        session = OpenCVCameraSession(capture, on_decoded, fps=self._fps, on_error=on_error)
        session.start()
        logger.info("Camera %d started", index)
        return session
