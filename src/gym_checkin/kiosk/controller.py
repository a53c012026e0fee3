from __future__ import annotations

import logging
import re
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional, Sequence

from ..common.validators import is_member_id
from ..core.constants import AUTO_RESTART_MS, CAMERA_LABEL_PATTERN
from ..core.enums import Badge, ScanState, ScanStatus
from ..core.exceptions import DeviceError, UpstreamError
from .client import CheckInClient
from .devices import CameraBackend, CameraDevice, CameraSession
from .display import ResultDisplay
from .scheduler import ScheduledTask, Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

_REAR_CAMERA_RE = re.compile(CAMERA_LABEL_PATTERN, re.IGNORECASE)


def pick_default_camera(cameras: Sequence[CameraDevice]) -> int:
    """Index of the first rear/environment-facing camera, else 0."""
    for index, device in enumerate(cameras):
        if _REAR_CAMERA_RE.search(device.label or ""):
            return index
    return 0


class ScanLoopController:
    """Owns the one camera session of the kiosk and processes one scan at a time.

    A successful decode sets the processing guard, stops the camera, calls the
    server off the camera thread, renders the answer and schedules a restart.
    The guard is only cleared by that restart, so decodes arriving meanwhile
    are dropped. Manual actions (toggle, switch) cancel any pending restart and
    bump the epoch, which turns an in-flight round trip's restart into a no-op.

    Two locks: `_lock` serialises camera transitions, `_guard` protects the
    small state read by the camera thread. The camera thread never takes
    `_lock`, so stopping a camera from a locked section cannot deadlock.
    """

    def __init__(
        self,
        camera: CameraBackend,
        client: CheckInClient,
        display: ResultDisplay,
        *,
        scheduler: Optional[Scheduler] = None,
        executor: Optional[Executor] = None,
        restart_ms: int = AUTO_RESTART_MS,
    ):
        self._camera = camera
        self._client = client
        self._display = display
        self._scheduler = scheduler or ThreadingScheduler()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="scan")
        self._restart_seconds = int(restart_ms) / 1000.0

        self._lock = threading.RLock()
        self._guard = threading.Lock()

        self._state = ScanState.IDLE
        self._processing = False
        self._epoch = 0
        self._camera_generation = 0
        self._cameras: list[CameraDevice] = []
        self._camera_index = 0
        self._session: Optional[CameraSession] = None
        self._pending_restart: Optional[ScheduledTask] = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def is_running(self) -> bool:
        return self._session is not None

    @property
    def toggle_label(self) -> str:
        """What the Stop/Start button does next."""
        return "Stop" if self._session is not None else "Start"

    @property
    def has_pending_restart(self) -> bool:
        return self._pending_restart is not None

    @property
    def cameras(self) -> Sequence[CameraDevice]:
        return tuple(self._cameras)

    @property
    def camera_index(self) -> int:
        return self._camera_index

    def start(self) -> None:
        """Enumerate cameras and start the preferred one."""
        with self._lock:
            try:
                self._cameras = list(self._camera.list_devices())
                if not self._cameras:
                    self._display.show_result("No camera found.", Badge.BAD)
                    return
                self._camera_index = pick_default_camera(self._cameras)
                self._start_camera(self._current_device_id())
                self._display.show_result("Point the camera at a QR code…")
            except DeviceError as e:
                self._camera_error(e)

    def toggle(self) -> None:
        """Stop/Start button."""
        with self._lock:
            self._begin_manual_action()
            if self._session is not None:
                try:
                    self._stop_camera()
                except DeviceError as e:
                    self._camera_error(e)
                    return
                self._set_state(ScanState.STOPPED)
                self._display.show_result("Scanner stopped.")
                self._display.hide_photo()
                return

            try:
                self._start_camera(self._current_device_id())
                self._display.show_result("Scanner running.")
            except DeviceError as e:
                self._camera_error(e)

    def switch_camera(self) -> None:
        """Advance to the next enumerated camera, cyclically."""
        with self._lock:
            if not self._cameras:
                return
            self._begin_manual_action()
            try:
                self._stop_camera()
                self._camera_index = (self._camera_index + 1) % len(self._cameras)
                self._start_camera(self._current_device_id())
                self._display.show_result("Scanner running.")
                self._display.hide_photo()
            except DeviceError as e:
                self._camera_error(e)

    def shutdown(self) -> None:
        with self._lock:
            self._begin_manual_action()
            try:
                self._stop_camera()
            except DeviceError as e:
                logger.warning("Camera did not stop cleanly: %s", e)
            self._set_state(ScanState.STOPPED)
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def on_decoded(self, text: str) -> None:
        """Camera callback; runs on the camera thread."""
        if not is_member_id(text):
            return

        with self._guard:
            if self._processing or self._state != ScanState.CAMERA_ACTIVE:
                return
            self._processing = True
            self._state = ScanState.PROCESSING
            epoch = self._epoch

        self._display.show_result(f"Scanned: {text}")
        self._display.hide_photo()
        self._executor.submit(self._process, text, epoch)

    def _on_camera_failure(self, error: Exception, generation: int) -> None:
        """Camera callback for a session that died after starting; runs on the camera thread."""
        self._executor.submit(self._drop_failed_camera, error, generation)

    def _drop_failed_camera(self, error: Exception, generation: int) -> None:
        with self._lock:
            if generation != self._camera_generation or self._session is None:
                return
            # The session already released the device.
            self._session = None
            self._set_state(ScanState.STOPPED)
            self._camera_error(error)

    def _process(self, payload: str, epoch: int) -> None:
        with self._lock:
            try:
                self._stop_camera()
            except DeviceError as e:
                logger.warning("Camera did not stop before scan: %s", e)

        try:
            data = self._client.check_in(payload)
            self._render(data)
        except UpstreamError as e:
            logger.warning("Scan %s failed: %s", payload, e)
            self._display.show_result(f"Server error: {e}", Badge.BAD)
        except Exception as e:
            logger.exception("Unexpected error while processing scan %s", payload)
            self._display.show_result(f"Server error: {e}", Badge.BAD)
        finally:
            self._schedule_restart(epoch)

    def _render(self, data: dict) -> None:
        message = data.get("message")
        if not data.get("ok"):
            self._display.show_result(message or "Error", Badge.BAD)
            self._display.hide_photo()
            return

        status = data.get("status")
        if status == ScanStatus.EXPIRED.value:
            self._display.show_result(message or "Membership expired.", Badge.BAD)
            self._display.hide_photo()
        elif status == ScanStatus.NO_MEMBERSHIP.value:
            self._display.show_result(message or "No membership found.", Badge.BAD)
            self._display.hide_photo()
        elif status == ScanStatus.ACTIVE.value:
            self._display.show_result(message or "", Badge.OK)
            if data.get("photoUrl"):
                self._display.show_photo(self._client.absolute_url(data["photoUrl"]))
        else:
            self._display.show_result(message or "Processed.")

    def _schedule_restart(self, epoch: int) -> None:
        with self._guard:
            if epoch != self._epoch:
                return
            self._cancel_restart()
            self._pending_restart = self._scheduler.call_later(self._restart_seconds, lambda: self._restart(epoch))

    def _restart(self, epoch: int) -> None:
        with self._lock:
            with self._guard:
                if epoch != self._epoch:
                    return
                self._pending_restart = None
            try:
                self._start_camera(self._current_device_id())
                self._display.show_result("Ready for next scan.")
                self._display.hide_photo()
            except DeviceError as e:
                self._display.show_result(f"Restart error: {e}", Badge.BAD)
            finally:
                with self._guard:
                    self._processing = False

    def _begin_manual_action(self) -> None:
        with self._guard:
            self._epoch += 1
            self._cancel_restart()
            self._processing = False

    def _cancel_restart(self) -> None:
        # caller holds _guard
        if self._pending_restart is not None:
            self._pending_restart.cancel()
            self._pending_restart = None

    def _current_device_id(self) -> Optional[int]:
        if not self._cameras:
            return None
        return self._cameras[self._camera_index].device_id

    def _set_state(self, state: ScanState) -> None:
        with self._guard:
            self._state = state

    def _start_camera(self, device_id: Optional[int]) -> None:
        if self._session is not None:
            return
        self._set_state(ScanState.CAMERA_STARTING)
        self._camera_generation += 1
        generation = self._camera_generation
        try:
            session = self._camera.start(device_id, self.on_decoded, lambda e: self._on_camera_failure(e, generation))
        except DeviceError:
            self._set_state(ScanState.STOPPED)
            raise
        except Exception as e:
            self._set_state(ScanState.STOPPED)
            raise DeviceError(str(e)) from e
        self._session = session
        self._set_state(ScanState.CAMERA_ACTIVE)

    def _stop_camera(self) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            session.stop()
        except DeviceError:
            raise
        except Exception as e:
            raise DeviceError(str(e)) from e

    def _camera_error(self, error: Exception) -> None:
        logger.warning("Camera error: %s", error)
        self._display.show_result(f"Camera error: {error}", Badge.BAD)
