import threading

import pytest

pytest.importorskip("cv2")
pytest.importorskip("pyzbar.pyzbar")

from gym_checkin.core.exceptions import DeviceError  # noqa: E402
from gym_checkin.kiosk.camera import OpenCVCameraSession  # noqa: E402


class ScriptedCapture:
    """Plays back read() results; a frame is the list of QR texts it contains."""

    def __init__(self, script, *, then=(False, None)):
        self._script = list(script)
        self._then = then
        self.released = threading.Event()

    def read(self):
        step = self._script.pop(0) if self._script else self._then
        if isinstance(step, Exception):
            raise step
        return step

    def release(self):
        self.released.set()


@pytest.fixture(autouse=True)
def frames_are_text_lists(monkeypatch):
    monkeypatch.setattr(OpenCVCameraSession, "_decode", staticmethod(lambda frame: list(frame)))


def run_until_released(capture, **kwargs):
    decoded, errors = [], []
    session = OpenCVCameraSession(
        capture,
        kwargs.pop("on_decoded", decoded.append),
        fps=1000,
        on_error=errors.append,
        max_read_failures=3,
        **kwargs,
    )
    session.start()
    assert capture.released.wait(timeout=5)
    session.stop()
    return decoded, errors


def test_read_exceptions_end_in_device_error():
    capture = ScriptedCapture([], then=OSError("device unplugged"))

    decoded, errors = run_until_released(capture)

    assert decoded == []
    assert len(errors) == 1
    assert isinstance(errors[0], DeviceError)
    assert "device unplugged" in str(errors[0])


def test_empty_reads_end_in_device_error():
    decoded, errors = run_until_released(ScriptedCapture([(True, ["000123"])]))

    assert decoded == ["000123"]
    assert [str(e) for e in errors] == ["Camera stopped delivering frames (no frame)"]


def test_transient_read_failures_are_tolerated():
    script = [OSError("glitch"), (False, None), (True, ["000123"]), OSError("glitch"), (True, ["000456"])]

    decoded, errors = run_until_released(ScriptedCapture(script))

    assert decoded == ["000123", "000456"]
    assert len(errors) == 1


def test_failing_scan_handler_does_not_stop_the_reader():
    seen = []

    def handler(text):
        seen.append(text)
        if text == "000123":
            raise RuntimeError("boom")

    _, errors = run_until_released(ScriptedCapture([(True, ["000123", "000456"]), (True, ["000789"])]), on_decoded=handler)

    assert seen == ["000123", "000456", "000789"]
    assert len(errors) == 1


def test_stop_releases_without_reporting_an_error():
    errors = []
    capture = ScriptedCapture([], then=(True, []))
    session = OpenCVCameraSession(capture, lambda text: None, fps=1000, on_error=errors.append, max_read_failures=3)
    session.start()

    session.stop()

    assert capture.released.wait(timeout=5)
    assert errors == []
