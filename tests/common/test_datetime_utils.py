from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from gym_checkin.common.datetime_utils import add_months, format_local, local_day, minutes_since_midnight, to_iso
from gym_checkin.common.validators import is_member_id, pad_member_number, require_member_id
from gym_checkin.core.exceptions import ValidationError

BEIRUT = ZoneInfo("Asia/Beirut")


def test_minutes_since_midnight_uses_gym_timezone_not_utc():
    # 07:00 UTC in January is 09:00 in Beirut (UTC+2)
    now = datetime(2026, 1, 15, 7, 0, tzinfo=timezone.utc)

    assert minutes_since_midnight(now, BEIRUT) == 540


def test_local_day_rolls_over_in_gym_timezone():
    now = datetime(2026, 1, 15, 23, 30, tzinfo=timezone.utc)

    assert local_day(now, BEIRUT).isoformat() == "2026-01-16"
    assert minutes_since_midnight(now, BEIRUT) == 90


def test_naive_datetimes_are_treated_as_utc():
    assert minutes_since_midnight(datetime(2026, 1, 15, 7, 30), BEIRUT) == 570


def test_add_months_clamps_to_month_end():
    start = datetime(2026, 1, 31, 10, 0, tzinfo=timezone.utc)

    assert add_months(start, 1) == datetime(2026, 2, 28, 10, 0, tzinfo=timezone.utc)
    assert add_months(start, 12) == datetime(2027, 1, 31, 10, 0, tzinfo=timezone.utc)


def test_add_months_crosses_year():
    start = datetime(2026, 12, 15, tzinfo=timezone.utc)

    assert add_months(start, 2) == datetime(2027, 2, 15, tzinfo=timezone.utc)


def test_format_and_iso():
    value = datetime(2026, 1, 10, 10, 0, tzinfo=timezone.utc)

    assert format_local(value, BEIRUT) == "2026-01-10 12:00"
    assert to_iso(value) == "2026-01-10T10:00:00Z"


@pytest.mark.parametrize("value", ["000123", "999999", "000000"])
def test_is_member_id_accepts_six_ascii_digits(value):
    assert is_member_id(value)


@pytest.mark.parametrize("value", ["12345", "1234567", "abcdef", "12 456", "", None, 123456, "١٢٣٤٥٦", "000123\n"])
def test_is_member_id_rejects_everything_else(value):
    assert not is_member_id(value)


def test_require_member_id_strips_and_validates():
    assert require_member_id(" 000042 ") == "000042"
    with pytest.raises(ValidationError):
        require_member_id("42")


def test_pad_member_number():
    assert pad_member_number(7) == "000007"
