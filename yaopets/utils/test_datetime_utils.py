# yaopets/utils/test_datetime_utils.py
"""
시간 유틸리티 기능 테스트

사용법: python -m pytest yaopets/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, timezone, timedelta

from yaopets.utils.datetime_utils import DateTimeUtils, EPOCH


def test_parse_iso_datetime():
    """ISO 포맷 파싱 테스트"""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+09:00",
        "2024-01-15T10:30:00.123456Z",
        "2024-01-15T10:30:00"
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert isinstance(dt, datetime)
        assert dt.tzinfo == timezone.utc

def test_parse_iso_datetime_normalizes_offset():
    dt = DateTimeUtils.parse_iso_datetime("2024-01-15T10:30:00+09:00")
    assert dt.hour == 1

def test_parse_iso_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("not a date")
    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("")

def test_to_iso_string_uses_z_suffix():
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert DateTimeUtils.to_iso_string(dt) == "2024-01-15T10:30:00Z"

    naive = datetime(2024, 1, 15, 10, 30)
    assert DateTimeUtils.to_iso_string(naive) == "2024-01-15T10:30:00Z"

    kst = datetime(2024, 1, 15, 19, 30, tzinfo=timezone(timedelta(hours=9)))
    assert DateTimeUtils.to_iso_string(kst) == "2024-01-15T10:30:00Z"

def test_timestamp_ms_conversion():
    """밀리초 타임스탬프 왕복 테스트"""
    dt = DateTimeUtils.from_timestamp_ms(1705314600000)
    assert dt == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert DateTimeUtils.to_timestamp_ms(dt) == 1705314600000

def test_from_timestamp_ms_rejects_non_numbers():
    with pytest.raises(ValueError):
        DateTimeUtils.from_timestamp_ms("1705314600000")
    with pytest.raises(ValueError):
        DateTimeUtils.from_timestamp_ms(True)

def test_coerce_datetime_accepts_stored_shapes():
    """저장소에 남아 있을 수 있는 모든 형태의 시간 값 변환 테스트"""
    expected = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    assert DateTimeUtils.coerce_datetime("2024-01-15T10:30:00Z") == expected
    assert DateTimeUtils.coerce_datetime(1705314600000) == expected
    assert DateTimeUtils.coerce_datetime(datetime(2024, 1, 15, 10, 30)) == expected

    with pytest.raises(ValueError):
        DateTimeUtils.coerce_datetime(None)
    with pytest.raises(ValueError):
        DateTimeUtils.coerce_datetime([2024, 1, 15])

def test_epoch_is_utc():
    assert EPOCH.tzinfo == timezone.utc
    assert DateTimeUtils.to_timestamp_ms(EPOCH) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
