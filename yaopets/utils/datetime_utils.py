# yaopets/utils/datetime_utils.py
"""
스토어 전체에서 일관된 시간 처리를 위한 중앙화된 유틸리티 모듈

이 모듈의 목적:
1. 모든 타임스탬프를 UTC timezone-aware datetime 으로 통일
2. 저장소에 기록되는 ISO 포맷 생성/파싱 통일
3. 과거 버전이 남긴 밀리초 타임스탬프(Date.now()) 호환
"""

import logging
from datetime import datetime, timezone
from typing import Any, Union

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

# createdAt 이 누락된 레코드에 부여되는 기본값 (최신순 정렬 시 항상 마지막)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 datetime 객체로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00
        """
        try:
            if not iso_string:
                raise ValueError("빈 문자열은 파싱할 수 없습니다")

            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'

            dt = dateutil_parser.isoparse(iso_string)

            # timezone-naive인 경우 UTC로 가정
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)

            return dt.astimezone(timezone.utc)

        except Exception as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime 객체를 ISO 포맷 문자열로 변환 (Z 접미사 포함)"""
        try:
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            else:
                dt = dt.astimezone(timezone.utc)

            return dt.isoformat().replace('+00:00', 'Z')

        except Exception as e:
            logger.error(f"ISO 문자열 변환 실패: {dt} - {e}")
            raise ValueError(f"datetime 객체를 ISO 문자열로 변환할 수 없습니다: {dt}")

    @staticmethod
    def from_timestamp_ms(timestamp_ms: Union[int, float]) -> datetime:
        """Unix timestamp (밀리초)를 UTC datetime 객체로 변환"""
        try:
            if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)):
                raise ValueError("timestamp_ms는 숫자여야 합니다")

            return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)

        except Exception as e:
            logger.error(f"timestamp_ms 변환 실패: {timestamp_ms} - {e}")
            raise ValueError(f"잘못된 timestamp 형식입니다: {timestamp_ms}")

    @staticmethod
    def to_timestamp_ms(dt: datetime) -> int:
        """datetime 객체를 Unix timestamp (밀리초)로 변환"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return int(dt.timestamp() * 1000)

    @staticmethod
    def coerce_datetime(value: Any) -> datetime:
        """
        저장소에서 읽은 임의의 시간 값을 UTC datetime 으로 변환

        Args:
            value: ISO 문자열, 밀리초 타임스탬프, datetime 객체 중 하나

        Returns:
            검증된 timezone-aware datetime 객체

        Raises:
            ValueError: 어떤 형식으로도 해석할 수 없는 경우
        """
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)

        if isinstance(value, str):
            return DateTimeUtils.parse_iso_datetime(value)

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return DateTimeUtils.from_timestamp_ms(value)

        raise ValueError(f"시간 값으로 해석할 수 없습니다: {value!r}")

