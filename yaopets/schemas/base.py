# yaopets/schemas/base.py
import logging
from typing import Any, Dict, Optional

from marshmallow import Schema, fields, EXCLUDE, ValidationError, pre_load, post_load

from yaopets.utils.datetime_utils import DateTimeUtils, EPOCH

logger = logging.getLogger(__name__)

# 저장 포맷 버전. 봉투(envelope) 없이 배열만 저장된 과거 데이터는 버전 0 으로 취급합니다.
SCHEMA_VERSION = 1


class UTCDateTime(fields.Field):
    """ISO 문자열/밀리초 타임스탬프를 모두 읽고, 항상 ISO(Z) 문자열로 기록하는 필드."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return DateTimeUtils.to_iso_string(value)

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return DateTimeUtils.coerce_datetime(value)
        except ValueError:
            logger.warning(f"'{attr}' 값을 해석할 수 없어 기본값으로 대체합니다: {value!r}")
            return EPOCH


class Counter(fields.Int):
    """비정규화 카운터 필드. 잘못된 값은 0, 음수는 0 으로 보정합니다."""

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            number = super()._deserialize(value, attr, data, **kwargs)
        except ValidationError:
            logger.warning(f"'{attr}' 카운터 값이 올바르지 않아 0 으로 대체합니다: {value!r}")
            return 0
        return max(0, number)


class BaseRecordSchema(Schema):
    """
    저장소 레코드 스키마의 기반 클래스.
    - 알 수 없는 필드는 무시하고(EXCLUDE), 누락/NULL 필드는 load_default 로 채웁니다.
    - 과거(camelCase) 키 이름은 legacy_keys 로 현재 이름에 매핑합니다.
    - 로드 결과는 record_class 데이터클래스 인스턴스입니다.
    """
    record_class: Optional[type] = None
    id_field: Optional[str] = None
    legacy_keys: Dict[str, str] = {}

    class Meta:
        unknown = EXCLUDE

    def upgrade_legacy(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """스키마별 추가 변환이 필요할 때 재정의합니다."""
        return data

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        upgraded = dict(data)
        for old_key, new_key in self.legacy_keys.items():
            if old_key in upgraded and new_key not in upgraded:
                upgraded[new_key] = upgraded.pop(old_key)
        upgraded = self.upgrade_legacy(upgraded)
        # NULL 은 누락과 동일하게 취급하여 기본값이 적용되도록 합니다.
        return {k: v for k, v in upgraded.items() if v is not None}

    @post_load
    def make_record(self, data, **kwargs):
        return self.record_class(**data)

    def record_id(self, record: Any) -> Optional[int]:
        if self.id_field is None:
            return None
        return getattr(record, self.id_field)
