# yaopets/schemas/codec.py
"""
컬렉션 단위 직렬화 코덱

저장 포맷:
    {"schema_version": 1, "records": [ {...}, {...} ]}

- 봉투 없이 배열만 저장된 값은 버전 0 (초기 브라우저 저장 포맷)으로 읽습니다.
- 손상된 값(JSON 아님, 형태 불일치)은 빈 컬렉션으로 취급하고 로그만 남깁니다.
- 개별 레코드가 스키마 검증에 실패하면 해당 레코드만 건너뜁니다.
"""

import json
import logging
from typing import Any, List, Optional

from marshmallow import Schema, fields, EXCLUDE, ValidationError

from .base import BaseRecordSchema, SCHEMA_VERSION

logger = logging.getLogger(__name__)


class CollectionEnvelopeSchema(Schema):
    """저장된 컬렉션 값을 감싸는 버전 봉투."""
    schema_version = fields.Int(load_default=0)
    records = fields.List(fields.Raw(), required=True)

    class Meta:
        unknown = EXCLUDE


_envelope_schema = CollectionEnvelopeSchema()


def encode_collection(schema: BaseRecordSchema, records: List[Any]) -> str:
    """레코드 목록을 버전 봉투에 담아 JSON 문자열로 변환합니다."""
    payload = {
        "schema_version": SCHEMA_VERSION,
        "records": schema.dump(records, many=True),
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def decode_collection(schema: BaseRecordSchema, raw: Optional[str], name: str = "") -> List[Any]:
    """
    저장된 문자열을 레코드 목록으로 복원합니다. 어떤 경우에도 예외를 던지지 않습니다.

    :param schema: 레코드 스키마
    :param raw: 저장소에서 읽은 값 (없으면 None)
    :param name: 로그에 표시할 컬렉션 이름
    :return: 레코드 목록 (손상 시 빈 목록)
    """
    if raw is None:
        return []

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"컬렉션 '{name}' 값이 손상되어 빈 컬렉션으로 취급합니다: {e}")
        return []

    if isinstance(data, list):
        version, items = 0, data
    elif isinstance(data, dict):
        try:
            envelope = _envelope_schema.load(data)
        except ValidationError as e:
            logger.warning(f"컬렉션 '{name}' 봉투 형식이 올바르지 않습니다: {e.messages}")
            return []
        version, items = envelope["schema_version"], envelope["records"]
    else:
        logger.warning(f"컬렉션 '{name}' 값의 형태를 알 수 없습니다: {type(data).__name__}")
        return []

    if version > SCHEMA_VERSION:
        logger.info(f"컬렉션 '{name}' 이(가) 더 최신 버전({version})으로 저장되어 있습니다. 알려진 필드만 읽습니다.")

    records = []
    seen_ids = set()
    for index, item in enumerate(items):
        try:
            record = schema.load(item)
        except ValidationError as e:
            logger.warning(f"컬렉션 '{name}' 의 {index}번째 레코드를 건너뜁니다: {e.messages}")
            continue

        record_id = schema.record_id(record)
        if record_id is not None:
            if record_id in seen_ids:
                logger.warning(f"컬렉션 '{name}' 에 중복 id {record_id} 가 있어 뒤의 레코드를 건너뜁니다.")
                continue
            seen_ids.add(record_id)
        records.append(record)

    return records
