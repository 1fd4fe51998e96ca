# yaopets/services/collection_store.py
"""
키 기반 컬렉션 저장소 (Keyed Collection Store)

이름 붙은 레코드 컬렉션("posts", "comments", "users" ...)을 네임스페이스 아래
하나의 키로 읽고 씁니다. 모든 상위 저장소(엔티티 서비스, 관계 인덱스)의 기반입니다.

- 없는 키, 손상된 값, 용량 초과는 예외가 아니라 "빈 컬렉션"/"쓰기 실패(False)"로 처리합니다.
- save/upsert 는 항상 컬렉션 전체를 다시 씁니다. 하나의 논리적 연산에서 여러
  컬렉션을 바꿀 때는 save_all 로 한 번에 기록해야 합니다.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from yaopets.schemas import COLLECTION_SCHEMAS, BaseRecordSchema, encode_collection, decode_collection
from yaopets.services.storage_backend import StorageBackend, StorageBackendError

logger = logging.getLogger(__name__)

# 다른 컬렉션에서 (컬렉션 이름, 필드) 로 참조되는 id 도 이미 발급된 id 로 봅니다.
# 원본 컬렉션이 손상되어 빈 목록으로 읽혀도 id 가 다시 발급되지 않습니다.
ID_REFERENCES = {
    'posts': (('likes_post', 'second'), ('saves_post', 'second'), ('comments', 'post_id')),
    'comments': (('likes_comment', 'second'),),
    'users': (('follows', 'first'), ('follows', 'second')),
}


class CollectionStore:
    """네임스페이스 단위의 컬렉션 저장소."""

    def __init__(self, backend: StorageBackend, namespace: str = "yaopets",
                 schemas: Optional[Dict[str, BaseRecordSchema]] = None,
                 id_references: Optional[Dict[str, Tuple[Tuple[str, str], ...]]] = None):
        self.backend = backend
        self.namespace = namespace
        self.schemas = schemas if schemas is not None else COLLECTION_SCHEMAS
        self._initialized = False
        self.id_references = id_references if id_references is not None else ID_REFERENCES

    # --- 내부 헬퍼 ---
    def _key(self, name: str) -> str:
        return f"{self.namespace}:{name}"

    def _schema(self, name: str) -> BaseRecordSchema:
        schema = self.schemas.get(name)
        if schema is None:
            raise ValueError(f"알 수 없는 컬렉션입니다: {name}")
        return schema

    def ensure_initialized(self) -> None:
        """최초 접근 시 없는 컬렉션을 빈 컬렉션으로 생성합니다."""
        if self._initialized:
            return
        self._initialized = True
        for name, schema in self.schemas.items():
            key = self._key(name)
            if self.backend.get_item(key) is not None:
                continue
            try:
                self.backend.set_item(key, encode_collection(schema, []))
            except StorageBackendError as e:
                logger.error(f"컬렉션 '{name}' 초기화 실패: {e}")
        logger.info(f"Collection store initialized (namespace: {self.namespace})")

    # --- 읽기 ---
    def load(self, name: str) -> List[Any]:
        """컬렉션 전체를 저장 순서대로 반환합니다. 문제가 있으면 빈 목록."""
        schema = self._schema(name)
        self.ensure_initialized()
        try:
            raw = self.backend.get_item(self._key(name))
        except StorageBackendError as e:
            logger.error(f"컬렉션 '{name}' 읽기 실패: {e}")
            return []
        return decode_collection(schema, raw, name)

    def get_by_id(self, name: str, record_id: int) -> Optional[Any]:
        schema = self._schema(name)
        for record in self.load(name):
            if schema.record_id(record) == record_id:
                return record
        return None

    def next_id(self, name: str, records: Optional[List[Any]] = None) -> int:
        """
        가장 큰 id + 1 (비어 있으면 1). 이미 읽어 둔 records 가 있으면 재사용합니다.
        ID_REFERENCES 에 등록된 관계/컬렉션이 참조하는 id 도 최댓값 계산에 포함합니다.
        """
        schema = self._schema(name)
        if records is None:
            records = self.load(name)
        ids = [schema.record_id(r) for r in records]
        for ref_name, field_name in self.id_references.get(name, ()):
            if ref_name in self.schemas and ref_name != name:
                ids.extend(getattr(r, field_name) for r in self.load(ref_name))
        return max(ids, default=0) + 1

    # --- 쓰기 ---
    def save(self, name: str, records: List[Any]) -> bool:
        """컬렉션 전체를 교체합니다."""
        return self.save_all({name: records})

    def upsert(self, name: str, record: Any) -> bool:
        """id 가 처음이면 끝에 추가하고, 이미 있으면 같은 위치에서 교체합니다."""
        schema = self._schema(name)
        record_id = schema.record_id(record)
        records = self.load(name)
        for index, existing in enumerate(records):
            if schema.record_id(existing) == record_id:
                records[index] = record
                break
        else:
            records.append(record)
        return self.save(name, records)

    def save_all(self, changes: Dict[str, List[Any]]) -> bool:
        """
        여러 컬렉션을 하나의 논리적 쓰기로 기록합니다.
        중간에 실패하면 이미 기록한 키를 이전 값으로 되돌려, 호출자는
        전부 반영되었거나 전혀 반영되지 않은 상태만 관찰합니다.

        :return: 모두 기록되었으면 True
        """
        self.ensure_initialized()
        encoded = {name: encode_collection(self._schema(name), records) for name, records in changes.items()}

        written: Dict[str, Optional[str]] = {}
        try:
            for name, value in encoded.items():
                key = self._key(name)
                previous = self.backend.get_item(key)
                self.backend.set_item(key, value)
                written[key] = previous
            return True
        except StorageBackendError as e:
            logger.error(f"컬렉션 쓰기 실패 ({', '.join(changes)}): {e}")
            self._rollback(written)
            return False

    def _rollback(self, written: Dict[str, Optional[str]]) -> None:
        for key, previous in written.items():
            try:
                if previous is None:
                    self.backend.remove_item(key)
                else:
                    self.backend.set_item(key, previous)
            except StorageBackendError as e:
                logger.error(f"'{key}' 롤백 실패: {e}", exc_info=True)
