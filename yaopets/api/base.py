# yaopets/api/base.py
"""
엔티티 서비스 기본 클래스
모든 엔티티 저장소(게시글, 댓글, 사용자, 반려동물)가 상속받는 공통 기능 제공
"""

import logging
from typing import Any, Dict, List, Optional

from yaopets.services.collection_store import CollectionStore

logger = logging.getLogger(__name__)


class BaseEntityService:
    """
    엔티티 서비스의 기본 클래스
    컬렉션 읽기/쓰기와 비정규화 카운터 보정 메서드 제공
    """
    collection_name: str = ""

    def __init__(self, collections: CollectionStore):
        self.collections = collections

    def load_all(self) -> List[Any]:
        """컬렉션 전체를 저장 순서대로 읽습니다."""
        return self.collections.load(self.collection_name)

    def find(self, records: List[Any], entity_id: int) -> Optional[Any]:
        """이미 읽어 둔 목록에서 id 로 레코드를 찾습니다."""
        schema = self.collections.schemas[self.collection_name]
        for record in records:
            if schema.record_id(record) == entity_id:
                return record
        return None

    def get_by_id(self, entity_id: int) -> Optional[Any]:
        return self.find(self.load_all(), entity_id)

    def next_id(self, records: List[Any]) -> int:
        return self.collections.next_id(self.collection_name, records)

    def changes_for(self, records: List[Any]) -> Dict[str, List[Any]]:
        """CollectionStore.save_all 에 넘길 변경분."""
        return {self.collection_name: records}

    def save_all_records(self, records: List[Any]) -> bool:
        return self.collections.save_all(self.changes_for(records))

    @staticmethod
    def apply_counter_delta(record: Any, counter_field: str, delta: int) -> int:
        """
        카운터를 delta 만큼 조정합니다. 0 아래로는 내려가지 않습니다.
        이미 관계 집합과 어긋나 있던 카운터가 음수가 되는 것을 막기 위함입니다.
        """
        value = max(0, getattr(record, counter_field) + delta)
        setattr(record, counter_field, value)
        return value

    @staticmethod
    def _apply_changes(record: Any, changes: Dict[str, Any], allowed_fields) -> List[str]:
        """허용된 필드만 레코드에 반영하고, 반영된 필드 이름을 반환합니다."""
        applied = []
        for field_name, value in changes.items():
            if field_name not in allowed_fields:
                logger.warning(f"수정할 수 없는 필드를 무시합니다: {field_name}")
                continue
            setattr(record, field_name, value)
            applied.append(field_name)
        return applied
