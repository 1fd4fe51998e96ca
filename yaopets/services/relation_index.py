# yaopets/services/relation_index.py
"""
관계 인덱스 (Relation Index)

사용자-게시글 좋아요, 사용자-댓글 좋아요, 사용자-게시글 저장, 사용자-사용자 팔로우
같은 다대다 관계를 순서쌍 집합으로 관리합니다. 관계 하나는 CollectionStore 의
컬렉션 하나(순서쌍 레코드 목록)로 저장됩니다.
"""

from typing import Dict, Iterator, List, Optional

from yaopets.models.relation import Relation, RelationPair
from yaopets.services.collection_store import CollectionStore


class RelationSet:
    """
    메모리 상의 관계 집합.
    삽입 순서를 보존하는 목록과 O(1) 멤버십 검사를 위한 dict 인덱스를 함께 유지합니다.
    """

    def __init__(self, relation: Relation, pairs: Optional[List[RelationPair]] = None):
        self.relation = relation
        self._pairs: Dict[RelationPair, None] = dict.fromkeys(pairs or [])

    def __contains__(self, pair: RelationPair) -> bool:
        return pair in self._pairs

    def __iter__(self) -> Iterator[RelationPair]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def has(self, a: int, b: int) -> bool:
        return RelationPair(a, b) in self._pairs

    def add(self, a: int, b: int) -> bool:
        """쌍을 추가합니다. 이미 있으면 아무것도 하지 않고 False."""
        pair = RelationPair(a, b)
        if pair in self._pairs:
            return False
        self._pairs[pair] = None
        return True

    def remove(self, a: int, b: int) -> bool:
        """쌍을 제거합니다. 없으면 아무것도 하지 않고 False."""
        pair = RelationPair(a, b)
        if pair not in self._pairs:
            return False
        del self._pairs[pair]
        return True

    def seconds_of(self, a: int) -> List[int]:
        return [p.second for p in self._pairs if p.first == a]

    def firsts_of(self, b: int) -> List[int]:
        return [p.first for p in self._pairs if p.second == b]

    def count_by_second(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for pair in self._pairs:
            counts[pair.second] = counts.get(pair.second, 0) + 1
        return counts

    def pairs(self) -> List[RelationPair]:
        return list(self._pairs)


class RelationIndex:
    """관계 집합의 읽기/쓰기 진입점."""

    def __init__(self, collections: CollectionStore):
        self.collections = collections

    def load(self, relation: Relation) -> RelationSet:
        """관계 전체를 한 번 읽어 RelationSet 으로 반환합니다."""
        return RelationSet(relation, self.collections.load(relation.value))

    def changes_for(self, relation_set: RelationSet) -> Dict[str, List[RelationPair]]:
        """save_all 에 넘길 수 있는 형태로 변환합니다."""
        return {relation_set.relation.value: relation_set.pairs()}

    def save(self, relation_set: RelationSet) -> bool:
        return self.collections.save_all(self.changes_for(relation_set))

    # --- 단일 연산 ---
    def add(self, relation: Relation, a: int, b: int) -> bool:
        """멱등 추가. 저장된 집합이 실제로 바뀌고 기록에 성공했을 때만 True."""
        relation_set = self.load(relation)
        if not relation_set.add(a, b):
            return False
        return self.save(relation_set)

    def remove(self, relation: Relation, a: int, b: int) -> bool:
        """멱등 제거. 저장된 집합이 실제로 바뀌고 기록에 성공했을 때만 True."""
        relation_set = self.load(relation)
        if not relation_set.remove(a, b):
            return False
        return self.save(relation_set)

    def has(self, relation: Relation, a: int, b: int) -> bool:
        return self.load(relation).has(a, b)

    def list_by_first(self, relation: Relation, a: int) -> List[int]:
        """(a, b) 가 관계에 속하는 모든 b. 세션 내에서 순서가 안정적입니다."""
        return self.load(relation).seconds_of(a)

    def list_by_second(self, relation: Relation, b: int) -> List[int]:
        """(a, b) 가 관계에 속하는 모든 a (역방향 조회)."""
        return self.load(relation).firsts_of(b)

    def count_by_first(self, relation: Relation, a: int) -> int:
        return len(self.list_by_first(relation, a))

    def count_by_second(self, relation: Relation, b: int) -> int:
        return len(self.list_by_second(relation, b))
