# yaopets/models/relation.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

class Relation(Enum):
    """다대다 관계의 종류. 값은 저장소 컬렉션 이름으로 그대로 사용됩니다."""
    LIKES_POST = "likes_post"          # (user_id, post_id)
    LIKES_COMMENT = "likes_comment"    # (user_id, comment_id)
    SAVES_POST = "saves_post"          # (user_id, post_id)
    FOLLOWS = "follows"                # (follower_id, followee_id)

@dataclass(frozen=True)
class RelationPair:
    """관계 집합의 원소인 순서쌍."""
    first: int
    second: int

@dataclass
class ToggleResult:
    """
    토글 연산의 결과.
    호출자(UI)는 이 값을 그대로 신뢰해야 하며, 로컬 상태로 다시 계산하지 않습니다.
    """
    active: bool
    count: Optional[int] = None  # 대상 엔티티가 없으면 None
