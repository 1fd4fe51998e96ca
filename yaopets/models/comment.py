# yaopets/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from yaopets.utils.datetime_utils import DateTimeUtils

@dataclass
class Comment:
    """
    'comments' 컬렉션의 레코드 구조를 정의하는 데이터클래스.
    댓글은 작성 후 수정/삭제되지 않습니다.
    """
    comment_id: int
    post_id: int
    author_id: int
    content: str
    likes_count: int = 0
    author_username: Optional[str] = None
    author_photo_url: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
