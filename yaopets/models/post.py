# yaopets/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from yaopets.utils.datetime_utils import DateTimeUtils

@dataclass
class Post:
    """
    'posts' 컬렉션의 레코드 구조를 정의하는 데이터클래스.
    likes_count / comments_count 는 관계 집합에서 파생된 비정규화 카운터입니다.
    """
    post_id: int
    author_id: int
    content: str = ""
    media_urls: List[str] = field(default_factory=list)  # 첫 번째 항목이 커버 이미지
    likes_count: int = 0
    comments_count: int = 0
    author_username: Optional[str] = None
    author_photo_url: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def cover_image(self) -> Optional[str]:
        return self.media_urls[0] if self.media_urls else None
