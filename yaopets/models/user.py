# yaopets/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from yaopets.utils.datetime_utils import DateTimeUtils

@dataclass
class User:
    """
    'users' 컬렉션의 레코드 구조를 정의하는 데이터클래스.
    프로필 수정은 본인만 가능하며, 사용자는 삭제되지 않습니다.
    """
    user_id: int
    name: str
    username: str
    profile_image: Optional[str] = None
    bio: str = ""
    website: str = ""
    city: str = ""
    points: int = 0
    level: int = 1
    achievement_badges: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
