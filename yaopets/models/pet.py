# yaopets/models/pet.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from yaopets.utils.datetime_utils import DateTimeUtils

@dataclass
class Pet:
    """
    'pets' 컬렉션 레코드 구조.
    반려동물은 소유자(owner_id) 한 명에게만 속하며, 소유자만 생성/수정할 수 있습니다.
    """
    pet_id: int
    owner_id: int
    name: str
    breed: str
    photos: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
