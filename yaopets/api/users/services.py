# yaopets/api/users/services.py
import logging
from typing import Optional, Dict, Any, List

from yaopets.api.base import BaseEntityService
from yaopets.models.relation import Relation
from yaopets.models.user import User
from yaopets.services.collection_store import CollectionStore
from yaopets.services.relation_index import RelationIndex

# 본인이 직접 수정할 수 있는 프로필 필드
PROFILE_FIELDS = ('name', 'username', 'profile_image', 'bio', 'website', 'city')

class UserService(BaseEntityService):
    """
    사용자 저장소와 팔로우 그래프 조회를 담당하는 서비스 클래스.
    팔로워/팔로잉 수는 User 레코드에 저장하지 않고, follows 관계에서 매번 계산합니다.
    팔로우/언팔로우 자체는 InteractionService 의 토글 프로토콜을 사용합니다.
    """
    collection_name = 'users'

    def __init__(self, collections: CollectionStore, relations: RelationIndex, level_points_step: int = 100):
        super().__init__(collections)
        self.relations = relations
        self.level_points_step = max(1, level_points_step)

    # --- 사용자 CRUD ---
    def create_user(self, name: str, username: str, profile_image: Optional[str] = None,
                    user_id: Optional[int] = None, **profile: Any) -> Optional[User]:
        """
        새 사용자를 생성합니다.
        - user_id 를 지정하지 않으면 가장 큰 id + 1 이 부여됩니다.
        - 이미 사용 중인 id 나 username 이면 생성하지 않습니다.
        """
        username = (username or "").strip()
        if not username:
            return None

        users = self.load_all()
        if self._username_taken(users, username):
            logging.warning(f"사용자 생성 실패: 이미 사용 중인 username ({username})")
            return None
        if user_id is not None and self.find(users, user_id) is not None:
            logging.warning(f"사용자 생성 실패: 이미 사용 중인 user_id ({user_id})")
            return None

        new_user = User(
            user_id=self.next_id(users) if user_id is None else user_id,
            name=(name or "").strip(),
            username=username,
            profile_image=profile_image,
        )
        for field_name in ('bio', 'website', 'city'):
            if profile.get(field_name):
                setattr(new_user, field_name, str(profile[field_name]))

        users.append(new_user)
        if not self.save_all_records(users):
            return None
        logging.info(f"사용자 생성 완료: user_id={new_user.user_id}")
        return new_user

    def get_user_by_id(self, user_id: Optional[int]) -> Optional[User]:
        if user_id is None:
            return None
        return self.get_by_id(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        wanted = (username or "").strip().lower()
        for user in self.load_all():
            if user.username.lower() == wanted:
                return user
        return None

    def get_all_users(self) -> List[User]:
        return self.load_all()

    def update_profile(self, user_id: int, acting_user_id: Optional[int], update_data: Dict[str, Any]) -> Optional[User]:
        """
        프로필을 부분 수정합니다. 본인(acting_user_id == user_id)만 가능합니다.
        PROFILE_FIELDS 에 없는 필드(포인트, 레벨, 배지 등)는 무시합니다.
        """
        if acting_user_id is None or acting_user_id != user_id:
            logging.warning(f"프로필 수정 거부: acting_user_id={acting_user_id}, user_id={user_id}")
            return None

        users = self.load_all()
        user = self.find(users, user_id)
        if user is None:
            return None

        normalized = {}
        for field_name, value in (update_data or {}).items():
            if field_name == 'profile_image':
                normalized[field_name] = value or None
            else:
                normalized[field_name] = "" if value is None else str(value).strip()

        new_username = normalized.get('username')
        if new_username is not None:
            if not new_username:
                return None
            others = [u for u in users if u.user_id != user_id]
            if self._username_taken(others, new_username):
                logging.warning(f"프로필 수정 거부: 이미 사용 중인 username ({new_username})")
                return None

        applied = self._apply_changes(user, normalized, PROFILE_FIELDS)
        if not applied:
            return user
        if not self.save_all_records(users):
            return None
        logging.info(f"User profile updated for {user_id} with fields: {applied}")
        return user

    def add_points(self, user_id: int, amount: int) -> Optional[User]:
        """포인트를 더하고 레벨을 다시 계산합니다. 포인트는 0 아래로 내려가지 않습니다."""
        users = self.load_all()
        user = self.find(users, user_id)
        if user is None:
            return None

        self.apply_counter_delta(user, 'points', amount)
        user.level = user.points // self.level_points_step + 1
        if not self.save_all_records(users):
            return None
        return user

    def award_badge(self, user_id: int, badge_id: str) -> Optional[User]:
        """배지를 획득 순서대로 추가합니다. 이미 가진 배지는 중복 추가하지 않습니다."""
        if not badge_id:
            return None
        users = self.load_all()
        user = self.find(users, user_id)
        if user is None:
            return None
        if badge_id in user.achievement_badges:
            return user

        user.achievement_badges.append(badge_id)
        if not self.save_all_records(users):
            return None
        return user

    # --- 팔로우 그래프 조회 ---
    def get_followers(self, user_id: int) -> List[int]:
        """user_id 를 팔로우하는 모든 사용자 id."""
        return self.relations.list_by_second(Relation.FOLLOWS, user_id)

    def get_following(self, user_id: int) -> List[int]:
        """user_id 가 팔로우하는 모든 사용자 id."""
        return self.relations.list_by_first(Relation.FOLLOWS, user_id)

    def is_following(self, follower_id: Optional[int], followee_id: int) -> bool:
        if follower_id is None:
            return False
        return self.relations.has(Relation.FOLLOWS, follower_id, followee_id)

    def get_follow_counts(self, user_id: int) -> Dict[str, int]:
        """팔로워/팔로잉 수를 관계 집합의 크기로 계산합니다."""
        follows = self.relations.load(Relation.FOLLOWS)
        return {
            'followers': len(follows.firsts_of(user_id)),
            'following': len(follows.seconds_of(user_id)),
        }

    @staticmethod
    def _username_taken(users: List[User], username: str) -> bool:
        wanted = username.lower()
        return any(u.username.lower() == wanted for u in users)
