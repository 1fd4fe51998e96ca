# yaopets/api/interactions/services.py
"""
상호작용 파사드 (InteractionService)

UI 가 직접 호출하는 공개 API 입니다. 관계 토글(좋아요/저장/팔로우)과
비정규화 카운터 갱신을 하나의 쓰기 단위로 묶고, 화면에 필요한 파생 조회
("사용자 X 가 좋아요 했는가", "게시글 P 의 댓글 최신순")를 제공합니다.

토글 프로토콜:
    1. 현재 멤버십을 읽는다.
    2. 목표 상태 = 현재 상태의 반대 (호출자는 원하는 상태를 넘기지 않는다).
    3. 설정: 쌍 추가, 카운터 +1 / 해제: 쌍 제거, 카운터 = max(0, 카운터 - 1)
    4. 관계와 카운터를 같은 읽기에서 계산해 한 번에 기록한 뒤 결과를 반환한다.

주의: 여러 탭(같은 백엔드를 공유하는 여러 스토어 인스턴스)이 1 과 4 사이에
끼어들면 갱신이 유실될 수 있습니다. 스토어는 실질적으로 단일 작성자(활성 탭 하나)를
가정하며 탭 간 잠금은 하지 않습니다. 원하는 상태를 이미 알고 있는 호출자는
like_post / unlike_post 같은 명시적 상태 API 를 사용하면 경쟁 구간이 줄어듭니다.
"""

import logging
from dataclasses import asdict
from typing import Optional, Dict, Any, List

from yaopets.api.base import BaseEntityService
from yaopets.api.comments.services import CommentService
from yaopets.api.pets.services import PetService
from yaopets.api.posts.services import PostService
from yaopets.api.users.services import UserService
from yaopets.models.comment import Comment
from yaopets.models.post import Post
from yaopets.models.relation import Relation, ToggleResult
from yaopets.services.collection_store import CollectionStore
from yaopets.services.relation_index import RelationIndex

class InteractionService:
    """좋아요/저장/팔로우/댓글 상호작용과 파생 조회를 담당하는 파사드."""

    def __init__(self,
                 collections: CollectionStore,
                 relations: RelationIndex,
                 post_service: PostService,
                 comment_service: CommentService,
                 user_service: UserService,
                 pet_service: PetService):
        self.collections = collections
        self.relations = relations
        self.posts = post_service
        self.comments = comment_service
        self.users = user_service
        self.pets = pet_service

    # =====================================================================================
    # 토글 프로토콜
    # =====================================================================================
    def _apply_toggle(self, relation: Relation, user_id: Optional[int], target_id: Optional[int],
                      entity_service: Optional[BaseEntityService] = None,
                      counter_field: Optional[str] = None,
                      desired: Optional[bool] = None) -> Optional[ToggleResult]:
        """
        관계 멤버십을 바꾸고 대상 엔티티의 카운터를 같은 쓰기 단위로 갱신합니다.

        :param desired: None 이면 현재 상태를 뒤집고, True/False 면 해당 상태로 맞춥니다.
        :return: 새 멤버십과 카운터. 입력이 잘못되었으면 None.
                 대상 엔티티가 없으면 관계만 갱신되고 count 는 None 입니다.
                 팔로우처럼 카운터 필드가 없는 관계는 대상의 역방향 관계 수를 count 로 돌려줍니다.
        """
        if user_id is None or target_id is None:
            return None

        relation_set = self.relations.load(relation)
        records = entity_service.load_all() if entity_service else []
        record = entity_service.find(records, target_id) if entity_service else None

        def current_count() -> Optional[int]:
            if entity_service is None:
                return len(relation_set.firsts_of(target_id))
            return getattr(record, counter_field) if record is not None else None

        was_active = relation_set.has(user_id, target_id)
        target_state = (not was_active) if desired is None else desired
        if target_state == was_active:
            return ToggleResult(active=was_active, count=current_count())

        previous_count = current_count()
        if target_state:
            relation_set.add(user_id, target_id)
        else:
            relation_set.remove(user_id, target_id)

        changes = self.relations.changes_for(relation_set)
        if record is not None:
            entity_service.apply_counter_delta(record, counter_field, 1 if target_state else -1)
            changes.update(entity_service.changes_for(records))

        if not self.collections.save_all(changes):
            logging.error(f"{relation.value} 토글 실패 (user_id: {user_id}, target_id: {target_id})")
            return ToggleResult(active=was_active, count=previous_count)

        return ToggleResult(active=target_state, count=current_count())

    # --- 게시글 좋아요 ---
    def toggle_post_like(self, user_id: Optional[int], post_id: int) -> Optional[ToggleResult]:
        """게시글 좋아요를 현재 상태의 반대로 바꿉니다. 반환값: (is_liked, likes_count)."""
        return self._apply_toggle(Relation.LIKES_POST, user_id, post_id, self.posts, 'likes_count')

    def like_post(self, user_id: Optional[int], post_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.LIKES_POST, user_id, post_id, self.posts, 'likes_count', desired=True)

    def unlike_post(self, user_id: Optional[int], post_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.LIKES_POST, user_id, post_id, self.posts, 'likes_count', desired=False)

    def is_post_liked(self, user_id: Optional[int], post_id: int) -> bool:
        if user_id is None:
            return False
        return self.relations.has(Relation.LIKES_POST, user_id, post_id)

    # --- 게시글 저장 ---
    def toggle_post_save(self, user_id: Optional[int], post_id: int) -> Optional[ToggleResult]:
        """게시글 저장(북마크)을 토글합니다. 저장 수 필드가 없으므로 count 는 이 게시글을 저장한 사용자 수입니다."""
        return self._apply_toggle(Relation.SAVES_POST, user_id, post_id)

    def save_post(self, user_id: Optional[int], post_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.SAVES_POST, user_id, post_id, desired=True)

    def unsave_post(self, user_id: Optional[int], post_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.SAVES_POST, user_id, post_id, desired=False)

    def is_post_saved(self, user_id: Optional[int], post_id: int) -> bool:
        if user_id is None:
            return False
        return self.relations.has(Relation.SAVES_POST, user_id, post_id)

    def get_saved_posts(self, user_id: Optional[int]) -> List[Post]:
        """사용자가 저장한 게시글을 최근에 저장한 순서로 반환합니다. 없는 게시글은 건너뜁니다."""
        if user_id is None:
            return []
        saved_ids = self.relations.list_by_first(Relation.SAVES_POST, user_id)
        posts = self.posts.load_all()
        saved = []
        for post_id in reversed(saved_ids):
            post = self.posts.find(posts, post_id)
            if post is not None:
                saved.append(post)
        return saved

    # --- 댓글 좋아요 ---
    def toggle_comment_like(self, user_id: Optional[int], comment_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.LIKES_COMMENT, user_id, comment_id, self.comments, 'likes_count')

    def like_comment(self, user_id: Optional[int], comment_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.LIKES_COMMENT, user_id, comment_id, self.comments, 'likes_count', desired=True)

    def unlike_comment(self, user_id: Optional[int], comment_id: int) -> Optional[ToggleResult]:
        return self._apply_toggle(Relation.LIKES_COMMENT, user_id, comment_id, self.comments, 'likes_count', desired=False)

    def is_comment_liked(self, user_id: Optional[int], comment_id: int) -> bool:
        if user_id is None:
            return False
        return self.relations.has(Relation.LIKES_COMMENT, user_id, comment_id)

    # --- 팔로우 ---
    def toggle_follow(self, follower_id: Optional[int], followee_id: int) -> Optional[ToggleResult]:
        """팔로우를 토글합니다. count 는 대상 사용자의 새 팔로워 수입니다. 자기 자신은 팔로우할 수 없습니다."""
        if follower_id == followee_id:
            return None
        return self._apply_toggle(Relation.FOLLOWS, follower_id, followee_id)

    def follow_user(self, follower_id: Optional[int], followee_id: int) -> Optional[ToggleResult]:
        if follower_id == followee_id:
            return None
        return self._apply_toggle(Relation.FOLLOWS, follower_id, followee_id, desired=True)

    def unfollow_user(self, follower_id: Optional[int], followee_id: int) -> Optional[ToggleResult]:
        if follower_id == followee_id:
            return None
        return self._apply_toggle(Relation.FOLLOWS, follower_id, followee_id, desired=False)

    # =====================================================================================
    # 댓글
    # =====================================================================================
    def add_comment(self, user_id: Optional[int], post_id: int, content: Optional[str]) -> Optional[Comment]:
        """
        댓글을 작성하고 게시글의 comments_count 를 같은 쓰기 단위로 1 증가시킵니다.
        - 작성자가 없거나 내용이 공백뿐이면 아무것도 하지 않고 None 을 반환합니다.
        - 반환된 레코드로 바로 화면을 그릴 수 있습니다 (같은 호출 맥락에서만 read-your-writes 보장).
        """
        text = (content or "").strip()
        if user_id is None or not text:
            return None

        comments = self.comments.load_all()
        posts = self.posts.load_all()
        author = self.users.get_user_by_id(user_id)

        new_comment = self.comments.new_comment(comments, user_id, post_id, text, author)
        comments.append(new_comment)
        changes = self.comments.changes_for(comments)

        post = self.posts.find(posts, post_id)
        if post is not None:
            self.posts.apply_counter_delta(post, 'comments_count', 1)
            changes.update(self.posts.changes_for(posts))

        if not self.collections.save_all(changes):
            logging.error(f"댓글 작성 실패 (user_id: {user_id}, post_id: {post_id})")
            return None

        logging.info(f"댓글 작성 완료: comment_id={new_comment.comment_id}, post_id={post_id}")
        return new_comment

    def get_post_comments(self, post_id: int) -> List[Comment]:
        """게시글의 댓글을 최신순으로 반환합니다."""
        return self.comments.get_comments_for_post(post_id)

    def get_comment_thread(self, post_id: int, current_user_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """댓글 목록 화면용: 각 댓글에 현재 사용자의 is_liked 를 붙여 반환합니다."""
        comments = self.get_post_comments(post_id)
        liked = self.relations.load(Relation.LIKES_COMMENT)

        thread = []
        for comment in comments:
            comment_data = asdict(comment)
            comment_data['is_liked'] = current_user_id is not None and liked.has(current_user_id, comment.comment_id)
            thread.append(comment_data)
        return thread

    # =====================================================================================
    # 파생 조회
    # =====================================================================================
    def get_feed(self, current_user_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """피드 화면용: 최신순 게시글에 is_liked / is_saved / cover_image 를 붙여 반환합니다."""
        posts = self.posts.get_all_posts()
        liked = self.relations.load(Relation.LIKES_POST)
        saved = self.relations.load(Relation.SAVES_POST)

        feed = []
        for post in posts:
            post_data = asdict(post)
            post_data['cover_image'] = post.cover_image
            post_data['is_liked'] = current_user_id is not None and liked.has(current_user_id, post.post_id)
            post_data['is_saved'] = current_user_id is not None and saved.has(current_user_id, post.post_id)
            feed.append(post_data)
        return feed

    def get_profile(self, user_id: int, viewer_id: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """
        프로필 화면용 조회. 사용자가 없으면 None (호출자는 홈으로 돌려보내는 등 정상 분기로 처리).
        팔로워/팔로잉 수는 관계 집합에서 계산하며, 저장한 게시글은 본인 프로필에서만 포함됩니다.
        """
        user = self.users.get_user_by_id(user_id)
        if user is None:
            return None

        follows = self.relations.load(Relation.FOLLOWS)
        is_own_profile = viewer_id is not None and viewer_id == user_id
        profile = {
            'user': asdict(user),
            'pets': [asdict(p) for p in self.pets.get_user_pets(user_id)],
            'follower_count': len(follows.firsts_of(user_id)),
            'following_count': len(follows.seconds_of(user_id)),
            'post_count': self.posts.count_posts_by_user_id(user_id),
            'is_own_profile': is_own_profile,
            'is_following': viewer_id is not None and not is_own_profile and follows.has(viewer_id, user_id),
        }
        if is_own_profile:
            profile['saved_posts'] = [asdict(p) for p in self.get_saved_posts(user_id)]
        return profile

    def reconcile_counters(self) -> int:
        """
        모든 비정규화 카운터를 관계 집합/댓글 수로 다시 계산합니다.
        탭 간 경쟁 등으로 어긋난 카운터를 복구할 때 사용하며, 보정된 레코드 수를 반환합니다.
        """
        posts = self.posts.load_all()
        comments = self.comments.load_all()
        post_likes = self.relations.load(Relation.LIKES_POST).count_by_second()
        comment_likes = self.relations.load(Relation.LIKES_COMMENT).count_by_second()

        comments_per_post: Dict[int, int] = {}
        for comment in comments:
            comments_per_post[comment.post_id] = comments_per_post.get(comment.post_id, 0) + 1

        corrected_posts = 0
        for post in posts:
            likes = post_likes.get(post.post_id, 0)
            replies = comments_per_post.get(post.post_id, 0)
            if post.likes_count != likes or post.comments_count != replies:
                post.likes_count, post.comments_count = likes, replies
                corrected_posts += 1

        corrected_comments = 0
        for comment in comments:
            likes = comment_likes.get(comment.comment_id, 0)
            if comment.likes_count != likes:
                comment.likes_count = likes
                corrected_comments += 1

        changes: Dict[str, List[Any]] = {}
        if corrected_posts:
            changes.update(self.posts.changes_for(posts))
        if corrected_comments:
            changes.update(self.comments.changes_for(comments))
        if not changes:
            return 0
        if not self.collections.save_all(changes):
            logging.error("카운터 재계산 결과 저장 실패")
            return 0

        logging.info(f"카운터 재계산 완료: posts={corrected_posts}, comments={corrected_comments}")
        return corrected_posts + corrected_comments
