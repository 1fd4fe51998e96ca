# yaopets/api/interactions/test_interactions.py
"""
상호작용 파사드 테스트 (좋아요 / 저장 / 팔로우 / 댓글 / 파생 조회)

사용법: python -m pytest yaopets/api/interactions/test_interactions.py -v
"""

import pytest

from yaopets import create_store
from yaopets.models import Comment, Relation, RelationPair, ToggleResult
from yaopets.services.demo_data import seed_demo_data
from yaopets.services.storage_backend import FileBackend, MemoryBackend, StorageQuotaExceededError


class FailingBackend(MemoryBackend):
    """armed 상태에서 지정한 키의 쓰기를 거부합니다."""

    def __init__(self, failing_key):
        super().__init__()
        self.failing_key = failing_key
        self.armed = False

    def set_item(self, key, value):
        if self.armed and key == self.failing_key:
            raise StorageQuotaExceededError(f"{key} rejected")
        super().set_item(key, value)


# --- 게시글 좋아요 ---
def test_toggle_post_like_round_trip(seeded_store):
    """데모 게시글 102 (likes 8): 좋아요 → 9, 취소 → 8"""
    assert seeded_store.toggle_post_like(5, 102) == ToggleResult(active=True, count=9)
    assert seeded_store.is_post_liked(5, 102)
    assert seeded_store.posts.get_post_by_id(102).likes_count == 9

    assert seeded_store.toggle_post_like(5, 102) == ToggleResult(active=False, count=8)
    assert not seeded_store.is_post_liked(5, 102)
    assert seeded_store.posts.get_post_by_id(102).likes_count == 8

def test_like_count_never_goes_negative(store):
    post = store.posts.create_post(1, "hello")
    assert post.likes_count == 0

    store.relations.add(Relation.LIKES_POST, 3, post.post_id)
    result = store.toggle_post_like(3, post.post_id)

    assert result == ToggleResult(active=False, count=0)
    assert store.posts.get_post_by_id(post.post_id).likes_count == 0

def test_counter_tracks_membership_over_many_toggles(store):
    post = store.posts.create_post(1, "hello")
    users = [2, 3, 4, 5]
    for step in range(11):
        store.toggle_post_like(users[step % len(users)], post.post_id)

    liked_by = [u for u in users if store.is_post_liked(u, post.post_id)]
    assert store.posts.get_post_by_id(post.post_id).likes_count == len(liked_by)

def test_toggle_on_missing_post_keeps_relation_without_count(store):
    result = store.toggle_post_like(5, 999)

    assert result == ToggleResult(active=True, count=None)
    assert store.is_post_liked(5, 999)

def test_toggle_without_user_is_noop(seeded_store):
    assert seeded_store.toggle_post_like(None, 102) is None
    assert seeded_store.save_post(None, 102) is None
    assert not seeded_store.is_post_liked(None, 102)
    assert seeded_store.posts.get_post_by_id(102).likes_count == 8

def test_explicit_like_is_idempotent(seeded_store):
    assert seeded_store.like_post(5, 102) == ToggleResult(active=True, count=9)
    assert seeded_store.like_post(5, 102) == ToggleResult(active=True, count=9)
    assert seeded_store.unlike_post(5, 102) == ToggleResult(active=False, count=8)
    assert seeded_store.unlike_post(5, 102) == ToggleResult(active=False, count=8)

def test_failed_write_reports_previous_state():
    backend = FailingBackend(None)
    store = create_store('testing', backend=backend)
    backend.failing_key = f"{store.collections.namespace}:posts"
    seed_demo_data(store)
    backend.armed = True

    result = store.toggle_post_like(5, 102)

    assert result == ToggleResult(active=False, count=8)
    assert not store.is_post_liked(5, 102)
    assert store.posts.get_post_by_id(102).likes_count == 8


# --- 게시글 저장 ---
def test_toggle_post_save(seeded_store):
    assert seeded_store.toggle_post_save(5, 102) == ToggleResult(active=True, count=1)
    assert seeded_store.is_post_saved(5, 102)
    assert not seeded_store.is_post_liked(5, 102)

    assert seeded_store.toggle_post_save(5, 102) == ToggleResult(active=False, count=0)
    assert not seeded_store.is_post_saved(5, 102)

def test_saved_posts_most_recent_first(seeded_store):
    for post_id in (103, 101, 999, 107):
        seeded_store.save_post(7, post_id)

    saved = seeded_store.get_saved_posts(7)

    assert [p.post_id for p in saved] == [107, 101, 103]
    assert seeded_store.get_saved_posts(None) == []


# --- 댓글 ---
def test_add_comment_bumps_post_counter(seeded_store):
    """데모 게시글 101 (comments 2) 에 댓글 작성 → 3"""
    comment = seeded_store.add_comment(7, 101, "  Cute!  ")

    assert isinstance(comment, Comment)
    assert comment.content == "Cute!"
    assert comment.likes_count == 0
    assert comment.author_username == "grace"
    assert seeded_store.posts.get_post_by_id(101).comments_count == 3
    assert seeded_store.get_post_comments(101)[0] == comment

@pytest.mark.parametrize("content", ["", "   ", "\n\t", None])
def test_blank_comment_is_rejected(seeded_store, content):
    assert seeded_store.add_comment(7, 101, content) is None
    assert seeded_store.get_post_comments(101) == []
    assert seeded_store.posts.get_post_by_id(101).comments_count == 2

def test_comment_without_user_is_rejected(seeded_store):
    assert seeded_store.add_comment(None, 101, "hi") is None

def test_comment_ids_increase_across_posts(seeded_store):
    ids = [
        seeded_store.add_comment(1, 101, "a").comment_id,
        seeded_store.add_comment(2, 102, "b").comment_id,
        seeded_store.add_comment(3, 101, "c").comment_id,
    ]
    assert ids == [1, 2, 3]

def test_comments_listed_newest_first(seeded_store):
    first = seeded_store.add_comment(1, 101, "first")
    second = seeded_store.add_comment(2, 101, "second")
    seeded_store.add_comment(3, 102, "other post")

    assert [c.comment_id for c in seeded_store.get_post_comments(101)] == [second.comment_id, first.comment_id]

def test_new_comment_does_not_inherit_likes_after_corruption(seeded_store):
    old = seeded_store.add_comment(1, 101, "first")
    seeded_store.like_comment(5, old.comment_id)
    seeded_store.collections.backend.set_item(f"{seeded_store.collections.namespace}:comments", "{{corrupt")

    new = seeded_store.add_comment(2, 102, "brand new")

    assert new.comment_id != old.comment_id
    assert not seeded_store.is_comment_liked(5, new.comment_id)
    assert new.likes_count == 0

@pytest.mark.parametrize("use_file_backend", [False, True])
def test_unencodable_comment_has_no_effect(tmp_path, use_file_backend):
    quota = 5 * 1024 * 1024
    backend = FileBackend(str(tmp_path), quota_bytes=quota) if use_file_backend else MemoryBackend(quota_bytes=quota)
    store = create_store('testing', backend=backend)
    seed_demo_data(store)

    assert store.add_comment(7, 101, "hi \ud800") is None

    assert store.get_post_comments(101) == []
    assert store.posts.get_post_by_id(101).comments_count == 2
    assert not list(tmp_path.glob("*.tmp"))

def test_comment_on_missing_post_is_stored(store):
    comment = store.add_comment(1, 555, "orphan")

    assert comment is not None
    assert store.get_post_comments(555) == [comment]

def test_toggle_comment_like(seeded_store):
    comment = seeded_store.add_comment(7, 101, "Cute!")

    assert seeded_store.toggle_comment_like(5, comment.comment_id) == ToggleResult(active=True, count=1)
    assert seeded_store.is_comment_liked(5, comment.comment_id)
    assert seeded_store.comments.get_comment_by_id(comment.comment_id).likes_count == 1

    assert seeded_store.unlike_comment(5, comment.comment_id) == ToggleResult(active=False, count=0)
    assert seeded_store.like_comment(None, comment.comment_id) is None

def test_comment_thread_marks_liked(seeded_store):
    liked = seeded_store.add_comment(1, 101, "liked")
    other = seeded_store.add_comment(2, 101, "other")
    seeded_store.like_comment(5, liked.comment_id)

    thread = seeded_store.get_comment_thread(101, current_user_id=5)

    assert [(c['comment_id'], c['is_liked']) for c in thread] == [(other.comment_id, False), (liked.comment_id, True)]
    assert all(not c['is_liked'] for c in seeded_store.get_comment_thread(101))


# --- 팔로우 ---
def test_follow_is_directional(seeded_store):
    assert seeded_store.toggle_follow(1, 2) == ToggleResult(active=True, count=1)

    assert seeded_store.users.is_following(1, 2)
    assert not seeded_store.users.is_following(2, 1)
    assert seeded_store.users.get_followers(2) == [1]
    assert seeded_store.users.get_following(1) == [2]
    assert seeded_store.users.get_follow_counts(2) == {'followers': 1, 'following': 0}

def test_unfollow(seeded_store):
    seeded_store.follow_user(1, 2)
    seeded_store.follow_user(3, 2)

    assert seeded_store.unfollow_user(1, 2) == ToggleResult(active=False, count=1)
    assert seeded_store.users.get_followers(2) == [3]

def test_self_follow_is_rejected(seeded_store):
    assert seeded_store.toggle_follow(1, 1) is None
    assert seeded_store.follow_user(1, 1) is None
    assert seeded_store.users.get_followers(1) == []


# --- 영속성 ---
def test_state_survives_reopen(seeded_store, reopen):
    seeded_store.toggle_post_like(5, 102)
    seeded_store.save_post(5, 103)
    seeded_store.follow_user(5, 2)
    comment = seeded_store.add_comment(5, 101, "persisted")

    reopened = reopen()

    assert reopened.is_post_liked(5, 102)
    assert reopened.posts.get_post_by_id(102).likes_count == 9
    assert reopened.is_post_saved(5, 103)
    assert reopened.users.is_following(5, 2)
    assert reopened.get_post_comments(101) == [comment]
    assert reopened.collections.load("likes_post") == [RelationPair(5, 102)]

def test_other_instance_sees_writes(seeded_store, reopen):
    other_tab = reopen()
    other_tab.toggle_post_like(6, 104)

    assert seeded_store.is_post_liked(6, 104)
    assert seeded_store.posts.get_post_by_id(104).likes_count == 16


# --- 파생 조회 ---
def test_feed_is_newest_first_with_flags(seeded_store):
    seeded_store.like_post(5, 103)
    seeded_store.save_post(5, 101)

    feed = seeded_store.get_feed(current_user_id=5)

    assert [p['post_id'] for p in feed] == [101, 102, 103, 104, 105, 106, 107, 108]
    by_id = {p['post_id']: p for p in feed}
    assert by_id[103]['is_liked'] and not by_id[103]['is_saved']
    assert by_id[101]['is_saved'] and not by_id[101]['is_liked']
    assert by_id[101]['cover_image'] == by_id[101]['media_urls'][0]

def test_feed_for_anonymous_viewer(seeded_store):
    seeded_store.like_post(5, 103)

    assert not any(p['is_liked'] or p['is_saved'] for p in seeded_store.get_feed())

def test_profile_for_other_viewer(seeded_store):
    seeded_store.pets.create_pet(2, "Thor", "Beagle")
    seeded_store.follow_user(1, 2)
    seeded_store.follow_user(2, 3)
    seeded_store.save_post(2, 101)

    profile = seeded_store.get_profile(2, viewer_id=1)

    assert profile['user']['username'] == "bob"
    assert [p['name'] for p in profile['pets']] == ["Thor"]
    assert profile['follower_count'] == 1
    assert profile['following_count'] == 1
    assert profile['post_count'] == 1
    assert profile['is_following'] is True
    assert profile['is_own_profile'] is False
    assert 'saved_posts' not in profile

def test_own_profile_includes_saved_posts(seeded_store):
    seeded_store.save_post(2, 101)

    profile = seeded_store.get_profile(2, viewer_id=2)

    assert profile['is_own_profile'] is True
    assert profile['is_following'] is False
    assert [p['post_id'] for p in profile['saved_posts']] == [101]

def test_profile_for_missing_user(seeded_store):
    assert seeded_store.get_profile(404) is None


# --- 카운터 재계산 ---
def test_reconcile_counters(seeded_store):
    comment = seeded_store.add_comment(1, 102, "hi")
    seeded_store.like_post(5, 102)
    seeded_store.like_comment(5, comment.comment_id)

    corrected = seeded_store.reconcile_counters()

    assert corrected == 8
    post = seeded_store.posts.get_post_by_id(102)
    assert (post.likes_count, post.comments_count) == (1, 1)
    assert seeded_store.posts.get_post_by_id(101).likes_count == 0
    assert seeded_store.comments.get_comment_by_id(comment.comment_id).likes_count == 1
    assert seeded_store.reconcile_counters() == 0
