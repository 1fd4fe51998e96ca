# yaopets/services/demo_data.py
"""데모 사용자/게시글 시드 데이터. 게시글이 하나도 없는 새 저장소에만 채웁니다."""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from yaopets.models.post import Post
from yaopets.models.user import User
from yaopets.utils.datetime_utils import DateTimeUtils

if TYPE_CHECKING:
    from yaopets.api.interactions.services import InteractionService

logger = logging.getLogger(__name__)

# (user_id, name, 프로필 사진)
DEMO_USERS = [
    (1, "Alice", "https://randomuser.me/api/portraits/women/65.jpg"),
    (2, "Bob", "https://randomuser.me/api/portraits/men/1.jpg"),
    (3, "Clara", "https://randomuser.me/api/portraits/women/43.jpg"),
    (4, "David", "https://randomuser.me/api/portraits/men/22.jpg"),
    (5, "Emma", "https://randomuser.me/api/portraits/women/33.jpg"),
    (6, "Frank", "https://randomuser.me/api/portraits/men/45.jpg"),
    (7, "Grace", "https://randomuser.me/api/portraits/women/22.jpg"),
    (8, "Henry", "https://randomuser.me/api/portraits/men/32.jpg"),
]

# (post_id, author_id, 본문, 커버 이미지, likes_count, comments_count, 몇 시간 전)
DEMO_POSTS = [
    (101, 1, "Meet Luna! She's looking for a loving home. 🐾",
     "https://images.unsplash.com/photo-1518717758536-85ae29035b6d?w=800&q=80", 12, 2, 1),
    (102, 2, "Thor is a playful pup ready for adventure! 🐶",
     "https://images.unsplash.com/photo-1558788353-f76d92427f16?w=800&q=80", 8, 1, 2),
    (103, 3, "Adopt Max and gain a loyal friend for life! 🦴",
     "https://images.unsplash.com/photo-1502672023488-70e25813f145?w=800&q=80", 20, 4, 5),
    (104, 4, "My cat Whiskers enjoying the sunshine today! 😺",
     "https://images.unsplash.com/photo-1533738363-b7f9aef128ce?w=800&q=80", 15, 3, 8),
    (105, 5, "Found this little guy abandoned. Taking him to the vet now. 💔",
     "https://images.unsplash.com/photo-1511044568932-338cba0ad803?w=800&q=80", 32, 7, 12),
    (106, 6, "Beach day with my best buddy! 🏖️",
     "https://images.unsplash.com/photo-1477884213360-7e9d7dcc1e48?w=800&q=80", 18, 2, 18),
    (107, 7, "My new rescue puppy! Meet Daisy 🌼",
     "https://images.unsplash.com/photo-1583511655857-d19b40a7a54e?w=800&q=80", 27, 5, 24),
    (108, 8, "Just donated to the local animal shelter. Every bit helps! 🙏",
     "https://images.unsplash.com/photo-1601758124510-52d02ddb7cbd?w=800&q=80", 22, 3, 36),
]


def seed_demo_data(store: "InteractionService") -> bool:
    """
    게시글 컬렉션이 비어 있을 때만 데모 사용자와 게시글을 한 번에 기록합니다.
    데모 카운터는 관계 집합 없이 시작하므로, 카운터 하한(0) 규칙이 적용되는 초기 상태입니다.

    :return: 시드를 기록했으면 True
    """
    if store.posts.load_all():
        return False

    now = DateTimeUtils.now()
    users = store.users.load_all()
    known_ids = {u.user_id for u in users}
    photos = {}
    for user_id, name, photo in DEMO_USERS:
        photos[user_id] = photo
        if user_id not in known_ids:
            users.append(User(user_id=user_id, name=name, username=name.lower(), profile_image=photo))

    posts = [
        Post(
            post_id=post_id,
            author_id=author_id,
            content=content,
            media_urls=[image_url],
            likes_count=likes,
            comments_count=comments,
            author_username=next(name for uid, name, _ in DEMO_USERS if uid == author_id),
            author_photo_url=photos[author_id],
            created_at=now - timedelta(hours=hours_ago),
        )
        for post_id, author_id, content, image_url, likes, comments, hours_ago in DEMO_POSTS
    ]

    changes = store.users.changes_for(users)
    changes.update(store.posts.changes_for(posts))
    if not store.collections.save_all(changes):
        logger.error("데모 데이터 시드 실패")
        return False

    logger.info(f"Demo data seeded: {len(DEMO_USERS)} users, {len(posts)} posts")
    return True
