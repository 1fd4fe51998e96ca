# yaopets/api/posts/services.py
import logging
from typing import Optional, List

from yaopets.api.base import BaseEntityService
from yaopets.api.users.services import UserService
from yaopets.models.post import Post
from yaopets.services.collection_store import CollectionStore

class PostService(BaseEntityService):
    """
    게시글 저장소.
    게시글 CRUD 와 likes_count / comments_count 비정규화 카운터의 보관을 담당합니다.
    카운터는 update_post 로는 바꿀 수 없고, InteractionService 를 통해서만 조정됩니다.
    """
    collection_name = 'posts'

    def __init__(self, collections: CollectionStore, user_service: Optional[UserService] = None):
        super().__init__(collections)
        self.user_service = user_service

    def create_post(self, author_id: Optional[int], content: str, media_urls: Optional[List[str]] = None) -> Optional[Post]:
        """새 게시글을 생성합니다. 본문과 미디어가 모두 비어 있으면 거부(None)합니다."""
        content = (content or "").strip()
        media_urls = [url for url in (media_urls or []) if url]
        if author_id is None or (not content and not media_urls):
            return None

        posts = self.load_all()
        author = self.user_service.get_user_by_id(author_id) if self.user_service else None

        new_post = Post(
            post_id=self.next_id(posts),
            author_id=author_id,
            content=content,
            media_urls=media_urls,
            author_username=author.username if author else None,
            author_photo_url=author.profile_image if author else None,
        )
        posts.append(new_post)
        if not self.save_all_records(posts):
            return None

        logging.info(f"게시글 생성 완료: post_id={new_post.post_id}, author_id={author_id}")
        return new_post

    def get_post_by_id(self, post_id: int) -> Optional[Post]:
        return self.get_by_id(post_id)

    def get_all_posts(self) -> List[Post]:
        """모든 게시글을 최신순으로 반환합니다."""
        return sorted(self.load_all(), key=lambda p: (p.created_at, p.post_id), reverse=True)

    def get_posts_by_user_id(self, author_id: int) -> List[Post]:
        """특정 사용자가 작성한 게시글을 최신순으로 반환합니다."""
        return [p for p in self.get_all_posts() if p.author_id == author_id]

    def count_posts_by_user_id(self, author_id: int) -> int:
        return sum(1 for p in self.load_all() if p.author_id == author_id)

    def update_post(self, post_id: int, author_id: Optional[int],
                    content: Optional[str] = None, media_urls: Optional[List[str]] = None) -> Optional[Post]:
        """작성자 본인만 본문/미디어를 수정할 수 있습니다."""
        posts = self.load_all()
        post = self.find(posts, post_id)
        if post is None or author_id is None or post.author_id != author_id:
            return None

        new_content = post.content if content is None else content.strip()
        new_media = post.media_urls if media_urls is None else [url for url in media_urls if url]
        if not new_content and not new_media:
            return None

        post.content = new_content
        post.media_urls = new_media
        if not self.save_all_records(posts):
            return None
        return post

    def set_cover_image(self, post_id: int, image_url: str) -> Optional[Post]:
        """
        커버 이미지(media_urls[0])를 교체합니다.
        임시 blob URL 로 올라간 이미지가 영구 URL 로 바뀌었을 때 사용합니다.
        """
        if not image_url:
            return None
        posts = self.load_all()
        post = self.find(posts, post_id)
        if post is None:
            return None

        if post.media_urls:
            post.media_urls[0] = image_url
        else:
            post.media_urls = [image_url]
        if not self.save_all_records(posts):
            return None
        return post
