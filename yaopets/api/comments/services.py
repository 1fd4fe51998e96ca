# yaopets/api/comments/services.py
from typing import Optional, List

from yaopets.api.base import BaseEntityService
from yaopets.models.comment import Comment
from yaopets.models.user import User

class CommentService(BaseEntityService):
    """
    댓글 저장소.
    댓글은 InteractionService.add_comment 로만 생성되며 수정/삭제되지 않습니다.
    """
    collection_name = 'comments'

    def new_comment(self, comments: List[Comment], author_id: int, post_id: int,
                    content: str, author: Optional[User] = None) -> Comment:
        """
        이미 읽어 둔 댓글 목록을 기준으로 새 댓글 레코드를 만듭니다 (저장은 하지 않음).
        id 는 전체 게시글을 통틀어 가장 큰 id + 1 입니다.
        """
        return Comment(
            comment_id=self.next_id(comments),
            post_id=post_id,
            author_id=author_id,
            content=content,
            likes_count=0,
            author_username=author.username if author else None,
            author_photo_url=author.profile_image if author else None,
        )

    def get_comment_by_id(self, comment_id: int) -> Optional[Comment]:
        return self.get_by_id(comment_id)

    def get_comments_for_post(self, post_id: int) -> List[Comment]:
        """특정 게시글의 댓글을 최신순으로 반환합니다."""
        comments = [c for c in self.load_all() if c.post_id == post_id]
        return sorted(comments, key=lambda c: (c.created_at, c.comment_id), reverse=True)

    def count_comments_for_post(self, post_id: int) -> int:
        return sum(1 for c in self.load_all() if c.post_id == post_id)
