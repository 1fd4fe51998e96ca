# yaopets/schemas/comment_schema.py
from marshmallow import fields

from yaopets.models.comment import Comment
from .base import BaseRecordSchema, Counter, UTCDateTime
from yaopets.utils.datetime_utils import EPOCH

class CommentSchema(BaseRecordSchema):
    """Comment 레코드의 직렬화/역직렬화를 위한 스키마."""
    record_class = Comment
    id_field = 'comment_id'
    legacy_keys = {
        'id': 'comment_id',
        'postId': 'post_id',
        'userId': 'author_id',
        'likesCount': 'likes_count',
        'username': 'author_username',
        'userPhotoUrl': 'author_photo_url',
        'createdAt': 'created_at',
    }

    comment_id = fields.Int(required=True, strict=True)
    post_id = fields.Int(required=True, strict=True)
    author_id = fields.Int(required=True, strict=True)
    content = fields.Str(load_default="")
    likes_count = Counter(load_default=0)
    author_username = fields.Str(load_default=None, allow_none=True)
    author_photo_url = fields.Str(load_default=None, allow_none=True)
    created_at = UTCDateTime(load_default=EPOCH)
