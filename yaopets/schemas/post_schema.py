# yaopets/schemas/post_schema.py
from marshmallow import fields

from yaopets.models.post import Post
from .base import BaseRecordSchema, Counter, UTCDateTime
from yaopets.utils.datetime_utils import EPOCH

class PostSchema(BaseRecordSchema):
    """Post 레코드의 직렬화/역직렬화를 위한 스키마."""
    record_class = Post
    id_field = 'post_id'
    legacy_keys = {
        'id': 'post_id',
        'userId': 'author_id',
        'mediaUrls': 'media_urls',
        'likesCount': 'likes_count',
        'commentsCount': 'comments_count',
        'username': 'author_username',
        'userPhotoUrl': 'author_photo_url',
        'createdAt': 'created_at',
    }

    post_id = fields.Int(required=True, strict=True)
    author_id = fields.Int(required=True, strict=True)
    content = fields.Str(load_default="")
    media_urls = fields.List(fields.Str(), load_default=list)
    likes_count = Counter(load_default=0)
    comments_count = Counter(load_default=0)
    author_username = fields.Str(load_default=None, allow_none=True)
    author_photo_url = fields.Str(load_default=None, allow_none=True)
    created_at = UTCDateTime(load_default=EPOCH)

    def upgrade_legacy(self, data):
        # 초기 버전은 이미지 한 장을 imageUrl 단일 필드로 저장했습니다.
        image_url = data.pop('imageUrl', None)
        if image_url and not data.get('media_urls'):
            data['media_urls'] = [image_url]
        return data
