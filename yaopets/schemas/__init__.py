# yaopets/schemas/__init__.py
from .base import SCHEMA_VERSION, BaseRecordSchema
from .user_schema import UserSchema
from .pet_schema import PetSchema
from .post_schema import PostSchema
from .comment_schema import CommentSchema
from .relation_schema import RelationPairSchema
from .codec import encode_collection, decode_collection

# 컬렉션 이름 -> 레코드 스키마
COLLECTION_SCHEMAS = {
    'users': UserSchema(),
    'pets': PetSchema(),
    'posts': PostSchema(),
    'comments': CommentSchema(),
    'likes_post': RelationPairSchema(),
    'likes_comment': RelationPairSchema(),
    'saves_post': RelationPairSchema(),
    'follows': RelationPairSchema(),
}

__all__ = [
    'SCHEMA_VERSION', 'BaseRecordSchema',
    'UserSchema', 'PetSchema', 'PostSchema', 'CommentSchema', 'RelationPairSchema',
    'encode_collection', 'decode_collection',
    'COLLECTION_SCHEMAS',
]
