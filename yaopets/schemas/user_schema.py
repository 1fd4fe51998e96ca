# yaopets/schemas/user_schema.py
from marshmallow import fields

from yaopets.models.user import User
from .base import BaseRecordSchema, Counter, UTCDateTime
from yaopets.utils.datetime_utils import EPOCH

class UserSchema(BaseRecordSchema):
    """User 레코드의 직렬화/역직렬화를 위한 스키마."""
    record_class = User
    id_field = 'user_id'
    legacy_keys = {
        'id': 'user_id',
        'profileImage': 'profile_image',
        'achievementBadges': 'achievement_badges',
        'createdAt': 'created_at',
    }

    user_id = fields.Int(required=True, strict=True)
    name = fields.Str(load_default="")
    username = fields.Str(load_default="")
    profile_image = fields.Str(load_default=None, allow_none=True)
    bio = fields.Str(load_default="")
    website = fields.Str(load_default="")
    city = fields.Str(load_default="")
    points = Counter(load_default=0)
    level = Counter(load_default=1)
    achievement_badges = fields.List(fields.Str(), load_default=list)
    created_at = UTCDateTime(load_default=EPOCH)
