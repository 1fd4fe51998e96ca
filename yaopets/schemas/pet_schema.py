# yaopets/schemas/pet_schema.py
from marshmallow import fields

from yaopets.models.pet import Pet
from .base import BaseRecordSchema, UTCDateTime
from yaopets.utils.datetime_utils import EPOCH

class PetSchema(BaseRecordSchema):
    """Pet 레코드의 직렬화/역직렬화를 위한 스키마."""
    record_class = Pet
    id_field = 'pet_id'
    legacy_keys = {
        'id': 'pet_id',
        'userId': 'owner_id',
        'ownerId': 'owner_id',
        'type': 'breed',
        'createdAt': 'created_at',
    }

    pet_id = fields.Int(required=True, strict=True)
    owner_id = fields.Int(required=True, strict=True)
    name = fields.Str(load_default="")
    breed = fields.Str(load_default="")
    photos = fields.List(fields.Str(), load_default=list)
    created_at = UTCDateTime(load_default=EPOCH)
