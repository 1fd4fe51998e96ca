# yaopets/schemas/relation_schema.py
from marshmallow import fields

from yaopets.models.relation import RelationPair
from .base import BaseRecordSchema

class RelationPairSchema(BaseRecordSchema):
    """관계 컬렉션에 저장되는 순서쌍 스키마."""
    record_class = RelationPair

    first = fields.Int(required=True, strict=True)
    second = fields.Int(required=True, strict=True)
