"""
Persistence schemas: map the Document and its entities to and from the JSON
written by FileStorage. Integer IDs become string keys in JSON and come back as ints.
"""
from datetime import timezone

from marshmallow import Schema, fields, post_load, ValidationError, RAISE

from models.chirp import Chirp
from models.document import Document, SEQUENCES
from models.refresh_token import RefreshToken
from models.user import User


class ChirpRecordSchema(Schema):
    class Meta:
        unknown = RAISE

    id = fields.Integer(required=True, strict=True)
    body = fields.String(required=True)
    author_id = fields.Integer(required=True, strict=True)

    @post_load
    def make_chirp(self, data, **kwargs):
        return Chirp(**data)


class UserRecordSchema(Schema):
    class Meta:
        unknown = RAISE

    id = fields.Integer(required=True, strict=True)
    email = fields.String(required=True)
    password_hash = fields.String(required=True)
    is_upgraded = fields.Boolean(load_default=False)

    @post_load
    def make_user(self, data, **kwargs):
        return User(**data)


class RefreshTokenRecordSchema(Schema):
    class Meta:
        unknown = RAISE

    owning_user_id = fields.Integer(required=True, strict=True)
    opaque_value = fields.String(required=True)
    expires_at = fields.AwareDateTime(required=True, default_timezone=timezone.utc)

    @post_load
    def make_token(self, data, **kwargs):
        return RefreshToken(**data)


class DocumentSchema(Schema):
    chirps = fields.Dict(keys=fields.Integer(), values=fields.Nested(ChirpRecordSchema), load_default=dict, allow_none=True)
    users = fields.Dict(keys=fields.Integer(), values=fields.Nested(UserRecordSchema), load_default=dict, allow_none=True)
    tokens = fields.Dict(keys=fields.Integer(), values=fields.Nested(RefreshTokenRecordSchema), load_default=dict, allow_none=True)
    next_ids = fields.Dict(keys=fields.String(), values=fields.Integer(), load_default=dict, allow_none=True)

    @post_load
    def make_document(self, data, **kwargs):
        # A JSON null for a collection is treated like an absent one
        for name in ("chirps", "users", "tokens", "next_ids"):
            if data.get(name) is None:
                data[name] = {}
        # Each record must sit under its own ID
        for name, attr in (("chirps", "id"), ("users", "id"), ("tokens", "owning_user_id")):
            for key, record in data[name].items():
                if getattr(record, attr) != key:
                    raise ValidationError(
                        f"key {key} does not match {attr} {getattr(record, attr)}", field_name=name
                    )
        return Document(**data)


def empty_document_dict() -> dict:
    return {"chirps": {}, "users": {}, "tokens": {}, "next_ids": {name: 1 for name in SEQUENCES}}
