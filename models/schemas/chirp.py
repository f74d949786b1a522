from marshmallow import Schema, fields, EXCLUDE


class ChirpCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # Length and masking are enforced by ChirpRepository.create
    body = fields.String(required=True)


class ChirpOutSchema(Schema):
    id = fields.Integer()
    body = fields.String()
    author_id = fields.Integer()
