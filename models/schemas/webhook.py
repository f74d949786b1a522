from marshmallow import Schema, fields, EXCLUDE

USER_UPGRADED = "user.upgraded"


class PolkaDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(required=True)


class PolkaEventSchema(Schema):
    """Payment-provider event. Only user.upgraded carries data we act on."""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(PolkaDataSchema, load_default=None)
