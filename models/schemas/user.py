from marshmallow import Schema, fields, pre_load, EXCLUDE


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class UserCredentialsSchema(Schema):
    """Body of POST /users, PUT /users and POST /login."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=lambda s: len(s) > 0)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_strip(data["email"]))
        return data


class UserOutSchema(Schema):
    id = fields.Integer()
    email = fields.String()
    is_upgraded = fields.Boolean()


class LoginOutSchema(UserOutSchema):
    token = fields.String()
    refresh_token = fields.String()
