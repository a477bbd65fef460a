from marshmallow import fields, validate, EXCLUDE
from app.extensions import ma
from app.schemas.query_schema import QuerySchema
from app.schemas.validators import not_blank
from app.utils.decorators import ROLES


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=1))


class UserCreateSchema(ma.Schema):
    email = fields.Email(required=True)
    username = fields.String(
        required=True, validate=[validate.Length(min=4, max=50), not_blank]
    )
    password = fields.String(required=True, validate=validate.Length(min=8))
    role = fields.String(required=True, validate=validate.OneOf(ROLES))
    phone = fields.String(load_default=None, allow_none=True)


class UserUpdateSchema(ma.Schema):
    email = fields.Email()
    username = fields.String(validate=[validate.Length(min=4, max=50), not_blank])
    password = fields.String(validate=validate.Length(min=8))
    role = fields.String(validate=validate.OneOf(ROLES))
    phone = fields.String(allow_none=True)


class UserQuerySchema(QuerySchema):
    role = fields.String(load_default=None, validate=validate.OneOf(ROLES))
