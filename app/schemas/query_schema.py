from marshmallow import fields, validate, pre_load, EXCLUDE
from app.extensions import ma


class QuerySchema(ma.Schema):
    """Base for list endpoints: page/limit/search from the query string."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=20, validate=validate.Range(min=1, max=100))
    search = fields.String(load_default=None)

    @pre_load
    def drop_empty(self, data, **kwargs):
        # Query strings send "" for cleared filters
        return {k: v for k, v in data.items() if v not in ("", None)}
