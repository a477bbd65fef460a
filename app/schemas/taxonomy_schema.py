from marshmallow import fields, validate
from app.extensions import ma
from app.schemas.query_schema import QuerySchema
from app.schemas.validators import not_blank


def _name_field(max_len=100):
    return fields.String(
        required=True, validate=[validate.Length(min=1, max=max_len), not_blank]
    )


class RegionSchema(ma.Schema):
    name = _name_field()


class AreaSchema(ma.Schema):
    name = _name_field()
    region_id = fields.Integer(required=True, data_key="regionId")


class TerritorySchema(ma.Schema):
    name = _name_field()
    area_id = fields.Integer(required=True, data_key="areaId")


class DistributorSchema(ma.Schema):
    name = _name_field(max_len=255)


class TaxonomyQuerySchema(QuerySchema):
    # Dropdowns load whole lists, so allow larger pages here
    limit = fields.Integer(load_default=20, validate=validate.Range(min=1, max=1000))
    region_id = fields.Integer(load_default=None, data_key="regionId")
    area_id = fields.Integer(load_default=None, data_key="areaId")
