from marshmallow import fields, validate
from app.extensions import ma
from app.schemas.query_schema import QuerySchema
from app.schemas.validators import not_blank

SALES_REP_FIELDS = ("points", "routes", "notes")


class RetailerQuerySchema(QuerySchema):
    region_id = fields.Integer(load_default=None, data_key="regionId")
    area_id = fields.Integer(load_default=None, data_key="areaId")
    distributor_id = fields.Integer(load_default=None, data_key="distributorId")
    territory_id = fields.Integer(load_default=None, data_key="territoryId")


class RetailerCreateSchema(ma.Schema):
    name = fields.String(
        required=True, validate=[validate.Length(min=1, max=255), not_blank]
    )
    phone = fields.String(
        load_default=None, allow_none=True, validate=validate.Length(max=50)
    )
    region_id = fields.Integer(
        required=True, data_key="regionId", validate=validate.Range(min=1)
    )
    area_id = fields.Integer(
        required=True, data_key="areaId", validate=validate.Range(min=1)
    )
    distributor_id = fields.Integer(
        required=True, data_key="distributorId", validate=validate.Range(min=1)
    )
    territory_id = fields.Integer(
        load_default=None, allow_none=True, data_key="territoryId"
    )
    points = fields.Integer(load_default=0, validate=validate.Range(min=0))
    routes = fields.String(load_default="", validate=validate.Length(max=255))
    notes = fields.String(load_default="")


class RetailerAdminUpdateSchema(ma.Schema):
    name = fields.String(validate=[validate.Length(min=1, max=255), not_blank])
    phone = fields.String(allow_none=True, validate=validate.Length(max=50))
    region_id = fields.Integer(data_key="regionId", validate=validate.Range(min=1))
    area_id = fields.Integer(data_key="areaId", validate=validate.Range(min=1))
    distributor_id = fields.Integer(
        data_key="distributorId", validate=validate.Range(min=1)
    )
    territory_id = fields.Integer(allow_none=True, data_key="territoryId")
    points = fields.Integer(validate=validate.Range(min=0))
    routes = fields.String(validate=validate.Length(max=255))
    notes = fields.String()


class RetailerRepUpdateSchema(ma.Schema):
    """Sales reps may only touch these three fields; anything else is rejected."""

    points = fields.Integer(validate=validate.Range(min=0))
    routes = fields.String(validate=validate.Length(max=255))
    notes = fields.String()


class BulkAssignSchema(ma.Schema):
    sales_rep_id = fields.Integer(required=True, data_key="salesRepId")
    retailer_ids = fields.List(
        fields.Integer(),
        required=True,
        data_key="retailerIds",
        validate=validate.Length(min=1),
    )
    action = fields.String(
        required=True, validate=validate.OneOf(["assign", "unassign"])
    )
