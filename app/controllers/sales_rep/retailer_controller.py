from flask import request, jsonify, current_app
from flask_jwt_extended import get_jwt_identity
from app.extensions import db
from app.models import User
from app.schemas.retailer_schema import RetailerQuerySchema, RetailerRepUpdateSchema
from app.services import retailer_service
from app.utils.errors import Forbidden


def _current_sales_rep_id():
    user = db.session.get(User, int(get_jwt_identity()))
    if not user or user.sales_rep is None:
        raise Forbidden("No sales rep profile for this account")
    return user.sales_rep.id


def list_my_retailers():
    filters = RetailerQuerySchema().load(request.args.to_dict())
    payload = retailer_service.list_assigned_retailers(
        current_app.extensions["retailer_cache"], _current_sales_rep_id(), filters
    )
    # Cached text is returned as-is
    return current_app.response_class(payload, status=200, mimetype="application/json")


def get_my_retailer(retailer_id):
    retailer = retailer_service.get_assigned_retailer(
        _current_sales_rep_id(), retailer_id
    )
    return jsonify(retailer.to_dict(include_assignments=False)), 200


def update_my_retailer(retailer_id):
    changes = RetailerRepUpdateSchema().load(request.json or {})
    retailer = retailer_service.update_assigned_retailer(
        current_app.extensions["retailer_cache"],
        _current_sales_rep_id(),
        retailer_id,
        changes,
    )
    return jsonify(retailer.to_dict(include_assignments=False)), 200
