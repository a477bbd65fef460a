from flask import request, jsonify, current_app
from app.schemas.retailer_schema import (
    RetailerQuerySchema,
    RetailerCreateSchema,
    RetailerAdminUpdateSchema,
)
from app.services import retailer_service, import_service
from app.utils.errors import ValidationFailed


def _cache():
    return current_app.extensions["retailer_cache"]


def list_retailers():
    filters = RetailerQuerySchema().load(request.args.to_dict())
    return jsonify(retailer_service.list_retailers(filters)), 200


def get_retailer(retailer_id):
    return jsonify(retailer_service.get_retailer(retailer_id).to_dict()), 200


def create_retailer():
    data = RetailerCreateSchema().load(request.json or {})
    retailer = retailer_service.create_retailer(data)
    return jsonify(retailer.to_dict()), 201


def update_retailer(retailer_id):
    changes = RetailerAdminUpdateSchema().load(request.json or {})
    retailer = retailer_service.update_retailer(_cache(), retailer_id, changes)
    return jsonify(retailer.to_dict()), 200


def delete_retailer(retailer_id):
    retailer_service.delete_retailer(_cache(), retailer_id)
    return jsonify({"success": True}), 200


def import_retailers():
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise ValidationFailed("A CSV file is required (form field 'file')")

    content = import_service.decode_upload(upload.read())
    result = import_service.import_retailers(content)
    return jsonify(result), 200
