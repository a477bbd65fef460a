from flask import Blueprint
from flask_jwt_extended import jwt_required
from app.controllers.admin import retailer_controller
from app.utils.decorators import roles_required, ADMIN

retailer_bp = Blueprint("admin_retailers", __name__)


@retailer_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_retailers():
    return retailer_controller.list_retailers()


@retailer_bp.route("", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def create_retailer():
    return retailer_controller.create_retailer()


@retailer_bp.route("/import", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def import_retailers():
    return retailer_controller.import_retailers()


@retailer_bp.route("/<int:id>", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_retailer(id):
    return retailer_controller.get_retailer(id)


@retailer_bp.route("/<int:id>", methods=["PATCH"])
@jwt_required()
@roles_required(ADMIN)
def update_retailer(id):
    return retailer_controller.update_retailer(id)


@retailer_bp.route("/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def delete_retailer(id):
    return retailer_controller.delete_retailer(id)
