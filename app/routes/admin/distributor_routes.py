from flask import Blueprint
from flask_jwt_extended import jwt_required
from app.controllers.admin import distributor_controller
from app.utils.decorators import roles_required, ADMIN

distributor_bp = Blueprint("distributors", __name__)


@distributor_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_dists():
    return distributor_controller.list_distributors()


@distributor_bp.route("", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def create_dist():
    return distributor_controller.create_distributor()


@distributor_bp.route("/<int:id>", methods=["PATCH"])
@jwt_required()
@roles_required(ADMIN)
def update_dist(id):
    return distributor_controller.update_distributor(id)


@distributor_bp.route("/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def delete_dist(id):
    return distributor_controller.delete_distributor(id)
