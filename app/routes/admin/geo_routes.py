from flask import Blueprint
from flask_jwt_extended import jwt_required
from app.controllers.admin import geo_controller
from app.utils.decorators import roles_required, ADMIN

geo_bp = Blueprint("admin_geo", __name__)


# Regions
@geo_bp.route("/regions", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_regs():
    return geo_controller.list_regions()


@geo_bp.route("/regions", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def post_reg():
    return geo_controller.create_region()


@geo_bp.route("/regions/<int:id>", methods=["PATCH"])
@jwt_required()
@roles_required(ADMIN)
def patch_reg(id):
    return geo_controller.update_region(id)


@geo_bp.route("/regions/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def del_reg(id):
    return geo_controller.delete_region(id)


# Areas
@geo_bp.route("/areas", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_areas():
    return geo_controller.list_areas()


@geo_bp.route("/areas", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def post_area():
    return geo_controller.create_area()


@geo_bp.route("/areas/<int:id>", methods=["PATCH"])
@jwt_required()
@roles_required(ADMIN)
def patch_area(id):
    return geo_controller.update_area(id)


@geo_bp.route("/areas/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def del_area(id):
    return geo_controller.delete_area(id)


# Territories
@geo_bp.route("/territories", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_territories():
    return geo_controller.list_territories()


@geo_bp.route("/territories", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def post_territory():
    return geo_controller.create_territory()


@geo_bp.route("/territories/<int:id>", methods=["PATCH"])
@jwt_required()
@roles_required(ADMIN)
def patch_territory(id):
    return geo_controller.update_territory(id)


@geo_bp.route("/territories/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def del_territory(id):
    return geo_controller.delete_territory(id)
