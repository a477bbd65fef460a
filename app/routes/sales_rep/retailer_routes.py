from flask import Blueprint
from flask_jwt_extended import jwt_required
from app.controllers.sales_rep import retailer_controller
from app.utils.decorators import roles_required, SALES_REP

my_retailer_bp = Blueprint("my_retailers", __name__)


@my_retailer_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(SALES_REP)
def list_retailers():
    return retailer_controller.list_my_retailers()


@my_retailer_bp.route("/<int:id>", methods=["GET"])
@jwt_required()
@roles_required(SALES_REP)
def get_retailer(id):
    return retailer_controller.get_my_retailer(id)


@my_retailer_bp.route("/<int:id>", methods=["PATCH"])
@jwt_required()
@roles_required(SALES_REP)
def update_retailer(id):
    return retailer_controller.update_my_retailer(id)
