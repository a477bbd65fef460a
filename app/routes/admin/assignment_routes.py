from flask import Blueprint
from flask_jwt_extended import jwt_required
from app.controllers.admin import assignment_controller
from app.utils.decorators import roles_required, ADMIN

assignment_bp = Blueprint("admin_assignments", __name__)


@assignment_bp.route("/assignments/bulk", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def bulk_assign():
    return assignment_controller.bulk_assign()


@assignment_bp.route("/sales-reps", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_sales_reps():
    return assignment_controller.list_sales_reps()
