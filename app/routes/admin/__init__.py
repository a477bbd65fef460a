from flask import Blueprint
from .geo_routes import geo_bp
from .distributor_routes import distributor_bp
from .retailer_routes import retailer_bp
from .assignment_routes import assignment_bp

admin_group_bp = Blueprint("admin_group", __name__)

# Register sub-blueprints
admin_group_bp.register_blueprint(geo_bp)
admin_group_bp.register_blueprint(distributor_bp, url_prefix="/distributors")
admin_group_bp.register_blueprint(retailer_bp, url_prefix="/retailers")
admin_group_bp.register_blueprint(assignment_bp)
