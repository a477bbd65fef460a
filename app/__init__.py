import redis
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from marshmallow import ValidationError

from app.extensions import db, jwt, ma, bcrypt, cors
from app.config import Config
from app.utils.cache import RetailerCache
from app.utils.errors import ApiError


def create_app(config_class=Config, cache_client=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # 1. Initialize extensions properly
    db.init_app(app)
    jwt.init_app(app)
    ma.init_app(app)
    bcrypt.init_app(app)

    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    # 2. Retailer cache (Redis client built here or handed in by the caller)
    if cache_client is None:
        cache_client = redis.Redis.from_url(
            app.config["REDIS_URL"], decode_responses=True
        )
    app.extensions["retailer_cache"] = RetailerCache(
        cache_client, ttl=app.config["RETAILER_CACHE_TTL"], logger=app.logger
    )

    _register_error_handlers(app)
    _register_jwt_handlers()

    # 3. Register Blueprints
    from app.routes.shared.auth_routes import auth_bp
    from app.routes.admin import admin_group_bp
    from app.routes.admin.user_routes import user_bp
    from app.routes.sales_rep.retailer_routes import my_retailer_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(admin_group_bp, url_prefix="/api/admin")
    app.register_blueprint(my_retailer_bp, url_prefix="/api/retailers")
    app.register_blueprint(user_bp, url_prefix="/api/users")

    from app.commands import seed_admin

    app.cli.add_command(seed_admin)

    return app


def _register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        return (
            jsonify({"message": "Validation failed", "errors": err.messages}),
            400,
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        messages = {
            403: "Access forbidden",
            404: "Resource not found",
            405: "Method not allowed",
        }
        return (
            jsonify({"message": messages.get(err.code, err.description)}),
            err.code,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", err)
        return jsonify({"message": "Internal server error"}), 500


def _register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"message": f"Authentication required: {reason}"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"message": f"Invalid token: {reason}"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"message": "Token has expired"}), 401
