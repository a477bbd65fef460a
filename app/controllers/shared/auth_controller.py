from flask import request, jsonify, current_app
from flask_jwt_extended import create_access_token, get_jwt_identity
from sqlalchemy import text
from app.extensions import bcrypt, db
from app.models import User
from app.schemas.user_schema import LoginSchema
from app.utils.errors import NotFound, Unauthorized


def login():
    data = LoginSchema().load(request.get_json(silent=True) or {})

    user = User.query.filter_by(email=data["email"]).first()
    if not user or not bcrypt.check_password_hash(user.password_hash, data["password"]):
        current_app.logger.info(f"Failed login for {data['email']}")
        raise Unauthorized("Invalid credentials")

    access_token = create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role, "email": user.email},
    )
    return (
        jsonify(
            {
                "access_token": access_token,
                "user": user.to_dict(
                    superadmin_email=current_app.config.get("SUPERADMIN_EMAIL")
                ),
            }
        ),
        200,
    )


def me():
    uid = get_jwt_identity()
    user = db.session.get(User, int(uid))
    if not user:
        raise NotFound("User not found")
    return jsonify(
        user.to_dict(superadmin_email=current_app.config.get("SUPERADMIN_EMAIL"))
    )


def check_health():
    health_status = {"status": "healthy", "services": {"database": "unhealthy"}}

    try:
        # Perform a simple query to verify DB connectivity
        db.session.execute(text("SELECT 1"))
        health_status["services"]["database"] = "healthy"
        return jsonify(health_status), 200
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["error"] = str(e)
        return jsonify(health_status), 500
