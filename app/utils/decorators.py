from flask_jwt_extended import get_jwt
from functools import wraps
from flask import jsonify

ADMIN = "Admin"
SALES_REP = "SalesRep"
ROLES = (ADMIN, SALES_REP)


def roles_required(*roles):
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            claims = get_jwt()
            if claims.get("role") not in roles:
                return jsonify({"message": "Access forbidden"}), 403
            return fn(*args, **kwargs)

        return decorator

    return wrapper
