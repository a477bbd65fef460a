from flask import request, jsonify, current_app
from flask_jwt_extended import get_jwt_identity
from sqlalchemy import or_
from app.extensions import db, bcrypt
from app.models import User, SalesRep, retailer_assignments
from app.schemas.user_schema import UserCreateSchema, UserUpdateSchema, UserQuerySchema
from app.utils.decorators import ADMIN, SALES_REP
from app.utils.errors import Conflict, Forbidden
from app.utils.pagination import paginate, envelope


def _cache():
    return current_app.extensions["retailer_cache"]


def _superadmin_email():
    return current_app.config.get("SUPERADMIN_EMAIL")


def _serialize(user):
    return user.to_dict(superadmin_email=_superadmin_email())


def _current_is_superadmin():
    current = db.session.get(User, int(get_jwt_identity()))
    return bool(current) and current.email == _superadmin_email()


def _ensure_unique(email=None, username=None, exclude_id=None):
    checks = []
    if email:
        checks.append(User.email == email)
    if username:
        checks.append(User.username == username)
    if not checks:
        return
    query = User.query.filter(or_(*checks))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise Conflict("Email or username is already taken.")


def _hash(password):
    return bcrypt.generate_password_hash(password).decode("utf-8")


def list_users():
    filters = UserQuerySchema().load(request.args.to_dict())

    query = User.query
    if filters["search"]:
        query = query.filter(
            or_(
                User.username.icontains(filters["search"], autoescape=True),
                User.email.icontains(filters["search"], autoescape=True),
            )
        )
    if filters["role"]:
        query = query.filter(User.role == filters["role"])

    page = paginate(
        query.order_by(User.created_at.desc(), User.id.desc()),
        filters["page"],
        filters["limit"],
    )
    return jsonify(envelope(page["items"], page["meta"], _serialize)), 200


def get_user(user_id):
    user = db.get_or_404(User, user_id)
    return jsonify(_serialize(user)), 200


def create_user():
    data = UserCreateSchema().load(request.json or {})

    if data["role"] != SALES_REP and not _current_is_superadmin():
        raise Forbidden("Only the predefined admin can create Admin users.")

    _ensure_unique(email=data["email"], username=data["username"])

    user = User(
        email=data["email"],
        username=data["username"],
        password_hash=_hash(data["password"]),
        role=data["role"],
        phone=data.get("phone"),
    )
    if user.role == SALES_REP:
        user.sales_rep = SalesRep(name=user.username)

    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"User {user.id} ({user.role}) created")
    return jsonify({"message": "User created successfully", "user": _serialize(user)}), 201


def update_user(user_id):
    user = db.get_or_404(User, user_id)
    data = UserUpdateSchema().load(request.json or {})
    is_superadmin = _current_is_superadmin()

    if user.email == _superadmin_email() and not is_superadmin:
        raise Forbidden("Only the predefined admin can update themselves.")

    if not is_superadmin:
        if user.role != SALES_REP:
            raise Forbidden("Admins can only update SalesRep users.")
        if data.get("role", SALES_REP) != SALES_REP:
            raise Forbidden("Admins can only set role to SalesRep.")

    _ensure_unique(
        email=data.get("email"), username=data.get("username"), exclude_id=user.id
    )

    for field in ("email", "username", "phone", "role"):
        if field in data:
            setattr(user, field, data[field])
    if data.get("password"):
        user.password_hash = _hash(data["password"])

    if user.role == SALES_REP and user.sales_rep is None:
        user.sales_rep = SalesRep(name=user.username)
    elif "username" in data and user.sales_rep is not None:
        user.sales_rep.name = user.username

    dropped_rep_id = None
    if user.role == ADMIN and user.sales_rep is not None:
        dropped_rep_id = _drop_sales_rep_profile(user)

    db.session.commit()
    if dropped_rep_id is not None:
        _cache().invalidate_sales_rep(dropped_rep_id)
    return jsonify(_serialize(user)), 200


def delete_user(user_id):
    user = db.get_or_404(User, user_id)

    if user.email == _superadmin_email():
        raise Forbidden("Cannot delete the predefined admin.")
    if user.role != SALES_REP and not _current_is_superadmin():
        raise Forbidden("Only the predefined admin can delete Admin users.")

    dropped_rep_id = None
    if user.sales_rep is not None:
        dropped_rep_id = _drop_sales_rep_profile(user)
    db.session.delete(user)
    db.session.commit()

    if dropped_rep_id is not None:
        _cache().invalidate_sales_rep(dropped_rep_id)
    return "", 204


def _drop_sales_rep_profile(user):
    rep_id = user.sales_rep.id
    db.session.execute(
        retailer_assignments.delete().where(
            retailer_assignments.c.sales_rep_id == rep_id
        )
    )
    user.sales_rep = None
    return rep_id
