from flask import request, jsonify, current_app
from sqlalchemy import or_
from app.models import SalesRep, User
from app.schemas.query_schema import QuerySchema
from app.schemas.retailer_schema import BulkAssignSchema
from app.services import assignment_service
from app.utils.pagination import paginate, envelope


def bulk_assign():
    data = BulkAssignSchema().load(request.json or {})
    result = assignment_service.bulk_assign(
        current_app.extensions["retailer_cache"],
        data["sales_rep_id"],
        data["retailer_ids"],
        data["action"],
    )
    return jsonify(result), 200


def list_sales_reps():
    filters = QuerySchema().load(request.args.to_dict())

    query = SalesRep.query.join(User, SalesRep.user_id == User.id)
    if filters["search"]:
        query = query.filter(
            or_(
                User.username.icontains(filters["search"], autoescape=True),
                User.email.icontains(filters["search"], autoescape=True),
            )
        )

    page = paginate(
        query.order_by(User.username.asc()), filters["page"], filters["limit"]
    )
    return jsonify(envelope(page["items"], page["meta"], lambda s: s.to_dict())), 200
