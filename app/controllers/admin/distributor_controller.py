from flask import request, jsonify
from app.extensions import db
from app.models import Distributor
from app.schemas.taxonomy_schema import DistributorSchema, TaxonomyQuerySchema
from app.utils.errors import ValidationFailed
from app.utils.pagination import paginate, envelope


def list_distributors():
    filters = TaxonomyQuerySchema().load(request.args.to_dict())

    query = Distributor.query
    if filters["search"]:
        query = query.filter(
            Distributor.name.icontains(filters["search"], autoescape=True)
        )

    page = paginate(
        query.order_by(Distributor.name.asc()), filters["page"], filters["limit"]
    )
    return jsonify(envelope(page["items"], page["meta"], lambda d: d.to_dict())), 200


def create_distributor():
    data = DistributorSchema().load(request.json or {})

    dist = Distributor(name=data["name"].strip())
    db.session.add(dist)
    db.session.commit()
    return jsonify(dist.to_dict()), 201


def update_distributor(dist_id):
    dist = db.get_or_404(Distributor, dist_id)
    data = DistributorSchema(partial=True).load(request.json or {})

    if "name" in data:
        dist.name = data["name"].strip()

    db.session.commit()
    return jsonify(dist.to_dict()), 200


def delete_distributor(dist_id):
    dist = db.get_or_404(Distributor, dist_id)

    if dist.retailers:
        names = ", ".join(r.name for r in dist.retailers)
        raise ValidationFailed(
            f"Cannot delete this distributor: it still supplies retailers: {names}."
        )

    db.session.delete(dist)
    db.session.commit()
    return jsonify({"message": f"Distributor '{dist.name}' deleted."}), 200
