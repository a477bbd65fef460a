from flask import request, jsonify
from app.extensions import db
from app.models import Region, Area, Territory
from app.schemas.taxonomy_schema import (
    RegionSchema,
    AreaSchema,
    TerritorySchema,
    TaxonomyQuerySchema,
)
from app.utils.errors import NotFound, ValidationFailed
from app.utils.pagination import paginate, envelope


def _list(query, column, filters):
    if filters["search"]:
        query = query.filter(column.icontains(filters["search"], autoescape=True))
    page = paginate(query.order_by(column.asc()), filters["page"], filters["limit"])
    return page


def _require(model, pk, label):
    obj = db.session.get(model, pk)
    if not obj:
        raise NotFound(f"{label} {pk} not found")
    return obj


def _refuse_if_used(label, dependents):
    for kind, items in dependents:
        if items:
            names = ", ".join(i.name for i in items)
            raise ValidationFailed(
                f"Cannot delete this {label}: it still has {kind}: {names}."
            )


# --- REGIONS ---


def list_regions():
    filters = TaxonomyQuerySchema().load(request.args.to_dict())
    page = _list(Region.query, Region.name, filters)
    return (
        jsonify(
            envelope(
                page["items"], page["meta"], lambda r: r.to_dict(include_areas=True)
            )
        ),
        200,
    )


def create_region():
    data = RegionSchema().load(request.json or {})
    region = Region(name=data["name"].strip())
    db.session.add(region)
    db.session.commit()
    return jsonify(region.to_dict()), 201


def update_region(id):
    region = db.get_or_404(Region, id)
    data = RegionSchema(partial=True).load(request.json or {})
    if "name" in data:
        region.name = data["name"].strip()
    db.session.commit()
    return jsonify(region.to_dict()), 200


def delete_region(id):
    region = db.get_or_404(Region, id)
    _refuse_if_used("region", [("areas", region.areas), ("retailers", region.retailers)])

    db.session.delete(region)
    db.session.commit()
    return jsonify({"message": f"Region '{region.name}' deleted."}), 200


# --- AREAS ---


def list_areas():
    filters = TaxonomyQuerySchema().load(request.args.to_dict())
    query = Area.query
    if filters["region_id"]:
        query = query.filter(Area.region_id == filters["region_id"])
    page = _list(query, Area.name, filters)
    return jsonify(envelope(page["items"], page["meta"], lambda a: a.to_dict())), 200


def create_area():
    data = AreaSchema().load(request.json or {})
    _require(Region, data["region_id"], "Region")

    area = Area(name=data["name"].strip(), region_id=data["region_id"])
    db.session.add(area)
    db.session.commit()
    return jsonify(area.to_dict()), 201


def update_area(id):
    area = db.get_or_404(Area, id)
    data = AreaSchema(partial=True).load(request.json or {})

    if "region_id" in data:
        _require(Region, data["region_id"], "Region")
        area.region_id = data["region_id"]
    if "name" in data:
        area.name = data["name"].strip()

    db.session.commit()
    return jsonify(area.to_dict()), 200


def delete_area(id):
    area = db.get_or_404(Area, id)
    _refuse_if_used(
        "area", [("territories", area.territories), ("retailers", area.retailers)]
    )

    db.session.delete(area)
    db.session.commit()
    return jsonify({"message": f"Area '{area.name}' deleted."}), 200


# --- TERRITORIES ---


def list_territories():
    filters = TaxonomyQuerySchema().load(request.args.to_dict())
    query = Territory.query
    if filters["area_id"]:
        query = query.filter(Territory.area_id == filters["area_id"])
    page = _list(query, Territory.name, filters)
    return jsonify(envelope(page["items"], page["meta"], lambda t: t.to_dict())), 200


def create_territory():
    data = TerritorySchema().load(request.json or {})
    _require(Area, data["area_id"], "Area")

    territory = Territory(name=data["name"].strip(), area_id=data["area_id"])
    db.session.add(territory)
    db.session.commit()
    return jsonify(territory.to_dict()), 201


def update_territory(id):
    territory = db.get_or_404(Territory, id)
    data = TerritorySchema(partial=True).load(request.json or {})

    if "area_id" in data:
        _require(Area, data["area_id"], "Area")
        territory.area_id = data["area_id"]
    if "name" in data:
        territory.name = data["name"].strip()

    db.session.commit()
    return jsonify(territory.to_dict()), 200


def delete_territory(id):
    territory = db.get_or_404(Territory, id)
    _refuse_if_used("territory", [("retailers", territory.retailers)])

    db.session.delete(territory)
    db.session.commit()
    return jsonify({"message": f"Territory '{territory.name}' deleted."}), 200
