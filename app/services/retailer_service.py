import json

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from app.extensions import db
from app.models import Retailer, SalesRep, Region, Area, Territory, Distributor
from app.schemas.retailer_schema import SALES_REP_FIELDS
from app.utils.errors import Conflict, Forbidden, NotFound, ValidationFailed
from app.utils.pagination import paginate, envelope

FILTER_COLUMNS = {
    "region_id": Retailer.region_id,
    "area_id": Retailer.area_id,
    "distributor_id": Retailer.distributor_id,
    "territory_id": Retailer.territory_id,
}


def build_retailer_query(filters, sales_rep_id=None):
    query = Retailer.query

    if sales_rep_id is not None:
        query = query.filter(Retailer.sales_reps.any(SalesRep.id == sales_rep_id))

    search = filters.get("search")
    if search:
        query = query.filter(
            or_(
                Retailer.name.icontains(search, autoescape=True),
                Retailer.phone.icontains(search, autoescape=True),
            )
        )

    for key, column in FILTER_COLUMNS.items():
        if filters.get(key) is not None:
            query = query.filter(column == filters[key])

    return query.order_by(Retailer.name.asc(), Retailer.id.asc())


def list_retailers(filters):
    """Admin listing: every retailer, with its sales reps, never cached."""
    page = paginate(build_retailer_query(filters), filters["page"], filters["limit"])
    return envelope(page["items"], page["meta"], lambda r: r.to_dict())


def list_assigned_retailers(cache, sales_rep_id, filters):
    """Return the JSON text of one page of the rep's retailers.

    A cache hit is returned verbatim; a miss is computed, stored with the
    cache TTL and returned.
    """
    key = cache.make_key(sales_rep_id, filters)
    cached = cache.get(key)
    if cached is not None:
        return cached

    query = build_retailer_query(filters, sales_rep_id=sales_rep_id)
    page = paginate(query, filters["page"], filters["limit"])
    payload = json.dumps(
        envelope(
            page["items"],
            page["meta"],
            lambda r: r.to_dict(include_assignments=False),
        )
    )
    cache.set(key, payload)
    return payload


def get_retailer(retailer_id):
    retailer = db.session.get(Retailer, retailer_id)
    if not retailer:
        raise NotFound(f"Retailer with ID {retailer_id} not found")
    return retailer


def get_assigned_retailer(sales_rep_id, retailer_id):
    retailer = get_retailer(retailer_id)
    if not retailer.is_assigned_to(sales_rep_id):
        raise Forbidden("Not authorized to access this retailer")
    return retailer


def update_assigned_retailer(cache, sales_rep_id, retailer_id, changes):
    retailer = get_assigned_retailer(sales_rep_id, retailer_id)

    for field in SALES_REP_FIELDS:
        if field in changes:
            setattr(retailer, field, changes[field])

    db.session.commit()
    cache.invalidate_sales_reps([sr.id for sr in retailer.sales_reps])
    return retailer


def validate_hierarchy(region_id, area_id, distributor_id, territory_id=None):
    """A retailer's area must sit in its region and its territory in its area."""
    if not db.session.get(Region, region_id):
        raise NotFound(f"Region {region_id} not found")

    area = db.session.get(Area, area_id)
    if not area:
        raise NotFound(f"Area {area_id} not found")
    if area.region_id != region_id:
        raise ValidationFailed(
            f"Area '{area.name}' does not belong to region {region_id}"
        )

    if not db.session.get(Distributor, distributor_id):
        raise NotFound(f"Distributor {distributor_id} not found")

    if territory_id is not None:
        territory = db.session.get(Territory, territory_id)
        if not territory:
            raise NotFound(f"Territory {territory_id} not found")
        if territory.area_id != area_id:
            raise ValidationFailed(
                f"Territory '{territory.name}' does not belong to area {area_id}"
            )


def _ensure_phone_available(phone, exclude_id=None):
    if not phone:
        return
    query = Retailer.query.filter(Retailer.phone == phone)
    if exclude_id is not None:
        query = query.filter(Retailer.id != exclude_id)
    if query.first():
        raise Conflict(f"A retailer with phone {phone} already exists")


def _commit():
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Retailer conflicts with existing data")


def create_retailer(data):
    validate_hierarchy(
        data["region_id"], data["area_id"], data["distributor_id"], data["territory_id"]
    )
    phone = data.get("phone") or None
    _ensure_phone_available(phone)

    retailer = Retailer(
        name=data["name"].strip(),
        phone=phone,
        region_id=data["region_id"],
        area_id=data["area_id"],
        distributor_id=data["distributor_id"],
        territory_id=data["territory_id"],
        points=data["points"],
        routes=data["routes"],
        notes=data["notes"],
    )
    db.session.add(retailer)
    _commit()
    current_app.logger.info(f"Retailer {retailer.id} created")
    return retailer


def update_retailer(cache, retailer_id, changes):
    retailer = get_retailer(retailer_id)

    merged = {
        "region_id": changes.get("region_id", retailer.region_id),
        "area_id": changes.get("area_id", retailer.area_id),
        "distributor_id": changes.get("distributor_id", retailer.distributor_id),
        "territory_id": changes.get("territory_id", retailer.territory_id),
    }
    validate_hierarchy(**merged)

    if "phone" in changes:
        changes["phone"] = changes["phone"] or None
        _ensure_phone_available(changes["phone"], exclude_id=retailer.id)
    if "name" in changes:
        changes["name"] = changes["name"].strip()

    for field, value in changes.items():
        setattr(retailer, field, value)

    _commit()
    cache.invalidate_sales_reps([sr.id for sr in retailer.sales_reps])
    return retailer


def delete_retailer(cache, retailer_id):
    retailer = get_retailer(retailer_id)
    rep_ids = [sr.id for sr in retailer.sales_reps]

    db.session.delete(retailer)
    db.session.commit()

    cache.invalidate_sales_reps(rep_ids)
    current_app.logger.info(f"Retailer {retailer_id} deleted")
