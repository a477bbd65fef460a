from flask import current_app
from sqlalchemy import select

from app.extensions import db
from app.models import Retailer, SalesRep, retailer_assignments
from app.utils.errors import AssignmentConflict, NotFound

ASSIGN = "assign"
UNASSIGN = "unassign"


def bulk_assign(cache, sales_rep_id, retailer_ids, action):
    """Attach or detach many retailers to/from one sales rep atomically.

    ``assign`` fails as a whole when any retailer already belongs to another
    rep. ``unassign`` only removes rows owned by ``sales_rep_id``. The
    reported ``affected`` count is the number of requested retailers.
    """
    retailer_ids = list(dict.fromkeys(retailer_ids))

    if not db.session.get(SalesRep, sales_rep_id):
        raise NotFound(f"Sales rep {sales_rep_id} not found")

    try:
        if action == ASSIGN:
            _assign(sales_rep_id, retailer_ids)
        else:
            _unassign(sales_rep_id, retailer_ids)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    cache.invalidate_sales_rep(sales_rep_id)
    current_app.logger.info(
        f"Bulk {action}: {len(retailer_ids)} retailers for sales rep {sales_rep_id}"
    )
    return {"success": True, "affected": len(retailer_ids)}


def _assign(sales_rep_id, retailer_ids):
    # Row locks keep a concurrent assign of the same retailers waiting
    # until this transaction commits or rolls back.
    locked = (
        Retailer.query.filter(Retailer.id.in_(retailer_ids))
        .with_for_update()
        .all()
    )
    missing = sorted(set(retailer_ids) - {r.id for r in locked})
    if missing:
        raise NotFound(
            f"Retailers not found: {', '.join(str(i) for i in missing)}",
            payload={"missingIds": missing},
        )

    conflicts = find_conflicts(sales_rep_id, retailer_ids)
    if conflicts:
        raise AssignmentConflict(conflicts)

    already = set(
        db.session.execute(
            select(retailer_assignments.c.retailer_id).where(
                retailer_assignments.c.sales_rep_id == sales_rep_id,
                retailer_assignments.c.retailer_id.in_(retailer_ids),
            )
        ).scalars()
    )
    rows = [
        {"retailer_id": rid, "sales_rep_id": sales_rep_id}
        for rid in retailer_ids
        if rid not in already
    ]
    if rows:
        db.session.execute(retailer_assignments.insert(), rows)


def _unassign(sales_rep_id, retailer_ids):
    db.session.execute(
        retailer_assignments.delete().where(
            retailer_assignments.c.sales_rep_id == sales_rep_id,
            retailer_assignments.c.retailer_id.in_(retailer_ids),
        )
    )


def find_conflicts(sales_rep_id, retailer_ids):
    """Retailers among ``retailer_ids`` assigned to a rep other than ``sales_rep_id``."""
    result = db.session.execute(
        select(
            Retailer.id,
            Retailer.name,
            SalesRep.id.label("sales_rep_id"),
            SalesRep.name.label("sales_rep_name"),
        )
        .select_from(retailer_assignments)
        .join(Retailer, Retailer.id == retailer_assignments.c.retailer_id)
        .join(SalesRep, SalesRep.id == retailer_assignments.c.sales_rep_id)
        .where(
            retailer_assignments.c.retailer_id.in_(retailer_ids),
            retailer_assignments.c.sales_rep_id != sales_rep_id,
        )
        .order_by(Retailer.id)
    )
    return [
        {
            "retailerId": row.id,
            "retailerName": row.name,
            "salesRepId": row.sales_rep_id,
            "salesRepName": row.sales_rep_name,
        }
        for row in result
    ]
