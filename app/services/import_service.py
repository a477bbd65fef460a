import csv
import io

from flask import current_app

from app.extensions import db
from app.models import Retailer, Region, Area, Territory, Distributor
from app.utils.errors import ValidationFailed

REQUIRED_COLUMNS = ("name", "region", "area", "distributor")
# Length-limited Retailer columns
SIZED_COLUMNS = ("name", "phone", "routes")


def decode_upload(raw):
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            return raw.decode("latin-1")
    return raw


def read_rows(content):
    reader = csv.DictReader(io.StringIO(content))
    columns = [c.strip().lower() for c in (reader.fieldnames or [])]

    rows = []
    for raw in reader:
        row = {
            (k or "").strip().lower(): (v or "").strip()
            for k, v in raw.items()
            if k is not None
        }
        if any(row.values()):
            rows.append(row)

    if not rows:
        raise ValidationFailed("CSV file is empty")

    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise ValidationFailed(f"Missing required CSV columns: {', '.join(missing)}")

    return rows


def _lookup_tables():
    # Load the whole taxonomy once instead of querying per row
    return {
        "regions": {r.name.lower(): r.id for r in Region.query.all()},
        "areas": {(a.name.lower(), a.region_id): a.id for a in Area.query.all()},
        "territories": {
            (t.name.lower(), t.area_id): t.id for t in Territory.query.all()
        },
        "distributors": {d.name.lower(): d.id for d in Distributor.query.all()},
    }


def resolve_row(row, tables):
    """Map one CSV row onto Retailer kwargs, or return (None, reason)."""
    name = row.get("name")
    if not name:
        return None, "missing name"

    for column in SIZED_COLUMNS:
        max_len = Retailer.__table__.c[column].type.length
        if len(row.get(column) or "") > max_len:
            return None, f"{column} longer than {max_len} characters"

    region_id = tables["regions"].get(row.get("region", "").lower())
    if not region_id:
        return None, f"region '{row.get('region')}' not found"

    area_id = tables["areas"].get((row.get("area", "").lower(), region_id))
    if not area_id:
        return None, f"area '{row.get('area')}' not found in region '{row.get('region')}'"

    territory_id = None
    if row.get("territory"):
        territory_id = tables["territories"].get((row["territory"].lower(), area_id))
        if not territory_id:
            return None, (
                f"territory '{row['territory']}' not found in area '{row.get('area')}'"
            )

    distributor_id = tables["distributors"].get(row.get("distributor", "").lower())
    if not distributor_id:
        return None, f"distributor '{row.get('distributor')}' not found"

    try:
        points = int(row["points"]) if row.get("points") else 0
    except ValueError:
        return None, f"invalid points '{row['points']}'"
    if points < 0:
        return None, f"invalid points '{row['points']}'"

    return {
        "name": name,
        "phone": row.get("phone") or None,
        "region_id": region_id,
        "area_id": area_id,
        "territory_id": territory_id,
        "distributor_id": distributor_id,
        "points": points,
        "routes": row.get("routes", ""),
        "notes": row.get("notes", ""),
    }, None


def import_retailers(content):
    rows = read_rows(content)
    tables = _lookup_tables()

    resolved = []
    for row in rows:
        data, reason = resolve_row(row, tables)
        if data is None:
            current_app.logger.warning(
                f"Skipping retailer '{row.get('name')}': {reason}"
            )
            continue
        resolved.append(data)

    # Drop phones already stored or repeated inside the file
    known_phones = {
        p for (p,) in db.session.query(Retailer.phone).filter(Retailer.phone.isnot(None))
    }
    new_retailers = []
    for data in resolved:
        phone = data["phone"]
        if phone and phone in known_phones:
            current_app.logger.warning(
                f"Skipping retailer '{data['name']}': phone {phone} already exists"
            )
            continue
        if phone:
            known_phones.add(phone)
        new_retailers.append(Retailer(**data))

    if new_retailers:
        db.session.add_all(new_retailers)
        db.session.commit()

    imported = len(new_retailers)
    skipped = len(rows) - imported
    current_app.logger.info(f"Retailer import: {imported} imported, {skipped} skipped")
    return {"imported": imported, "skipped": skipped}
