import uuid

import fakeredis
import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from app.config import TestConfig
from app.extensions import db as _db, bcrypt
from app.models import User, SalesRep, Region, Area, Territory, Distributor, Retailer


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def app(redis_client):
    app = create_app(TestConfig, cache_client=redis_client)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def cache(app):
    return app.extensions["retailer_cache"]


def _headers(user):
    token = create_access_token(
        identity=str(user.id), additional_claims={"role": user.role, "email": user.email}
    )
    return {"Authorization": f"Bearer {token}"}


def make_user(db, role="SalesRep", email=None, password="password123"):
    suffix = uuid.uuid4().hex[:6]
    user = User(
        email=email or f"user_{suffix}@example.com",
        username=f"user_{suffix}",
        password_hash=bcrypt.generate_password_hash(password).decode("utf-8"),
        role=role,
    )
    if role == "SalesRep":
        user.sales_rep = SalesRep(name=f"Rep {suffix}")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def superadmin(db, app):
    return make_user(db, role="Admin", email=app.config["SUPERADMIN_EMAIL"])


@pytest.fixture
def superadmin_headers(superadmin):
    return _headers(superadmin)


@pytest.fixture
def admin(db):
    return make_user(db, role="Admin")


@pytest.fixture
def admin_headers(admin):
    return _headers(admin)


@pytest.fixture
def rep(db):
    """A sales rep user; ``rep.sales_rep.id`` is the assignment id."""
    return make_user(db)


@pytest.fixture
def rep_headers(rep):
    return _headers(rep)


@pytest.fixture
def other_rep(db):
    return make_user(db)


@pytest.fixture
def other_rep_headers(other_rep):
    return _headers(other_rep)


@pytest.fixture
def taxonomy(db):
    """Two regions with an area each, a territory under the first area and two distributors."""
    north = Region(name="North")
    south = Region(name="South")
    db.session.add_all([north, south])
    db.session.flush()

    uptown = Area(name="Uptown", region_id=north.id)
    harbor = Area(name="Harbor", region_id=south.id)
    db.session.add_all([uptown, harbor])
    db.session.flush()

    hill = Territory(name="Hill", area_id=uptown.id)
    metro = Distributor(name="Metro Distributors")
    coastal = Distributor(name="Coastal Supply")
    db.session.add_all([hill, metro, coastal])
    db.session.commit()

    return {
        "north": north,
        "south": south,
        "uptown": uptown,
        "harbor": harbor,
        "hill": hill,
        "metro": metro,
        "coastal": coastal,
    }


def make_retailer(db, taxonomy, name, phone=None, **overrides):
    fields = dict(
        name=name,
        phone=phone,
        region_id=taxonomy["north"].id,
        area_id=taxonomy["uptown"].id,
        distributor_id=taxonomy["metro"].id,
        territory_id=None,
        points=0,
        routes="",
        notes="",
    )
    fields.update(overrides)
    retailer = Retailer(**fields)
    db.session.add(retailer)
    db.session.commit()
    return retailer


def assign(db, retailer, user):
    retailer.sales_reps.append(user.sales_rep)
    db.session.commit()


@pytest.fixture
def retailers(db, taxonomy):
    return [
        make_retailer(db, taxonomy, "Alpha Store", "01700000001"),
        make_retailer(db, taxonomy, "Beta Mart", "01700000002"),
        make_retailer(
            db,
            taxonomy,
            "Gamma Traders",
            "01700000003",
            region_id=taxonomy["south"].id,
            area_id=taxonomy["harbor"].id,
            distributor_id=taxonomy["coastal"].id,
        ),
    ]


@pytest.fixture
def user_factory(db):
    return lambda **kwargs: make_user(db, **kwargs)


@pytest.fixture
def retailer_factory(db, taxonomy):
    return lambda name, phone=None, **overrides: make_retailer(
        db, taxonomy, name, phone, **overrides
    )


@pytest.fixture
def assign_retailer(db):
    return lambda retailer, user: assign(db, retailer, user)


@pytest.fixture
def headers_for():
    return _headers
