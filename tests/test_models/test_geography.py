from app.models import Region, Area, Territory, Distributor


def test_region_creation(db):
    """Test Region model creation"""
    region = Region(name="North Region")
    db.session.add(region)
    db.session.commit()

    assert region.id is not None
    assert region.name == "North Region"
    assert len(region.areas) == 0


def test_area_belongs_to_region(db):
    region = Region(name="Test Region")
    db.session.add(region)
    db.session.flush()

    area = Area(name="Central Area", region_id=region.id)
    db.session.add(area)
    db.session.commit()

    assert area.region == region
    assert region.areas == [area]


def test_territory_belongs_to_area(db):
    region = Region(name="Test Region")
    db.session.add(region)
    db.session.flush()
    area = Area(name="Test Area", region_id=region.id)
    db.session.add(area)
    db.session.flush()

    territory = Territory(name="Gulshan", area_id=area.id)
    db.session.add(territory)
    db.session.commit()

    assert territory.area == area
    assert area.territories == [territory]


def test_area_to_dict_includes_parent_and_children(taxonomy):
    data = taxonomy["uptown"].to_dict()

    assert data["regionId"] == taxonomy["north"].id
    assert data["region"] == {"id": taxonomy["north"].id, "name": "North"}
    assert data["territories"] == [{"id": taxonomy["hill"].id, "name": "Hill"}]


def test_distributor_to_dict(db):
    dist = Distributor(name="Metro")
    db.session.add(dist)
    db.session.commit()

    assert dist.to_dict() == {"id": dist.id, "name": "Metro"}
