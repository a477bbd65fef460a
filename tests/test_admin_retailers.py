import json

from app.models import Retailer


def _payload(taxonomy, **overrides):
    data = {
        "name": "Delta Shop",
        "phone": "01800000000",
        "regionId": taxonomy["north"].id,
        "areaId": taxonomy["uptown"].id,
        "distributorId": taxonomy["metro"].id,
    }
    data.update(overrides)
    return data


def test_create_retailer(client, admin_headers, taxonomy):
    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, territoryId=taxonomy["hill"].id, points=10),
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json["territory"]["name"] == "Hill"
    assert response.json["points"] == 10
    assert response.json["salesReps"] == []


def test_create_retailer_area_outside_region(client, admin_headers, taxonomy):
    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, areaId=taxonomy["harbor"].id),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "does not belong" in response.json["message"]


def test_create_retailer_territory_outside_area(client, admin_headers, taxonomy, db):
    from app.models import Territory

    dock = Territory(name="Dock", area_id=taxonomy["harbor"].id)
    db.session.add(dock)
    db.session.commit()

    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, territoryId=dock.id),
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_create_retailer_duplicate_phone(client, admin_headers, taxonomy, retailers):
    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, phone=retailers[0].phone),
        headers=admin_headers,
    )
    assert response.status_code == 409


def test_create_retailer_negative_points(client, admin_headers, taxonomy):
    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, points=-5),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "points" in response.json["errors"]


def test_list_retailers_envelope(client, admin_headers, retailers):
    response = client.get("/api/admin/retailers?limit=2", headers=admin_headers)

    assert response.status_code == 200
    assert [r["name"] for r in response.json["data"]] == ["Alpha Store", "Beta Mart"]
    assert response.json["meta"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}


def test_list_retailers_search_matches_name_and_phone(client, admin_headers, retailers):
    by_name = client.get("/api/admin/retailers?search=MART", headers=admin_headers)
    by_phone = client.get("/api/admin/retailers?search=0003", headers=admin_headers)

    assert [r["name"] for r in by_name.json["data"]] == ["Beta Mart"]
    assert [r["name"] for r in by_phone.json["data"]] == ["Gamma Traders"]


def test_list_retailers_exact_filters(client, admin_headers, taxonomy, retailers):
    response = client.get(
        f"/api/admin/retailers?regionId={taxonomy['south'].id}"
        f"&distributorId={taxonomy['coastal'].id}",
        headers=admin_headers,
    )
    assert [r["name"] for r in response.json["data"]] == ["Gamma Traders"]

    response = client.get(
        f"/api/admin/retailers?areaId={taxonomy['uptown'].id}&regionId=",
        headers=admin_headers,
    )
    assert response.json["meta"]["total"] == 2


def test_list_retailers_rejects_bad_page(client, admin_headers):
    response = client.get("/api/admin/retailers?page=0", headers=admin_headers)
    assert response.status_code == 400


def test_get_retailer_404(client, admin_headers):
    response = client.get("/api/admin/retailers/4242", headers=admin_headers)
    assert response.status_code == 404


def test_update_retailer_invalidates_assigned_rep_cache(
    client, admin_headers, rep, retailers, assign_retailer, cache, redis_client, db
):
    assign_retailer(retailers[0], rep)
    cache.set(cache.make_key(rep.sales_rep.id, {"page": 1}), json.dumps({"data": []}))

    response = client.patch(
        f"/api/admin/retailers/{retailers[0].id}",
        json={"name": "Alpha Superstore", "points": 50},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert db.session.get(Retailer, retailers[0].id).name == "Alpha Superstore"
    assert redis_client.keys(f"retailers:sr:{rep.sales_rep.id}:*") == []


def test_update_retailer_checks_merged_hierarchy(client, admin_headers, taxonomy, retailers):
    # Moving only the area into another region breaks the invariant
    response = client.patch(
        f"/api/admin/retailers/{retailers[0].id}",
        json={"areaId": taxonomy["harbor"].id},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = client.patch(
        f"/api/admin/retailers/{retailers[0].id}",
        json={"regionId": taxonomy["south"].id, "areaId": taxonomy["harbor"].id},
        headers=admin_headers,
    )
    assert response.status_code == 200


def test_delete_retailer(client, admin_headers, rep, retailers, assign_retailer, cache, redis_client, db):
    assign_retailer(retailers[1], rep)
    cache.set(cache.make_key(rep.sales_rep.id, {"page": 1}), "cached")
    retailer_id = retailers[1].id

    response = client.delete(f"/api/admin/retailers/{retailer_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json == {"success": True}
    assert db.session.get(Retailer, retailer_id) is None
    assert redis_client.keys(f"retailers:sr:{rep.sales_rep.id}:*") == []


def test_list_sales_reps(client, admin_headers, rep, other_rep, retailers, assign_retailer):
    assign_retailer(retailers[0], rep)

    response = client.get("/api/admin/sales-reps", headers=admin_headers)

    assert response.status_code == 200
    by_id = {r["id"]: r for r in response.json["data"]}
    assert by_id[rep.sales_rep.id]["retailerCount"] == 1
    assert by_id[other_rep.sales_rep.id]["retailerCount"] == 0
    assert response.json["meta"]["total"] == 2


def test_create_retailer_rejects_blank_name(client, admin_headers, taxonomy):
    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, name="   "),
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "name" in response.json["errors"]
    assert Retailer.query.count() == 0


def test_update_retailer_rejects_blank_name(client, admin_headers, retailers, db):
    response = client.patch(
        f"/api/admin/retailers/{retailers[0].id}",
        json={"name": "\t "},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert db.session.get(Retailer, retailers[0].id).name == "Alpha Store"


def test_create_retailer_rejects_overlong_phone(client, admin_headers, taxonomy):
    response = client.post(
        "/api/admin/retailers",
        json=_payload(taxonomy, phone="0" * 51),
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "phone" in response.json["errors"]


def test_list_retailers_search_underscore_is_literal(
    client, admin_headers, retailer_factory
):
    retailer_factory("A_B Store")
    retailer_factory("AxB Store")

    response = client.get("/api/admin/retailers?search=A_B", headers=admin_headers)

    assert [r["name"] for r in response.json["data"]] == ["A_B Store"]
