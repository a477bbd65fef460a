from app.models import Retailer


def test_rep_cannot_read_other_reps_retailer_by_id_guessing(
    client, rep_headers, other_rep, retailers, assign_retailer
):
    assign_retailer(retailers[0], other_rep)

    for retailer in retailers:
        response = client.get(f"/api/retailers/{retailer.id}", headers=rep_headers)
        assert response.status_code == 403


def test_rep_cannot_update_other_reps_retailer(
    client, rep_headers, other_rep, retailers, assign_retailer, db
):
    assign_retailer(retailers[0], other_rep)

    response = client.patch(
        f"/api/retailers/{retailers[0].id}",
        json={"points": 9999},
        headers=rep_headers,
    )

    assert response.status_code == 403
    assert db.session.get(Retailer, retailers[0].id).points == 0


def test_rep_cannot_reassign_through_update(
    client, rep, rep_headers, retailers, assign_retailer, taxonomy, db
):
    assign_retailer(retailers[0], rep)

    response = client.patch(
        f"/api/retailers/{retailers[0].id}",
        json={"regionId": taxonomy["south"].id, "distributorId": taxonomy["coastal"].id},
        headers=rep_headers,
    )

    assert response.status_code == 400
    retailer = db.session.get(Retailer, retailers[0].id)
    assert retailer.region_id == taxonomy["north"].id
    assert retailer.distributor_id == taxonomy["metro"].id


def test_listing_never_leaks_other_reps_retailers(
    client, rep_headers, other_rep, retailers, assign_retailer
):
    for retailer in retailers:
        assign_retailer(retailer, other_rep)

    response = client.get("/api/retailers?search=a", headers=rep_headers)

    assert response.status_code == 200
    assert response.json["data"] == []


def test_rep_cannot_manage_users(client, rep_headers):
    response = client.post(
        "/api/users",
        json={
            "email": "evil@example.com",
            "username": "evil_admin",
            "password": "password123",
            "role": "Admin",
        },
        headers=rep_headers,
    )
    assert response.status_code == 403


def test_rep_cannot_touch_taxonomy(client, rep_headers, taxonomy):
    assert client.post(
        "/api/admin/regions", json={"name": "Mine"}, headers=rep_headers
    ).status_code == 403
    assert client.delete(
        f"/api/admin/regions/{taxonomy['north'].id}", headers=rep_headers
    ).status_code == 403
