from medsales.models.setting import SiteSetting

API = "/api/settings"


def test_settings_start_empty(client):
    response = client.get(API)
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}


def test_put_creates_then_updates(client, admin_headers):
    created = client.put(
        f"{API}/site_name",
        json={"value": "MedSales", "description": "Shown in the header"},
        headers=admin_headers,
    )
    assert created.status_code == 200
    assert created.json()["data"] == {
        "key": "site_name",
        "value": "MedSales",
        "description": "Shown in the header",
    }

    updated = client.put(
        f"{API}/site_name", json={"value": "MedSales Pro"}, headers=admin_headers
    )
    assert updated.json()["data"]["value"] == "MedSales Pro"
    assert updated.json()["data"]["description"] == "Shown in the header"


def test_scalar_values_are_stored_as_text(client, admin_headers):
    client.put(f"{API}/maintenance", json={"value": True}, headers=admin_headers)
    client.put(f"{API}/items_per_row", json={"value": 4}, headers=admin_headers)

    data = client.get(API).json()["data"]
    assert data["maintenance"]["value"] == "true"
    assert data["items_per_row"]["value"] == "4"


def test_value_is_required(client, admin_headers):
    response = client.put(f"{API}/site_name", json={}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Setting value is required"


def test_writes_require_admin(client, editor_headers):
    assert client.put(f"{API}/site_name", json={"value": "x"}).status_code == 401

    response = client.put(f"{API}/site_name", json={"value": "x"}, headers=editor_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Only admins have access"


def test_get_single_setting(client, admin_headers):
    client.put(f"{API}/phone", json={"value": "+1 555 0100"}, headers=admin_headers)

    assert client.get(f"{API}/phone").json()["data"]["value"] == "+1 555 0100"

    missing = client.get(f"{API}/fax")
    assert missing.status_code == 404
    assert missing.json()["error"] == "Setting not found"


def test_get_selected_keys(client, admin_headers):
    client.put(
        API,
        json={"settings": {"phone": "1", "email": "a@b.c", "address": "Main St"}},
        headers=admin_headers,
    )

    data = client.get(API, params={"keys": "phone, email,unknown"}).json()["data"]
    assert sorted(data) == ["email", "phone"]


def test_batch_update(client, admin_headers, db):
    client.put(f"{API}/phone", json={"value": "old"}, headers=admin_headers)

    response = client.put(
        API,
        json={"settings": {"phone": "new", "show_prices": False}},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()["data"]
    assert body["message"] == "2 settings updated successfully"
    assert {row["key"]: row["value"] for row in body["updated"]} == {
        "phone": "new",
        "show_prices": "false",
    }

    db.expire_all()
    assert db.query(SiteSetting).count() == 2


def test_batch_requires_settings(client, admin_headers):
    for payload in ({}, {"settings": {}}):
        response = client.put(API, json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Settings object is required"
