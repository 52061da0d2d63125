from datetime import datetime, timedelta, timezone


ADMIN = {"x-admin-password": "admin123"}


def test_admin_requires_password(test_client):
    assert test_client.get("/admin/licenses").status_code == 401
    assert test_client.get("/admin/licenses", headers={"x-admin-password": "nope"}).status_code == 401


def test_license_lifecycle(test_client):
    r = test_client.post("/admin/licenses", json={"license_key": "NEW-1", "notes": "client X"}, headers=ADMIN)
    assert r.status_code == 201, r.text
    assert r.json()["max_devices"] == 3

    assert test_client.post("/admin/licenses", json={"license_key": "NEW-1"}, headers=ADMIN).status_code == 409

    keys = [i["license_key"] for i in test_client.get("/admin/licenses", headers=ADMIN).json()["items"]]
    assert "NEW-1" in keys and "SNQUIZ-2024-DEMO" in keys

    user = {"x-license-key": "NEW-1"}
    assert test_client.post("/v1/progress/S1", json={"score": 1, "total_questions": 2}, headers=user).status_code == 200

    r = test_client.post("/admin/licenses/NEW-1/deactivate", headers=ADMIN)
    assert r.json()["is_active"] is False
    assert test_client.get("/v1/progress", headers=user).status_code == 401

    test_client.post("/admin/licenses/NEW-1/activate", headers=ADMIN)
    assert len(test_client.get("/v1/progress", headers=user).json()["items"]) == 1

    assert test_client.delete("/admin/licenses/NEW-1", headers=ADMIN).status_code == 204
    assert test_client.get("/admin/licenses/NEW-1", headers=ADMIN).status_code == 404
    assert test_client.delete("/admin/licenses/NEW-1", headers=ADMIN).status_code == 404


def test_settings(test_client):
    r = test_client.get("/admin/settings/admin_password", headers=ADMIN)
    assert r.json() == {"key": "admin_password", "value": "admin123"}

    r = test_client.put("/admin/settings/admin_password", json={"value": "n3w"}, headers=ADMIN)
    assert r.status_code == 200
    # l'ancien mot de passe ne passe plus
    assert test_client.get("/admin/licenses", headers=ADMIN).status_code == 401
    assert test_client.get("/admin/licenses", headers={"x-admin-password": "n3w"}).status_code == 200

    assert test_client.get("/admin/settings/missing", headers={"x-admin-password": "n3w"}).status_code == 404


def test_expiry_with_utc_offset(test_client):
    plus5 = timezone(timedelta(hours=5))
    expired = (datetime.now(timezone.utc) - timedelta(hours=1)).astimezone(plus5).isoformat()

    r = test_client.post("/admin/licenses", json={"license_key": "OFF-5", "expires_at": expired}, headers=ADMIN)
    assert r.status_code == 201, r.text

    r = test_client.post("/v1/license/validate", json={"key": "OFF-5"})
    assert r.json() == {"valid": False}
