import os

from sqlalchemy.exc import OperationalError

from launchpro.config import settings
from launchpro.repositories.integrations import SettingsRepository


def test_defaults_are_public(anonymous):
    response = anonymous.get("/api/settings")
    assert response.status_code == 200
    assert response.json() == {
        "theme": {"primary": "#0ea5e9", "variant": "professional", "appearance": "light", "radius": "0.5"},
        "organization": {"name": "LaunchRocket", "logo": None},
    }


def test_admin_updates_are_merged(admin_client, anonymous):
    response = admin_client.put("/api/settings", json={"theme": {"primary": "#111111"}})
    assert response.status_code == 200

    admin_client.put("/api/settings", json={"organization": {"name": "Acme"}})

    body = anonymous.get("/api/settings").json()
    assert body["theme"]["primary"] == "#111111"
    assert body["theme"]["variant"] == "professional"
    assert body["organization"]["name"] == "Acme"


def test_non_admin_cannot_update(make_user, login):
    make_user("bob")
    assert login("bob").put("/api/settings", json={"theme": {"primary": "#000"}}).status_code == 403


def test_logo_upload(admin_client, anonymous):
    response = admin_client.post("/api/settings/logo", files={"logo": ("logo.png", b"\x89PNG....", "image/png")})
    assert response.status_code == 201
    url = response.json()["logo"]
    assert url.startswith("/uploads/logos/logo")
    assert url.endswith(".png")
    assert os.path.exists(os.path.join(settings.UPLOAD_DIR, "logos", os.path.basename(url)))

    assert anonymous.get("/api/settings").json()["organization"]["logo"] == url


def test_logo_must_be_an_image(admin_client):
    response = admin_client.post("/api/settings/logo", files={"logo": ("notes.txt", b"hi", "text/plain")})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid file type"


def test_failed_logo_save_removes_upload(admin_client, monkeypatch):
    def broken_update(self, entity, changes):
        raise OperationalError("UPDATE", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SettingsRepository, "update", broken_update)

    response = admin_client.post("/api/settings/logo", files={"logo": ("logo.png", b"\x89PNG....", "image/png")})
    assert response.status_code == 500
    assert response.json()["message"] == "Could not save logo"
    assert os.listdir(os.path.join(settings.UPLOAD_DIR, "logos")) == []
