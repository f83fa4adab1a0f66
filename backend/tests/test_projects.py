import os

from launchpro.config import settings


def test_create_project_makes_creator_admin(make_user, login):
    make_user("bob")
    client = login("bob")

    response = client.post("/api/projects", json={"name": "Launch", "description": "Go to market"})
    assert response.status_code == 201
    project = response.json()
    assert project["status"] == "active"

    members = client.get(f"/api/projects/{project['id']}/members").json()
    assert [(m["user"]["username"], m["role"]) for m in members] == [("bob", "admin")]


def test_create_project_records_activity(admin_client, count_activities):
    project = admin_client.post("/api/projects", json={"name": "Launch"}).json()

    activities = admin_client.get(f"/api/projects/{project['id']}/activities").json()
    assert count_activities(project["id"]) == 1
    assert activities[0]["action"] == "created"
    assert activities[0]["subject"] == "a new project"
    assert activities[0]["details"] == "Launch"
    assert activities[0]["user"]["username"] == "alice"
    assert "password_hash" not in activities[0]["user"]


def test_create_project_validation(admin_client):
    response = admin_client.post("/api/projects", json={"name": "   "})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "name"


def test_deadline_before_start_rejected(admin_client):
    response = admin_client.post("/api/projects", json={
        "name": "Launch",
        "start_date": "2026-05-01T00:00:00",
        "deadline": "2026-04-01T00:00:00",
    })
    assert response.status_code == 400


def test_list_projects_scoped_to_membership(project_with_roles, admin_client):
    admin_client.post("/api/projects", json={"name": "Secret"})

    names = [p["name"] for p in project_with_roles["member"].get("/api/projects").json()]
    assert names == ["Launch"]
    assert project_with_roles["outsider"].get("/api/projects").json() == []
    assert {p["name"] for p in admin_client.get("/api/projects").json()} == {"Launch", "Secret"}


def test_get_project_reports_role_and_capabilities(project_with_roles):
    project_id = project_with_roles["project"]["id"]

    body = project_with_roles["member"].get(f"/api/projects/{project_id}").json()
    assert body["member_role"] == "member"
    assert "task:create" in body["capabilities"]
    assert "task:delete" not in body["capabilities"]


def test_outsider_gets_403_and_missing_project_404(project_with_roles):
    project_id = project_with_roles["project"]["id"]
    assert project_with_roles["outsider"].get(f"/api/projects/{project_id}").status_code == 403
    assert project_with_roles["outsider"].get("/api/projects/999").status_code == 404


def test_update_project_requires_manager(project_with_roles, count_activities):
    project_id = project_with_roles["project"]["id"]
    before = count_activities(project_id)

    denied = project_with_roles["member"].put(f"/api/projects/{project_id}", json={"name": "Renamed"})
    assert denied.status_code == 403
    assert count_activities(project_id) == before

    response = project_with_roles["manager"].put(f"/api/projects/{project_id}", json={"name": "Renamed"})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert count_activities(project_id) == before + 1


def test_delete_project_requires_project_admin(project_with_roles):
    project_id = project_with_roles["project"]["id"]
    assert project_with_roles["manager"].delete(f"/api/projects/{project_id}").status_code == 403


def test_delete_project_cascades_but_keeps_activities(project_with_roles, count_activities):
    admin = project_with_roles["admin"]
    project_id = project_with_roles["project"]["id"]

    phase = admin.post(f"/api/projects/{project_id}/phases", json={"name": "Design"}).json()
    task = admin.post(f"/api/projects/{project_id}/tasks", json={"name": "Wireframes", "phase_id": phase["id"]}).json()
    admin.post(f"/api/tasks/{task['id']}/checklist", json={"content": "Sketch"})
    admin.post(f"/api/projects/{project_id}/comments", json={"content": "Kickoff"})
    upload = admin.post(
        f"/api/projects/{project_id}/files",
        files={"file": ("brief.txt", b"hello", "text/plain")},
    )
    assert upload.status_code == 201
    stored = os.listdir(os.path.join(settings.UPLOAD_DIR, "projects", str(project_id)))
    assert len(stored) == 1

    activities_before = count_activities(project_id)
    response = admin.delete(f"/api/projects/{project_id}")
    assert response.status_code == 200
    assert response.json()["message"] == "Project deleted successfully"

    assert admin.get(f"/api/projects/{project_id}").status_code == 404
    assert admin.get(f"/api/tasks/{task['id']}").status_code == 404
    assert admin.get(f"/api/tasks/{task['id']}/checklist").status_code == 404
    assert os.listdir(os.path.join(settings.UPLOAD_DIR, "projects", str(project_id))) == []

    # the audit trail survives, plus one record for the deletion itself
    assert count_activities(project_id) == activities_before + 1


def test_update_deadline_checked_against_stored_start(admin_client):
    project = admin_client.post("/api/projects", json={
        "name": "Launch",
        "start_date": "2026-05-01T00:00:00",
    }).json()

    response = admin_client.put(f"/api/projects/{project['id']}", json={"deadline": "2026-01-01T00:00:00"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "deadline"

    accepted = admin_client.put(f"/api/projects/{project['id']}", json={"deadline": "2026-06-01T00:00:00"})
    assert accepted.status_code == 200
