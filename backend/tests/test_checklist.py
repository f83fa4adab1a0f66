import pytest


@pytest.fixture()
def task(project_with_roles):
    project_id = project_with_roles["project"]["id"]
    return project_with_roles["manager"].post(f"/api/projects/{project_id}/tasks", json={"name": "Wireframes"}).json()


def test_checklist_lifecycle(project_with_roles, task, count_activities):
    member = project_with_roles["member"]
    project_id = project_with_roles["project"]["id"]
    before = count_activities(project_id)

    created = member.post(f"/api/tasks/{task['id']}/checklist", json={"content": "Sketch layout"})
    assert created.status_code == 201
    item = created.json()
    assert item["completed"] is False

    updated = member.put(f"/api/checklist/{item['id']}", json={"completed": True})
    assert updated.json()["completed"] is True

    items = member.get(f"/api/tasks/{task['id']}/checklist").json()
    assert [i["content"] for i in items] == ["Sketch layout"]

    assert member.delete(f"/api/checklist/{item['id']}").status_code == 200
    assert member.get(f"/api/tasks/{task['id']}/checklist").json() == []
    # checklist edits are not part of the activity log
    assert count_activities(project_id) == before


def test_outsider_cannot_touch_checklist(project_with_roles, task):
    outsider = project_with_roles["outsider"]
    assert outsider.get(f"/api/tasks/{task['id']}/checklist").status_code == 403
    assert outsider.post(f"/api/tasks/{task['id']}/checklist", json={"content": "x"}).status_code == 403


def test_checklist_missing_resources(project_with_roles):
    manager = project_with_roles["manager"]
    assert manager.get("/api/tasks/999/checklist").status_code == 404
    assert manager.put("/api/checklist/999", json={"completed": True}).status_code == 404
