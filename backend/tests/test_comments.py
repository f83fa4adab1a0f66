def test_comment_lifecycle(project_with_roles, count_activities):
    project_id = project_with_roles["project"]["id"]
    member = project_with_roles["member"]
    before = count_activities(project_id)

    response = member.post(f"/api/projects/{project_id}/comments", json={"content": "Looks good"})
    assert response.status_code == 201
    comment = response.json()
    assert comment["user"]["username"] == "mike"
    assert "password_hash" not in comment["user"]

    listed = member.get(f"/api/projects/{project_id}/comments").json()
    assert [c["content"] for c in listed] == ["Looks good"]

    assert member.delete(f"/api/comments/{comment['id']}").status_code == 200
    assert member.get(f"/api/projects/{project_id}/comments").json() == []
    assert count_activities(project_id) == before + 2


def test_task_comments(project_with_roles):
    project_id = project_with_roles["project"]["id"]
    manager = project_with_roles["manager"]
    task = manager.post(f"/api/projects/{project_id}/tasks", json={"name": "Wireframes"}).json()

    manager.post(f"/api/projects/{project_id}/comments", json={"content": "General"})
    manager.post(f"/api/projects/{project_id}/comments", json={"content": "On task", "task_id": task["id"]})

    assert [c["content"] for c in manager.get(f"/api/tasks/{task['id']}/comments").json()] == ["On task"]


def test_comment_task_must_belong_to_project(project_with_roles, admin_client):
    project_id = project_with_roles["project"]["id"]
    other = admin_client.post("/api/projects", json={"name": "Other"}).json()
    foreign = admin_client.post(f"/api/projects/{other['id']}/tasks", json={"name": "X"}).json()

    response = project_with_roles["member"].post(
        f"/api/projects/{project_id}/comments", json={"content": "Hi", "task_id": foreign["id"]}
    )
    assert response.status_code == 400


def test_empty_comment_rejected(project_with_roles):
    project_id = project_with_roles["project"]["id"]
    response = project_with_roles["member"].post(f"/api/projects/{project_id}/comments", json={"content": "  "})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "content"


def test_only_author_or_manager_deletes_comment(project_with_roles):
    project_id = project_with_roles["project"]["id"]
    comment = project_with_roles["manager"].post(
        f"/api/projects/{project_id}/comments", json={"content": "Manager note"}
    ).json()

    assert project_with_roles["member"].delete(f"/api/comments/{comment['id']}").status_code == 403
    assert project_with_roles["outsider"].delete(f"/api/comments/{comment['id']}").status_code == 403
    assert project_with_roles["admin"].delete(f"/api/comments/{comment['id']}").status_code == 200
    assert project_with_roles["admin"].delete(f"/api/comments/{comment['id']}").status_code == 404
