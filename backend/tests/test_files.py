import os

import pytest
from sqlalchemy.exc import OperationalError

from launchpro.models.file import ProjectFile
from launchpro.repositories.content import FileRepository
from launchpro.repositories.storage import Storage


def upload(client, project_id, name="brief.txt", content=b"hello world", task_id=None):
    data = {"task_id": str(task_id)} if task_id is not None else None
    return client.post(
        f"/api/projects/{project_id}/files",
        files={"file": (name, content, "text/plain")},
        data=data,
    )


@pytest.fixture()
def project_id(project_with_roles):
    return project_with_roles["project"]["id"]


def _stored_path(db, file_id):
    db.expire_all()
    record = db.get(ProjectFile, file_id)
    return record.path if record else None


def test_upload_and_download(project_with_roles, project_id, db):
    member = project_with_roles["member"]

    response = upload(member, project_id)
    assert response.status_code == 201
    record = response.json()
    assert record["name"] == "brief.txt"
    assert record["size"] == len(b"hello world")
    assert "path" not in record
    assert os.path.exists(_stored_path(db, record["id"]))

    download = member.get(f"/api/files/{record['id']}/download")
    assert download.status_code == 200
    assert download.content == b"hello world"

    assert [f["id"] for f in member.get(f"/api/projects/{project_id}/files").json()] == [record["id"]]


def test_upload_attached_to_task(project_with_roles, project_id):
    manager = project_with_roles["manager"]
    task = manager.post(f"/api/projects/{project_id}/tasks", json={"name": "Wireframes"}).json()

    record = upload(manager, project_id, task_id=task["id"]).json()
    assert record["task_id"] == task["id"]
    assert [f["id"] for f in manager.get(f"/api/tasks/{task['id']}/files").json()] == [record["id"]]


def test_upload_with_foreign_task(project_with_roles, project_id, admin_client, count_activities):
    other = admin_client.post("/api/projects", json={"name": "Other"}).json()
    foreign = admin_client.post(f"/api/projects/{other['id']}/tasks", json={"name": "X"}).json()
    before = count_activities(project_id)

    response = upload(project_with_roles["manager"], project_id, task_id=foreign["id"])
    assert response.status_code == 400
    assert response.json()["message"] == "Task does not belong to this project"
    assert count_activities(project_id) == before


def test_outsider_cannot_upload(project_with_roles, project_id):
    assert upload(project_with_roles["outsider"], project_id).status_code == 403


def test_uploader_deletes_own_file(project_with_roles, project_id, db, count_activities):
    member = project_with_roles["member"]
    record = upload(member, project_id).json()
    path = _stored_path(db, record["id"])
    before = count_activities(project_id)

    response = member.delete(f"/api/files/{record['id']}")
    assert response.status_code == 200
    assert not os.path.exists(path)
    assert _stored_path(db, record["id"]) is None
    assert count_activities(project_id) == before + 1


def test_member_cannot_delete_others_file(project_with_roles, project_id):
    record = upload(project_with_roles["manager"], project_id).json()
    assert project_with_roles["member"].delete(f"/api/files/{record['id']}").status_code == 403


def test_manager_deletes_any_file(project_with_roles, project_id):
    record = upload(project_with_roles["member"], project_id).json()
    assert project_with_roles["manager"].delete(f"/api/files/{record['id']}").status_code == 200


def test_download_missing_physical_file(project_with_roles, project_id, db):
    member = project_with_roles["member"]
    record = upload(member, project_id).json()
    os.remove(_stored_path(db, record["id"]))

    response = member.get(f"/api/files/{record['id']}/download")
    assert response.status_code == 404
    assert response.json()["message"] == "Stored file not found"


def test_unknown_file(project_with_roles):
    assert project_with_roles["member"].get("/api/files/999/download").status_code == 404
    assert project_with_roles["member"].delete("/api/files/999").status_code == 404


def test_failed_delete_keeps_record_and_file(project_with_roles, project_id, db, monkeypatch):
    member = project_with_roles["member"]
    record = upload(member, project_id).json()
    path = _stored_path(db, record["id"])

    original_delete = FileRepository.delete
    original_commit = Storage.commit

    def delete_and_mark(self, entity):
        original_delete(self, entity)
        self.db.info["fail_next_commit"] = True

    def failing_commit(self):
        if self.db.info.pop("fail_next_commit", False):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))
        original_commit(self)

    monkeypatch.setattr(FileRepository, "delete", delete_and_mark)
    monkeypatch.setattr(Storage, "commit", failing_commit)

    response = member.delete(f"/api/files/{record['id']}")
    assert response.status_code == 500
    assert _stored_path(db, record["id"]) == path
    assert os.path.exists(path)
    assert os.listdir(os.path.dirname(path)) == [os.path.basename(path)]

    monkeypatch.undo()
    assert member.get(f"/api/files/{record['id']}/download").content == b"hello world"


def test_attachments_are_not_served_statically(project_with_roles, project_id, db, anonymous):
    record = upload(project_with_roles["member"], project_id).json()
    name = os.path.basename(_stored_path(db, record["id"]))

    assert anonymous.get(f"/uploads/projects/{project_id}/{name}").status_code == 404
