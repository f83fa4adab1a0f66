import os

# must be set before launchpro.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from launchpro.config import settings  # noqa: E402
from launchpro.core.security import hash_password  # noqa: E402
from launchpro.database.base import Base  # noqa: E402
from launchpro.database.session import get_db  # noqa: E402
from launchpro.main import app  # noqa: E402
from launchpro.models.activity import Activity  # noqa: E402
from launchpro.models.user import User  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def app_overrides(session_factory, tmp_path, monkeypatch):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def anonymous():
    return TestClient(app)


@pytest.fixture()
def make_user(db):
    def _make(username, role="user", name=None, password=PASSWORD):
        user = User(
            username=username,
            name=name or username.capitalize(),
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture()
def login():
    def _login(username, password=PASSWORD):
        client = TestClient(app)
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return client
    return _login


@pytest.fixture()
def admin_user(make_user):
    return make_user("alice", role="admin")


@pytest.fixture()
def admin_client(admin_user, login):
    return login("alice")


@pytest.fixture()
def count_activities(db):
    def _count(project_id=None):
        db.expire_all()
        query = db.query(Activity)
        if project_id is not None:
            query = query.filter(Activity.project_id == project_id)
        return query.count()
    return _count


@pytest.fixture()
def project_with_roles(make_user, login, admin_client):
    """A project created by the global admin with a manager, a member and an outsider."""
    manager = make_user("maria")
    member = make_user("mike")
    outsider = make_user("oscar")

    project = admin_client.post("/api/projects", json={"name": "Launch"}).json()
    for user, role in ((manager, "manager"), (member, "member")):
        response = admin_client.post(
            f"/api/projects/{project['id']}/members",
            json={"user_id": user.id, "role": role},
        )
        assert response.status_code == 201, response.text

    return {
        "project": project,
        "admin": admin_client,
        "manager": login("maria"),
        "member": login("mike"),
        "outsider": login("oscar"),
        "users": {"manager": manager, "member": member, "outsider": outsider},
    }
