from types import SimpleNamespace

import pytest

from launchpro.core.authz import (
    OWNER_CAPABILITIES,
    ROLE_CAPABILITIES,
    Capability,
    ProjectScope,
    authorize,
    effective_capabilities,
)


def actor(user_id=7, role="user"):
    return SimpleNamespace(id=user_id, role=role)


def test_global_admin_allowed_without_membership():
    verdict = authorize(actor(role="admin"), Capability.PROJECT_DELETE, ProjectScope(project_id=1))
    assert verdict
    assert verdict.reason == "global admin"


def test_non_member_denied():
    verdict = authorize(actor(), Capability.PROJECT_VIEW, ProjectScope(project_id=1))
    assert not verdict
    assert "not a member" in verdict.reason


@pytest.mark.parametrize("capability", [
    Capability.PROJECT_VIEW,
    Capability.TASK_CREATE,
    Capability.TASK_UPDATE,
    Capability.CHECKLIST_MANAGE,
    Capability.FILE_UPLOAD,
    Capability.COMMENT_CREATE,
    Capability.ACTIVITY_VIEW,
])
def test_member_capabilities(capability):
    assert authorize(actor(), capability, ProjectScope(1, member_role="member"))


@pytest.mark.parametrize("capability", [
    Capability.PROJECT_UPDATE,
    Capability.MEMBER_MANAGE,
    Capability.PHASE_MANAGE,
    Capability.TASK_DELETE,
])
def test_manager_only_capabilities(capability):
    assert not authorize(actor(), capability, ProjectScope(1, member_role="member"))
    assert authorize(actor(), capability, ProjectScope(1, member_role="manager"))
    assert authorize(actor(), capability, ProjectScope(1, member_role="admin"))


@pytest.mark.parametrize("capability", [Capability.PROJECT_DELETE, Capability.MEMBER_SET_ROLE])
def test_admin_only_capabilities(capability):
    assert not authorize(actor(), capability, ProjectScope(1, member_role="manager"))
    assert authorize(actor(), capability, ProjectScope(1, member_role="admin"))


@pytest.mark.parametrize("capability", sorted(OWNER_CAPABILITIES))
def test_owner_keeps_delete_on_own_resources(capability):
    assert authorize(actor(user_id=7), capability, ProjectScope(1, member_role="member", owner_id=7))
    assert not authorize(actor(user_id=7), capability, ProjectScope(1, member_role="member", owner_id=8))


def test_owner_must_still_be_member():
    assert not authorize(actor(user_id=7), Capability.FILE_DELETE, ProjectScope(1, owner_id=7))


def test_unknown_role_grants_nothing():
    assert not authorize(actor(), Capability.PROJECT_VIEW, ProjectScope(1, member_role="guest"))


def test_roles_are_nested():
    assert ROLE_CAPABILITIES["member"] < ROLE_CAPABILITIES["manager"] < ROLE_CAPABILITIES["admin"]


def test_effective_capabilities():
    assert effective_capabilities(actor(), ProjectScope(1)) == frozenset()
    assert effective_capabilities(actor(role="admin"), ProjectScope(1)) == ROLE_CAPABILITIES["admin"]
    assert Capability.TASK_DELETE in effective_capabilities(actor(), ProjectScope(1, member_role="manager"))
