"""
Project authorization policy.

One decision function for every project-scoped endpoint:

    authorize(actor, capability, scope) -> Verdict

- A global admin is always allowed.
- Anyone else must be a member of the project the resource belongs to.
- The member's project role must grant the capability, except for
  capabilities on owned resources (files, comments), which the owner keeps
  whatever their role.

Pure Python logic - no FastAPI imports, no database access. The request
glue lives in ``launchpro.core.permissions``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from launchpro.models.project import ProjectRole
from launchpro.models.user import GlobalRole


# ============================================================================
# Capabilities
# ============================================================================

class Capability:
    PROJECT_VIEW = "project:view"
    PROJECT_UPDATE = "project:update"
    PROJECT_DELETE = "project:delete"

    MEMBER_VIEW = "member:view"
    MEMBER_MANAGE = "member:manage"
    MEMBER_SET_ROLE = "member:set_role"

    PHASE_VIEW = "phase:view"
    PHASE_MANAGE = "phase:manage"

    TASK_VIEW = "task:view"
    TASK_CREATE = "task:create"
    TASK_UPDATE = "task:update"
    TASK_DELETE = "task:delete"

    CHECKLIST_VIEW = "checklist:view"
    CHECKLIST_MANAGE = "checklist:manage"

    FILE_VIEW = "file:view"
    FILE_UPLOAD = "file:upload"
    FILE_DELETE = "file:delete"

    COMMENT_VIEW = "comment:view"
    COMMENT_CREATE = "comment:create"
    COMMENT_DELETE = "comment:delete"

    ACTIVITY_VIEW = "activity:view"


_MEMBER_CAPABILITIES = frozenset({
    Capability.PROJECT_VIEW,
    Capability.MEMBER_VIEW,
    Capability.PHASE_VIEW,
    Capability.TASK_VIEW,
    Capability.TASK_CREATE,
    Capability.TASK_UPDATE,
    Capability.CHECKLIST_VIEW,
    Capability.CHECKLIST_MANAGE,
    Capability.FILE_VIEW,
    Capability.FILE_UPLOAD,
    Capability.COMMENT_VIEW,
    Capability.COMMENT_CREATE,
    Capability.ACTIVITY_VIEW,
})

_MANAGER_CAPABILITIES = _MEMBER_CAPABILITIES | {
    Capability.PROJECT_UPDATE,
    Capability.MEMBER_MANAGE,
    Capability.PHASE_MANAGE,
    Capability.TASK_DELETE,
    Capability.FILE_DELETE,
    Capability.COMMENT_DELETE,
}

_ADMIN_CAPABILITIES = _MANAGER_CAPABILITIES | {
    Capability.PROJECT_DELETE,
    Capability.MEMBER_SET_ROLE,
}

ROLE_CAPABILITIES: Dict[str, FrozenSet[str]] = {
    ProjectRole.ADMIN: frozenset(_ADMIN_CAPABILITIES),
    ProjectRole.MANAGER: frozenset(_MANAGER_CAPABILITIES),
    ProjectRole.MEMBER: _MEMBER_CAPABILITIES,
}

# Capabilities the resource owner holds regardless of project role
OWNER_CAPABILITIES: FrozenSet[str] = frozenset({
    Capability.FILE_DELETE,
    Capability.COMMENT_DELETE,
})


# ============================================================================
# Decision
# ============================================================================

@dataclass(frozen=True)
class ProjectScope:
    """What the policy needs to know about the resource being accessed."""
    project_id: int
    member_role: Optional[str] = None
    owner_id: Optional[int] = None

    @property
    def is_member(self) -> bool:
        return self.member_role is not None


@dataclass(frozen=True)
class Verdict:
    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed


def authorize(actor, capability: str, scope: ProjectScope) -> Verdict:
    """Decide whether ``actor`` (anything with ``id`` and ``role``) may use ``capability``."""
    if getattr(actor, "role", None) == GlobalRole.ADMIN:
        return Verdict(True, "global admin")

    if not scope.is_member:
        return Verdict(False, f"user {actor.id} is not a member of project {scope.project_id}")

    if capability in ROLE_CAPABILITIES.get(scope.member_role, frozenset()):
        return Verdict(True, f"project role '{scope.member_role}' grants {capability}")

    if capability in OWNER_CAPABILITIES and scope.owner_id is not None and scope.owner_id == actor.id:
        return Verdict(True, "resource owner")

    return Verdict(False, f"project role '{scope.member_role}' lacks {capability}")


def effective_capabilities(actor, scope: ProjectScope) -> FrozenSet[str]:
    """All project capabilities ``actor`` holds in ``scope`` (for client-side gating)."""
    if getattr(actor, "role", None) == GlobalRole.ADMIN:
        return ROLE_CAPABILITIES[ProjectRole.ADMIN]
    return ROLE_CAPABILITIES.get(scope.member_role, frozenset())
