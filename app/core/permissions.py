"""
Contest permission definitions and resolution.

Each user holds at most one effective role per contest. The role maps to a fixed
set of capabilities through ROLE_CAPABILITIES; `resolve_permissions` is the only
place that turns a role into capabilities, and it is also where administrator
supremacy is applied. Every permission check in the API goes through it.
"""

import enum
import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from sqlalchemy.orm import Session

from app.models.contest_role import ContestRole, ContestUserRole

logger = logging.getLogger(__name__)


# ── All available permissions ──────────────────────────────────────────────
class Permission(str, enum.Enum):
    MANAGE_CONTEST = "canManageContest"
    JUDGE = "canJudge"
    PARTICIPATE = "canParticipate"
    VIEW_RESULTS = "canViewResults"
    MANAGE_USERS = "canManageUsers"
    MANAGE_CATEGORIES = "canManageCategories"
    MANAGE_SUBMISSIONS = "canManageSubmissions"


ALL_PERMISSIONS: list[str] = [p.value for p in Permission]

# Results are public: every row, including "no role", can view them.
_VIEW_ONLY: frozenset[Permission] = frozenset({Permission.VIEW_RESULTS})

ROLE_CAPABILITIES: Mapping[ContestRole | None, frozenset[Permission]] = MappingProxyType({
    ContestRole.CONTEST_ADMINISTRATOR: frozenset({
        Permission.MANAGE_CONTEST,
        Permission.VIEW_RESULTS,
        Permission.MANAGE_USERS,
        Permission.MANAGE_CATEGORIES,
        Permission.MANAGE_SUBMISSIONS,
    }),
    ContestRole.JUDGE: frozenset({Permission.JUDGE, Permission.VIEW_RESULTS}),
    ContestRole.PARTICIPANT: frozenset({Permission.PARTICIPATE, Permission.VIEW_RESULTS}),
    ContestRole.PUBLIC_VIEWER: _VIEW_ONLY,
    None: _VIEW_ONLY,
})

# Highest first. Used when a user holds several role rows on one contest.
ROLE_PRIORITY: tuple[ContestRole, ...] = (
    ContestRole.CONTEST_ADMINISTRATOR,
    ContestRole.JUDGE,
    ContestRole.PARTICIPANT,
    ContestRole.PUBLIC_VIEWER,
)


@dataclass(frozen=True)
class ContestPermissions:
    role: ContestRole | None
    granted: frozenset[Permission]

    def allows(self, permission: Permission) -> bool:
        return permission in self.granted

    def as_flags(self) -> dict[str, bool]:
        return {p.value: p in self.granted for p in Permission}


def resolve_permissions(role: ContestRole | None) -> ContestPermissions:
    """Capabilities of `role`; a contest administrator is granted every permission."""
    granted = ROLE_CAPABILITIES.get(role, _VIEW_ONLY)
    if role is ContestRole.CONTEST_ADMINISTRATOR:
        granted = frozenset(Permission)
    return ContestPermissions(role=role, granted=granted)


def pick_role(roles: Iterable[str]) -> ContestRole | None:
    """Return the highest-priority known role among raw role values."""
    held: set[ContestRole] = set()
    for value in roles:
        try:
            held.add(ContestRole(value))
        except ValueError:
            logger.warning("Ignoring unknown contest role '%s'", value)
    for role in ROLE_PRIORITY:
        if role in held:
            return role
    return None


def get_user_contest_role(
    db: Session, user_id: str, contest_id: uuid.UUID
) -> ContestRole | None:
    rows = (
        db.query(ContestUserRole.role)
        .filter(ContestUserRole.user_id == user_id, ContestUserRole.contest_id == contest_id)
        .all()
    )
    return pick_role(r.role for r in rows)


def get_user_permissions(
    db: Session, user_id: str, contest_id: uuid.UUID
) -> ContestPermissions:
    return resolve_permissions(get_user_contest_role(db, user_id, contest_id))


def has_permission(
    db: Session, user_id: str, contest_id: uuid.UUID, permission: Permission
) -> bool:
    return get_user_permissions(db, user_id, contest_id).allows(permission)


def holds_role(db: Session, user_id: str, contest_id: uuid.UUID, role: ContestRole) -> bool:
    """True if a role row exists for exactly this (user, contest, role)."""
    row = (
        db.query(ContestUserRole.id)
        .filter(
            ContestUserRole.user_id == user_id,
            ContestUserRole.contest_id == contest_id,
            ContestUserRole.role == role.value,
        )
        .first()
    )
    return row is not None
