"""
Per-entity repositories for database access.

`TeamRepository` and `MemberRepository` share the generic CRUD contract in
`base`; `relations` serves the team/member relation paths on top of them.
"""

from .base import CrudRepository
from .teams import TeamRepository
from .members import MemberRepository, TeamReferenceGate
from .relations import TeamMembersRelation, pin_team_id, scope_where

__all__ = [
    "CrudRepository",
    "TeamRepository",
    "MemberRepository",
    "TeamReferenceGate",
    "TeamMembersRelation",
    "pin_team_id",
    "scope_where",
]
