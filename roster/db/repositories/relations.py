"""
Team <-> Member relation traversal.

Relation paths such as "members of team X" or "team of member Y" are served
by the Member and Team repositories with the team id from the path pinned
into the payload or folded into the where.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from roster.db import models, schemas
from roster.db.errors import NotFoundError
from .members import MemberRepository
from .teams import TeamRepository


def pin_team_id(data: Optional[Dict[str, Any]], team_id: int) -> Dict[str, Any]:
    """Copy of ``data`` whose team reference is forced to ``team_id``."""
    pinned = {k: v for k, v in (data or {}).items() if k not in ('teamId', 'team_id')}
    pinned['team_id'] = team_id
    return pinned


def scope_where(where: Optional[Dict[str, Any]], team_id: int) -> Dict[str, Any]:
    """Restrict ``where`` to the members of ``team_id``."""
    scoped = {'teamId': team_id}
    if not where:
        return scoped
    return {'and': [where, scoped]}


def scope_filter(query_filter: Optional[schemas.Filter], team_id: int) -> schemas.Filter:
    query_filter = query_filter or schemas.Filter()
    return query_filter.model_copy(update={'where': scope_where(query_filter.where, team_id)})


class TeamMembersRelation:
    """Members of a team, addressed through the owning team's id."""

    def __init__(self, teams: TeamRepository, members: MemberRepository):
        self.teams = teams
        self.members = members

    def resolve_team(self, team_id: int) -> models.Team:
        return self.teams.find_by_id(team_id)

    def team_of_member(self, member_id: int) -> models.Team:
        member = self.members.find_by_id(member_id)
        if member.team_id is None:
            raise NotFoundError(f"Member with id {member_id} has no team")
        team = self.teams.get(member.team_id)
        if team is None:
            raise NotFoundError(f"Team with id {member.team_id} not found")
        return team

    def list(self, team_id: int, query_filter: Optional[schemas.Filter] = None) -> List[models.Member]:
        self.resolve_team(team_id)
        return self.members.find_all(scope_filter(query_filter, team_id))

    def count(self, team_id: int, where: Optional[Dict[str, Any]] = None) -> int:
        self.resolve_team(team_id)
        return self.members.count(scope_where(where, team_id))

    def create(self, team_id: int, data: Dict[str, Any]) -> models.Member:
        self.resolve_team(team_id)
        return self.members.create(pin_team_id(data, team_id))

    def find(self, team_id: int, member_id: int) -> models.Member:
        self.resolve_team(team_id)
        member = self.members.get(member_id)
        if member is None or member.team_id != team_id:
            raise NotFoundError(f"Member with id {member_id} not found in team {team_id}")
        return member

    def update(self, team_id: int, member_id: int, data: Dict[str, Any]) -> models.Member:
        self.find(team_id, member_id)
        return self.members.update(member_id, pin_team_id(data, team_id))

    def delete(self, team_id: int, member_id: int) -> int:
        self.find(team_id, member_id)
        return self.members.delete(member_id)

    def delete_all(self, team_id: int, where: Optional[Dict[str, Any]] = None) -> int:
        self.resolve_team(team_id)
        return self.members.delete_all(scope_where(where, team_id))
