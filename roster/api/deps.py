"""
API dependency helpers.

Builds request-scoped repositories on top of the session from `get_db`. The
Member repository receives the Team repository explicitly so its team
reference gate can look teams up without a global registry.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from roster.db.database import get_db
from roster.db.repositories import MemberRepository, TeamMembersRelation, TeamRepository


def get_team_repository(db: Session = Depends(get_db)) -> TeamRepository:
    return TeamRepository(db)


def get_member_repository(teams: TeamRepository = Depends(get_team_repository)) -> MemberRepository:
    return MemberRepository(teams.db, teams)


def get_team_members(
    teams: TeamRepository = Depends(get_team_repository),
    members: MemberRepository = Depends(get_member_repository),
) -> TeamMembersRelation:
    return TeamMembersRelation(teams, members)
