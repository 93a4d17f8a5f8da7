"""
Member repository and the team reference gate.

Members hold a non-owning ``team_id`` reference. There is no database
constraint behind it; instead every Member write passes through
`TeamReferenceGate` before reaching the datastore.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from roster.db import models
from roster.db.errors import ValidationError
from .base import CrudRepository
from .teams import TeamRepository

logger = logging.getLogger(__name__)


class TeamReferenceGate:
    """Reject Member writes whose ``team_id`` names a Team that does not exist.

    Receives the fields about to be written: the full record on create and
    replace, only the changed fields on partial updates. A missing, empty or
    null ``team_id`` needs no check. Lookup failures propagate unchanged.

    The lookup and the following write are separate round-trips, so a Team
    deleted in between leaves a dangling reference.
    """

    def __init__(self, teams: TeamRepository):
        self.teams = teams

    def __call__(self, changes: Dict[str, Any]) -> None:
        team_id = changes.get('team_id')
        if team_id is None or team_id == '':
            return
        if self.teams.get(team_id) is None:
            logger.info("member_rejected: team_id=%s reason=unknown_team", team_id)
            raise ValidationError(f"Team with id {team_id} does not exist.")


class MemberRepository(CrudRepository):
    model = models.Member

    def __init__(self, db: Session, teams: TeamRepository):
        super().__init__(db)
        self.add_before_write(TeamReferenceGate(teams))
