"""
Members API endpoints.

CRUD routes for members, the member's team, and the member collection of
that team (``/Members/{id}/team/members``).
"""
from fastapi import Depends

from roster.api.crud import crud_router
from roster.api.deps import get_member_repository, get_team_members
from roster.api.relations import member_collection_routes
from roster.db import schemas
from roster.db.repositories import TeamMembersRelation

router = crud_router(
    prefix="/Members",
    tags=["members"],
    repository=get_member_repository,
    create_schema=schemas.MemberCreate,
    update_schema=schemas.MemberUpdate,
    response_schema=schemas.Member,
)


@router.get("/{id}/team", response_model=schemas.Team)
def get_team_of_member(id: int, relation: TeamMembersRelation = Depends(get_team_members)):
    return relation.team_of_member(id)


member_collection_routes(
    router,
    "/{id}/team/members",
    lambda member_id, relation: relation.team_of_member(member_id).id,
)
