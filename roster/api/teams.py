"""
Teams API endpoints.

CRUD routes for teams plus the ``/Teams/{id}/members`` collection.
"""
from roster.api.crud import crud_router
from roster.api.deps import get_team_repository
from roster.api.relations import member_collection_routes
from roster.db import schemas

router = crud_router(
    prefix="/Teams",
    tags=["teams"],
    repository=get_team_repository,
    create_schema=schemas.TeamCreate,
    update_schema=schemas.TeamUpdate,
    response_schema=schemas.Team,
)

# The path id already is the team id; the relation itself answers 404 for
# a missing team.
member_collection_routes(
    router,
    "/{id}/members",
    lambda team_id, relation: team_id,
)
