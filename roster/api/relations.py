"""
Nested member collection routes.

Both ``/Teams/{id}/members`` and ``/Members/{id}/team/members`` address the
members of one team; they differ only in how the path id turns into a team
id. `member_collection_routes` registers the shared routes given that
resolver.
"""
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from roster.api.deps import get_team_members
from roster.db import filters, schemas
from roster.db.repositories import TeamMembersRelation

TeamIdResolver = Callable[[int, TeamMembersRelation], int]


def member_collection_routes(router: APIRouter, path: str, resolve_team_id: TeamIdResolver) -> None:

    @router.get(path, response_model=List[schemas.Member])
    def list_members(
        id: int,
        filter: Optional[str] = Query(default=None),
        relation: TeamMembersRelation = Depends(get_team_members),
    ):
        return relation.list(resolve_team_id(id, relation), filters.parse_filter(filter))

    @router.post(path, response_model=schemas.Member)
    def create_member(
        id: int,
        body: schemas.MemberCreate,
        relation: TeamMembersRelation = Depends(get_team_members),
    ):
        return relation.create(resolve_team_id(id, relation), body.model_dump(exclude_unset=True))

    @router.delete(path, status_code=status.HTTP_204_NO_CONTENT)
    def delete_members(
        id: int,
        where: Optional[str] = Query(default=None),
        relation: TeamMembersRelation = Depends(get_team_members),
    ):
        relation.delete_all(resolve_team_id(id, relation), filters.parse_json_param(where, "where"))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get(f"{path}/count", response_model=schemas.CountResponse)
    def count_members(
        id: int,
        where: Optional[str] = Query(default=None),
        relation: TeamMembersRelation = Depends(get_team_members),
    ):
        return {"count": relation.count(resolve_team_id(id, relation), filters.parse_json_param(where, "where"))}

    @router.get(f"{path}/{{fk}}", response_model=schemas.Member)
    def get_member(id: int, fk: int, relation: TeamMembersRelation = Depends(get_team_members)):
        return relation.find(resolve_team_id(id, relation), fk)

    @router.put(f"{path}/{{fk}}", response_model=schemas.Member)
    def update_member(
        id: int,
        fk: int,
        body: schemas.MemberUpdate,
        relation: TeamMembersRelation = Depends(get_team_members),
    ):
        return relation.update(resolve_team_id(id, relation), fk, body.model_dump(exclude_unset=True))

    @router.delete(f"{path}/{{fk}}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_member(id: int, fk: int, relation: TeamMembersRelation = Depends(get_team_members)):
        relation.delete(resolve_team_id(id, relation), fk)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
