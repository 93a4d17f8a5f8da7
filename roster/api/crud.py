"""
CRUD endpoint factory.

Team and Member expose the same set of collection and single-record routes;
`crud_router` registers them for one entity against a repository dependency.
Static segments (``count``, ``findOne`` ...) are registered before ``/{id}``
so they are never captured as an id.
"""
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from roster.db import filters, schemas
from roster.db.errors import NotFoundError


def crud_router(
    *,
    prefix: str,
    tags: List[str],
    repository: Callable,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags)

    def _payload(body: BaseModel) -> dict:
        return body.model_dump(exclude_unset=True)

    @router.get("", response_model=List[response_schema])
    def find_all(filter: Optional[str] = Query(default=None), repo=Depends(repository)):
        return repo.find_all(filters.parse_filter(filter))

    @router.post("", response_model=response_schema)
    def create(body: create_schema, repo=Depends(repository)):
        return repo.create(_payload(body))

    @router.patch("", response_model=response_schema)
    def patch_or_create(body: update_schema, repo=Depends(repository)):
        return repo.patch_or_create(_payload(body))

    @router.put("", response_model=response_schema)
    def replace_or_create_put(body: update_schema, repo=Depends(repository)):
        return repo.replace_or_create(_payload(body))

    @router.get("/count", response_model=schemas.CountResponse)
    def count(where: Optional[str] = Query(default=None), repo=Depends(repository)):
        return {"count": repo.count(filters.parse_json_param(where, "where"))}

    @router.get("/findOne", response_model=response_schema)
    def find_one(filter: Optional[str] = Query(default=None), repo=Depends(repository)):
        return repo.find_one(filters.parse_filter(filter))

    @router.post("/replaceOrCreate", response_model=response_schema)
    def replace_or_create(body: update_schema, repo=Depends(repository)):
        return repo.replace_or_create(_payload(body))

    @router.post("/update", response_model=schemas.CountResponse)
    def update_all(body: update_schema, where: Optional[str] = Query(default=None), repo=Depends(repository)):
        return {"count": repo.update_all(filters.parse_json_param(where, "where"), _payload(body))}

    @router.post("/upsertWithWhere", response_model=response_schema)
    def upsert_with_where(body: update_schema, where: Optional[str] = Query(default=None), repo=Depends(repository)):
        return repo.upsert_with_where(filters.parse_json_param(where, "where"), _payload(body))

    @router.get("/{id}", response_model=response_schema)
    def find_by_id(id: int, repo=Depends(repository)):
        return repo.find_by_id(id)

    @router.head("/{id}")
    def head(id: int, repo=Depends(repository)):
        if not repo.exists(id):
            raise NotFoundError(f"{repo.name} with id {id} not found")
        return Response(status_code=status.HTTP_200_OK)

    @router.put("/{id}", response_model=response_schema)
    def replace_by_id(id: int, body: create_schema, repo=Depends(repository)):
        return repo.replace(id, _payload(body))

    @router.patch("/{id}", response_model=response_schema)
    def update_by_id(id: int, body: update_schema, repo=Depends(repository)):
        return repo.update(id, _payload(body))

    @router.delete("/{id}", response_model=schemas.CountResponse)
    def delete_by_id(id: int, repo=Depends(repository)):
        # A missing id is reported as zero rows deleted rather than 404.
        return {"count": repo.delete(id)}

    @router.get("/{id}/exists", response_model=schemas.ExistsResponse)
    def exists(id: int, repo=Depends(repository)):
        return {"exists": repo.exists(id)}

    @router.post("/{id}/replace", response_model=response_schema)
    def replace_by_id_post(id: int, body: create_schema, repo=Depends(repository)):
        return repo.replace(id, _payload(body))

    return router
