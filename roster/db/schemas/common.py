from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field


class Filter(BaseModel):
    """Structured query accepted through the ``filter`` query parameter."""

    where: Dict[str, Any] | None = None
    order: str | List[str] | None = None
    limit: int | None = Field(default=None, ge=0)
    skip: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    model_config = ConfigDict(extra='ignore')

    @property
    def start(self) -> int | None:
        return self.skip if self.skip is not None else self.offset


class CountResponse(BaseModel):
    count: int


class ExistsResponse(BaseModel):
    exists: bool
