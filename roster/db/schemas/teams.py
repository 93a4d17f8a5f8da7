from pydantic import BaseModel, ConfigDict


class TeamBase(BaseModel):
    name: str
    description: str | None = None


class TeamCreate(TeamBase):
    id: int | None = None


class TeamUpdate(BaseModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None


class Team(TeamBase):
    id: int
    model_config = ConfigDict(from_attributes=True)
