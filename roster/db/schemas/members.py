from pydantic import BaseModel, ConfigDict, Field


class MemberBase(BaseModel):
    name: str
    role: str
    team_id: int | None = Field(default=None, alias='teamId')
    model_config = ConfigDict(populate_by_name=True)


class MemberCreate(MemberBase):
    id: int | None = None


class MemberUpdate(BaseModel):
    id: int | None = None
    name: str | None = None
    role: str | None = None
    team_id: int | None = Field(default=None, alias='teamId')
    model_config = ConfigDict(populate_by_name=True)


class Member(MemberBase):
    id: int
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
