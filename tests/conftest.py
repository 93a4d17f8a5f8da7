import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from roster.api.main import app
from roster.db import models
from roster.db.database import SessionLocal, engine
from roster.db.repositories import MemberRepository, TeamMembersRelation, TeamRepository


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session (SQLite in-memory resets per process)."""
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Empty all tables before each test without dropping metadata."""
    with engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def teams(db_session: Session):
    return TeamRepository(db_session)


@pytest.fixture
def members(db_session: Session, teams):
    return MemberRepository(db_session, teams)


@pytest.fixture
def relation(teams, members):
    return TeamMembersRelation(teams, members)


@pytest.fixture
def team_factory(teams):
    def _create(name: str = "Team", description: str = None):
        return teams.create({"name": name, "description": description})
    return _create


@pytest.fixture
def member_factory(members):
    def _create(name: str = "Member", role: str = "member", team_id: int = None):
        return members.create({"name": name, "role": role, "team_id": team_id})
    return _create


@pytest.fixture
def client():
    return TestClient(app)
