from sqlalchemy import Column, Index, Integer, String
from .base import Base


class Member(Base):
    __tablename__ = 'member'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    # Non-owning reference to team.id. Integrity is checked by the
    # repository before each write, not by a database constraint.
    team_id = Column(Integer, nullable=True)

    field_aliases = {'teamId': 'team_id'}
    required_fields = ('name', 'role')

    __table_args__ = (
        Index('idx_member_team_id', 'team_id'),
    )
