from sqlalchemy import Column, Integer, String, Text
from .base import Base


class Team(Base):
    __tablename__ = 'team'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Wire name -> attribute name for fields whose names differ.
    field_aliases = {}
    required_fields = ('name',)
