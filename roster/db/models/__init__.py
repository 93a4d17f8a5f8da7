"""
SQLAlchemy models for the roster service.

Exposes `Base` and the ORM classes so callers can import them from
`roster.db.models` directly.
"""

from .base import Base  # re-export

from .teams import Team
from .members import Member

__all__ = [
    "Base",
    "Team",
    "Member",
]
