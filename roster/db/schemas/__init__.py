"""
Pydantic schemas for request payloads and responses.
"""

from .common import Filter, CountResponse, ExistsResponse
from .teams import TeamBase, TeamCreate, TeamUpdate, Team
from .members import MemberBase, MemberCreate, MemberUpdate, Member

__all__ = [
    # Query helpers
    "Filter",
    "CountResponse",
    "ExistsResponse",
    # Teams
    "TeamBase",
    "TeamCreate",
    "TeamUpdate",
    "Team",
    # Members
    "MemberBase",
    "MemberCreate",
    "MemberUpdate",
    "Member",
]
