"""
Team repository.
"""
from __future__ import annotations

from roster.db import models
from .base import CrudRepository


class TeamRepository(CrudRepository):
    model = models.Team
