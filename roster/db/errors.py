"""
Repository error taxonomy.

Each error carries the HTTP status the API layer answers with, so routes do
not need to translate them one by one.
"""
from __future__ import annotations


class RepositoryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RepositoryError):
    """Rejected write or malformed query: missing fields, bad filters, unknown team."""

    status_code = 400


class NotFoundError(RepositoryError):
    status_code = 404


class DatastoreError(RepositoryError):
    """The underlying store failed; the session has already been rolled back."""

    status_code = 500


class ConflictError(RepositoryError):
    """The write collides with an existing row, e.g. an explicit id already in use."""

    status_code = 409
