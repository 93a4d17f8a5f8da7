"""
App assembly entry point.

Re-exports the FastAPI `app` from `roster.api.main` so servers can be pointed
at `app:app`.
"""

from roster.api.main import app  # noqa: F401
