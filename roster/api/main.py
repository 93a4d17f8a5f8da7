"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
import os
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from roster.api.members import router as members_router
from roster.api.support import router as support_router
from roster.api.teams import router as teams_router
from roster.db.errors import DatastoreError, RepositoryError

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Roster Service",
    description="REST API for teams and their members.",
    version=os.getenv("VERSION", "1.0.0"),
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

DEFAULT_ORIGINS = "http://localhost,http://localhost:3000,http://localhost:8000"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", DEFAULT_ORIGINS).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError):
    if isinstance(exc, DatastoreError):
        logger.error("request_failed: path=%s error=%s", request.url.path, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


# Malformed payloads share the 400 status of rejected writes.
@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"detail": jsonable_encoder(exc.errors())}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception: path=%s", request.url.path)
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


app.include_router(teams_router, prefix="/api")
app.include_router(members_router, prefix="/api")
app.include_router(support_router)
