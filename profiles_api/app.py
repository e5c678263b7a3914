"""
Application factory for the profiles API.

Run with::

    uvicorn profiles_api.app:create_app --factory

Every collaborator (database, repositories, services, token verifier) is
built here from explicit settings and published on ``app.state`` for the
routers to pick up.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from profiles_api.core.config import Settings, get_settings
from profiles_api.core.logging_config import setup_logging
from profiles_api.core.security import TokenVerifier
from profiles_api.db.session import Database
from profiles_api.repositories.profile_repository import ProfileRepository
from profiles_api.repositories.subscription_repository import SubscriptionRepository
from profiles_api.routers import profiles as profiles_router
from profiles_api.services.query_service import QueryService
from profiles_api.services.relationship_service import RelationshipService

request_logger = logging.getLogger("profiles_api.requests")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client and status code of every request."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        client = request.client.host if request.client else "unknown"
        request_logger.debug(
            "%s %s [%s] - %d", request.method, request.url.path, client, response.status_code
        )
        return response


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn and with tests."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    database = database or Database.from_settings(settings)
    if settings.app_env != "prod":
        # production schema is managed with `python -m profiles_api.db.create_tables`
        database.create_all()

    subscriptions = SubscriptionRepository()
    profiles = ProfileRepository(database, subscriptions)

    app = FastAPI(title="Profiles API")
    app.state.settings = settings
    app.state.database = database
    app.state.profile_repository = profiles
    app.state.relationship_service = RelationshipService(database, profiles, subscriptions)
    app.state.query_service = QueryService(database, profiles, subscriptions)
    app.state.token_verifier = TokenVerifier(settings.jwt_secret, settings.jwt_algorithm)

    origins = list(settings.cors_allowed_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["X-Requested-With", "Content-Type", "Authorization"],
            max_age=86400,
        )
    app.add_middleware(RequestLogMiddleware)

    app.include_router(profiles_router.router)
    return app
