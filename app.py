from __future__ import annotations

# Standard library
import os
import logging as _logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

# Third-party
from fastapi import FastAPI, Request
from strawberry.fastapi import GraphQLRouter

# Local application imports
from domain.identity.ports.auth_provider import IAuthProvider
from domain.shared.ports.diet_chart_repository import IDietChartRepository
from domain.shared.ports.people_directory import IPeopleDirectory
from graphql_api.context import GraphQLContext, create_context
from graphql_api.schema import create_schema
from infrastructure.config import get_ward_timezone
from infrastructure.identity.auth_middleware import AuthMiddleware
from infrastructure.identity.jwt_provider import JwtAuthProvider
from infrastructure.persistence.factory import get_diet_chart_repository, get_people_directory

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Version read from env (Docker build ARG -> ENV APP_VERSION)
APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")

schema = create_schema()


def create_app(
    repository: Optional[IDietChartRepository] = None,
    directory: Optional[IPeopleDirectory] = None,
    auth_provider: Optional[IAuthProvider] = None,
    auth_required: Optional[bool] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Dependencies default to the environment-selected singletons
    (REPOSITORY_BACKEND, AUTH_JWT_SECRET, WARD_TIMEZONE). Tests pass their
    own repository / directory / provider instead.

    Raises:
        ValueError: If no auth provider is given and AUTH_JWT_SECRET is unset
    """
    repository = repository or get_diet_chart_repository()
    directory = directory or get_people_directory()
    auth_provider = auth_provider or JwtAuthProvider()
    ward_timezone = get_ward_timezone()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger = _logging.getLogger("startup")
        logger.info(
            "lifespan.startup",
            extra={
                "repository": type(repository).__name__,
                "directory": type(directory).__name__,
                "ward_timezone": str(ward_timezone),
            },
        )

        ensure_indexes = getattr(repository, "ensure_indexes", None)
        if ensure_indexes is not None:
            await ensure_indexes()
            logger.info("lifespan.mongodb_ready", extra={"collection": "diet_charts"})

        logger.info("lifespan.ready", extra={"status": "serving"})
        yield

        logger.info("lifespan.shutdown", extra={"status": "cleanup"})
        for resource in (repository, directory):
            close = getattr(resource, "close", None)
            if close is not None:
                await close()

    application = FastAPI(
        title="Hospital Meal Workflow",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    application.add_middleware(
        AuthMiddleware, auth_provider=auth_provider, auth_required=auth_required
    )

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": APP_VERSION}

    async def get_graphql_context(request: Request) -> GraphQLContext:
        """Per-request context: shared dependencies plus the caller from AuthMiddleware."""
        return create_context(
            diet_chart_repository=repository,
            people_directory=directory,
            ward_timezone=ward_timezone,
            request=request,
        )

    graphql_app: GraphQLRouter[Any, Any] = GraphQLRouter(
        schema, context_getter=get_graphql_context
    )
    application.include_router(graphql_app, prefix="/graphql")

    return application


app = create_app()


# ============================================
# Run with uvicorn
# ============================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENVIRONMENT") == "development",
    )
