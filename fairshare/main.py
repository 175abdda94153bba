from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fairshare.core.config import Settings, settings as default_settings
from fairshare.core.logging import configure_logging
from fairshare.api.v1.api import api_router
from fairshare.repositories.memory_repo import InMemoryRepository


def create_app(settings: Optional[Settings] = None, repository: Optional[InMemoryRepository] = None) -> FastAPI:
    """Build the API around its own repository (a fresh one unless given)."""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.SEED_DEMO_USERS:
            await app.state.repository.seed_users_if_empty()
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan
    )
    if repository is None:
        repository = InMemoryRepository(settings.DEFAULT_AVATAR_COLOR)
    app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
