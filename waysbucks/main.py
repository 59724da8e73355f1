# main.py
from contextlib import asynccontextmanager
import logging
from pathlib import Path

from dotenv import load_dotenv

# Ensure repo-root .env is loaded for the running server process.
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from waysbucks.config import settings
from waysbucks.config import build_sqlalchemy_db_url
from waysbucks.database import Base, engine
from waysbucks.errors import register_error_handlers
from waysbucks.logging_config import configure_logging
from waysbucks.models import Product, Profile, User  # noqa: F401  # register tables
from waysbucks.api.routes.health import router as health_router
from waysbucks.routers import admin, auth, products, profiles, users


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting %s v%s environment=%s", settings.app_name, settings.version, settings.environment)
        yield

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(application)

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(auth.router, prefix=settings.api_prefix)
    application.include_router(users.router, prefix=settings.api_prefix)
    application.include_router(profiles.router, prefix=settings.api_prefix)
    application.include_router(products.router, prefix=settings.api_prefix)
    application.include_router(admin.router, prefix=settings.api_prefix)

    # Avoid accidental schema changes in shared MySQL databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
