import logging
import threading
from contextlib import asynccontextmanager
from textwrap import dedent
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles

from database import DocumentStore, init_db
from portfolio_api.adapters.storage import MEDIA_ROUTE, BlobStore, LocalBlobStore, init_blob_store
from portfolio_api.config.settings import Settings
from portfolio_api.errors import (
    PortfolioAPIError,
    handle_broad_exceptions,
    handle_portfolio_errors,
    handle_pydantic_validation_errors,
)
from portfolio_api.routers import API_ROUTERS
from portfolio_api.routers.health import router as health_router

# Set up logging
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    blob_store: Optional[BlobStore] = None,
) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level)

    if store is None:
        logger.info("creating db")
        store = init_db(
            mongo_uri=settings.mongo_uri,
            db_path=settings.db_path,
            mongo_db_name=settings.mongo_db_name,
        )
    if blob_store is None:
        blob_store = init_blob_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Portfolio API started in {settings.deployment_mode} mode")
        yield
        app.state.store.close()

    app = FastAPI(
        title="Portfolio API",
        summary="Content backend for a personal portfolio site",
        version="v1",
        description=dedent(
            """\
        Profile, projects, experience, certifications, testimonials and contact messages.

        | Write routes | Notes |
        | --- | --- |
        | `POST /api/profile`, `POST/PUT /api/projects`, `POST /api/certifications` | multipart form; optional `photo` / `image` file |
        | all other writes | JSON object or form fields |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    # Registered first so CORS wraps it and error responses keep the CORS headers
    app.middleware("http")(handle_broad_exceptions)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.store = store
    app.state.blob_store = blob_store
    app.state.singleton_lock = threading.Lock()

    for router, tag in API_ROUTERS:
        app.include_router(router, prefix="/api", tags=[tag])
    app.include_router(health_router, tags=["health"])

    if isinstance(blob_store, LocalBlobStore):
        app.mount(MEDIA_ROUTE, StaticFiles(directory=blob_store.storage_dir), name="media")

    app.add_exception_handler(
        exc_class_or_status_code=PortfolioAPIError,
        handler=handle_portfolio_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
