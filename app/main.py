import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware

logger = logging.getLogger(__name__)

from app.api import inventory
from app.api.problems import problem_response
from app.config import Settings
from app.config import settings as default_settings
from app.database import create_db_engine, create_session_factory, init_db


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API around its own engine, created from ``settings.DATABASE_URL``."""
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = create_db_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.CREATE_TABLES:
            init_db(engine)
        yield
        engine.dispose()

    # Interactive docs only outside production
    docs_enabled = settings.ENVIRONMENT == "development"
    app = FastAPI(
        title=settings.APP_NAME,
        description="Records delivery of ordered products into warehouses",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    if settings.HTTPS_REDIRECT:
        app.add_middleware(HTTPSRedirectMiddleware)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Return a problem detail for unhandled exceptions."""
        logger.error("Unhandled error: %s\n%s", exc, traceback.format_exc())
        return problem_response(str(exc))

    app.include_router(inventory.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
