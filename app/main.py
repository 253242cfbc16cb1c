from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings
from app.core.database import build_engine, build_session_factory, init_db
from app.core.handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.api.v1.router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the students table on startup if it is missing."""
    init_db(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(config: Settings = settings) -> FastAPI:
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.APP_VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )

    # Storage handle for this app, used by get_db and the lifespan
    app.state.engine = build_engine(config.DATABASE_URL, echo=config.DB_ECHO_SQL)
    app.state.SessionLocal = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_methods=config.CORS_ALLOWED_METHODS,
        allow_headers=config.CORS_ALLOWED_HEADERS,
        expose_headers=["Content-Length"],
        allow_credentials=True,
    )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=config.API_PREFIX)

    @app.get("/")
    def root():
        """
        Health check endpoint
        """
        return {
            "message": "Welcome to Student Service",
            "docs": "/docs",
            "version": config.APP_VERSION
        }

    return app


app = create_app()
