from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core import db
from app.core.config import get_settings
from app.core.database_init import init_database_schema
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import RequestContextMiddleware
from app.routers import get_api_router
from app.services.bootstrap import ensure_default_admin


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(title=settings.PROJECT_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    api_router = get_api_router()
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    def startup_event():
        init_database_schema(db.get_engine())
        ensure_default_admin()

    return app


app = create_app()
