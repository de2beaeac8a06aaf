from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gigflow.core.config import Settings, get_settings
from gigflow.core.logging import configure_logging
from gigflow.core.middleware import RequestIdMiddleware
from gigflow.api.v1.router import v1_router
from gigflow.db.base import Base
from gigflow.db.session import build_engine, build_session_factory
from gigflow.db.store import EntityStore

import gigflow.models  # noqa: F401  (register tables on Base.metadata)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    engine = build_engine(settings)
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.store = EntityStore(build_session_factory(engine))

    # Middleware: Request ID
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()
