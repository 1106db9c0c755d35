from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from procurement.api.errors import register_error_handlers
from procurement.api.v1.router import v1_router
from procurement.core.config import Settings, get_settings
from procurement.core.logging import configure_logging
from procurement.core.middleware import RequestIdMiddleware
from procurement.db.session import get_session_factory
from procurement.services.registry import build_services


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    app.state.services = build_services(
        session_factory or get_session_factory(),
        timeout=settings.http_timeout,
    )

    # Middleware: Request ID
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    register_error_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


def run() -> None:
    settings = get_settings()
    host, _, port = settings.server_address.rpartition(":")
    uvicorn.run(create_app(settings), host=host or "0.0.0.0", port=int(port))


if __name__ == "__main__":
    run()
