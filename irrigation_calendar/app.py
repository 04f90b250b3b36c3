"""FastAPI application factory for the irrigation calendar gateway."""

from __future__ import annotations

import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import PlainTextResponse

from .accounts import AccountRegistry
from .config import Settings, get_settings
from .errors import NoAccountsResolved, RegistryUnavailable
from .routers import schedule_router
from .utils import log_error


async def _no_accounts_handler(request: Request, exc: NoAccountsResolved) -> PlainTextResponse:
    return PlainTextResponse("Invalid account", status_code=404)


async def _registry_unavailable_handler(request: Request, exc: RegistryUnavailable) -> PlainTextResponse:
    return PlainTextResponse("Server configuration error", status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    registry = AccountRegistry.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        print("Starting Irrigation Calendar server...")
        print(f"Loaded {len(registry)} account(s): {', '.join(registry.names)}")
        yield
        print("Server shutdown completed.")

    app = FastAPI(title="Irrigation Calendar", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.registry = registry

    app.add_exception_handler(NoAccountsResolved, _no_accounts_handler)
    app.add_exception_handler(RegistryUnavailable, _registry_unavailable_handler)

    @app.middleware("http")
    async def catch_all_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:  # pylint: disable=broad-except
            log_error("unhandled_error", f"Unhandled error serving {request.method} {request.url.path}", exception=exc)
            traceback.print_exc()
            return PlainTextResponse("Something went wrong", status_code=500)

    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)

    app.include_router(schedule_router.router)

    return app
