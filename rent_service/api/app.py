import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    message = "Service temporarily unavailable" if exc.status_code == 503 else "Internal server error"
    error_dict = {"code": exc.base_error.code, "message": message}
    logger.error(f"Server error: {exc.base_error.code} ({exc.base_error.message})")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        scanner = None
        if ApplicationConfig.ENABLE_OVERDUE_SCANNER:
            from rent_service.adapter.services.clock import SystemClock
            from rent_service.depends import AsyncSessionLocal
            from rent_service.jobs.overdue_scanner import run_overdue_scanner

            scanner = asyncio.create_task(
                run_overdue_scanner(
                    AsyncSessionLocal,
                    SystemClock(),
                    ApplicationConfig.OVERDUE_SCAN_INTERVAL_SECONDS,
                )
            )
        yield
        if scanner is not None:
            scanner.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await scanner

    app = FastAPI(title="Rent Service", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from rent_service.api.routes import admin, health_check, rents

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(rents.router, tags=["Rent"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
