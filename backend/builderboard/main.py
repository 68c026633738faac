"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import redis
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.middleware.sessions import SessionMiddleware
from sqlalchemy import text

from builderboard.config import get_settings
from builderboard.exceptions import DomainException
from builderboard.models.base import engine, AsyncSessionLocal, Base
from builderboard.api.v1 import router as api_v1_router
from builderboard.routes.web import router as web_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(levelname)s] %(asctime)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting %s...", settings.app_name)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")
    yield
    logger.info("Shutting down...")
    await engine.dispose()


def _field_errors(exc: RequestValidationError) -> list[dict]:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        details.append({"field": ".".join(loc) or "body", "message": message})
    return details


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {"error": code, "message": text}."""

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        if exc.status_code >= 500:
            logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

        content = {"error": exc.code, "message": exc.message}
        details = getattr(exc, "details", None)
        if details:
            content["details"] = details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = _field_errors(exc)
        logger.info(f"Validation error on {request.method} {request.url.path}: {details}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": details,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "internal_error", "message": "An unexpected error occurred"},
        )


def _ping_redis() -> None:
    r = redis.from_url(settings.redis_url, socket_timeout=5)
    r.ping()


def _active_celery_workers() -> dict | None:
    from builderboard.tasks.celery_app import celery_app
    inspect = celery_app.control.inspect(timeout=5)
    return inspect.active()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Job board for builders: applications, decision links and shortlists",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        same_site="lax",
        https_only=not settings.debug,
    )

    setup_exception_handlers(app)

    # Include API routers
    app.include_router(api_v1_router)

    # Include web routes (HTML pages)
    app.include_router(web_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "app": settings.app_name}

    @app.get("/health/detailed")
    async def detailed_health_check():
        checks = {}

        # Database
        try:
            async with AsyncSessionLocal() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()
                checks["database"] = {"ok": True}
        except Exception as e:
            checks["database"] = {"ok": False, "message": str(e)}

        # Redis
        try:
            await run_in_threadpool(_ping_redis)
            checks["redis"] = {"ok": True}
        except Exception as e:
            checks["redis"] = {"ok": False, "message": str(e)}

        # Celery workers
        try:
            active_workers = await run_in_threadpool(_active_celery_workers)
            checks["celery_workers"] = {
                "ok": bool(active_workers),
                "workers": list(active_workers.keys()) if active_workers else [],
            }
        except Exception as e:
            checks["celery_workers"] = {"ok": False, "message": str(e)}

        all_ok = all(check.get("ok", False) for check in checks.values())
        status = "healthy" if all_ok else "degraded"

        return {
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
        }

    return app


app = create_app()
