import logging
import uvicorn
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis import Redis
from sqlalchemy.engine import Engine
from app import models  # noqa: F401  registers tables on Base.metadata
from app.config import Settings, settings as default_settings
from app.database import Base, build_engine, build_session_factory
from app.ratelimit import RateLimiter, RateLimitMiddleware
from app.redis_client import connect_redis, ensure_redis
from app.revocation import RevocationStore
from app.security_headers import SecurityHeadersMiddleware
from app.tokens import TokenIssuer
from app.auth_module.routes import router as auth_router
from app.task_module.routes import router as task_router
from app.admin_module.routes import router as admin_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the Redis and database clients once per process and tear them down on shutdown.

    Startup fails if Redis does not answer: token revocation cannot be checked without it.
    """
    settings = app.state.settings
    redis_client = app.state.redis_client or connect_redis(settings)
    ensure_redis(redis_client)

    owns_engine = app.state.engine is None
    engine = app.state.engine or build_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    app.state.redis_client = redis_client
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.revocation_store = RevocationStore(redis_client)
    logging.info("Application startup complete")
    try:
        yield
    finally:
        redis_client.close()
        if owns_engine:
            engine.dispose()
        logging.info("Application shutdown complete")


def _field_name(loc) -> Optional[str]:
    parts = [str(part) for part in loc[1:]] if loc and loc[0] in ("body", "query", "path", "header") else [str(part) for part in loc]
    return ".".join(parts) or None


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")} for error in exc.errors()]
    return JSONResponse(status_code=400, content={"detail": errors})


def create_app(settings: Optional[Settings] = None, redis_client: Optional[Redis] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    app = FastAPI(title="Taskboard API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.redis_client = redis_client
    app.state.engine = engine
    app.state.token_issuer = TokenIssuer.from_settings(settings)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(SecurityHeadersMiddleware)
    if settings.RATE_LIMIT_ENABLED:
        limiter = RateLimiter(rate=settings.RATE_LIMIT_MAX_REQUESTS, period=settings.RATE_LIMIT_WINDOW_SECONDS)
        app.add_middleware(RateLimitMiddleware, limiter=limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["health"], summary="Health check")
    def health():
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(auth_router)
    app.include_router(task_router)
    app.include_router(admin_router)
    return app


app = create_app()


def run():
    settings = app.state.settings
    logging.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
