"""
FastAPI Application Entry Point.
Initializes the FastAPI app with middleware, CORS, and routes.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from goonergram.config import settings
from goonergram.core.cache import cache
from goonergram.core.database import engine, AsyncSessionLocal
from goonergram.core.logging_config import configure_logging
from goonergram.core.rate_limit import limiter
from goonergram.core.websocket import connection_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    configure_logging()
    await cache.connect()
    logger.info("GoonerGram server started (%s)", settings.environment)
    yield
    # Shutdown
    await cache.disconnect()
    await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title="GoonerGram Server",
    description="FastAPI backend for the GoonerGram fan community",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add rate limiter state and error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# CORS Middleware
# Socket.IO applies its own CORS (cors_allowed_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with its status and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    if request.url.path.startswith("/api"):
        logger.info(
            "%s %s %d in %.0fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 1),
            }
        )
    return response


# Health Check Endpoints
@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "environment": settings.environment,
        }
    )


@app.get("/health/ready", tags=["Health"])
async def readiness_check():
    """
    Readiness check endpoint.
    Verifies database and cache connectivity.
    """
    checks = {
        "database": False,
        "redis": "not_configured" if not settings.redis_url else False,
    }

    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
            checks["database"] = True
    except Exception:
        logger.exception("Readiness check: database unreachable")

    if settings.redis_url:
        checks["redis"] = cache.redis is not None

    redis_ok = checks["redis"] == "not_configured" or checks["redis"] is True
    all_healthy = checks["database"] and redis_ok

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={
            "status": "ready" if all_healthy else "not ready",
            "checks": checks,
        }
    )


# Include API routers
from goonergram.api.v1 import (  # noqa: E402
    auth,
    profile,
    posts,
    stories,
    partners,
    chats,
    global_chat,
    notifications,
)

app.include_router(auth.router, prefix="/api", tags=["Authentication"])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])
app.include_router(posts.router, prefix="/api/posts", tags=["Posts"])
app.include_router(stories.router, prefix="/api/stories", tags=["Stories"])
app.include_router(partners.router, prefix="/api/partners", tags=["Partners"])
app.include_router(chats.router, prefix="/api/chats", tags=["Chats"])
app.include_router(global_chat.router, prefix="/api/global", tags=["Global Chat"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])

# Socket.IO wraps FastAPI: /socket.io/* goes to Socket.IO, everything else to FastAPI
fastapi_app = app

app = connection_manager.get_asgi_app(fastapi_app)
