from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from plotdesk.core.config import settings
from plotdesk.core.constants import Messages
from plotdesk.core.exceptions import PlotDeskError, StorageError, InternalError, error_response
from plotdesk.core.logging_config import logger
from plotdesk.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from plotdesk.core.rate_limiter import limiter, rate_limit_exceeded_handler
from plotdesk.api.v1.router import api_router
from plotdesk.db.seed_data import seed_owner
from plotdesk.storage import get_store


def validate_config() -> None:
    """Warn about settings that are unsafe outside development"""
    warnings = []

    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        warnings.append("JWT_SECRET_KEY is not set or using default value")

    if not settings.OWNER_PASSWORD:
        warnings.append("OWNER_PASSWORD not set - owner account will not be seeded")

    if settings.AI_FEATURES_ENABLED and not settings.ANTHROPIC_API_KEY:
        warnings.append("AI_FEATURES_ENABLED is set but ANTHROPIC_API_KEY is empty - AI features stay off")

    if settings.STORAGE_BACKEND == "file" and settings.ENVIRONMENT == "production":
        warnings.append("File storage is not safe for multiple worker processes")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    if settings.ENVIRONMENT == "production" and settings.JWT_SECRET_KEY == "CHANGE_ME":
        logger.critical("[Startup] CRITICAL: refusing to start in production with the default JWT secret")
        raise RuntimeError("JWT_SECRET_KEY must be set in production")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API Version: {settings.API_VERSION}")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")

    validate_config()

    store = get_store()
    await store.init()
    await seed_owner(store)

    logger.info(f"AI features: {'enabled' if settings.ai_available else 'disabled'}")
    logger.info("=" * 60)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await store.close()


app = FastAPI(
    title=settings.APP_NAME,
    description="Plot listings, inquiries and the owner's dashboard",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_UPLOAD_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(PlotDeskError)
async def plotdesk_exception_handler(request: Request, exc: PlotDeskError):
    if isinstance(exc, StorageError):
        logger.log_error_with_context(exc, context=request.url.path, details=exc.details)
        exc = InternalError()
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": Messages.INTERNAL_ERROR}
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"/api/{settings.API_VERSION}/health"
    }


# Include API router
app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "plotdesk.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
    )
