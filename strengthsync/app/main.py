"""
FastAPI application entry point
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from strengthsync.app.api.routes import health, strengths_import, themes
from strengthsync.app.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.RATE_LIMIT_DEFAULT])

# Create FastAPI app
app = FastAPI(
    title="StrengthSync",
    description="CliftonStrengths import pipeline: report and spreadsheet extraction, member reconciliation, preview and commit",
    version="1.0.0"
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
logger.info(f"Rate limiting enabled: {settings.RATE_LIMIT_DEFAULT}")

allowed_origins = settings.get_cors_origins()
logger.info(f"CORS enabled for origins: {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,  # Cache preflight requests for 1 hour
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
            response.headers["Content-Security-Policy"] = "default-src 'self'; frame-ancestors 'none';"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# Include API routers
app.include_router(strengths_import.router, prefix="/api", tags=["Import"])
app.include_router(themes.router, prefix="/api", tags=["Themes"])
app.include_router(health.router, prefix="/api", tags=["Health"])


@app.on_event("startup")
async def startup_event():
    """Initialize database and catalog on startup"""
    logger.info("Starting StrengthSync...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Data directory: {settings.DATA_DIR}")

    try:
        from strengthsync.app.database import get_session_local, init_db
        from strengthsync.app.services.catalog_seed import seed_catalog

        init_db()
        db = get_session_local()()
        try:
            seed_catalog(db)
        finally:
            db.close()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down StrengthSync...")
    strengths_import._thread_pool.shutdown(wait=False)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "strengthsync.app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
