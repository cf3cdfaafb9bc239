"""
Goodwill API - FastAPI Application
Likes, endorsements and goodwill scores between users
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from goodwill.core.config import settings
from goodwill.core.exceptions import GoodwillError
from goodwill.utils.responses import error_response

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="API for likes, endorsements and goodwill scores",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(GoodwillError)
async def goodwill_error_handler(request: Request, exc: GoodwillError):
    logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.message, status_code=exc.status_code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response("Internal Server Error", status_code=500)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - health check"""
    return {
        "ok": True,
        "message": f"Welcome to {settings.APP_NAME} API",
        "version": "1.0.0",
        "environment": settings.APP_ENV
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "environment": settings.APP_ENV
    }


@app.get("/health/db", tags=["Health"])
async def db_health_check():
    """Database connection health check"""
    from goodwill.core.database import get_engine

    result = {"connection_test": False, "error": None}

    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        result["connection_test"] = True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        result["error"] = str(e)

    return result


# Import routers
from goodwill.api import likes, history, users  # noqa: E402

# Include routers
app.include_router(likes.router, prefix="/api/v1", tags=["Likes"])
app.include_router(history.router, prefix="/api/v1", tags=["Like History"])
app.include_router(users.router, prefix="/api/v1", tags=["Users"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "goodwill.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
