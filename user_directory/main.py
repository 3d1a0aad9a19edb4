import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from user_directory.core.bootstrap import bootstrap_app
from user_directory.core.config import settings
from user_directory.core.error_handlers import register_exception_handlers
from user_directory.core.middlewares import request_logging_middleware, limiter, rate_limit_exceeded_handler
from user_directory.db import db_manager

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown, creating the schema when
    configured to and releasing the connection pool on exit.
    """
    logger.info("Starting application...")

    if settings.DB_CREATE_TABLES:
        logger.info("Creating database tables...")
        await db_manager.create_all()
        logger.info("Database tables ready.")

    yield

    logger.info("Shutting down application...")
    logger.info("Disposing database engine...")
    await db_manager.dispose()
    logger.info("Database engine disposed.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    version=settings.VERSION,
    lifespan=lifespan,
)

# Rate limiter state and handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

# Request logging middleware
app.middleware("http")(request_logging_middleware)

register_exception_handlers(app)

bootstrap_app(app)


# Health check endpoint (useful for monitoring)
@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.VERSION}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.PROJECT_NAME,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0",
                port=8000,
                log_level=settings.LOG_LEVEL.lower()
        )
