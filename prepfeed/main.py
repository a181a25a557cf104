from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from . import __version__
from .core.config import settings
from .core.errors import PrepFeedError
from .core.logging import setup_logging
from .core.monitoring import set_system_info
from .db.database import SessionLocal, init_db
from .middleware.logging import log_request
from .middleware.rate_limit import setup_rate_limiting
from .routes import current_affairs, health, profile, recommendations

setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up application...")
    init_db()
    logger.info("Database schema ready")

    if settings.SEED_ON_STARTUP:
        from .data.seed import seed_database
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()

    environment = "production" if os.getenv("ENV") == "production" else "development"
    set_system_info(__version__, environment)
    logger.info(f"API Version: {settings.API_V1_STR}, environment: {environment}")
    yield
    logger.info("Shutting down application...")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

setup_rate_limiting(app)

@app.exception_handler(PrepFeedError)
async def prepfeed_error_handler(request: Request, exc: PrepFeedError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})

@app.middleware("http")
async def global_error_handler(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"Unhandled error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "status_code": 500
            }
        )

app.middleware("http")(log_request)

# CORS middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Root endpoint for health check
@app.get("/")
async def root():
    return {"status": "healthy", "message": settings.PROJECT_NAME}

# Recommendations go first so /current-affairs/recommendations is not taken for an article id
app.include_router(health.router)
app.include_router(recommendations.router, prefix=settings.API_V1_STR)
app.include_router(current_affairs.router, prefix=settings.API_V1_STR)
app.include_router(profile.router, prefix=settings.API_V1_STR)
