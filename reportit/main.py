"""
Report-It - Main FastAPI Application
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from reportit.config import get_settings
from reportit.database import close_db, get_session_factory, init_db
from reportit.dependencies import get_memory_storage, wire_badges
from reportit.exceptions import ReportItError
from reportit.routers import auth, badges, reports
from reportit.services.photo_service import UPLOADS_URL_PREFIX
from reportit.services.user_service import UserService
from reportit.storage import SqlStorage

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def _seed_demo_users() -> None:
    if settings.storage_backend == "memory":
        await UserService(get_memory_storage()).seed_demo_users()
        return

    async with get_session_factory()() as session:
        await UserService(wire_badges(SqlStorage(session))).seed_demo_users()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting %s (%s storage)", settings.app_name, settings.storage_backend)
    if settings.storage_backend == "sql":
        await init_db()

    if settings.seed_demo_users:
        await _seed_demo_users()
        logger.info("Demo users ready")

    yield

    # Shutdown
    logger.info("Shutting down %s", settings.app_name)
    if settings.storage_backend == "sql":
        await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Municipal issue reporting: citizens file reports, admins resolve them",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReportItError)
async def report_it_error_handler(request: Request, exc: ReportItError):
    """Map domain errors to their HTTP status"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Include routers
app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(badges.router, prefix="/api/badges", tags=["Badges"])

# Uploaded photos
Path(settings.uploads_path).mkdir(parents=True, exist_ok=True)
app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.uploads_path), name="uploads")


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
