# /examcell/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Imports ---
from .core import config
from .core.deps import get_current_principal
from .core.exceptions import register_exception_handlers
from .core.logging_config import setup_logging
from .db.base import Base
from .db.database import SessionLocal, engine
from .routers import (
    auth_router,
    students_router,
    subjects_router,
    results_router,
    uploads_router,
    reports_router,
)
from .services import auth_service
from .services.database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    setup_logging(config.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        auth_service.seed_bootstrap_admin(DatabaseService(session))
    logger.info("Examcell backend started.")
    yield
    # This code runs ONCE when the application shuts down.
    logger.info("Examcell backend shutting down.")


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Examcell Backend API",
    description="Academic records service: students, subjects, results, bulk CSV uploads and semester reports.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- API Router Inclusion ---
# Login is public; everything else under /api needs a bearer token.
app.include_router(auth_router.router, prefix="/api/auth", tags=["Authentication"])

authenticated = [Depends(get_current_principal)]
app.include_router(students_router.router, prefix="/api/students", tags=["Students"], dependencies=authenticated)
app.include_router(subjects_router.router, prefix="/api/subjects", tags=["Subjects"], dependencies=authenticated)
app.include_router(results_router.router, prefix="/api/results", tags=["Results"], dependencies=authenticated)
app.include_router(uploads_router.router, prefix="/api/uploads", tags=["Uploads"], dependencies=authenticated)
app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"], dependencies=authenticated)


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Examcell Backend is running!", "version": app.version}
