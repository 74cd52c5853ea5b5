"""
Employee Attendance Tracker - Main Application Entry Point
Multi-tenant NFC kiosk attendance backend
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging
import structlog

from attendance_tracker.core.config import get_settings
from attendance_tracker.core.database import run_migrations
from attendance_tracker.api import attendance, auth, employees, kiosks, subscription

settings = get_settings()

# Configure structured logging
logging.basicConfig(level=settings.LOG_LEVEL, format="%(message)s")
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup: never serve against a store of unknown shape
    logger.info("Initializing attendance tracker backend")
    try:
        run_migrations()
    except Exception:
        logger.exception("FATAL: database setup failed")
        raise

    yield

    # Shutdown
    logger.info("Shutting down attendance tracker backend")


# Create FastAPI application
app = FastAPI(
    title="Employee Attendance Tracker API",
    description="Multi-tenant NFC kiosk attendance tracking with plan-based seat limits",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields are client errors (400)"""
    fields = sorted({
        str(error["loc"][-1]) for error in exc.errors()
        if error.get("loc") and error["loc"][0] == "body" and len(error["loc"]) > 1
    })
    message = f"Missing or invalid fields: {', '.join(fields)}." if fields else "Invalid request body."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(employees.router, prefix="/api/employees", tags=["employees"])
app.include_router(attendance.router, prefix="/api/logs", tags=["attendance"])
app.include_router(attendance.kiosk_router, prefix="/api/kiosk", tags=["attendance"])
app.include_router(kiosks.router, prefix="/api/kiosks", tags=["kiosks"])
app.include_router(subscription.router, prefix="/api/subscription", tags=["subscription"])


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "attendance-tracker-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "attendance_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
