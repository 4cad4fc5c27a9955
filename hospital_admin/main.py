from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import time
import logging

from .api.v1.appointments import router as appointments_router
from .api.v1.billings import router as billings_router
from .api.v1.dashboard import router as dashboard_router
from .api.v1.doctors import router as doctors_router
from .api.v1.patients import router as patients_router
from .api.v1.records import router as records_router
from .api.v1.resources import router as resources_router
from .core.config import Settings, settings
from .core.exceptions import DuplicateKeyError, ValidationError
from .services.repository import HospitalRepository

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# URL segment -> entity label used in client error messages
_ENTITY_LABELS = {
    "patients": "patient",
    "doctors": "doctor",
    "appointments": "appointment",
    "records": "medical record",
    "billings": "billing",
    "resources": "resource",
}

def _entity_label(path: str) -> str:
    parts = path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "api":
        return _ENTITY_LABELS.get(parts[1], "request")
    return "request"

def create_app(
    app_settings: Optional[Settings] = None,
    repository: Optional[HospitalRepository] = None,
) -> FastAPI:
    """Build the application together with the repository it serves."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.VERSION,
        description="Hospital administration: patients, doctors, appointments, records, billing and resources",
        openapi_url="/api/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    if repository is None:
        repository = HospitalRepository(
            seed=app_settings.SEED_DATA,
            validate_references=app_settings.VALIDATE_REFERENCES,
            max_key_attempts=app_settings.BUSINESS_KEY_MAX_ATTEMPTS,
        )
    app.state.repository = repository
    app.state.settings = app_settings

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Only add TrustedHostMiddleware in production, not in testing
    if not app_settings.TESTING:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=["localhost", "127.0.0.1", "*.localhost", "testserver"]
        )

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log request
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": getattr(exc, "detail", None) or "The requested resource was not found",
                "path": str(request.url.path)
            }
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {key: value for key, value in error.items() if key not in ("ctx", "input", "url")}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={
                "message": f"Invalid {_entity_label(request.url.path)} data",
                "errors": errors
            }
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": exc.message, "errors": exc.errors}
        )

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        return JSONResponse(
            status_code=409,
            content={"message": exc.message, "errors": exc.errors}
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred"
            }
        )

    # Include routers
    for router in (
        dashboard_router,
        resources_router,
        patients_router,
        doctors_router,
        appointments_router,
        records_router,
        billings_router,
    ):
        app.include_router(router, prefix="/api")

    # Startup and shutdown events
    @app.on_event("startup")
    async def startup_event():
        """Log the state of the repository on startup."""
        logger.info(f"Starting {app_settings.APP_NAME}...")
        logger.info(
            f"Repository ready: {len(repository.patients)} patients, "
            f"{len(repository.doctors)} doctors, {len(repository.appointments)} appointments"
        )
        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info(f"Shutting down {app_settings.APP_NAME}...")

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": app_settings.VERSION
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {app_settings.APP_NAME} API",
            "version": app_settings.VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/health"
        }

    # API Info endpoint
    @app.get("/api/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": app_settings.APP_NAME,
            "version": app_settings.VERSION,
            "endpoints": {
                "dashboard": "/api/dashboard/stats",
                "resources": "/api/resources",
                "patients": "/api/patients",
                "doctors": "/api/doctors",
                "appointments": "/api/appointments",
                "records": "/api/records",
                "billings": "/api/billings",
                "docs": "/docs",
                "openapi": "/api/openapi.json"
            }
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hospital_admin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
