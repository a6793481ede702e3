"""
Pothole Pulse - Road Defect Tracking API
FastAPI with multiple storage backends: JSON files, SQLite, PostgreSQL and Supabase

Install dependencies:
pip install -e .

Run server:
uvicorn main:app --host 0.0.0.0 --port 8000
"""

import contextvars
import logging
import os
import time
import uuid

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters import StorageError, build_storage_adapter
from core import snapshot
from schemas import HealthCheck
from settings import get_settings

API_VERSION = "1.0"

# ========== Request Context for Tracing ==========
request_id_var = contextvars.ContextVar('request_id', default=None)
request_start_time_var = contextvars.ContextVar('request_start_time', default=None)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================================
# BACKEND CONFIGURATION
# ============================================================================

STORAGE_BACKEND = settings.storage_backend.lower()

logger.info(f"🔧 Storage Backend: {STORAGE_BACKEND.upper()}")

# ============================================================================
# STORAGE ADAPTER INITIALIZATION
# ============================================================================

try:
    storage_adapter = build_storage_adapter(settings)
except Exception as e:
    logger.error(f"✗ Failed to initialize {STORAGE_BACKEND} storage: {e}")
    raise


# ---- DI helper (used by routers/*) ----
def get_storage_adapter(_=None):
    return storage_adapter


# ============================================================================
# FASTAPI APP
# ============================================================================

app = FastAPI(
    title="Pothole Pulse API",
    description="Backend API for road defect reporting, repair lifecycle and analytics",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)


# ========== Request Tracing Middleware ==========
@app.middleware("http")
async def request_tracing_middleware(request, call_next):
    """Add request_id and timing to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request_id_var.set(request_id)
    request_start_time_var.set(time.time())

    response = await call_next(request)

    latency = time.time() - request_start_time_var.get()

    logger.info(
        f"[{request_id}] {request.method} {request.url.path} -> "
        f"{response.status_code} ({round(latency * 1000, 2)} ms)"
    )

    response.headers["X-Request-ID"] = request_id
    return response


ALLOWED_ORIGINS = settings.get_origins_list()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )

# ============================================================================
# ENDPOINTS
# ============================================================================


@app.get("/health", response_model=HealthCheck)
async def health_check():
    """Health check endpoint"""
    try:
        get_storage_adapter().ping()
        return {
            "status": "healthy",
            "backend": STORAGE_BACKEND,
            "version": API_VERSION
        }
    except StorageError as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "backend": STORAGE_BACKEND, "error": str(e)}
        )


@app.get("/healthz")
async def healthz():
    """
    Kubernetes-style liveness probe.
    Fast check - is the process alive and responding?
    """
    return {
        "status": "ok",
        "timestamp": time.time(),
        "version": API_VERSION
    }


@app.get("/readyz")
async def readyz():
    """
    Kubernetes-style readiness probe.
    Returns 200 if the storage backend answers, 503 if not.
    """
    try:
        get_storage_adapter().ping()
        return {
            "status": "ready",
            "backend": STORAGE_BACKEND,
            "snapshot": dict(snapshot.stats),
            "timestamp": time.time()
        }
    except StorageError as e:
        logger.error(f"Readiness check failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "backend": STORAGE_BACKEND,
                "error": str(e),
                "timestamp": time.time()
            }
        )


@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": "Pothole Pulse API",
        "version": API_VERSION,
        "backend": STORAGE_BACKEND,
        "status": "running",
        "docs": "/docs"
    }


from routers import potholes as potholes_router
app.include_router(potholes_router.router)

from routers import documents as documents_router
app.include_router(documents_router.router)

from routers import analytics as analytics_router
app.include_router(analytics_router.router)

from routers import users as users_router
app.include_router(users_router.router)


@app.on_event("startup")
async def startup_event():
    logger.info("Pothole Pulse API starting up...")
    logger.info(f"Storage Backend: {STORAGE_BACKEND.upper()}")
    if STORAGE_BACKEND in ("sqlite", "pg"):
        logger.info(f"Database: {settings.db_url.split('://')[0]}")
    elif STORAGE_BACKEND == "supabase":
        logger.info(f"Supabase project: {settings.supabase_url}")
    logger.info(f"Allowed origins: {ALLOWED_ORIGINS}")

    if settings.seed_demo_data:
        from core.seed_local import seed_if_empty

        try:
            if seed_if_empty(get_storage_adapter()):
                snapshot.invalidate()
        except StorageError as e:
            logger.error(f"Demo seed failed: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Pothole Pulse API shutting down...")
    adapter = get_storage_adapter()
    if hasattr(adapter, "close"):
        adapter.close()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, log_level="info")
