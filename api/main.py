"""
Psychrometric Converter - FastAPI Application

This is the main entry point for the FastAPI backend.
It combines all route modules and provides system-wide endpoints.

Features:
- Humidity conversion between relative humidity, dew point and
  absolute humidity
- Input validation with detailed feedback
- Interactive API documentation (Swagger/OpenAPI)

Access Points:
- API Root: http://localhost:8000
- Swagger Docs: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
- OpenAPI JSON: http://localhost:8000/openapi.json
"""

import os
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import convert_router
from api.models import SystemHealth
from core.psychrometrics import convert

API_VERSION = "0.1.0"

# =========================================
# Logging Configuration
# =========================================

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def check_engine_health() -> str:
    """Run a known conversion (20°C, 20°C dew point) as a self-test."""
    try:
        result = convert(20.0, 20.0, "dewPoint")
    except Exception as e:
        logger.error(f"Engine self-test failed: {e}")
        return "error"
    return "ok" if result.relative_humidity == 100.0 else "degraded"


# =========================================
# Application Lifespan
# =========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown.
    """
    logger.info("Starting Psychrometric Converter API...")

    engine_status = check_engine_health()
    if engine_status == "ok":
        logger.info("Psychrometric engine self-test passed")
    else:
        logger.warning(f"Psychrometric engine self-test: {engine_status}")

    logger.info("API documentation: http://localhost:8000/docs")

    yield  # Application runs here

    logger.info("Shutting down Psychrometric Converter API...")


# =========================================
# FastAPI Application
# =========================================

app = FastAPI(
    title="Psychrometric Converter API",
    description="""
## Humidity Conversion

Give the air temperature and any one humidity measurement; get back all three.

### Measurements

- **Relative Humidity** (%): actual vapor pressure as a share of saturation
- **Dew Point** (°C): temperature at which the air would become saturated
- **Absolute Humidity** (g/m³): mass of water vapor per cubic meter of air

Saturation vapor pressure uses the August-Roche-Magnus approximation;
absolute humidity uses the ideal gas law with R_v = 461.5 J/(kg·K).

### Quick Start

1. **Check API health**: `GET /health`
2. **Convert**: `POST /api/v1/convert` with
   `{"temperature": 25, "source": "relativeHumidity", "value": 50}`
    """,
    version=API_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# =========================================
# CORS Middleware
# =========================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================
# Exception Handlers
# =========================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# =========================================
# Include Routers
# =========================================

app.include_router(convert_router, prefix="/api/v1")


# =========================================
# Root Endpoints
# =========================================

@app.get(
    "/",
    tags=["System"],
    summary="API Root",
    description="Welcome endpoint with API information"
)
async def root():
    """API root endpoint."""
    return {
        "name": "Psychrometric Converter API",
        "version": API_VERSION,
        "description": "Relative humidity, dew point and absolute humidity conversion",
        "documentation": "/docs",
        "health_check": "/health",
        "api_base": "/api/v1"
    }


@app.get(
    "/health",
    response_model=SystemHealth,
    tags=["System"],
    summary="System Health Check",
    description="Check the health status of the API and the conversion engine"
)
async def health_check():
    """System health check endpoint."""
    engine_status = check_engine_health()

    return SystemHealth(
        status="ok" if engine_status == "ok" else "degraded",
        version=API_VERSION,
        timestamp=datetime.utcnow(),
        components={
            "api": "ok",
            "psychrometric_engine": engine_status,
        }
    )


@app.get(
    "/live",
    tags=["System"],
    summary="Liveness Check",
    description="Check if the API process is alive"
)
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}


# =========================================
# Development/Debug Endpoints
# =========================================

if os.getenv("DEBUG", "false").lower() == "true":

    @app.get("/debug/config", tags=["Debug"])
    async def debug_config():
        """Show configuration (debug only)."""
        return {
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "guard_strict_mode": os.getenv("GUARD_STRICT_MODE", "false"),
            "cors_origins": os.getenv("CORS_ORIGINS", "*"),
            "debug": os.getenv("DEBUG", "false")
        }


# =========================================
# Run with Uvicorn (for development)
# =========================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "true").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
