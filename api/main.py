"""
FastAPI application initialization
"""

from fastapi import FastAPI
from api.routes import health, users, operations, kpi
from api.errors import register_exception_handlers
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.database import database
from core.logging import setup_logging
import logging

setup_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Mines Operations Gateway",
    description="Records and retrieves mine operations and KPI data through stored procedures",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)
register_exception_handlers(app)


# Include routers
app.include_router(health.router)
app.include_router(users.router)
app.include_router(operations.router)
app.include_router(kpi.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting Mines Operations Gateway")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")
    logger.info(f"Upsert strategy: {settings.UPSERT_STRATEGY}")

    database.connect()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down Mines Operations Gateway")
    await database.disconnect()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Mines Operations Gateway",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "users": "/api/users/"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT)
