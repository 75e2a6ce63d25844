"""
Main FastAPI application entry point.
Initializes the app, middleware, and routes.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from flashlearn.config import settings
from flashlearn.services.cosmos_db_service import cosmos_db_service

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Adaptive flashcard quiz and daily spotlight word engine",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create the Cosmos DB database and containers when a key is configured."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if settings.COSMOS_DB_KEY:
        await cosmos_db_service.initialize()
    else:
        logger.warning("COSMOS_DB_KEY not set, skipping Cosmos DB initialization")

    logger.info("Application started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown complete")


@app.get("/")
async def root():
    """Health check endpoint"""
    return JSONResponse(content={
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "environment": settings.ENVIRONMENT
    })


@app.get("/health")
async def health_check():
    """Service status"""
    health_status = {
        "status": "healthy",
        "services": {
            "api": "up",
            "cosmos_db": "configured" if settings.COSMOS_DB_KEY else "not_configured"
        }
    }

    return JSONResponse(content=health_status)


# Include routers
from flashlearn.api.v1.endpoints import quiz
from flashlearn.api.v1.endpoints import daily
app.include_router(quiz.router, prefix=f"{settings.API_V1_PREFIX}/quiz", tags=["quiz"])
app.include_router(daily.router, prefix=f"{settings.API_V1_PREFIX}/daily", tags=["daily"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "flashlearn.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
