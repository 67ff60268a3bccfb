"""
Subtrans Backend - Unified Application Entry Point
Mounts the subtitle document service and authentication under a single FastAPI application
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database import check_connection, engine, init_database
from services.auth import router as auth_router
from services.subtitles.app import router as subtitles_router
from shared.response_models import HealthResponse
from shared.utils import config, setup_logging

logger = setup_logging("subtrans-backend")


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_database()
    yield


app = FastAPI(
    title="Subtrans Backend API",
    description="""
    Collaborative subtitle translation API.

    Upload SRT files in any supported encoding, add per-caption translations,
    and download the original or translated subtitles.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "User authentication and token management",
        },
        {
            "name": "Health",
            "description": "Service health and status endpoints",
        },
        {
            "name": "Subtitles",
            "description": "Subtitle document service - mounted at /api/v1/subtitles",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, tags=["Authentication"])
app.include_router(subtitles_router, prefix="/api/v1/subtitles", tags=["Subtitles"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with service information and API navigation"""
    return {
        "service": "Subtrans Backend API",
        "version": "1.0.0",
        "services": {
            "subtitles": {
                "base_url": "/api/v1/subtitles",
                "health": "/api/v1/subtitles/health",
            },
            "auth": {
                "token_endpoint": "/token",
                "register_endpoint": "/register",
            },
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint covering the database connection"""
    database_ok = check_connection(engine)
    return HealthResponse(
        status="healthy" if database_ok else "degraded",
        services={
            "api_gateway": "operational",
            "subtitles": "operational",
            "database": "operational" if database_ok else "unavailable",
        },
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Subtrans Backend on http://0.0.0.0:8000")
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
