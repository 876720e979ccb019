"""
Toolroom Tracker - tool loans and purchase requests
FastAPI backend
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from pathlib import Path
from typing import Optional
import logging

# Load environment variables
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

from app.bootstrap import build_services
from database.config import TrackerSettings
from routes.auth_routes import auth_router
from routes.loans_routes import loans_router
from routes.requests_routes import requests_router

# ==================== Logging Configuration ====================
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[TrackerSettings] = None) -> FastAPI:
    settings = settings or TrackerSettings()

    # ==================== Startup & Shutdown ====================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting Toolroom Tracker...")

        if settings.storage_backend == "sql":
            from database import DATABASE_ERRORS, init_db
            try:
                await init_db(settings)
            except DATABASE_ERRORS as e:
                # ledgers still start, empty, and writes report 503 until the database is back
                logger.error(f"❌ Database unavailable at startup: {e}")

        services = build_services(settings)
        await services.load()
        app.state.services = services
        logger.info("✅ Ledgers loaded")

        yield

        logger.info("🛑 Shutting down...")
        if settings.storage_backend == "sql":
            from database import close_db
            await close_db()
        logger.info("✅ Shutdown complete")

    app = FastAPI(
        title="Toolroom Tracker",
        description="Tool loans and purchase requests",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Health check endpoint at root level (for Kubernetes)
    @app.get("/health")
    async def root_health_check():
        """Health check endpoint for liveness/readiness probes"""
        return {"status": "healthy", "storage": settings.storage_backend}

    app.include_router(auth_router)
    app.include_router(loans_router)
    app.include_router(requests_router)

    # ==================== CORS Configuration ====================
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()
