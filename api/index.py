"""
Digital Hub - Main FastAPI Application

Single entry point for the hub API routes.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging import get_logger
from core.routers import webapp_router

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Digital Hub API starting")
    yield
    logger.info("Digital Hub API stopped")


app = FastAPI(
    title="Digital Hub",
    description="Unified cart and checkout API for the Digital Hub services",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for the hub frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(webapp_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "digital-hub"}
