"""
SAGE Backend
FastAPI application serving the retrieval-augmented chat, quiz and tutor modes
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import uvicorn
import logging
import os

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Import API routers
from sage.api import chat_router, quiz_router, tutor_router, documents_router
from sage.config import get_config
from sage.database.vector_db import reset_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting SAGE backend...")
    # Qdrant connection is opened lazily on first use
    yield
    logger.info("Shutting down SAGE backend...")
    await reset_store()


app = FastAPI(
    title="SAGE API",
    description="Retrieval-augmented study assistant",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "SAGE API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "success": True,
        "status": "healthy",
        "environment": os.getenv("ENVIRONMENT", "development"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Include API routers
app.include_router(chat_router)
app.include_router(quiz_router)
app.include_router(tutor_router)
app.include_router(documents_router)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
