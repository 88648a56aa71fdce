import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .api.deps import get_db
from .api.v1.api import api_router
from .config import settings
from .core.exceptions import StoreError
from .init_db import init_db

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(StoreError)
@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: Exception):
    """Any rejected store operation surfaces as one generic failure."""
    logger.warning(f"Operation failed: {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": "Operation failed"})


app.include_router(api_router)


# Root endpoint
@app.get("/")
def read_root():
    return {
        "message": "Welcome to Hyper Friends Zone API",
        "version": settings.API_VERSION,
        "status": "running"
    }


# Health check endpoint
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """API and database health check"""
    db.execute(text("SELECT 1"))
    return {"status": "healthy"}
