"""
Activity Planner API server.

FastAPI application exposing activities, contexts and categories, plus the
suggestions endpoint that ranks what to do right now.

Usage:
    uvicorn activity_planner.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_planner import __version__
from activity_planner.api import API_PREFIX
from activity_planner.api.activities import router as activities_router
from activity_planner.api.categories import router as categories_router
from activity_planner.api.contexts import router as contexts_router
from activity_planner.api.suggestions import router as suggestions_router
from activity_planner.config import settings
from activity_planner.database import get_db, init_db
from activity_planner.errors import ConflictError, NotFoundError, ValidationError
from activity_planner.logging import bind_request, get_logger, setup_logging

setup_logging(json_output=settings.log_json, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("api_started", version=__version__)
    yield


app = FastAPI(
    title="Activity Planner API",
    description="Stores activities and suggests what to do right now",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_context(request: Request, call_next):
    bind_request(request.url.path, request.method)
    return await call_next(request)


app.include_router(activities_router, prefix=API_PREFIX)
app.include_router(categories_router, prefix=API_PREFIX)
app.include_router(contexts_router, prefix=API_PREFIX)
app.include_router(suggestions_router, prefix=API_PREFIX)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("storage_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Storage failure"})


@app.get("/health")
def health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Health check endpoint.

    Runs a trivial query so that a broken database shows up as unhealthy.
    """
    db.execute(text("SELECT 1"))
    return {"status": "healthy", "service": "activity-planner-api"}
