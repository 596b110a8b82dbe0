"""FastAPI application — the main entrypoint for StackRoast."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from stackroast.app.api.ai import router as ai_router
from stackroast.app.api.roasts import router as roasts_router
from stackroast.app.api.stacks import router as stacks_router
from stackroast.app.api.votes import router as votes_router
from stackroast.app.config import settings
from stackroast.app.db import engine, get_engine, init_db
from stackroast.app.errors import StackRoastError
from stackroast.app.pages import router as pages_router
from stackroast.app.templating import render_template

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(levelname)s:%(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(
    title="StackRoast",
    description="Submit your tech stack, get roasted",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[f"http://localhost:{settings.port}", *settings.cors_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception handlers ---
# API routes answer {"error": ...}; pages get the error template.


def _error_response(request: Request, status_code: int, message: str) -> Response:
    if request.url.path.startswith("/api"):
        return JSONResponse(status_code=status_code, content={"error": message})
    return render_template(
        request,
        "error.html",
        {"status_code": status_code, "error": message},
        status_code=status_code,
    )


@app.exception_handler(StackRoastError)
async def _stackroast_error_handler(request: Request, exc: StackRoastError) -> Response:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    return _error_response(request, 400, "Invalid request data")


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return _error_response(request, exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> Response:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _error_response(request, 500, "Database error")


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Catch unhandled exceptions and return a clean 500 instead of a stack trace."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(request, 500, "Internal server error")


# Include routers
app.include_router(stacks_router, prefix="/api")
app.include_router(roasts_router, prefix="/api")
app.include_router(votes_router, prefix="/api")
app.include_router(ai_router, prefix="/api")
app.include_router(pages_router)


# --- Health check ---


@app.get("/api/health")
async def health(db_engine: AsyncEngine = Depends(get_engine)) -> dict[str, str]:
    """Health check with DB connectivity verification."""
    db_ok = "ok"
    try:
        async with db_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        db_ok = "error"
        logger.exception("Health check: database connectivity failed")

    return {
        "status": "ok" if db_ok == "ok" else "degraded",
        "database": db_ok,
    }
