import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from campus_companion.ai.chat.dependencies import close_ai_provider
from campus_companion.ai.chat.router import apology_response
from campus_companion.ai.chat.router import router as chat_router
from campus_companion.config import get_app_settings
from campus_companion.constants import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS
from campus_companion.db.database import close_db
from campus_companion.exceptions import APIError
from campus_companion.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return "0.0.0"
    return data["project"]["version"]


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info(
        "Campus Companion API starting",
        environment=get_app_settings().environment.value,
    )
    yield
    await close_ai_provider()
    await close_db()
    logger.info("Campus Companion API stopped")


app = FastAPI(
    title="Campus Companion API",
    description="Chat answers about campus resources, events and clubs",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_settings().get_cors_origins(),
    allow_credentials=False,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.exception_handler(APIError)
async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Render API errors as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def error_cors_headers(request: Request) -> dict[str, str]:
    """
    CORS headers for responses built outside CORSMiddleware.

    Unhandled exceptions are rendered by the outermost middleware, so the
    headers CORSMiddleware would add are set here instead.
    """
    allowed = get_app_settings().get_cors_origins()
    if "*" in allowed:
        return {"Access-Control-Allow-Origin": "*"}
    origin = request.headers.get("origin")
    if origin in allowed:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Never leak internal error text; answer with the fixed apology."""
    logger.exception("Unhandled error", error_type=type(exc).__name__)
    return apology_response(headers=error_cors_headers(request))


app.include_router(chat_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "Campus Companion API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "Campus Companion API is running"}
