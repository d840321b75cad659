# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.logging_config import setup_logging
from config.settings import get_settings

# DB
from database.session import check_connection, init_db

# one router that gathers auth / cities / ai
from gateway.gateway_router import gateway_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "weather-dashboard-api"
VERSION = "1.0.0"

_PARAM_SOURCES = ("body", "query", "path", "header")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("FastAPI is starting…")
    settings = get_settings()

    init_db()
    if check_connection():
        logger.info("Database connected")

    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set: login will fail until it is configured")
    logger.info(f"OpenWeather: {'configured' if settings.openweather_api_key else 'MISSING OPENWEATHER_API_KEY'}")
    logger.info(
        f"Gemini ({settings.gemini_model}): "
        f"{'configured' if settings.gemini_api_key else 'not configured, heuristic fallback only'}"
    )

    yield
    # Shutdown
    logger.info("Shutting down…")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") in ("json_invalid", "value_error.jsondecode"):
        return "Malformed JSON body"
    loc = [str(p) for p in first.get("loc", ()) if p not in _PARAM_SOURCES]
    field = ".".join(loc)
    if first.get("type") in ("missing", "value_error.missing"):
        return f"{field} is required" if field else "Request body is required"
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


def create_app() -> FastAPI:
    setup_logging()
    settings = get_settings()

    app = FastAPI(
        title="Weather Dashboard API",
        description="Saved cities, current weather and AI insights behind JWT auth",
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/health")
    async def health():
        db_ok = check_connection()
        return {
            "status": "healthy" if db_ok else "degraded",
            "service": SERVICE_NAME,
            "version": VERSION,
            "database": "connected" if db_ok else "error",
        }

    @app.get("/")
    async def root():
        return {
            "message": "Weather Dashboard API",
            "version": VERSION,
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "auth": "/auth",
                "cities": "/cities",
                "ai": "/ai/insights",
            },
        }

    app.include_router(gateway_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
