import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from studyloop.db import get_settings, verify_connection, close_client
from studyloop.routers import flashcards_router, reviews_router, analytics_router
from studyloop.auth import get_auth_settings
from studyloop.repositories import PersistenceError

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    auth_settings = get_auth_settings()

    if auth_settings.enabled:
        if auth_settings.is_configured():
            logger.info("Bearer token authentication enabled (%s)", auth_settings.jwt_algorithm)
        else:
            logger.warning("Authentication enabled but JWT_SECRET is not set")
    else:
        logger.warning("Authentication DISABLED - using X-User-Id header fallback (dev mode)")

    if settings.is_configured():
        if verify_connection():
            logger.info("Connected to Cosmos DB database %s", settings.database_name)
        else:
            logger.error("Failed to connect to Cosmos DB - check configuration")
    else:
        logger.warning("Cosmos DB not configured (COSMOS_ENDPOINT/COSMOS_EMULATOR not set)")

    yield

    # Shutdown
    close_client()
    logger.info("Cosmos DB connection closed")


app = FastAPI(
    title="Studyloop API",
    description="Flashcard review scheduling (SM-2) and study statistics",
    version="1.0.0",
    lifespan=lifespan,
)

cors_origins = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Invalid request bodies and parameters are client errors (400)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc.cause)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


app.include_router(flashcards_router)
app.include_router(reviews_router)
app.include_router(analytics_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Studyloop API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "flashcards": "/flashcards",
            "reviews": "/reviews",
            "analytics": "/analytics",
        },
    }


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "studyloop.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").lower(),
    )
