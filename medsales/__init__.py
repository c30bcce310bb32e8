from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from medsales.api import api_router
from medsales.core.config import settings
from medsales.core.database import SessionLocal, init_db
from medsales.core.exceptions import AppError, BlobStoreError, StoreError
from medsales.core.logger import logger
from medsales.models.user import User


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def seed_admin() -> None:
    if not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is not set, no admin account was created")
        return
    db = SessionLocal()
    try:
        User.ensure(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(f"Starting Medical Sales API ({settings.ENVIRONMENT})")
    init_db()
    seed_admin()
    yield
    logger.info("Shutting down Medical Sales API")


app = FastAPI(
    title="Medical Sales API",
    version=settings.APP_VERSION,
    description="Storefront and admin API for medical equipment sales",
    lifespan=lifespan,
    debug=settings.DEBUG,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, (StoreError, BlobStoreError)):
        logger.error(f"{request.method} {request.url.path}: {exc.message}: {exc.detail}")
    elif exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{location}: {message}" if location else message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return error_response(404, "API endpoint not found")
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error")


@app.get("/", tags=["health"])
@app.get("/health", tags=["health"])
async def health_check() -> dict:
    """Health check endpoint to verify API status"""
    return {
        "success": True,
        "message": "Medical Sales API is running",
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


app.include_router(api_router, prefix=settings.API_PREFIX)
