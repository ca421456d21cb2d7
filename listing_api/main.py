"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from listing_scraper.logging_config import setup_logging

from listing_api.api.router import api_router
from listing_api.core.config import settings
from listing_api.core.controller import get_controller

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.api_version}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all errors."""
    logger.exception(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    if not logging.getLogger().handlers:
        setup_logging(settings.log_level, settings.log_file)
    logger.info("=" * 60)
    logger.info(f"{settings.app_name} v{settings.api_version}")
    logger.info("=" * 60)
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Admin token: {'set' if settings.admin_token else 'not set (routes open)'}")
    logger.info(f"Status:   http://{settings.host}:{settings.port}/api/scraper/status")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop any running crawl before the loop closes."""
    logger.info("Shutting down...")
    await get_controller().shutdown()
    logger.info("Stopped")
