"""
Flash Tans Storefront - Backend API
Catalog, cart checkout and order history
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api import products, orders, admin
from storefront.core.config import Settings, settings as default_settings, configure_logging
from storefront.core.database import Database
from storefront.core.errors import StorefrontError
from storefront.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


ERROR_PAGE = """<!DOCTYPE html>
<html>
<head><title>Flash Tans - Error</title></head>
<body>
<h1>Oops!</h1>
<p>{message}</p>
<a href="/">Back to the store</a>
</body>
</html>
"""


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _error_response(request: Request, status_code: int, api_message: str, page_message: str):
    """JSON {"error": ...} for API callers, a generic HTML page for everything else"""
    if _is_api_request(request):
        return JSONResponse(status_code=status_code, content={"error": api_message})
    return HTMLResponse(status_code=status_code, content=ERROR_PAGE.format(message=page_message))


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        return _error_response(request, exc.status_code, exc.message, "Something went wrong!")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {errors[0].get('msg', '')}".strip()
        else:
            message = "Invalid request"
        return _error_response(request, 400, message, "Something went wrong!")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        page_message = "Page not found" if exc.status_code == 404 else "Something went wrong!"
        return _error_response(request, exc.status_code, str(exc.detail), page_message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(request, 500, "Internal server error", "Something went wrong!")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application

    The store handle is opened in the lifespan hook and closed on shutdown.
    If the database cannot be reached, startup fails and the server exits
    with a non-zero status.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(
            settings.DATABASE_URL,
            min_connections=settings.DB_POOL_MIN,
            max_connections=settings.DB_POOL_MAX,
            pool_timeout=settings.DB_POOL_TIMEOUT
        )
        db.connect(max_retries=settings.DB_CONNECT_RETRIES, retry_delay=settings.DB_RETRY_DELAY)
        try:
            db.init_schema()
            if settings.SEED_SAMPLE_PRODUCTS:
                CatalogService(db).seed_if_empty()

            app.state.db = db
            logger.info(f"{settings.API_TITLE} {settings.API_VERSION} ready")
            yield
        finally:
            db.close()

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=settings.API_DESCRIPTION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(products.router, prefix="/api/products", tags=["Products"])
    app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])

    @app.get("/health")
    def health(request: Request):
        """Health check endpoint - tests database connectivity"""
        start_time = time.time()

        db_status = "unknown"
        db_latency_ms = None
        db_error = None

        try:
            db_latency_ms = request.app.state.db.ping()
            db_status = "connected"
        except Exception as e:
            db_status = "disconnected"
            db_error = str(e)

        return {
            "status": "ok" if db_status == "connected" else "degraded",
            "version": settings.API_VERSION,
            "database": {
                "status": db_status,
                "latency_ms": db_latency_ms,
                "error": db_error
            },
            "total_latency_ms": round((time.time() - start_time) * 1000, 2)
        }

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()
