"""
FastAPI application for the work log tracker.

create_app() builds one DataStore and one UploadStorage per application and
keeps them on app.state; request handlers reach them through dependencies.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routes import router, get_store
from .schemas import HealthResponse
from ..core.config import VERSION, CORS_ORIGINS, SEED_ON_START, debug_enabled, validate_config
from ..core.errors import NotFoundError, SchemaValidationError, StorageError, UploadError
from ..core.seed import seed_if_empty
from ..core.store import DataStore
from ..core.uploads import UploadStorage
from ..util.logging import logger


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON bodies that always carry a human-readable message."""

    @app.exception_handler(SchemaValidationError)
    async def schema_validation_handler(request: Request, exc: SchemaValidationError):
        return JSONResponse(status_code=400, content={"message": exc.message, "field": exc.field})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed JSON or a body that is not an object; report the first problem only
        error = exc.errors()[0]
        loc = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
        return JSONResponse(
            status_code=400,
            content={"message": error.get("msg", "Invalid request"), "field": ".".join(loc) or None},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": str(exc)})

    @app.exception_handler(UploadError)
    async def upload_error_handler(request: Request, exc: UploadError):
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions (storage I/O, corrupted files)."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc!r}")
        content = {"message": "Internal server error"}
        if debug_enabled():
            content["debug"] = str(exc)
        return JSONResponse(status_code=500, content=content)


def create_app(store: DataStore = None, uploads: UploadStorage = None, seed: bool = None) -> FastAPI:
    """Build the application around a store and upload storage (defaults come from config)."""
    store = store if store is not None else DataStore()
    uploads = uploads if uploads is not None else UploadStorage()
    seed_on_start = SEED_ON_START if seed is None else seed

    @asynccontextmanager
    async def lifespan(_app_instance: FastAPI):
        for issue in validate_config():
            logger.warning(f"Configuration issue: {issue}")
        uploads.ensure_directory()
        if seed_on_start:
            seed_if_empty(store)
        logger.info(f"Work log API started (logs: {store.worklogs.path}, components: {store.components.path})")
        yield
        logger.info("Work log API shutting down")

    app = FastAPI(
        title="Work Log API",
        version=VERSION,
        description="Personal work log tracker backed by flat JSON files",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.uploads = uploads

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(request: Request):
        """Check that both collection files can be loaded."""
        current = get_store(request)
        try:
            worklog_count = current.worklogs.count()
            component_count = current.components.count()
        except (OSError, ValueError, StorageError) as e:
            logger.error(f"Health check failed to load collections: {e}")
            return HealthResponse(status="unhealthy", version=VERSION, worklog_count=0, component_count=0)

        return HealthResponse(
            status="healthy",
            version=VERSION,
            worklog_count=worklog_count,
            component_count=component_count,
        )

    app.include_router(router, tags=["worklog"])
    app.mount(uploads.url_prefix or "/uploads", StaticFiles(directory=str(uploads.upload_dir), check_dir=False), name="uploads")

    return app


app = create_app()
