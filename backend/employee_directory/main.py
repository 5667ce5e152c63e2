"""FastAPI application entry point."""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .errors import DuplicateEmailError, StorageError, ValidationError
from .routers.employees import router as employees_router
from .seed import seed_sample_data
from .store import EmployeeStore, build_store

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Choose the storage backend once, seed demo data, and close it on shutdown."""

    settings = get_settings()
    if getattr(app.state, "store", None) is None:
        app.state.store = await build_store(settings)
        if settings.seed_sample_data:
            await seed_sample_data(app.state.store)
    logger.info("Employee directory ready (%s storage)", app.state.store.backend_name)
    yield
    await app.state.store.close()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(store: EmployeeStore | None = None) -> FastAPI:
    """Build the application; pass ``store`` to bypass startup backend selection."""

    app = FastAPI(title="Employee Directory", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.include_router(employees_router)

    @app.exception_handler(ValidationError)
    async def on_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(DuplicateEmailError)
    async def on_duplicate_email(request: Request, exc: DuplicateEmailError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(StorageError)
    async def on_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")

    @app.exception_handler(Exception)
    async def on_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = str(exc.detail)
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = "Route not found"
        return _error(exc.status_code, message)

    @app.get("/health", tags=["system"])
    async def healthcheck() -> dict[str, str]:
        """Simple readiness probe for uptime checks."""

        return {"status": "ok", "backend": app.state.store.backend_name}

    return app


configure_logging(get_settings().log_level)
app = create_app()
