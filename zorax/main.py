from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from zorax.core.config import settings
from zorax.core.errors import AppError
from zorax.db import base  # noqa: F401  registers every model on Base.metadata
from zorax.db.session import Base, SessionLocal, engine
from zorax.logger import Logger
from zorax.routes.endpoints import api_router
from zorax.services.user_service import seed_default_users

logger = Logger.get_logger(__name__)


def init_database():
    Base.metadata.create_all(bind=engine)
    if not settings.SEED_DEFAULT_USERS:
        return
    db = SessionLocal()
    try:
        created = seed_default_users(db)
        logger.info("Default users initialized (%s created)", created)
    except Exception:
        logger.exception("Failed to initialize default users")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=unused-argument
    logger.info("Initializing database and creating tables.")
    init_database()
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Shutdown complete.")


def format_validation_errors(errors) -> str:
    """Flatten pydantic errors into one readable line, e.g. 'Validation error: Field required at "date"'."""
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p != "body"]
        where = f' at "{".".join(loc)}"' if loc else ""
        parts.append(f"{error.get('msg', 'Invalid value')}{where}")
    return "Validation error: " + "; ".join(parts)


def create_app() -> FastAPI:
    main_app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        generate_unique_id_function=lambda route: f"{route.tags[0]}-{route.name}",
        lifespan=lifespan,
    )

    main_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @main_app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @main_app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        logger.debug("Validation error on %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"message": message})

    @main_app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @main_app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    main_app.include_router(api_router, prefix=settings.API_V1_STR)

    return main_app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("zorax.main:app", host="0.0.0.0", port=settings.SERVER_PORT)
