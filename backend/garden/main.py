"""FastAPI app factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from garden.config import settings
from garden.errors import GardenError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.garden_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from garden.db.database import init_db

    logger.info("Starting Fresh Takes Garden API (%s)", settings.garden_env)
    init_db(seed_demo_data=settings.seed_demo_data, default_creator=settings.default_creator)
    yield
    logger.info("Fresh Takes Garden API stopped")


def _error_body(message: str, detail: str | None = None) -> dict:
    body: dict = {"success": False, "message": message}
    if detail and not settings.is_production:
        body["error"] = detail
    return body


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GardenError)
    async def garden_error_handler(request: Request, exc: GardenError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = f"Invalid {field}: {first.get('msg', 'bad value')}" if field else "Invalid request"
        return JSONResponse(status_code=400, content=_error_body(message))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content=_error_body("Route not found in the garden"))
        return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = {
            "success": False,
            "message": "Something went wrong in the garden!",
            "error": "Internal server error" if settings.is_production else str(exc),
        }
        return JSONResponse(status_code=500, content=body)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fresh Takes Garden",
        description="Projects gallery with generated fruit stickers and a clustered garden layout",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    from garden.api.router import api_router

    app.include_router(api_router)

    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.uploads_dir, check_dir=False), name="uploads")
    app.mount("/sticker-assets", StaticFiles(directory=settings.assets_dir, check_dir=False), name="sticker-assets")

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.garden_log_level.lower())


if __name__ == "__main__":
    run()
