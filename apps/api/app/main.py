from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from app.core.config import settings
from app.routes.checkout import router as checkout_router
from app.routes.pages import router as pages_router
from app.routes.translations import router as translations_router
from app.services.asaas_rest import close_http
from app.services.error_log import log_system_error
from app.services.image_store import ImageStore
from app.services.translations import TranslationStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.translations = TranslationStore.load(
        settings.resolved_translations_file(),
        default_language=settings.default_language,
    )
    app.state.image_store = ImageStore(
        settings.mongodb_uri,
        db_name=settings.mongodb_db_name,
        collection=settings.mongodb_collection,
    )
    logger.info(
        "Available languages: %s", ", ".join(app.state.translations.languages())
    )
    logger.info("Serving pages from: %s", settings.public_dir)
    yield
    await close_http()
    await app.state.image_store.close()


app = FastAPI(title="Clerky Website", version="0.1.0", lifespan=lifespan)


def _init_sentry() -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.sentry_traces_sample_rate,
        send_default_pii=False,
        environment=settings.app_env,
    )


_init_sentry()


@app.middleware("http")
async def log_server_error_responses(request: Request, call_next):
    response = await call_next(request)
    if response.status_code >= 500 and not getattr(
        request.state, "error_logged", False
    ):
        await log_system_error(
            route=str(request.url.path),
            message=f"Server response status {response.status_code}",
            meta={
                "status_code": response.status_code,
                "method": request.method,
                "path": str(request.url.path),
            },
        )
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Best-effort: never block the response on logging.
    await log_system_error(
        route=str(request.url.path),
        message="Unhandled server error",
        err=exc,
        meta={"method": request.method},
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(pages_router)
app.include_router(translations_router, prefix="/api")
app.include_router(checkout_router, prefix="/api")

# Mounted last so the page and API routes above take precedence.
app.mount(
    "/assets",
    StaticFiles(directory=settings.assets_dir, check_dir=False),
    name="assets",
)
app.mount(
    "/",
    StaticFiles(directory=settings.public_dir, check_dir=False),
    name="public",
)
