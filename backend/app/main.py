from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.schema import ensure_schema
from app.db.session import get_engine


logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    engine = get_engine()
    logger.info("Starting %s on %s", settings.app_name, engine.dialect.name)
    logger.info("CORS origins: %s", settings.cors_origins)

    # Dev-friendly: auto-create tables. There is no migration tooling.
    if settings.auto_create_tables:
        ensure_schema(engine)

    yield

    engine.dispose()
    logger.info("Shutting down")


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
def root():
    return {"message": f"{settings.app_name} is running. See /docs or /health."}


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(api_router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
