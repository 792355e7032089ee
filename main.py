# main.py
from __future__ import annotations
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic_settings import BaseSettings, SettingsConfigDict

from webcommon.api.exception_handlers import EXCEPTION_HANDLERS
from webcommon.api.router import router
from webcommon.database.session import engine
from webcommon.models import Base  # also imports every mapped class
from webcommon.utils.logger import get_logger, setup_logging


class Settings(BaseSettings):
    app_name: str = "webcommon-API"
    app_version: str = "0.1.0"
    debug: bool = False
    create_tables: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


setup_logging()
logger = get_logger(__name__)

# CORS origins (CSV in env CORS_ORIGINS), defaults to localhost:5173
_cors_env = os.getenv("CORS_ORIGINS", "http://localhost:5173")
origins = [o.strip() for o in _cors_env.split(",") if o.strip()]

settings = Settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)


# Create tables at startup when they don't exist (no Alembic)
@app.on_event("startup")
def _init_db():
    if not settings.create_tables:
        return
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.app_name} {settings.app_version} started")


@app.get("/")
def root():
    return {"status": "ok"}


# Mount all routes
app.include_router(router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
