from __future__ import annotations
import os
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.engine import URL


def build_database_url() -> str | URL:
    """DATABASE_URL when set, otherwise a PostgreSQL URL from POSTGRES_CONN_* variables."""
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    # URL.create escapes special characters in credentials
    return URL.create(
        "postgresql+psycopg",
        username=os.getenv("POSTGRES_CONN_USERNAME"),
        password=os.getenv("POSTGRES_CONN_PASSWORD"),
        host=os.getenv("POSTGRES_CONN_HOST", "localhost"),
        port=int(os.getenv("POSTGRES_CONN_PORT", "5432")),
        database=os.getenv("POSTGRES_CONN_DBNAME"),
    )


engine = create_engine(
    build_database_url(),
    pool_pre_ping=True,  # drops dead connections
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
