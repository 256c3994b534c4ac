from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings
from app.core.geo import haversine_m


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite has no geography type; proximity queries call this instead.
    dbapi_connection.create_function("haversine_m", 4, haversine_m, deterministic=True)


def create_db_engine(database_url: str, **kwargs) -> Engine:
    engine = create_engine(database_url, pool_pre_ping=True, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return create_db_engine(settings.database_url)


@lru_cache
def get_session_maker():
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    db = get_session_maker()()
    try:
        yield db
    finally:
        db.close()
