from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from symptom_map.config import settings


def _tune_sqlite(dbapi_connection, _connection_record) -> None:
    # Lookups read from pool workers while seeding may still be writing.
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
    finally:
        cursor.close()


def create_symptom_engine(database_url: str, *, echo: bool = False) -> Engine:
    is_sqlite = database_url.startswith("sqlite")
    engine = create_engine(
        database_url,
        echo=echo,
        future=True,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        event.listen(engine, "connect", _tune_sqlite)
    return engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Engine for the configured symptom database, built on first use."""
    return create_symptom_engine(settings.database_url, echo=settings.echo_sql)
