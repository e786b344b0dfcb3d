from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from symptom_map.infrastructure.db.engine import get_engine

SessionFactory = Callable[[], AbstractContextManager[Session]]


def make_session_scope(engine: Engine) -> SessionFactory:
    """Transactional scope factory bound to ``engine``: commit on exit, rollback on error."""
    session_local = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @contextmanager
    def _scope() -> Iterator[Session]:
        session = session_local()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return _scope


@lru_cache(maxsize=1)
def _default_scope() -> SessionFactory:
    return make_session_scope(get_engine())


def session_scope() -> AbstractContextManager[Session]:
    """Session on the configured database; the engine is created on first call."""
    return _default_scope()()
