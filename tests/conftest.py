from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Generator
from pathlib import Path
from uuid import uuid4

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
# Keep config's import-time directories out of the real user profile.
os.environ.setdefault("SYMPTOM_MAP_DATA_DIR", str(Path("pytest_artifacts") / "data_dir"))


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def tmp_path() -> Generator[Path, None, None]:
    base = Path("pytest_artifacts")
    base.mkdir(parents=True, exist_ok=True)
    path = base / uuid4().hex
    path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def make_session_factory():
    from symptom_map.infrastructure.db.engine import create_symptom_engine
    from symptom_map.infrastructure.db.models_sqlalchemy import Base
    from symptom_map.infrastructure.db.session import SessionFactory, make_session_scope

    engines = []

    def _factory(db_path: Path) -> SessionFactory:
        engine = create_symptom_engine(f"sqlite:///{db_path.as_posix()}")
        engines.append(engine)
        Base.metadata.create_all(engine)
        return make_session_scope(engine)

    yield _factory
    for engine in engines:
        engine.dispose()


@pytest.fixture
def wait_until(qapp):  # noqa: ARG001
    from PySide6.QtCore import QCoreApplication, QDeadlineTimer, QEventLoop, QThreadPool

    def _wait(condition: Callable[[], bool], timeout_ms: int = 3000) -> bool:
        deadline = QDeadlineTimer(timeout_ms)
        while not condition():
            if deadline.hasExpired():
                return False
            QThreadPool.globalInstance().waitForDone(10)
            QCoreApplication.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, 20)
        return True

    return _wait
