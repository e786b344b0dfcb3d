from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.engine import make_url

from symptom_map.config import settings
from symptom_map.container import build_container
from symptom_map.infrastructure.db import models_sqlalchemy as models
from symptom_map.infrastructure.db.engine import create_symptom_engine, get_engine
from symptom_map.infrastructure.db.session import make_session_scope
from symptom_map.infrastructure.session_store.selection_store import SelectionStore


@pytest.fixture
def engine(tmp_path: Path):
    engine = create_symptom_engine(f"sqlite:///{(tmp_path / 'scope.db').as_posix()}")
    models.Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


def test_scope_commits_on_clean_exit(engine) -> None:
    scope = make_session_scope(engine)

    with scope() as session:
        session.add(models.SymptomMaster(body_part="NECK", symptoms="Stiff neck"))

    with scope() as session:
        rows = session.scalars(select(models.SymptomMaster.symptoms)).all()
    assert rows == ["Stiff neck"]


def test_scope_rolls_back_and_reraises(engine) -> None:
    scope = make_session_scope(engine)

    with pytest.raises(RuntimeError, match="boom"):
        with scope() as session:
            session.add(models.SymptomMaster(body_part="NECK", symptoms="Stiff neck"))
            session.flush()
            raise RuntimeError("boom")

    with scope() as session:
        assert session.scalars(select(models.SymptomMaster)).all() == []


def test_configured_engine_is_built_once() -> None:
    first = get_engine()

    assert get_engine() is first
    assert first.url == make_url(settings.database_url)


def test_container_wires_the_given_session_factory(engine, tmp_path: Path) -> None:
    scope = make_session_scope(engine)
    store = SelectionStore(tmp_path / "selection.json")

    container = build_container(session_factory=scope, selection_store=store)

    assert container.selection_store is store
    assert container.symptom_resolver_service.session_factory is scope
    assert container.symptom_seed_service.session_factory is scope
    assert container.symptom_seed_service.repo is container.symptom_repo
