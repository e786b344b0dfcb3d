from __future__ import annotations

from dataclasses import dataclass

from symptom_map.application.services.symptom_resolver_service import SymptomResolverService
from symptom_map.application.services.symptom_seed_service import SymptomSeedService
from symptom_map.infrastructure.db.repositories.symptom_repo import SymptomRepository
from symptom_map.infrastructure.db.session import SessionFactory, session_scope
from symptom_map.infrastructure.session_store.selection_store import SelectionStore


@dataclass
class Container:
    symptom_repo: SymptomRepository
    selection_store: SelectionStore

    symptom_resolver_service: SymptomResolverService
    symptom_seed_service: SymptomSeedService


def build_container(
    session_factory: SessionFactory | None = None,
    selection_store: SelectionStore | None = None,
) -> Container:
    session_factory = session_factory or session_scope
    symptom_repo = SymptomRepository()

    return Container(
        symptom_repo=symptom_repo,
        selection_store=selection_store or SelectionStore(),
        symptom_resolver_service=SymptomResolverService(repo=symptom_repo, session_factory=session_factory),
        symptom_seed_service=SymptomSeedService(repo=symptom_repo, session_factory=session_factory),
    )
