from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from symptom_map.config import RESOURCES_DIR
from symptom_map.infrastructure.db.repositories.symptom_repo import SymptomRepository
from symptom_map.infrastructure.db.session import SessionFactory, session_scope

_SEED_FIELDS = (
    "body_part",
    "symptoms",
    "short_summary",
    "probable_diagnosis",
    "basic_investigations",
    "common_treatments",
    "prescription_yn",
)


class SymptomSeedService:
    def __init__(
        self,
        repo: SymptomRepository | None = None,
        session_factory: SessionFactory = session_scope,
    ) -> None:
        self.repo = repo or SymptomRepository()
        self.session_factory = session_factory
        self._logger = logging.getLogger(__name__)

    def seed_defaults(self, seed_path: Path | None = None) -> int:
        seed_file = seed_path or RESOURCES_DIR / "symptom_seed.json"
        if not seed_file.exists():
            self._logger.warning("Symptom seed file not found: %s", seed_file)
            return 0
        payload = json.loads(seed_file.read_text(encoding="utf-8"))
        rows = [self._normalize(item) for item in payload.get("symptoms", [])]
        rows = [row for row in rows if row is not None]
        with self.session_factory() as session:
            added = self.repo.add_many(session, rows)
        self._logger.info("Symptom seed applied: rows=%s", added)
        return added

    def seed_defaults_if_empty(self, seed_path: Path | None = None) -> int:
        with self.session_factory() as session:
            has_rows = self.repo.count(session) > 0
        if has_rows:
            return 0
        return self.seed_defaults(seed_path)

    def _normalize(self, item: dict[str, Any]) -> dict[str, Any] | None:
        body_part = str(item.get("body_part") or "").strip()
        if not body_part:
            self._logger.warning("Seed row without body_part skipped: %s", item)
            return None
        row = {key: item.get(key) for key in _SEED_FIELDS}
        row["body_part"] = body_part
        row["symptoms"] = str(row.get("symptoms") or "")
        row["prescription_yn"] = "Y" if str(row.get("prescription_yn") or "").strip().upper() == "Y" else "N"
        return row
