from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from symptom_map.infrastructure.db import models_sqlalchemy as models


class SymptomRepository:
    def list_by_body_part(self, session: Session, body_part: str) -> list[models.SymptomMaster]:
        stmt: Any = (
            select(models.SymptomMaster)
            .where(models.SymptomMaster.body_part == body_part)
            .order_by(models.SymptomMaster.id)
        )
        return list(session.execute(stmt).scalars())

    def list_body_parts(self, session: Session) -> list[str]:
        stmt: Any = select(models.SymptomMaster.body_part).distinct().order_by(models.SymptomMaster.body_part)
        return [row[0] for row in session.execute(stmt) if row[0]]

    def count(self, session: Session) -> int:
        return int(session.execute(select(func.count(models.SymptomMaster.id))).scalar_one())

    def add_many(self, session: Session, payloads: Iterable[dict[str, Any]]) -> int:
        added = 0
        for data in payloads:
            session.add(models.SymptomMaster(**data))
            added += 1
        return added
