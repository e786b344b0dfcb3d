from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from symptom_map.application.dto.symptom_dto import (
    FallbackSymptomDto,
    RegionCoordinatesDto,
    SymptomContentDto,
    SymptomRegionDto,
    SymptomRowDto,
)
from symptom_map.application.static_content import STATIC_SYMPTOM_CONTENT
from symptom_map.domain.geometry import RegionBox
from symptom_map.domain.rules.region_layout import (
    assign_template_slots,
    fallback_text,
    layout_grid,
    region_id,
    region_text,
    template_for,
)
from symptom_map.infrastructure.db.repositories.symptom_repo import SymptomRepository
from symptom_map.infrastructure.db.session import SessionFactory, session_scope


class SymptomResolverService:
    """Maps a body part to spatial symptom regions.

    Resolution order: symptom database, then the bundled static table, then an
    empty result. Nothing is cached and no error ever reaches the caller.
    """

    def __init__(
        self,
        repo: SymptomRepository | None = None,
        session_factory: SessionFactory = session_scope,
        static_content: Mapping[str, SymptomContentDto] | None = None,
    ) -> None:
        self.repo = repo or SymptomRepository()
        self.session_factory = session_factory
        self.static_content = STATIC_SYMPTOM_CONTENT if static_content is None else static_content
        self._logger = logging.getLogger(__name__)

    def resolve(self, body_part: str) -> SymptomContentDto:
        try:
            rows = self._query_rows(body_part)
        except Exception:  # noqa: BLE001
            self._logger.warning("Symptom query failed for %r; using static content", body_part, exc_info=True)
            return self.static_fallback(body_part)
        if not rows:
            self._logger.info("No symptom rows for %r; using static content", body_part)
            return self.static_fallback(body_part)
        return self.build_content(body_part, rows)

    def static_fallback(self, body_part: str) -> SymptomContentDto:
        content = self.static_content.get(body_part)
        if content is None:
            return SymptomContentDto()
        return content.model_copy(deep=True)

    def build_content(self, body_part: str, rows: Sequence[SymptomRowDto]) -> SymptomContentDto:
        boxes = self._layout(body_part, rows)
        regions = [
            SymptomRegionDto(
                id=region_id(body_part, index),
                text=region_text(row.symptoms, row.short_summary),
                diagnosis=row.probable_diagnosis,
                summary=row.short_summary,
                coordinates=RegionCoordinatesDto.from_box(box),
            )
            for index, (row, box) in enumerate(zip(rows, boxes, strict=True))
        ]
        fallback = [
            FallbackSymptomDto(id=f"fallback_{index}", text=fallback_text(row.symptoms, row.short_summary))
            for index, row in enumerate(rows)
        ]
        return SymptomContentDto(regions=regions, fallback_symptoms=fallback)

    def _layout(self, body_part: str, rows: Sequence[SymptomRowDto]) -> list[RegionBox]:
        template = template_for(body_part)
        if template is None:
            return layout_grid(len(rows))
        texts = [f"{row.symptoms} {row.short_summary}" for row in rows]
        return [template[slot].box for slot in assign_template_slots(texts, template)]

    def _query_rows(self, body_part: str) -> list[SymptomRowDto]:
        with self.session_factory() as session:
            records = self.repo.list_by_body_part(session, body_part)
            rows: list[SymptomRowDto] = []
            for record in records:
                try:
                    rows.append(SymptomRowDto.model_validate(record))
                except ValidationError:
                    self._logger.warning("Skipping malformed symptom row id=%s", getattr(record, "id", None))
            return rows
