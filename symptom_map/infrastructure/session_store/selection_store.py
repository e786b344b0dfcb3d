from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from symptom_map.application.dto.selection_dto import SelectionStateDto
from symptom_map.config import SELECTION_STATE_FILE
from symptom_map.domain.models.selection_state import SelectionState

SCHEMA = "symptom_map.selection.v1"


class SelectionStore:
    """Keeps the wizard selection across restarts in a small JSON file."""

    def __init__(self, path: str | Path = SELECTION_STATE_FILE) -> None:
        self.path = Path(path)
        self._logger = logging.getLogger(__name__)

    def save(self, state: SelectionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        dto = SelectionStateDto.from_state(state)
        self.path.write_text(
            json.dumps(
                {
                    "schema": SCHEMA,
                    "saved_at": datetime.now(UTC).isoformat(),
                    "state": dto.model_dump(mode="json", by_alias=True),
                },
                ensure_ascii=False,
                indent=2,
            ),
            encoding="utf-8",
        )

    def load(self) -> SelectionState:
        if not self.path.exists():
            return SelectionState()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            raw_state = payload.get("state") if isinstance(payload, dict) else None
            if not isinstance(raw_state, dict):
                raise ValueError("selection file has no state object")
            return SelectionStateDto.model_validate(raw_state).to_state()
        except (OSError, ValueError, ValidationError) as exc:
            self._logger.warning("Ignoring unreadable selection file %s: %s", self.path, exc)
            return SelectionState()

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
