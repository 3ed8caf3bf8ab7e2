"""Standards catalog loader: reads standards.yaml and provides lookups."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from pera_analytics.shared.constants import DEFAULT_K_VALUE

from .distance import sort_events_by_distance
from .models import EventStandard

logger = logging.getLogger(__name__)


class StandardsCatalog:
    """Loads and provides access to the default event standards from YAML."""

    def __init__(self, yaml_path: Path):
        self.yaml_path = yaml_path
        self._standards: list[EventStandard] | None = None

    def load(self) -> list[EventStandard]:
        """Load standards from the YAML file; a missing file yields none."""
        if not self.yaml_path.exists():
            logger.warning("Standards file not found: %s", self.yaml_path)
            self._standards = []
            return []

        with open(self.yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        standards = [
            EventStandard(
                id=str(s["id"]),
                name=str(s["name"]),
                gold_time=float(s["gold_time"]),
                k_value=float(s.get("k_value", DEFAULT_K_VALUE)),
            )
            for s in data.get("standards", [])
        ]

        self._standards = standards
        return standards

    @property
    def standards(self) -> list[EventStandard]:
        if self._standards is None:
            self.load()
        return self._standards or []

    def get_standard(self, event_id: str) -> EventStandard | None:
        return next((s for s in self.standards if s.id == event_id), None)

    def sorted_by_distance(self) -> list[EventStandard]:
        return sort_events_by_distance(self.standards)
