"""Helpers to persist render plans for debugging."""
from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from spec_table.model.plan_model import RenderPlan
from spec_table.model.style_model import StyleSet

PLAN_FILENAME = "render_plan.json"


class DebugDumper:
    """Writes render plans onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, plan: RenderPlan, name: str = PLAN_FILENAME) -> Path:
        """Persist the plan as JSON and return the written path."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / name
        target.write_text(json.dumps(serialize(plan), indent=2))
        return target


def serialize(value: Any) -> Any:
    """Convert plan dataclasses into JSON-ready structures.

    Style sets keep their stored camelCase keys so dumps can be diffed
    against template payloads.
    """
    if isinstance(value, StyleSet):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        return {f.name: serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value
