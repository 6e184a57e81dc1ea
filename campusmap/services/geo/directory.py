from __future__ import annotations

import json
from pathlib import Path

from campusmap.domain.schemas.building import Building


def load_building_directory(path: str | Path) -> list[Building]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Building directory {path} must be a JSON list")
    return [Building.model_validate(entry) for entry in raw]
