from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from bookingdesk.core.schemas import BusinessConfig


def load_business_config(businesses_dir: str | Path, slug: str) -> BusinessConfig:
    """
    Load one business variant from `<businesses_dir>/<slug>.yaml`.

    The YAML may wrap the fields in a top-level `business:` key.
    """
    path = Path(businesses_dir) / f"{slug}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"{slug}.yaml not found in {businesses_dir}")

    data = _load_yaml(path)
    data = data.get("business", data)
    data.setdefault("slug", slug)
    return BusinessConfig(**data)


def list_businesses(businesses_dir: str | Path = "businesses") -> list[str]:
    """Return the slugs of all business variants, excluding _template."""
    base = Path(businesses_dir)
    if not base.exists():
        return []

    return sorted(p.stem for p in base.glob("*.yaml") if p.stem != "_template")


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
