"""
Tolerance registry: loads the numeric tolerances used by the geometric
predicates from YAML at startup and exposes them read-only.

The registry is a module-level singleton; call get_tolerances() to obtain it.
The table is loaded and validated once at import time. Nothing writes to the
registry after startup.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

_DATA_DIR = Path(__file__).parent / "data"

_REQUIRED_KEYS = ("touch_tolerance", "projection_epsilon", "point_tolerance")


@dataclass(frozen=True)
class Tolerances:
    """
    Distances and parameters below which two values are considered equal.

    touch_tolerance:    point-to-edge distance treated as "on the boundary"
    projection_epsilon: projection parameter treated as "at the start vertex"
    point_tolerance:    point-to-line distance used by intersects()
    """

    touch_tolerance: float
    projection_epsilon: float
    point_tolerance: float


class ToleranceRegistry:
    """
    Read-only holder of the tolerance table.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_tolerances() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir
        self.tolerances: Tolerances = self._load_tolerances()

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self._data_dir / filename
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Tolerance data file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse tolerance data file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Tolerance data file {path} must contain a mapping")
        return cast(dict[str, Any], data)

    def _load_tolerances(self) -> Tolerances:
        data = self._load_yaml("tolerances.yaml")
        errors: list[str] = []
        values: dict[str, float] = {}
        for key in _REQUIRED_KEYS:
            if key not in data:
                errors.append(f"missing key {key!r}")
                continue
            raw = data[key]
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                errors.append(f"{key!r} must be a number, got {raw!r}")
            elif raw <= 0:
                errors.append(f"{key!r} must be positive, got {raw!r}")
            else:
                values[key] = float(raw)
        if errors:
            raise ValueError(
                "Tolerance registry validation failed:\n" + "\n".join(f"  • {e}" for e in errors)
            )
        return Tolerances(**values)


# ── Module-level singleton ─────────────────────────────────────────────────────
#
# Initialized eagerly at import time; read-only after construction.

_registry: ToleranceRegistry = ToleranceRegistry()


def get_tolerances() -> Tolerances:
    """Return the tolerances of the module-level registry."""
    return _registry.tolerances
