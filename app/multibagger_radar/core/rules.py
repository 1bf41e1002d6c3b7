from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .settings import RULES_PATH


class RuleValidationError(ValueError):
    pass


def _required_keys() -> dict[str, list[str]]:
    return {
        "root": ["data_provider", "controls", "sliders", "ui"],
        "controls": [
            "min_score",
            "min_margin",
            "min_cagr",
            "max_debt",
            "horizon_years",
            "discount_rate_delta",
            "growth_rate_delta",
        ],
        "slider": ["min", "max", "step"],
    }


def validate_rules(rules: dict[str, Any]) -> None:
    required = _required_keys()

    for key in required["root"]:
        if key not in rules:
            raise RuleValidationError(f"Missing root key: {key}")

    controls = rules["controls"]
    sliders = rules["sliders"]
    if not isinstance(controls, dict) or not isinstance(sliders, dict):
        raise RuleValidationError("controls and sliders must be mappings")

    for key in required["controls"]:
        if key not in controls:
            raise RuleValidationError(f"Missing controls.{key}")
        if key not in sliders:
            raise RuleValidationError(f"Missing sliders.{key}")

        bounds = sliders[key]
        for bound in required["slider"]:
            if bound not in bounds:
                raise RuleValidationError(f"Missing sliders.{key}.{bound}")

        low, high = float(bounds["min"]), float(bounds["max"])
        if low > high:
            raise RuleValidationError(f"sliders.{key}: min {low} is greater than max {high}")
        if float(bounds["step"]) <= 0:
            raise RuleValidationError(f"sliders.{key}.step must be > 0")

        value = float(controls[key])
        if not low <= value <= high:
            raise RuleValidationError(f"controls.{key}={value} is outside slider range [{low}, {high}]")

    horizon = int(controls["horizon_years"])
    if not 5 <= horizon <= 15:
        raise RuleValidationError("controls.horizon_years must be between 5 and 15")


def load_rules(path: Path | None = None) -> dict[str, Any]:
    path = path or RULES_PATH
    if not path.exists():
        raise RuleValidationError(f"Rules file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise RuleValidationError("Rules YAML must parse into a dictionary")

    validate_rules(data)
    return data
