"""Engine configuration and tolerant loaders.

Two options are recognized:
- cache capacity: number of pattern sets kept in the LRU cache (>= 1)
- symmetry threshold (deg): patterns whose largest sampled angle is below it
  are treated as half-plane, mirror-symmetric patterns (default 181)

Configs can come from free-form text ("Cache capacity: 300",
"Symmetry threshold: 181 deg"), from a mapping (camelCase or snake_case keys),
or from a file holding either form (JSON when the suffix is ``.json``).
Missing fields fall back to defaults.
"""

import json
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .cache import DEFAULT_CACHE_CAPACITY
from .normalize import DEFAULT_SYMMETRY_THRESHOLD_DEG


@dataclass(frozen=True)
class EngineConfig:
    cache_capacity: int = DEFAULT_CACHE_CAPACITY
    symmetry_threshold_deg: float = DEFAULT_SYMMETRY_THRESHOLD_DEG

    def __post_init__(self):
        if int(self.cache_capacity) != self.cache_capacity or self.cache_capacity < 1:
            raise ValueError(f"cache_capacity must be a positive integer, got {self.cache_capacity!r}")
        if not math.isfinite(self.symmetry_threshold_deg):
            raise ValueError("symmetry_threshold_deg must be finite")


_CAPACITY_KEYS = ("cache_capacity", "cacheCapacity", "capacity")
_THRESHOLD_KEYS = ("symmetry_threshold_deg", "symmetryThresholdDegrees", "symmetry_threshold")


def config_from_mapping(values: Mapping[str, Any], defaults: Optional[EngineConfig] = None) -> EngineConfig:
    """Build a config from a mapping; unknown keys are ignored."""
    if defaults is None:
        defaults = EngineConfig()
    capacity = defaults.cache_capacity
    threshold = defaults.symmetry_threshold_deg
    for k in _CAPACITY_KEYS:
        if k in values and values[k] is not None:
            capacity = int(values[k])
            break
    for k in _THRESHOLD_KEYS:
        if k in values and values[k] is not None:
            threshold = float(values[k])
            break
    return EngineConfig(cache_capacity=capacity, symmetry_threshold_deg=threshold)


def parse_config_text(text: str, defaults: Optional[EngineConfig] = None) -> EngineConfig:
    """Best-effort regex extraction of config values from free-form text."""
    if defaults is None:
        defaults = EngineConfig()
    capacity = defaults.cache_capacity
    threshold = defaults.symmetry_threshold_deg

    m = re.search(r"cache\s*_?capacity[^:=\n]*[:=]\s*([0-9]+)", text, re.IGNORECASE)
    if m:
        capacity = int(m.group(1))

    m = re.search(r"symmetry\s*_?threshold[^:=\n]*[:=]\s*([0-9]+(?:\.[0-9]+)?)", text, re.IGNORECASE)
    if m:
        threshold = float(m.group(1))

    return EngineConfig(cache_capacity=capacity, symmetry_threshold_deg=threshold)


def load_config_file(path: str | Path, defaults: Optional[EngineConfig] = None) -> EngineConfig:
    p = Path(path)
    text = p.read_text(encoding="utf-8", errors="ignore")
    if p.suffix.lower() == ".json":
        return config_from_mapping(json.loads(text), defaults)
    return parse_config_text(text, defaults)
