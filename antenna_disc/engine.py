"""Discrimination query facade.

``DiscriminationEngine.query`` answers "how much is a signal attenuated at
this off-axis angle for this antenna pattern?" in four steps:

1. reject non-finite angles (InvalidAngleError), before any store access
2. get the pattern's samples from the LRU cache (fetching on a miss)
3. normalize the angle using the pattern's largest sampled angle
   (negative wrap, half-plane mirroring)
4. locate the bracketing samples and interpolate each requested column

The engine is safe to share between threads; the cache is the only shared
mutable state and pattern data is never modified.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .cache import CacheStats, PatternCache
from .config import EngineConfig
from .interpolate import interpolate_columns
from .locate import locate_bounds
from .normalize import normalize_angle, validate_angle
from .patterns import COLUMNS, Polarization
from .store import PatternStore


@dataclass(frozen=True)
class DiscriminationResult:
    """Discrimination values (dB) for one query.

    Columns the polarization selector did not ask for are None.
    """
    pattern_id: str
    off_axis_angle_deg: float
    canonical_angle_deg: float
    polarization: Polarization
    co_polar_v: Optional[float] = None
    cross_polar_v: Optional[float] = None
    co_polar_h: Optional[float] = None
    cross_polar_h: Optional[float] = None

    def as_tuple(self) -> Tuple[Optional[float], Optional[float], Optional[float], Optional[float]]:
        return (self.co_polar_v, self.cross_polar_v, self.co_polar_h, self.cross_polar_h)


class DiscriminationEngine:
    def __init__(self, store: PatternStore, config: Optional[EngineConfig] = None):
        self.config = config if config is not None else EngineConfig()
        self.cache = PatternCache(store, capacity=self.config.cache_capacity)

    def query(
        self,
        pattern_id: str,
        off_axis_angle_deg: float,
        polarization: "Polarization | str" = Polarization.BOTH,
    ) -> DiscriminationResult:
        """Discrimination of ``pattern_id`` at ``off_axis_angle_deg``.

        Raises InvalidAngleError, PatternNotFoundError, MalformedPatternError or
        IncompleteDataError; no partial result is ever returned.
        """
        angle = validate_angle(off_axis_angle_deg)
        pol = Polarization.parse(polarization)
        sample_set = self.cache.get_or_load(pattern_id)
        canonical = normalize_angle(angle, sample_set.max_angle_deg, self.config.symmetry_threshold_deg)
        low, high = locate_bounds(sample_set.angles_deg, canonical)
        values = interpolate_columns(sample_set, low, high, canonical, pol.columns)
        return DiscriminationResult(
            pattern_id=pattern_id,
            off_axis_angle_deg=angle,
            canonical_angle_deg=canonical,
            polarization=pol,
            **{col: values.get(col) for col in COLUMNS},
        )

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def invalidate(self, pattern_id: str) -> bool:
        return self.cache.invalidate(pattern_id)

    def clear_cache(self) -> None:
        self.cache.clear()


def query_discrimination(
    store: PatternStore,
    pattern_id: str,
    off_axis_angle_deg: float,
    polarization: "Polarization | str" = Polarization.BOTH,
    config: Optional[EngineConfig] = None,
) -> DiscriminationResult:
    """One-shot query with a fresh (cold) engine."""
    return DiscriminationEngine(store, config).query(pattern_id, off_axis_angle_deg, polarization)
