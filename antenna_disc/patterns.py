"""Antenna discrimination pattern data model.

A pattern is the measured discrimination curve of one antenna model: for a set
of off-axis angles (degrees) it stores four attenuations in dB:

- co-polar, vertical      (``co_polar_v``)
- cross-polar, vertical   (``cross_polar_v``)
- co-polar, horizontal    (``co_polar_h``)
- cross-polar, horizontal (``cross_polar_h``)

Samples are kept as read-only numpy arrays sorted by angle. Missing values
(``None`` or NaN in the raw rows) are recorded in a null mask and are never
used for interpolation.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import MalformedPatternError


logger = logging.getLogger(__name__)

# Column order of ``PatternSampleSet.values_db``
COLUMNS: Tuple[str, ...] = ("co_polar_v", "cross_polar_v", "co_polar_h", "cross_polar_h")
VERTICAL_COLUMNS: Tuple[str, ...] = ("co_polar_v", "cross_polar_v")
HORIZONTAL_COLUMNS: Tuple[str, ...] = ("co_polar_h", "cross_polar_h")

# Two sampled angles closer than this are the same angle
ANGLE_EPS_DEG = 1e-9


class Polarization(str, Enum):
    """Which polarization plane(s) a query needs."""

    VERTICAL = "V"
    HORIZONTAL = "H"
    BOTH = "both"

    @classmethod
    def parse(cls, value: "str | Polarization") -> "Polarization":
        if isinstance(value, Polarization):
            return value
        s = str(value).strip().lower()
        aliases = {
            "v": cls.VERTICAL,
            "vertical": cls.VERTICAL,
            "h": cls.HORIZONTAL,
            "horizontal": cls.HORIZONTAL,
            "both": cls.BOTH,
            "b": cls.BOTH,
            "all": cls.BOTH,
        }
        if s not in aliases:
            raise ValueError(f"unknown polarization selector: {value!r}")
        return aliases[s]

    @property
    def columns(self) -> Tuple[str, ...]:
        if self is Polarization.VERTICAL:
            return VERTICAL_COLUMNS
        if self is Polarization.HORIZONTAL:
            return HORIZONTAL_COLUMNS
        return COLUMNS


class PatternSample(NamedTuple):
    """One row of a pattern: angle plus the four discrimination values."""

    angle_deg: float
    co_polar_v: Optional[float]
    cross_polar_v: Optional[float]
    co_polar_h: Optional[float]
    cross_polar_h: Optional[float]


@dataclass(frozen=True, eq=False)
class PatternSampleSet:
    """Sorted, immutable samples of one antenna pattern.

    pattern_id: identifier of the pattern in the reference store
    angles_deg: (n,) float array, strictly ascending
    values_db: (n, 4) float array in ``COLUMNS`` order
    null_mask: optional (n, 4) bool array, True where a value is missing
    """

    pattern_id: str
    angles_deg: np.ndarray
    values_db: np.ndarray
    null_mask: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return int(self.angles_deg.shape[0])

    @property
    def min_angle_deg(self) -> float:
        return float(self.angles_deg[0])

    @property
    def max_angle_deg(self) -> float:
        return float(self.angles_deg[-1])

    def is_null(self, index: int, column: str) -> bool:
        if self.null_mask is None:
            return False
        return bool(self.null_mask[index, COLUMNS.index(column)])

    def value(self, index: int, column: str) -> float:
        return float(self.values_db[index, COLUMNS.index(column)])

    def sample(self, index: int) -> PatternSample:
        vals = [
            None if self.is_null(index, col) else self.value(index, col)
            for col in COLUMNS
        ]
        return PatternSample(float(self.angles_deg[index]), *vals)


def _as_value(raw) -> float:
    if raw is None:
        return math.nan
    return float(raw)


def build_sample_set(pattern_id: str, rows: Iterable[Sequence]) -> PatternSampleSet:
    """Validate raw rows and freeze them into a ``PatternSampleSet``.

    Each row is ``(angle_deg, co_v, cross_v, co_h, cross_h)``. Rows may arrive
    in any order; they are sorted by angle. ``None`` or NaN values become nulls.

    Raises MalformedPatternError when the rows are empty, have the wrong width,
    hold a non-finite angle or an infinite value, or repeat an angle.
    """
    parsed = []
    for i, row in enumerate(rows):
        r = tuple(row)
        if len(r) != 1 + len(COLUMNS):
            raise MalformedPatternError(
                f"pattern {pattern_id!r}: row {i} has {len(r)} fields, expected {1 + len(COLUMNS)}",
                pattern_id,
            )
        try:
            parsed.append(tuple(_as_value(x) for x in r))
        except (TypeError, ValueError) as exc:
            raise MalformedPatternError(
                f"pattern {pattern_id!r}: row {i} is not numeric: {exc}", pattern_id
            ) from exc
    if not parsed:
        raise MalformedPatternError(f"pattern {pattern_id!r} has no samples", pattern_id)

    table = np.asarray(parsed, dtype=float)
    angles = table[:, 0]
    values = table[:, 1:]

    if not np.all(np.isfinite(angles)):
        logger.warning("Rejecting pattern %s: non-finite angle in samples", pattern_id)
        raise MalformedPatternError(f"pattern {pattern_id!r} has a non-finite angle", pattern_id)
    if np.any(np.isinf(values)):
        logger.warning("Rejecting pattern %s: infinite discrimination value", pattern_id)
        raise MalformedPatternError(f"pattern {pattern_id!r} has an infinite value", pattern_id)

    order = np.argsort(angles, kind="stable")
    angles = angles[order]
    values = values[order]
    if angles.shape[0] > 1:
        gaps = np.diff(angles)
        dup = np.flatnonzero(gaps < ANGLE_EPS_DEG)
        if dup.size:
            a = float(angles[dup[0]])
            logger.warning("Rejecting pattern %s: duplicate angle %.6g", pattern_id, a)
            raise MalformedPatternError(
                f"pattern {pattern_id!r} repeats angle {a:g} deg", pattern_id
            )

    nulls = np.isnan(values)
    null_mask: Optional[np.ndarray] = None
    if nulls.any():
        null_mask = nulls
        null_mask.flags.writeable = False
    angles.flags.writeable = False
    values.flags.writeable = False
    return PatternSampleSet(
        pattern_id=str(pattern_id),
        angles_deg=angles,
        values_db=values,
        null_mask=null_mask,
    )
