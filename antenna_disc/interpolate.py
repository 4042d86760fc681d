"""Linear interpolation of discrimination values between bracketing samples."""

from typing import Dict, Iterable

from .errors import IncompleteDataError
from .patterns import COLUMNS, PatternSampleSet


def _check_present(sample_set: PatternSampleSet, index: int, column: str) -> None:
    if sample_set.is_null(index, column):
        angle = float(sample_set.angles_deg[index])
        raise IncompleteDataError(
            f"pattern {sample_set.pattern_id!r}: {column} is missing at {angle:g} deg",
            pattern_id=sample_set.pattern_id,
            column=column,
            angle_deg=angle,
        )


def interpolate_value(
    sample_set: PatternSampleSet,
    low: int,
    high: int,
    angle_deg: float,
    column: str,
) -> float:
    """Value of ``column`` at ``angle_deg`` from the samples at ``low``/``high``.

    When ``low == high`` the stored value is returned as-is (exact hit or
    clamped boundary). Otherwise:

        v = v_low + (angle - a_low) * (v_high - v_low) / (a_high - a_low)

    A null at either endpoint raises IncompleteDataError; we never fall back to
    the one valid endpoint.
    """
    if column not in COLUMNS:
        raise ValueError(f"unknown discrimination column: {column!r}")
    _check_present(sample_set, low, column)
    if low == high:
        return sample_set.value(low, column)
    _check_present(sample_set, high, column)
    a0 = float(sample_set.angles_deg[low])
    a1 = float(sample_set.angles_deg[high])
    v0 = sample_set.value(low, column)
    v1 = sample_set.value(high, column)
    return v0 + (float(angle_deg) - a0) * (v1 - v0) / (a1 - a0)


def interpolate_columns(
    sample_set: PatternSampleSet,
    low: int,
    high: int,
    angle_deg: float,
    columns: Iterable[str] = COLUMNS,
) -> Dict[str, float]:
    """Interpolate several columns; all succeed or the first failure is raised."""
    return {col: interpolate_value(sample_set, low, high, angle_deg, col) for col in columns}
