"""Map a raw off-axis angle into a pattern's canonical angular domain.

Rules, in order:
1. Negative angles are wrapped into [0, 360) by adding full turns.
2. If the pattern was only sampled over a half-plane (its largest sampled
   angle is below the symmetry threshold, 181 deg by default) and the angle
   is above 180 deg, it is mirrored: angle = 360 - angle.
3. Anything else is returned untouched, even outside the sampled range.
   Clamping to the first/last sample happens in the locator.

A threshold of 181 rather than 180 lets patterns measured one step past
180 deg still count as half-plane patterns. 180 deg itself is never mirrored.
"""

import math

from .errors import InvalidAngleError


DEFAULT_SYMMETRY_THRESHOLD_DEG = 181.0


def validate_angle(angle_deg: float) -> float:
    """Return ``angle_deg`` as float, raising InvalidAngleError if not finite."""
    try:
        x = float(angle_deg)
    except (TypeError, ValueError) as exc:
        raise InvalidAngleError(f"off-axis angle is not a number: {angle_deg!r}") from exc
    if not math.isfinite(x):
        raise InvalidAngleError(f"off-axis angle must be finite, got {x!r}")
    return x


def is_half_plane(max_angle_deg: float, symmetry_threshold_deg: float = DEFAULT_SYMMETRY_THRESHOLD_DEG) -> bool:
    """True when a pattern sampled up to ``max_angle_deg`` is treated as mirror-symmetric."""
    return max_angle_deg < symmetry_threshold_deg


def normalize_angle(
    angle_deg: float,
    max_angle_deg: float,
    symmetry_threshold_deg: float = DEFAULT_SYMMETRY_THRESHOLD_DEG,
) -> float:
    """Canonical angle for a pattern whose largest sampled angle is ``max_angle_deg``."""
    x = validate_angle(angle_deg)
    if x < 0.0:
        x = x % 360.0
        # -1e-20 % 360 rounds up to 360.0
        if x >= 360.0:
            x = 0.0
    if is_half_plane(max_angle_deg, symmetry_threshold_deg) and x > 180.0:
        x = 360.0 - x
    return x
