"""Find the samples that bracket an angle in a sorted angle array."""

from typing import Sequence, Tuple

import numpy as np


def locate_bounds(angles_deg: Sequence[float], angle_deg: float) -> Tuple[int, int]:
    """Return ``(low, high)`` indices of the samples bracketing ``angle_deg``.

    - At or below the first angle: ``(0, 0)``
    - At or above the last angle: ``(n - 1, n - 1)``
    - Exactly on a sampled angle ``i``: ``(i, i)``
    - Otherwise ``high == low + 1`` and ``angles[low] < angle < angles[high]``

    ``angles_deg`` must be sorted ascending without duplicates. The search is a
    binary search, O(log n).
    """
    angles = np.asarray(angles_deg, dtype=float)
    n = int(angles.shape[0])
    if n == 0:
        raise ValueError("angles_deg must not be empty")
    x = float(angle_deg)
    if x <= angles[0]:
        return 0, 0
    if x >= angles[-1]:
        return n - 1, n - 1
    # first index with angles[i] >= x; 1 <= i <= n - 1 here
    i = int(np.searchsorted(angles, x, side="left"))
    if angles[i] == x:
        return i, i
    return i - 1, i
