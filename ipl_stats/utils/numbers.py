"""Numeric helpers shared by the mapping and aggregation code."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ``.5`` going up.

    Python's :func:`round` rounds half to even, which would report an average
    of 2.5 runs as 2; dashboards expect 3.
    """

    return int(math.floor(value + 0.5))


def safe_average(total: float, count: int) -> int:
    """Return ``total / count`` rounded half-up, or ``0`` when ``count`` is 0."""

    if count <= 0:
        return 0
    return round_half_up(total / count)


__all__ = ["round_half_up", "safe_average"]
