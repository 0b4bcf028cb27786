"""
Interval estimators for draws from a distribution.

Every estimator returns a float array of shape ``(k, 2)`` holding ``k``
``(lower, upper)`` pairs. ``qi`` and ``hdci`` always return one pair; ``hdi``
returns one pair per disjoint high-density region.

Missing-value policy: with ``na_rm=False`` a sample containing NaN yields a
single ``(nan, nan)`` pair and no computation is attempted.
"""

from __future__ import annotations

import warnings
from typing import Callable, Dict

import numpy as np

from .density import DensityEstimate, estimate_density
from .sample import clean_sample


def _undefined_interval() -> np.ndarray:
    return np.array([[np.nan, np.nan]])


def qi(x, width: float = 0.95, na_rm: bool = False) -> np.ndarray:
    """Equal-tailed quantile interval.

    Args:
        x: Draws to summarize.
        width (float): Probability mass of the interval.
        na_rm (bool): Drop missing values instead of propagating them.

    Returns:
        numpy.ndarray: One ``(lower, upper)`` row at quantiles
        ``(1 - width) / 2`` and ``(1 + width) / 2`` (linear interpolation).
    """
    draws = clean_sample(x, na_rm)
    if draws is None or draws.size == 0:
        return _undefined_interval()
    probs = [(1.0 - width) / 2.0, (1.0 + width) / 2.0]
    return np.quantile(draws, probs).reshape(1, 2)


def shortest_interval(x, width: float = 0.95) -> np.ndarray:
    """Narrowest window of sorted draws covering ``width`` of the sample.

    Candidate windows span ``floor(n * width)`` index positions of the
    sorted draws; the first narrowest one wins ties.

    Raises:
        ValueError: If ``width`` lies outside ``[0, 1]``.
    """
    if not 0.0 <= width <= 1.0:
        raise ValueError(f"width must be within [0, 1], got {width!r}")
    draws = np.sort(np.asarray(x, dtype=float).ravel())
    n = draws.size
    if n == 0:
        return _undefined_interval()

    span = min(int(np.floor(n * width)), n - 1)
    lows = draws[: n - span]
    highs = draws[span:]
    best = int(np.argmin(highs - lows))
    return np.array([[lows[best], highs[best]]])


def hdi_from_density(
    density: DensityEstimate, width: float = 0.95, allow_split: bool = True
) -> np.ndarray:
    """Highest-density region(s) of a gridded density estimate.

    Grid points are ranked by density height; the threshold is the smallest
    height whose cumulative mass reaches ``width`` of the total. Grid points at
    or above it are split into contiguous regions.

    Args:
        density (DensityEstimate): Output of ``estimate_density``.
        width (float): Target probability mass.
        allow_split (bool): Return one row per region. When false and the
            regions are disjoint, warn and return the shortest single
            credible interval on the cumulative density instead.

    Returns:
        numpy.ndarray: ``(k, 2)`` array of region bounds in grid order.

    Raises:
        ValueError: If ``width`` exceeds 1 (no threshold reaches the mass).
    """
    y = np.asarray(density.y, dtype=float)
    grid = np.asarray(density.x, dtype=float)
    if y.size == 0:
        return _undefined_interval()

    heights = np.sort(y)[::-1]
    reached = np.flatnonzero(np.cumsum(heights) >= y.sum() * width)
    if reached.size == 0:
        raise ValueError(f"width must be within [0, 1], got {width!r}")
    threshold = heights[reached[0]]

    indices = np.flatnonzero(y >= threshold)
    gaps = np.flatnonzero(np.diff(indices) > 1)

    if gaps.size and not allow_split:
        warnings.warn(
            "The HDI is discontinuous but allow_split=False; "
            "the result is a valid credible interval but not an HDI.",
            UserWarning,
            stacklevel=2,
        )
        cumulative = np.cumsum(y) / y.sum()
        low = np.flatnonzero(cumulative < 1.0 - width)
        if low.size == 0:
            return np.array([[grid[0], grid[-1]]])
        upp = np.searchsorted(cumulative, cumulative[low] + width, side="right")
        upp = np.minimum(upp, y.size - 1)
        spans = upp - low
        best = spans == spans.min()
        return np.array([[grid[low[best]].mean(), grid[upp[best]].mean()]])

    begins = indices[np.r_[0, gaps + 1]]
    ends = indices[np.r_[gaps, indices.size - 1]]
    return np.column_stack([grid[begins], grid[ends]])


def hdi(x, width: float = 0.95, na_rm: bool = False) -> np.ndarray:
    """Highest-density interval(s), possibly several for multimodal draws.

    The density is estimated with ``cut=0``. When it yields a single region,
    the bounds are recomputed from the draws with ``shortest_interval``, which
    is narrower than the grid-resolution estimate.

    Returns:
        numpy.ndarray: One row per disjoint region, in increasing order.
    """
    draws = clean_sample(x, na_rm)
    if draws is None or draws.size == 0:
        return _undefined_interval()

    intervals = hdi_from_density(estimate_density(draws, cut=0), width, allow_split=True)
    if intervals.shape[0] == 1:
        intervals = shortest_interval(draws, width)
    return intervals


def hdci(x, width: float = 0.95, na_rm: bool = False) -> np.ndarray:
    """Highest-density continuous interval: the narrowest single interval."""
    draws = clean_sample(x, na_rm)
    if draws is None or draws.size == 0:
        return _undefined_interval()
    return shortest_interval(draws, width)


INTERVAL_FUNCTIONS: Dict[str, Callable[..., np.ndarray]] = {
    "qi": qi,
    "hdi": hdi,
    "hdci": hdci,
}
