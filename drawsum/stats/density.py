"""
Kernel density estimation used by the mode and highest-density computations.

The estimate is a Gaussian kernel density evaluated on an evenly spaced grid.
``cut`` controls how many bandwidths the grid extends past the observed range;
mode and HDI use ``cut=0`` so near-zero tails never widen an interval.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Union

import numpy as np
from scipy.stats import gaussian_kde, norm

from .sample import to_float_array

DEFAULT_GRID_POINTS = 512
DEFAULT_CUT = 3.0

# qnorm(0.75) - qnorm(0.25), rounded as in the classic rule of thumb
_IQR_TO_SD = 1.34


@dataclass(frozen=True)
class DensityEstimate:
    x: np.ndarray
    y: np.ndarray
    bw: float
    n: int


def _robust_scale(x: np.ndarray) -> float:
    sd = float(np.std(x, ddof=1)) if x.size > 1 else 0.0
    q25, q75 = np.quantile(x, [0.25, 0.75])
    scale = min(sd, float(q75 - q25) / _IQR_TO_SD)
    if not scale:
        # zero spread: fall back to sd, then the first value, then unity
        scale = sd or abs(float(x[0])) or 1.0
    return scale


def bandwidth_nrd0(x) -> float:
    """Silverman's rule-of-thumb bandwidth, ``0.9 * min(sd, IQR/1.34) * n^(-1/5)``.

    Args:
        x: Finite draws (at least one value).

    Returns:
        float: Kernel standard deviation.

    Raises:
        ValueError: If ``x`` is empty.
    """
    arr = to_float_array(x)
    if arr.size == 0:
        raise ValueError("Bandwidth selection needs at least one data point.")
    return 0.9 * _robust_scale(arr) * arr.size ** -0.2


def bandwidth_nrd(x) -> float:
    """Scott's variation of the rule of thumb, ``1.06 * min(sd, IQR/1.34) * n^(-1/5)``."""
    arr = to_float_array(x)
    if arr.size == 0:
        raise ValueError("Bandwidth selection needs at least one data point.")
    return 1.06 * _robust_scale(arr) * arr.size ** -0.2


BANDWIDTH_RULES: Dict[str, Callable[[np.ndarray], float]] = {
    "nrd0": bandwidth_nrd0,
    "nrd": bandwidth_nrd,
}


def bandwidth(x, bw: Union[str, float] = "nrd0") -> float:
    """Resolve a bandwidth from a rule name or a fixed positive value."""
    if isinstance(bw, str):
        rule = BANDWIDTH_RULES.get(bw)
        if rule is None:
            raise ValueError(
                f"Unknown bandwidth rule '{bw}'; expected one of {sorted(BANDWIDTH_RULES)}."
            )
        return float(rule(x))
    h = float(bw)
    if not math.isfinite(h) or h <= 0:
        raise ValueError(f"Bandwidth must be finite and > 0, got {bw!r}")
    return h


def estimate_density(
    x,
    bw: Union[str, float] = "nrd0",
    cut: float = DEFAULT_CUT,
    n_grid: int = DEFAULT_GRID_POINTS,
    na_rm: bool = False,
) -> DensityEstimate:
    """Estimate a Gaussian kernel density on an evenly spaced grid.

    Args:
        x: Draws to estimate the density of.
        bw (str | float): Bandwidth rule name (see ``BANDWIDTH_RULES``) or a
            fixed kernel standard deviation.
        cut (float): Number of bandwidths the grid extends beyond
            ``min(x)`` and ``max(x)``.
        n_grid (int): Number of grid points.
        na_rm (bool): Drop missing values before estimating.

    Returns:
        DensityEstimate: Grid ``x``, density ``y``, bandwidth and sample size.
        An empty sample gives empty grids and a NaN bandwidth.

    Raises:
        ValueError: If ``x`` contains missing values and ``na_rm`` is false,
            or if ``n_grid`` is smaller than 1.

    Note:
        A sample without spread (constant, or a single draw) is evaluated
        directly from the kernel, since the KDE covariance would be singular.
    """
    if n_grid < 1:
        raise ValueError(f"n_grid must be >= 1, got {n_grid}")

    draws = to_float_array(x)
    missing = np.isnan(draws)
    if missing.any():
        if not na_rm:
            raise ValueError("Sample contains missing values; pass na_rm=True to drop them.")
        draws = draws[~missing]

    if draws.size == 0:
        return DensityEstimate(x=np.array([]), y=np.array([]), bw=math.nan, n=0)

    h = bandwidth(draws, bw)
    grid = np.linspace(draws.min() - cut * h, draws.max() + cut * h, int(n_grid))

    if draws.size > 1 and np.ptp(draws) > 0:
        kde = gaussian_kde(draws, bw_method=h / float(np.std(draws, ddof=1)))
        y = kde(grid)
    else:
        y = norm.pdf(grid[:, None], loc=draws[None, :], scale=h).mean(axis=1)

    return DensityEstimate(x=grid, y=np.asarray(y, dtype=float), bw=h, n=int(draws.size))
