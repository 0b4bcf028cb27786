"""Point estimators reducing draws to a single representative value."""

from __future__ import annotations

import math
from typing import Callable, Dict

import numpy as np
import pandas as pd

from .density import estimate_density
from .sample import clean_sample


def is_integerish(x) -> bool:
    """Return ``True`` if every value is finite and whole."""
    arr = np.asarray(x, dtype=float)
    return bool(np.all(np.isfinite(arr)) and np.all(arr == np.round(arr)))


def mean(x, na_rm: bool = False) -> float:
    draws = clean_sample(x, na_rm)
    if draws is None or draws.size == 0:
        return math.nan
    return float(np.mean(draws))


def median(x, na_rm: bool = False) -> float:
    draws = clean_sample(x, na_rm)
    if draws is None or draws.size == 0:
        return math.nan
    return float(np.median(draws))


def mode(x, na_rm: bool = False) -> float:
    """Most probable value of the draws.

    Integer-valued draws use frequency counts; ties go to the value that
    appears first in the sample. Other draws use the location of the peak
    of a kernel density estimate with ``cut=0``.

    Args:
        x: Draws to summarize.
        na_rm (bool): Drop missing values instead of propagating them.

    Returns:
        float: Mode estimate, or ``nan`` for missing/empty input.
    """
    draws = clean_sample(x, na_rm)
    if draws is None or draws.size == 0:
        return math.nan

    if is_integerish(draws):
        codes, uniques = pd.factorize(draws, sort=False)
        return float(uniques[int(np.argmax(np.bincount(codes)))])

    density = estimate_density(draws, cut=0)
    return float(density.x[int(np.argmax(density.y))])


POINT_FUNCTIONS: Dict[str, Callable[..., float]] = {
    "mean": mean,
    "median": median,
    "mode": mode,
}
