"""Coerce raw draws into flat float arrays with explicit missing-value policy."""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd


def to_float_array(x) -> np.ndarray:
    """Flatten draws into a 1-D float array, mapping missing entries to NaN.

    Args:
        x: Sequence of numbers, numpy array or pandas Series. ``None`` and
            ``pd.NA`` entries become ``nan``.

    Returns:
        numpy.ndarray: One-dimensional float64 array.
    """
    if isinstance(x, np.ndarray) and x.dtype != object:
        return x.astype(float).ravel()
    if not isinstance(x, (pd.Series, pd.Index)):
        x = pd.Series(np.asarray(x, dtype=object).ravel())
    return pd.to_numeric(x, errors="raise").to_numpy(dtype=float, na_value=np.nan).ravel()


def clean_sample(x, na_rm: bool = False) -> Optional[np.ndarray]:
    """Return draws ready for summarization, or ``None`` if absence propagates.

    Args:
        x: Draws to summarize.
        na_rm (bool): Drop missing values instead of propagating them.

    Returns:
        numpy.ndarray | None: Finite-or-infinite draws with NaN removed, or
        ``None`` when the sample has missing values and ``na_rm`` is false.
    """
    draws = to_float_array(x)
    missing = np.isnan(draws)
    if missing.any():
        if not na_rm:
            return None
        draws = draws[~missing]
    return draws
