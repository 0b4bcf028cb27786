"""
Point and interval summaries for draws from distributions.

``point_interval`` reduces draws to a point summary plus interval bounds at
one or more probability levels (``.width``). Input may be a single vector of
draws or a (grouped) DataFrame; see ``data_processing`` for how columns and
samples are resolved.

Output layouts:
- vector: ``.value``/``.lower``/``.upper`` (or ``y``/``ymin``/``ymax`` with
  ``simple_names=False``), one row per width and sub-interval.
- long: one table column ``x`` with ``simple_names=True`` gives ``x``,
  ``.lower``, ``.upper``; ``hdi`` may add rows for disjoint regions.
- wide: several columns (or ``simple_names=False``) give ``x``, ``x.lower``,
  ``x.upper`` per column; more than one interval per cell is an error.

Every table ends with ``.width``, ``.point`` and ``.interval``. Rows are
ordered by group, then width, then sub-interval.
"""

from __future__ import annotations

import logging
import warnings
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .data_processing import (
    ColumnExpr,
    TableDraws,
    VectorDraws,
    collect_samples,
    resolve_draws,
)
from .errors import ConfigurationError
from .schema import COLUMNS, DEFAULT_EXCLUDE, DEFAULT_WIDTH
from .stats.intervals import INTERVAL_FUNCTIONS
from .stats.points import POINT_FUNCTIONS

logger = logging.getLogger(__name__)

PointSpec = Union[str, Callable[..., float]]
IntervalSpec = Union[str, Callable[..., np.ndarray]]


def _resolve_estimator(spec, registry: Mapping[str, Callable], kind: str) -> Tuple[str, Callable]:
    if isinstance(spec, str):
        fn = registry.get(spec.lower())
        if fn is None:
            raise ValueError(f"Unknown {kind} estimator '{spec}'; expected one of {sorted(registry)}.")
        return spec.lower(), fn
    if not callable(spec):
        raise TypeError(f"{kind} estimator must be a name or a callable, got {spec!r}")
    # functools.partial and similar wrappers expose the wrapped function as .func
    name = getattr(spec, "__name__", None) or getattr(getattr(spec, "func", None), "__name__", None)
    return (name or type(spec).__name__).lower(), spec


def _resolve_widths(width, prob) -> List[float]:
    if prob is not None:
        if width is not None:
            raise ValueError("Pass either `width` or the deprecated `prob`, not both.")
        warnings.warn(
            "`prob` is deprecated; use `width` instead.",
            DeprecationWarning,
            stacklevel=3,
        )
        width = prob
    if width is None:
        width = DEFAULT_WIDTH
    return [float(w) for w in np.atleast_1d(np.asarray(width, dtype=float))]


def _interval_rows(interval_fn: Callable, sample: np.ndarray, width: float, na_rm: bool) -> np.ndarray:
    bounds = np.asarray(interval_fn(sample, width=width, na_rm=na_rm), dtype=float)
    return bounds.reshape(-1, 2)


def _summarize_vector(draws: VectorDraws, point_fn, interval_fn, widths, simple_names, na_rm) -> pd.DataFrame:
    if simple_names:
        names = (COLUMNS.value, COLUMNS.lower, COLUMNS.upper)
    else:
        names = (COLUMNS.y, COLUMNS.ymin, COLUMNS.ymax)

    value = point_fn(draws.sample, na_rm=na_rm)
    records = []
    for w in widths:
        for lower, upper in _interval_rows(interval_fn, draws.sample, w, na_rm):
            records.append((value, lower, upper, w))
    return pd.DataFrame.from_records(records, columns=[*names, COLUMNS.width])


def _summarize_long(draws: TableDraws, point_fn, interval_fn, widths, _simple_names, na_rm) -> pd.DataFrame:
    (column,) = draws.columns
    table = collect_samples(draws)

    positions, values, lowers, uppers, row_widths = [], [], [], [], []
    for i, sample in enumerate(table.samples[column]):
        value = point_fn(sample, na_rm=na_rm)
        for w in widths:
            for lower, upper in _interval_rows(interval_fn, sample, w, na_rm):
                positions.append(i)
                values.append(value)
                lowers.append(lower)
                uppers.append(upper)
                row_widths.append(w)

    result = table.carrier.iloc[positions].reset_index(drop=True)
    result[column] = np.asarray(values, dtype=float)
    result[COLUMNS.lower] = np.asarray(lowers, dtype=float)
    result[COLUMNS.upper] = np.asarray(uppers, dtype=float)
    result[COLUMNS.width] = np.asarray(row_widths, dtype=float)
    return result


def _summarize_wide(draws: TableDraws, point_fn, interval_fn, widths, _simple_names, na_rm) -> pd.DataFrame:
    table = collect_samples(draws)
    n_rows = len(table.carrier)
    positions = [i for i in range(n_rows) for _ in widths]

    cells: Dict[str, Dict[str, List[float]]] = {}
    ambiguous: List[str] = []
    for column in draws.columns:
        values, lowers, uppers = [], [], []
        for sample in table.samples[column]:
            value = point_fn(sample, na_rm=na_rm)
            for w in widths:
                bounds = _interval_rows(interval_fn, sample, w, na_rm)
                if bounds.shape[0] != 1:
                    if column not in ambiguous:
                        ambiguous.append(column)
                    continue
                values.append(value)
                lowers.append(bounds[0, 0])
                uppers.append(bounds[0, 1])
        cells[column] = {"point": values, "lower": lowers, "upper": uppers}

    if ambiguous:
        raise ConfigurationError(
            f"Column(s) {ambiguous} produced more than one interval for a single "
            "probability level. This happens when summarizing a multimodal distribution "
            "with a method that returns multiple intervals (such as `hdi`) while "
            "generating intervals for several columns in wide format. Summarize one "
            "column at a time (for example, reshape the draws into a single long column "
            "with a grouping variable), or use an interval type such as `hdci` or `qi` "
            "that always returns exactly one interval per probability level."
        )

    result = table.carrier.iloc[positions].reset_index(drop=True)
    for column in draws.columns:
        result[column] = np.asarray(cells[column]["point"], dtype=float)
        result[COLUMNS.lower_of(column)] = np.asarray(cells[column]["lower"], dtype=float)
        result[COLUMNS.upper_of(column)] = np.asarray(cells[column]["upper"], dtype=float)
    result[COLUMNS.width] = np.asarray([w for _ in range(n_rows) for w in widths], dtype=float)
    return result


_LAYOUTS = {
    "vector": _summarize_vector,
    "long": _summarize_long,
    "wide": _summarize_wide,
}


def summary_layout(draws: Union[VectorDraws, TableDraws], simple_names: bool) -> str:
    """Name the output layout for resolved draws: vector, long or wide."""
    if isinstance(draws, VectorDraws):
        return "vector"
    if len(draws.columns) == 1 and simple_names:
        return "long"
    return "wide"


def point_interval(
    data,
    *columns: str,
    exprs: Optional[Mapping[str, ColumnExpr]] = None,
    groups: Union[str, Sequence[str], None] = None,
    width: Union[float, Sequence[float], None] = None,
    point: PointSpec = "median",
    interval: IntervalSpec = "qi",
    simple_names: bool = True,
    na_rm: bool = False,
    exclude: Sequence[str] = DEFAULT_EXCLUDE,
    prob: Union[float, Sequence[float], None] = None,
) -> pd.DataFrame:
    """Summarize draws with a point estimate and interval(s) per width.

    Args:
        data: Draws as a 1-D sequence, numpy array or Series; or a DataFrame
            (optionally a ``DataFrameGroupBy`` grouped by column labels).
        *columns: Names of table columns to summarize. When neither these nor
            ``exprs`` are given, every column that is not a group key and not
            in ``exclude`` is summarized.
        exprs: Mapping of new column name to a callable taking the DataFrame
            and returning draws (flat values or one array per row).
        groups: Group-key column label(s); summaries are computed per group.
        width: Probability level(s) of the intervals, default ``0.95``. Each
            level yields at least one row per group.
        point: ``"mean"``, ``"median"``, ``"mode"`` or a callable
            ``f(x, na_rm=...) -> float``.
        interval: ``"qi"``, ``"hdi"``, ``"hdci"`` or a callable
            ``f(x, width=..., na_rm=...)`` returning ``(lower, upper)`` pairs.
        simple_names: Use ``.lower``/``.upper`` for a single summarized column
            (and ``.value`` for vectors). When false, tables use
            ``x.lower``/``x.upper`` and vectors use ``y``/``ymin``/``ymax``.
        na_rm: Drop missing draws. When false, a sample with missing draws
            gets NaN point and bounds without affecting other samples.
        exclude: Columns skipped by default column selection.
        prob: Deprecated alias for ``width``.

    Returns:
        pandas.DataFrame: One row per group, width and sub-interval, ending
        with ``.width``, ``.point`` and ``.interval`` columns.

    Raises:
        ConfigurationError: If no columns can be summarized, or if a wide
            summary meets more than one interval for one column and width.
        ValueError: If ``point`` or ``interval`` names an unknown estimator,
            or if both ``width`` and ``prob`` are given.

    Examples:
        >>> point_interval([1, 2, 3, 4, 5], point="mean", width=0.5)
        >>> point_interval(df, "x", groups="g", width=[0.66, 0.95])
    """
    widths = _resolve_widths(width, prob)
    point_name, point_fn = _resolve_estimator(point, POINT_FUNCTIONS, "point")
    interval_name, interval_fn = _resolve_estimator(interval, INTERVAL_FUNCTIONS, "interval")

    draws = resolve_draws(data, columns, exprs=exprs, groups=groups, exclude=exclude)
    layout = summary_layout(draws, simple_names)
    logger.debug(
        "Summarizing %s draws with %s/%s at widths %s", layout, point_name, interval_name, widths
    )

    result = _LAYOUTS[layout](draws, point_fn, interval_fn, widths, simple_names, na_rm)
    result[COLUMNS.point] = point_name
    result[COLUMNS.interval] = interval_name
    return result


def mean_qi(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="mean", interval="qi")``."""
    return point_interval(data, *columns, width=width, point="mean", interval="qi", **kwargs)


def median_qi(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="median", interval="qi")``."""
    return point_interval(data, *columns, width=width, point="median", interval="qi", **kwargs)


def mode_qi(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="mode", interval="qi")``."""
    return point_interval(data, *columns, width=width, point="mode", interval="qi", **kwargs)


def mean_hdi(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="mean", interval="hdi")``."""
    return point_interval(data, *columns, width=width, point="mean", interval="hdi", **kwargs)


def median_hdi(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="median", interval="hdi")``."""
    return point_interval(data, *columns, width=width, point="median", interval="hdi", **kwargs)


def mode_hdi(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="mode", interval="hdi")``."""
    return point_interval(data, *columns, width=width, point="mode", interval="hdi", **kwargs)


def mean_hdci(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="mean", interval="hdci")``."""
    return point_interval(data, *columns, width=width, point="mean", interval="hdci", **kwargs)


def median_hdci(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="median", interval="hdci")``."""
    return point_interval(data, *columns, width=width, point="median", interval="hdci", **kwargs)


def mode_hdci(data, *columns: str, width=None, **kwargs) -> pd.DataFrame:
    """Shorthand for ``point_interval(..., point="mode", interval="hdci")``."""
    return point_interval(data, *columns, width=width, point="mode", interval="hdci", **kwargs)
