"""
Resolve caller input into draws ready for summarization.

Input is classified once, at entry, into one of two kinds:

- ``VectorDraws``: a single sample (list, tuple, numpy array or Series).
- ``TableDraws``: a DataFrame (optionally grouped) plus the resolved list of
  columns to summarize and the group-key columns.

``collect_samples`` then turns a ``TableDraws`` into one sample per output
row. List columns (object columns whose cells are array-like) already hold a
sample per row, so every row is kept with its other columns. Flat numeric
columns are coalesced so each group contributes one sample.
"""

# Algorithm summary: evaluate derived-column callables ahead of time, pick
# columns explicitly or by excluding group keys and metadata columns, then
# gather per-row or per-group samples in first-appearance group order.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from pandas.api.types import is_list_like
from pandas.core.groupby import DataFrameGroupBy

from .errors import ConfigurationError
from .schema import DEFAULT_EXCLUDE
from .stats.sample import to_float_array

logger = logging.getLogger(__name__)

ColumnExpr = Callable[[pd.DataFrame], object]


@dataclass(frozen=True)
class VectorDraws:
    sample: np.ndarray


@dataclass(frozen=True)
class TableDraws:
    frame: pd.DataFrame
    columns: Tuple[str, ...]
    groups: Tuple[str, ...] = ()


@dataclass
class SampleTable:
    """One sample per output row for each summarized column.

    Attributes:
        carrier: Columns repeated on every derived row (group keys, plus the
            other columns of list-column rows). One row per sample.
        samples: Mapping of column name to a list of samples aligned with
            ``carrier`` rows.
    """

    carrier: pd.DataFrame
    samples: Dict[str, List[np.ndarray]] = field(default_factory=dict)


def _as_label_list(labels) -> List:
    if labels is None:
        return []
    if isinstance(labels, (list, tuple)):
        return list(labels)
    return [labels]


def _unpack_groupby(grouped: DataFrameGroupBy) -> Tuple[pd.DataFrame, List]:
    frame = grouped.obj
    keys = _as_label_list(grouped.keys)
    if not all(np.ndim(k) == 0 and k in frame.columns for k in keys):
        raise ValueError("Grouped input must be grouped by column labels of the DataFrame.")
    return frame, keys


def resolve_draws(
    data,
    columns: Sequence[str] = (),
    exprs: Optional[Mapping[str, ColumnExpr]] = None,
    groups: Union[str, Sequence[str], None] = None,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> Union[VectorDraws, TableDraws]:
    """Classify input and resolve the columns to summarize.

    Args:
        data: A 1-D sample, a ``pandas.DataFrame`` or a ``DataFrameGroupBy``
            grouped by column labels.
        columns: Explicit column names to summarize.
        exprs: Mapping of new column name to a callable evaluated against the
            table; results are added as columns and summarized.
        groups: Group-key column label(s), combined with any groupby keys.
        exclude: Column names skipped when no columns are given.

    Returns:
        VectorDraws | TableDraws: Resolved input. ``columns``, ``exprs`` and
        ``groups`` are ignored for vector input.

    Raises:
        ConfigurationError: If no columns remain to summarize.
        KeyError: If an explicit column or group key is not in the table.
        ValueError: If vector input is not one-dimensional.
    """
    if isinstance(data, DataFrameGroupBy):
        frame, group_cols = _unpack_groupby(data)
    elif isinstance(data, pd.DataFrame):
        frame, group_cols = data, []
    else:
        if np.ndim(data) != 1:
            raise ValueError(f"Vector draws must be one-dimensional, got {np.ndim(data)} dimensions.")
        return VectorDraws(sample=to_float_array(data))

    for key in _as_label_list(groups):
        if key not in group_cols:
            group_cols.append(key)
    missing_keys = [k for k in group_cols if k not in frame.columns]
    if missing_keys:
        raise KeyError(f"Group columns not found: {missing_keys}")

    exprs = dict(exprs or {})
    if exprs:
        frame = frame.copy()
        for name, expr in exprs.items():
            frame[name] = expr(frame)

    selected = list(dict.fromkeys(list(columns) + list(exprs)))
    if not selected:
        excluded = set(group_cols) | set(exclude)
        selected = [c for c in frame.columns if c not in excluded]
        if not selected:
            raise ConfigurationError(
                "No columns found to calculate point and interval summaries for."
            )

    unknown = [c for c in selected if c not in frame.columns]
    if unknown:
        raise KeyError(f"Columns not found: {unknown}")

    logger.debug("Selected columns %s grouped by %s", selected, group_cols)
    return TableDraws(frame=frame, columns=tuple(selected), groups=tuple(group_cols))


def is_list_column(series: pd.Series) -> bool:
    """Return ``True`` if every cell of an object column holds array-like draws."""
    if series.dtype != object or series.empty:
        return False
    return all(is_list_like(v) and not isinstance(v, dict) for v in series)


def _coalesce(series: pd.Series, nested: bool) -> np.ndarray:
    if nested:
        parts = [to_float_array(v) for v in series]
        return np.concatenate(parts) if parts else np.array([], dtype=float)
    return to_float_array(series)


def collect_samples(draws: TableDraws) -> SampleTable:
    """Gather the samples to summarize, one per output row.

    When every selected column is a list column, each row is its own sample
    and all non-selected columns are carried. Otherwise the rows of each group
    are coalesced into one sample per column and only group keys are carried.
    Groups keep first-appearance order; missing keys form their own group.
    """
    frame = draws.frame
    columns = list(draws.columns)
    nested = {c: is_list_column(frame[c]) for c in columns}

    if all(nested.values()):
        carrier = frame.drop(columns=columns).reset_index(drop=True)
        samples = {c: [to_float_array(v) for v in frame[c]] for c in columns}
        return SampleTable(carrier=carrier, samples=samples)

    group_cols = list(draws.groups)
    if not group_cols:
        carrier = pd.DataFrame(index=pd.RangeIndex(1))
        samples = {c: [_coalesce(frame[c], nested[c])] for c in columns}
        return SampleTable(carrier=carrier, samples=samples)

    keys = []
    samples = {c: [] for c in columns}
    grouped = frame.groupby(group_cols, sort=False, dropna=False, observed=True)
    for _, group in grouped:
        keys.append(group[group_cols].iloc[[0]])
        for c in columns:
            samples[c].append(_coalesce(group[c], nested[c]))

    if keys:
        carrier = pd.concat(keys).reset_index(drop=True)
    else:
        carrier = frame[group_cols].iloc[0:0].reset_index(drop=True)
    logger.debug("Coalesced %d rows into %d groups", len(frame), len(carrier))
    return SampleTable(carrier=carrier, samples=samples)
