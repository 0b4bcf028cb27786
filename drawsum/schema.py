"""Define standardized column names for summary DataFrames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Metadata columns of draws tables that are never summarized by default.
DEFAULT_EXCLUDE: Tuple[str, ...] = (".chain", ".iteration", ".draw", ".row")

DEFAULT_WIDTH = 0.95


@dataclass(frozen=True)
class SummaryColumns:
    """Container for standardized column labels.

    These names are used in every summary table produced by
    ``point_interval`` so a rendering layer can rely on them.

    Attributes:
        value: Point summary of a vector input with simple names.
        lower: Lower interval bound (simple names).
        upper: Upper interval bound (simple names).
        y: Point summary of a vector input with plotting names.
        ymin: Lower interval bound with plotting names.
        ymax: Upper interval bound with plotting names.
        width: Probability mass of the interval on each row.
        point: Name of the point estimator used.
        interval: Name of the interval estimator used.
    """

    value: str = ".value"
    lower: str = ".lower"
    upper: str = ".upper"
    y: str = "y"
    ymin: str = "ymin"
    ymax: str = "ymax"
    width: str = ".width"
    point: str = ".point"
    interval: str = ".interval"

    def lower_of(self, column: str) -> str:
        """Wide-layout lower-bound label for ``column``."""
        return f"{column}.lower"

    def upper_of(self, column: str) -> str:
        """Wide-layout upper-bound label for ``column``."""
        return f"{column}.upper"


COLUMNS = SummaryColumns()
