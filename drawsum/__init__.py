"""
A Python package for point and interval summaries of draws from distributions.

Reduces samples (or grouped tables of samples) to a point estimate and one or
more credible intervals per probability level, ready for a plotting layer.

Modules:
    - data_processing: Classifies input and gathers one sample per group or row.
    - point_interval: Builds summary tables and the ``<point>_<interval>`` shorthands.
    - schema: Standard output column names and defaults.
    - stats: Density estimation, interval and point estimators.
"""

__version__ = "1.0.0"

from .errors import ConfigurationError
from .point_interval import (
    mean_hdci,
    mean_hdi,
    mean_qi,
    median_hdci,
    median_hdi,
    median_qi,
    mode_hdci,
    mode_hdi,
    mode_qi,
    point_interval,
)
from .schema import COLUMNS, DEFAULT_EXCLUDE, SummaryColumns
from .stats import (
    DensityEstimate,
    estimate_density,
    hdci,
    hdi,
    mean,
    median,
    mode,
    qi,
)

__all__ = [
    # Summaries
    "point_interval",
    "mean_qi",
    "median_qi",
    "mode_qi",
    "mean_hdi",
    "median_hdi",
    "mode_hdi",
    "mean_hdci",
    "median_hdci",
    "mode_hdci",
    "ConfigurationError",
    # Estimators
    "qi",
    "hdi",
    "hdci",
    "mean",
    "median",
    "mode",
    "DensityEstimate",
    "estimate_density",
    # Schema
    "COLUMNS",
    "DEFAULT_EXCLUDE",
    "SummaryColumns",
]
