"""
Statistical estimators for summarizing draws.

This subpackage provides the numerical routines behind point and interval
summaries. All functions operate on arrays and primitive types; table
handling lives in the parent package.

Modules:
    density:
        Gaussian kernel density estimation with rule-of-thumb bandwidths.

    intervals:
        Quantile (qi), highest-density (hdi) and highest-density continuous
        (hdci) intervals.

    points:
        Mean, median and mode point estimators.

    sample:
        Conversion of raw draws to float arrays and missing-value handling.
"""

from .density import (
    BANDWIDTH_RULES,
    DensityEstimate,
    bandwidth,
    bandwidth_nrd,
    bandwidth_nrd0,
    estimate_density,
)
from .intervals import (
    INTERVAL_FUNCTIONS,
    hdci,
    hdi,
    hdi_from_density,
    qi,
    shortest_interval,
)
from .points import POINT_FUNCTIONS, is_integerish, mean, median, mode
from .sample import clean_sample, to_float_array

__all__ = [
    "BANDWIDTH_RULES",
    "DensityEstimate",
    "bandwidth",
    "bandwidth_nrd",
    "bandwidth_nrd0",
    "estimate_density",
    "INTERVAL_FUNCTIONS",
    "hdci",
    "hdi",
    "hdi_from_density",
    "qi",
    "shortest_interval",
    "POINT_FUNCTIONS",
    "is_integerish",
    "mean",
    "median",
    "mode",
    "clean_sample",
    "to_float_array",
]
