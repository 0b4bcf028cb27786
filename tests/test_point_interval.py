"""Tests for point_interval summary tables and the shorthand functions."""

import logging
import math

import numpy as np
import pandas as pd
import pytest

from drawsum import (
    ConfigurationError,
    mean_qi,
    median_hdci,
    median_qi,
    mode_hdi,
    point_interval,
)


@pytest.fixture
def grouped_frame():
    return pd.DataFrame(
        {
            "g": ["A"] * 5 + ["B"] * 5,
            "x": [1, 2, 3, 4, 5, 10, 20, 30, 40, 50],
        }
    )


class TestVectorMode:
    """Summaries of a single vector of draws."""

    def test_mean_qi_round_trip(self):
        out = point_interval([1, 2, 3, 4, 5], point="mean", interval="qi", width=[0.5])
        assert list(out.columns) == [".value", ".lower", ".upper", ".width", ".point", ".interval"]
        assert len(out) == 1
        row = out.iloc[0]
        assert row[".value"] == 3.0
        assert row[".lower"] == 2.0
        assert row[".upper"] == 4.0
        assert row[".point"] == "mean"
        assert row[".interval"] == "qi"

    def test_plotting_names(self):
        out = point_interval(np.arange(1.0, 6.0), simple_names=False)
        assert list(out.columns)[:4] == ["y", "ymin", "ymax", ".width"]
        assert out.loc[0, "y"] == 3.0

    def test_one_row_per_width_in_given_order(self):
        out = point_interval(np.arange(100.0), width=[0.95, 0.5, 0.8])
        assert out[".width"].tolist() == [0.95, 0.5, 0.8]
        spans = (out[".upper"] - out[".lower"]).tolist()
        assert spans[1] < spans[2] < spans[0]

    def test_missing_values_propagate(self):
        out = point_interval([1.0, None, 3.0], width=0.5)
        assert out[[".value", ".lower", ".upper"]].isna().all(axis=None)

    def test_missing_values_removed(self):
        out = point_interval([1.0, None, 3.0], width=0.5, na_rm=True)
        assert out.loc[0, ".value"] == 2.0
        assert out.loc[0, ".lower"] == 1.5
        assert out.loc[0, ".upper"] == 2.5

    def test_multimodal_hdi_adds_rows(self, bimodal_draws):
        out = point_interval(bimodal_draws, point="mode", interval="hdi", width=[0.5, 0.8])
        assert len(out) == 4
        assert out[".width"].tolist() == [0.5, 0.5, 0.8, 0.8]
        assert out[".value"].nunique() == 1

    def test_series_input(self):
        out = point_interval(pd.Series([2.0, 4.0, 6.0]), point="mean")
        assert out.loc[0, ".value"] == 4.0

    def test_constant_sample_is_zero_width(self):
        for interval in ("qi", "hdi", "hdci"):
            out = point_interval([7.0, 7.0, 7.0], interval=interval)
            row = out.iloc[0]
            assert row[".value"] == row[".lower"] == row[".upper"] == 7.0

    def test_pandas_na_in_plain_list(self):
        out = point_interval([1.0, pd.NA, 3.0], width=0.5)
        assert out[[".value", ".lower", ".upper"]].isna().all(axis=None)
        out = point_interval([1.0, pd.NA, 3.0], width=0.5, na_rm=True)
        assert out.loc[0, ".value"] == 2.0
        assert out.loc[0, ".lower"] == 1.5


class TestSingleColumn:
    """Long layout for one summarized table column."""

    def test_groups_give_one_row_each(self, grouped_frame):
        out = point_interval(grouped_frame, "x", groups="g", point="median", width=[0.5])
        assert list(out.columns) == ["g", "x", ".lower", ".upper", ".width", ".point", ".interval"]
        assert out["g"].tolist() == ["A", "B"]
        assert out["x"].tolist() == [3.0, 30.0]
        assert out[".lower"].tolist() == [2.0, 20.0]
        assert out[".upper"].tolist() == [4.0, 40.0]

    def test_groupby_object_matches_groups_argument(self, grouped_frame):
        by_arg = point_interval(grouped_frame, groups="g", width=0.5)
        by_obj = point_interval(grouped_frame.groupby("g"), width=0.5)
        pd.testing.assert_frame_equal(by_arg, by_obj)

    def test_group_order_follows_first_appearance(self, grouped_frame):
        reordered = grouped_frame.iloc[::-1].reset_index(drop=True)
        out = point_interval(reordered, "x", groups="g")
        assert out["g"].tolist() == ["B", "A"]

    def test_rows_ordered_by_group_then_width(self, grouped_frame):
        out = point_interval(grouped_frame, "x", groups="g", width=[0.5, 0.9])
        assert out["g"].tolist() == ["A", "A", "B", "B"]
        assert out[".width"].tolist() == [0.5, 0.9, 0.5, 0.9]

    def test_missing_value_is_isolated_to_its_group(self):
        df = pd.DataFrame({"g": ["A", "A", "B", "B"], "x": [1.0, np.nan, 3.0, 5.0]})
        out = point_interval(df, "x", groups="g", point="mean")
        assert math.isnan(out.loc[0, "x"])
        assert math.isnan(out.loc[0, ".lower"])
        assert out.loc[1, "x"] == 4.0

    def test_ungrouped_flat_column(self):
        out = point_interval(pd.DataFrame({"x": [1.0, 2.0, 3.0, 4.0, 5.0]}), width=0.5)
        assert list(out.columns) == ["x", ".lower", ".upper", ".width", ".point", ".interval"]
        assert len(out) == 1
        assert out.loc[0, "x"] == 3.0

    def test_metadata_columns_are_excluded(self):
        df = pd.DataFrame(
            {".chain": [1, 1, 1], ".iteration": [1, 2, 3], ".draw": [1, 2, 3], "theta": [0.1, 0.2, 0.3]}
        )
        out = point_interval(df)
        assert "theta" in out.columns
        assert ".lower" in out.columns
        assert ".chain" not in out.columns

    def test_single_valued_group_reproduces_itself(self):
        df = pd.DataFrame({"g": ["only"], "x": [7.0]})
        for interval in ("qi", "hdi", "hdci"):
            out = point_interval(df, "x", groups="g", interval=interval)
            assert out.loc[0, ["x", ".lower", ".upper"]].tolist() == [7.0, 7.0, 7.0]

    def test_list_column_rows_are_separate_samples(self):
        df = pd.DataFrame({"label": ["a", "b"]})
        df["draws"] = pd.Series(
            [np.array([1.0, 2.0, 3.0, 4.0, 5.0]), np.array([10.0, 20.0, 30.0, 40.0, 50.0])],
            dtype=object,
        )
        out = point_interval(df, "draws", width=0.5)
        assert out["label"].tolist() == ["a", "b"]
        assert out["draws"].tolist() == [3.0, 30.0]

    def test_multimodal_hdi_expands_rows(self, bimodal_draws):
        df = pd.DataFrame({"x": bimodal_draws})
        out = mode_hdi(df, "x", width=0.8)
        assert len(out) == 2
        assert out[".lower"].iloc[0] < out[".upper"].iloc[0] < out[".lower"].iloc[1]
        assert (out[".interval"] == "hdi").all()

    def test_expression_column(self, grouped_frame):
        out = point_interval(grouped_frame, exprs={"x2": lambda d: d["x"] * 2}, groups="g")
        assert "x2" in out.columns
        assert out["x2"].tolist() == [6.0, 60.0]

    def test_simple_names_off_uses_column_suffixes(self, grouped_frame):
        out = point_interval(grouped_frame, "x", groups="g", simple_names=False)
        assert {"x", "x.lower", "x.upper"} <= set(out.columns)
        assert ".lower" not in out.columns


class TestWideMode:
    """Wide layout for several summarized columns."""

    def test_default_selection_picks_all_value_columns(self):
        df = pd.DataFrame(
            {
                "g": ["a", "a", "b", "b"],
                "x": [1.0, 3.0, 5.0, 7.0],
                "y": [10.0, 30.0, 50.0, 70.0],
            }
        )
        out = point_interval(df, groups="g", point="mean")
        assert list(out.columns) == [
            "g", "x", "x.lower", "x.upper", "y", "y.lower", "y.upper", ".width", ".point", ".interval",
        ]
        assert out["x"].tolist() == [2.0, 6.0]
        assert out["y"].tolist() == [20.0, 60.0]

    def test_rows_ordered_by_group_then_width(self):
        df = pd.DataFrame({"g": ["a", "b"], "x": [1.0, 2.0], "y": [3.0, 4.0]})
        out = point_interval(df, groups="g", width=[0.5, 0.95])
        assert out["g"].tolist() == ["a", "a", "b", "b"]
        assert out[".width"].tolist() == [0.5, 0.95, 0.5, 0.95]

    def test_multimodal_hdi_in_wide_format_fails(self, bimodal_draws):
        df = pd.DataFrame({"a": bimodal_draws, "b": bimodal_draws + 100.0})
        with pytest.raises(ConfigurationError, match="more than one interval") as excinfo:
            point_interval(df, "a", "b", interval="hdi", width=0.8)
        message = str(excinfo.value)
        assert "'a'" in message and "'b'" in message
        assert "one column at a time" in message

    def test_multimodal_with_single_interval_method_is_fine(self, bimodal_draws):
        df = pd.DataFrame({"a": bimodal_draws, "b": bimodal_draws + 100.0})
        out = point_interval(df, interval="hdci", width=0.8)
        assert len(out) == 1

    def test_no_columns_found(self):
        df = pd.DataFrame({"g": ["a"], ".row": [1]})
        with pytest.raises(ConfigurationError, match="No columns found"):
            point_interval(df, groups="g")


class TestEstimatorSelection:
    """Estimator names, callables and shorthands."""

    def test_shorthands_set_provenance_columns(self):
        x = [1.0, 2.0, 3.0, 4.0]
        assert mean_qi(x).loc[0, ".point"] == "mean"
        out = median_hdci(x)
        assert (out.loc[0, ".point"], out.loc[0, ".interval"]) == ("median", "hdci")
        assert median_qi(x, width=[0.5, 0.9])[".width"].tolist() == [0.5, 0.9]

    def test_custom_callables(self):
        def trimmed(x, na_rm=False):
            return float(np.sort(np.asarray(x))[1:-1].mean())

        def minmax(x, width=0.95, na_rm=False):
            return [(min(x), max(x))]

        out = point_interval([0.0, 1.0, 2.0, 100.0], point=trimmed, interval=minmax)
        assert out.loc[0, ".value"] == 1.5
        assert out.loc[0, ".lower"] == 0.0
        assert out.loc[0, ".upper"] == 100.0
        assert out.loc[0, ".point"] == "trimmed"
        assert out.loc[0, ".interval"] == "minmax"

    def test_names_are_case_insensitive(self):
        assert point_interval([1.0, 2.0], point="Mean").loc[0, ".point"] == "mean"

    def test_unknown_estimator(self):
        with pytest.raises(ValueError, match="Unknown point estimator"):
            point_interval([1.0], point="trimean")
        with pytest.raises(ValueError, match="Unknown interval estimator"):
            point_interval([1.0], interval="eti")

    def test_prob_is_a_deprecated_alias(self):
        with pytest.warns(DeprecationWarning, match="`prob` is deprecated"):
            out = point_interval([1.0, 2.0, 3.0], prob=0.5)
        assert out.loc[0, ".width"] == 0.5

    def test_width_and_prob_together_are_rejected(self):
        with pytest.raises(ValueError, match="not both"):
            point_interval([1.0, 2.0, 3.0], width=0.8, prob=0.5)

    def test_default_width_when_neither_given(self):
        assert mean_qi([1.0, 2.0, 3.0]).loc[0, ".width"] == 0.95
        assert point_interval([1.0, 2.0, 3.0]).loc[0, ".width"] == 0.95

    def test_dispatch_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="drawsum")
        point_interval([1.0, 2.0, 3.0], point="mean", interval="hdci")
        assert any("Summarizing vector draws with mean/hdci" in rec.getMessage() for rec in caplog.records)
