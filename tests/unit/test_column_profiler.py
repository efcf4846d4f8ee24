"""Test per-column statistics."""

from __future__ import annotations

import pytest

from tabprofile.models.profile import BooleanSummary, NumericSummary, TextSummary
from tabprofile.profiling.column_profiler import (
    profile_columns,
    summarize_boolean,
    summarize_numeric,
    summarize_text,
)
from tabprofile.profiling.type_inference import infer_types
from tabprofile.types import ColumnType


class TestSummarizeNumeric:
    """Test numeric summaries."""

    def test_odd_count(self):
        """Test statistics of 1, 2, 3."""
        summary = summarize_numeric([3.0, 1.0, 2.0])
        assert summary == NumericSummary(
            count=3,
            mean=2.0,
            median=2.0,
            std_dev=0.8165,
            min=1.0,
            max=3.0,
            q1=1.0,
            q3=3.0,
            range=2.0,
        )

    def test_even_count_median_averages_middle_values(self):
        """Test the median of an even count is the mean of the central pair."""
        summary = summarize_numeric([4.0, 1.0, 3.0, 2.0])
        assert summary.median == 2.5
        assert summary.q1 == 2.0
        assert summary.q3 == 4.0

    def test_quartiles_are_positional_without_interpolation(self):
        """Test q1/q3 pick sorted[floor(n*0.25)] and sorted[floor(n*0.75)]."""
        values = [float(v) for v in range(1, 11)]
        summary = summarize_numeric(values)
        assert summary.q1 == 3.0
        assert summary.q3 == 8.0
        assert summary.median == 5.5

    def test_single_value(self):
        """Test a single value has zero spread."""
        summary = summarize_numeric([1.0])
        assert summary.count == 1
        assert summary.mean == summary.median == summary.min == summary.max == 1.0
        assert summary.q1 == summary.q3 == 1.0
        assert summary.std_dev == 0.0
        assert summary.range == 0.0

    def test_constant_column_has_zero_std_dev(self):
        """Test a constant column has a standard deviation of 0."""
        assert summarize_numeric([5.0, 5.0, 5.0, 5.0]).std_dev == 0.0

    def test_rounds_to_four_decimals(self):
        """Test statistics are rounded to 4 decimal places."""
        summary = summarize_numeric([1.0, 2.0, 2.0])
        assert summary.mean == 1.6667
        assert summary.std_dev == 0.4714

    def test_ties_round_away_from_zero(self):
        """Test a mean sitting exactly on a rounding tie rounds up."""
        summary = summarize_numeric([0.0, 0.0625])
        assert summary.mean == 0.0313
        assert summary.median == 0.0313

    def test_no_values(self):
        """Test an empty input yields no summary."""
        assert summarize_numeric([]) is None

    @pytest.mark.parametrize(
        "values",
        [
            [3, 1, 2],
            [10, 1],
            [5, 5, 5, 5],
            [1, 2, 3, 4, 5, 6, 7],
            [-1.5, 2, 100, 0],
            [0.1, 0.2, 0.3, 0.4, 0.5, 0.6],
        ],
    )
    def test_order_statistics_are_monotonic(self, values):
        """Test min <= q1 <= median <= q3 <= max."""
        s = summarize_numeric([float(v) for v in values])
        assert s.min <= s.q1 <= s.median <= s.q3 <= s.max


class TestSummarizeText:
    """Test text summaries."""

    def test_counts_and_average_length(self):
        """Test count, distinct count and average length."""
        summary = summarize_text(["x", "yy", "x"])
        assert summary.count == 3
        assert summary.unique_count == 2
        assert summary.avg_length == 1.33

    def test_average_length_tie_rounds_up(self):
        """Test an average length of exactly 1.125 becomes 1.13."""
        assert summarize_text(["a"] * 7 + ["bb"]).avg_length == 1.13

    def test_ties_keep_first_seen_order(self):
        """Test equal counts are ranked by first appearance."""
        summary = summarize_text(["b", "a", "c", "a", "b"])
        assert [(vc.value, vc.count) for vc in summary.most_common] == [
            ("b", 2),
            ("a", 2),
            ("c", 1),
        ]

    def test_limited_to_five_values(self):
        """Test only the five most common values are kept."""
        summary = summarize_text([f"v{i}" for i in range(8)] + ["v7"])
        assert len(summary.most_common) == 5
        assert summary.most_common[0].value == "v7"
        assert summary.unique_count == 8

    def test_no_values(self):
        """Test an empty input yields no summary."""
        assert summarize_text([]) is None


class TestSummarizeBoolean:
    """Test boolean summaries."""

    def test_counts_and_percentage(self):
        """Test true/false counts and the true percentage."""
        assert summarize_boolean([True, False, True]) == BooleanSummary(
            count=3, true_count=2, false_count=1, true_percentage=66.67
        )

    def test_percentage_tie_rounds_up(self):
        """Test a true percentage of exactly 3.125 becomes 3.13."""
        assert summarize_boolean([True] + [False] * 31).true_percentage == 3.13

    def test_no_values(self):
        """Test an empty input yields no summary."""
        assert summarize_boolean([]) is None


class TestProfileColumns:
    """Test profiling a whole dataset."""

    def test_scenario_a(self, scenario_a):
        """Test numeric and text summaries of a small dataset."""
        summary_stats, missing_values = profile_columns(scenario_a, infer_types(scenario_a))

        a = summary_stats["a"]
        assert isinstance(a, NumericSummary)
        assert (a.count, a.mean, a.median, a.min, a.max) == (3, 2, 2, 1, 3)

        b = summary_stats["b"]
        assert isinstance(b, TextSummary)
        assert b.unique_count == 2
        assert [vc.model_dump() for vc in b.most_common] == [
            {"value": "x", "count": 2},
            {"value": "y", "count": 1},
        ]
        assert missing_values == {"a": 0, "b": 0}

    def test_missing_values_are_excluded(self):
        """Test null and empty-string cells count as missing and are skipped."""
        dataset = [{"v": 1}, {"v": None}, {"v": 3}, {"v": ""}, {"v": 5}]
        summary_stats, missing_values = profile_columns(dataset, infer_types(dataset))
        assert missing_values["v"] == 2
        assert summary_stats["v"].count == 3
        assert summary_stats["v"].mean == 3.0
        assert summary_stats["v"].median == 3.0

    def test_stray_values_are_skipped_not_missing(self):
        """Test a non-numeric value in a numeric column is dropped silently."""
        dataset = [{"v": 1}, {"v": "oops"}, {"v": 3}]
        summary_stats, missing_values = profile_columns(dataset, infer_types(dataset))
        assert missing_values["v"] == 0
        assert summary_stats["v"].count == 2
        assert summary_stats["v"].mean == 2.0

    def test_date_and_empty_columns_have_no_summary(self, sales_records):
        """Test date and empty columns are counted but not summarized."""
        summary_stats, missing_values = profile_columns(
            sales_records, infer_types(sales_records)
        )
        assert "day" not in summary_stats
        assert "note" not in summary_stats
        assert missing_values["day"] == 1
        assert missing_values["note"] == 5

    def test_boolean_column(self, sales_records):
        """Test the boolean column summary."""
        summary_stats, _ = profile_columns(sales_records, infer_types(sales_records))
        assert summary_stats["paid"] == BooleanSummary(
            count=4, true_count=3, false_count=1, true_percentage=75.0
        )

    def test_missing_plus_present_equals_rows(self, sales_records):
        """Test every row is either missing or present in every column."""
        _, missing_values = profile_columns(sales_records, infer_types(sales_records))
        for column, missing in missing_values.items():
            present = sum(
                1 for record in sales_records if record.get(column) not in (None, "")
            )
            assert missing + present == len(sales_records)

    def test_column_without_usable_values_is_skipped(self):
        """Test a forced type with no matching values yields no summary entry."""
        dataset = [{"a": "x", "b": 1}, {"a": "y", "b": 2}]
        summary_stats, missing_values = profile_columns(
            dataset, {"a": ColumnType.NUMERIC, "b": ColumnType.NUMERIC}
        )
        assert "a" not in summary_stats
        assert summary_stats["b"].count == 2
        assert missing_values == {"a": 0, "b": 0}
