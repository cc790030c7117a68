#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

import datetime

import numpy as np
import pandas as pd
import pytest

from table_explorer.data_explorer_comm import (
    ColumnDisplayType,
    ColumnFrequencyTableParams,
    ColumnHistogramParams,
    ColumnProfileSpec,
    FormatOptions,
    RowFilter,
)
from table_explorer.filters import apply_row_filters
from table_explorer.formatting import _VALUE_NAN
from table_explorer.profiles import (
    DataExplorerWarning,
    _date_median,
    _get_histogram_numpy,
    compute_profiles,
    prof_freq_table,
    prof_histogram,
    prof_null_count,
    prof_summary_stats,
)
from table_explorer.table_adapter import PandasAdapter
from table_explorer.utils import guid

DEFAULT_FORMAT = FormatOptions(
    large_num_digits=2,
    small_num_digits=4,
    max_integral_digits=7,
    max_value_length=1000,
    thousands_sep=",",
)


def _summary(values, type_display=None):
    adapter = PandasAdapter(pd.DataFrame({"x": values}))
    if type_display is None:
        type_display = adapter.get_column_schema(0).type_display
    return prof_summary_stats(adapter.get_column(0), type_display, DEFAULT_FORMAT)


def test_null_count():
    fibo = pd.Series([1, None, 2, 3, 5, None, 13, 21, None])
    assert prof_null_count(fibo) == 3
    assert prof_null_count(pd.Series(["a", None, pd.NA, "b"], dtype=object)) == 2
    assert prof_null_count(pd.Series([], dtype="float64")) == 0


def test_summary_stats_number():
    stats = _summary([1, 2, 3, None])
    assert stats.type_display == ColumnDisplayType.Number
    assert stats.number_stats.model_dump() == {
        "min_value": "1.00",
        "max_value": "3.00",
        "mean": "2.00",
        "median": "2.00",
        "stdev": "1.00",
    }


def test_summary_stats_number_edge_cases():
    # A single value has no sample standard deviation
    stats = _summary([5.0]).number_stats
    assert stats.min_value == "5.00"
    assert stats.stdev is None

    stats = _summary([np.nan, np.nan]).number_stats
    assert stats.min_value is None
    assert stats.mean is None

    # Infinities make the moments undefined
    stats = _summary([1.0, np.inf]).number_stats
    assert stats.mean is None
    assert stats.median is None


def test_summary_stats_string():
    stats = _summary(["a", "a", "", None])
    assert stats.type_display == ColumnDisplayType.String
    assert stats.string_stats.num_empty == 1
    assert stats.string_stats.num_unique == 3


def test_summary_stats_boolean():
    stats = _summary([True, False, True])
    assert stats.type_display == ColumnDisplayType.Boolean
    assert stats.boolean_stats.true_count == 2
    assert stats.boolean_stats.false_count == 1

    stats = _summary([True, None, False, False])
    assert stats.boolean_stats.true_count == 1
    assert stats.boolean_stats.false_count == 2


def test_summary_stats_datetime():
    values = pd.to_datetime(["2024-01-01 00:00:00", "2024-01-03 00:00:00"])
    stats = _summary(values)
    assert stats.type_display == ColumnDisplayType.Datetime
    assert stats.datetime_stats.min_date == "2024-01-01 00:00:00"
    assert stats.datetime_stats.max_date == "2024-01-03 00:00:00"
    assert stats.datetime_stats.mean_date == "2024-01-02 00:00:00"
    assert stats.datetime_stats.median_date == "2024-01-02 00:00:00"
    assert stats.datetime_stats.num_unique == 2
    assert stats.datetime_stats.timezone == "None"


def test_summary_stats_date():
    values = [datetime.date(2024, 1, 1), datetime.date(2024, 1, 5), None]
    stats = _summary(values)
    assert stats.type_display == ColumnDisplayType.Date
    assert stats.date_stats.min_date == "2024-01-01"
    assert stats.date_stats.max_date == "2024-01-05"
    assert stats.date_stats.median_date == "2024-01-03"
    assert stats.date_stats.num_unique == 2


def test_summary_stats_unknown_type():
    stats = _summary([1, 2], type_display=ColumnDisplayType.Interval)
    assert stats.type_display == ColumnDisplayType.Interval
    assert stats.number_stats is None


def test_date_median():
    assert _date_median(pd.Series([], dtype="datetime64[ns]")) is None
    x = pd.Series(pd.to_datetime(["2024-01-01", "2024-01-02", "2024-01-10"]))
    assert _date_median(x) == pd.Timestamp("2024-01-02")


def test_frequency_table():
    col = pd.Series(["a", "b", "a", "c", "a", "b", None])
    result = prof_freq_table(col, ColumnFrequencyTableParams(limit=2), DEFAULT_FORMAT)
    assert result.values == ["a", "b"]
    assert result.counts == [3, 2]
    assert result.other_count == 1


def test_frequency_table_formats_numbers():
    col = pd.Series([1.5, 1.5, 2.25])
    result = prof_freq_table(col, ColumnFrequencyTableParams(limit=5), DEFAULT_FORMAT)
    assert result.values == ["1.50", "2.25"]
    assert result.counts == [2, 1]
    assert result.other_count == 0


def test_histogram_fixed():
    col = pd.Series([0.0, 1.0, 2.0, 3.0, np.nan])
    result = prof_histogram(
        col, ColumnHistogramParams(method="fixed", num_bins=3), DEFAULT_FORMAT
    )
    assert result.bin_edges == ["0.00", "1.00", "2.00", "3.00"]
    assert result.bin_counts == [1, 1, 2]


def test_histogram_single_value():
    col = pd.Series([7, 7, 7])
    result = prof_histogram(
        col, ColumnHistogramParams(method="freedman_diaconis", num_bins=10), DEFAULT_FORMAT
    )
    assert result.bin_edges == ["7", "7"]
    assert result.bin_counts == [3]


def test_histogram_empty():
    col = pd.Series([np.nan, np.nan])
    result = prof_histogram(col, ColumnHistogramParams(method="sturges", num_bins=5), DEFAULT_FORMAT)
    assert result.bin_edges == []
    assert result.bin_counts == []


def test_histogram_limits_bins():
    data = np.arange(1000, dtype=np.float64)
    counts, edges = _get_histogram_numpy(data, 4, method="fd")
    assert len(edges) == 5
    assert counts.sum() == 1000


def test_histogram_integer_width():
    data = np.array([1, 2, 3, 1, 2, 3])
    counts, edges = _get_histogram_numpy(data, 10, method="fixed")
    assert len(counts) == 3
    assert counts.sum() == 6


def test_histogram_invalid_bins():
    with pytest.raises(ValueError):
        _get_histogram_numpy(np.array([1.0, 2.0]), 0, method="fixed")


def test_histogram_object_warns():
    data = np.array([1, 2, 3], dtype=object)
    with pytest.warns(DataExplorerWarning):
        counts, _ = _get_histogram_numpy(data, 2, method="fixed")
    assert counts.sum() == 3


def test_compute_profiles_uses_filtered_rows():
    df = pd.DataFrame({"x": [1.0, np.nan, 3.0, 10.0]})
    adapter = PandasAdapter(df)
    result = compute_profiles(
        adapter,
        np.array([0, 1, 2]),
        0,
        [
            ColumnProfileSpec(profile_type="null_count"),
            ColumnProfileSpec(profile_type="summary_stats"),
            ColumnProfileSpec(
                profile_type="frequency_table",
                params=ColumnFrequencyTableParams(limit=10),
            ),
        ],
        DEFAULT_FORMAT,
    )
    assert result.null_count == 1
    assert result.summary_stats.number_stats.max_value == "3.00"
    assert result.frequency_table.values == ["1.00", "3.00"]
    assert result.histogram is None


def test_compute_profiles_missing_params():
    adapter = PandasAdapter(pd.DataFrame({"x": [1, 2]}))
    with pytest.raises(ValueError):
        compute_profiles(
            adapter,
            np.array([0, 1]),
            0,
            [ColumnProfileSpec(profile_type="histogram")],
            DEFAULT_FORMAT,
        )


def test_format_codes_in_frequency_table():
    col = pd.Series([np.nan, 1.0])
    # value_counts drops missing values
    result = prof_freq_table(col, ColumnFrequencyTableParams(limit=5), DEFAULT_FORMAT)
    assert _VALUE_NAN not in result.values


def test_null_count_over_filtered_rows():
    adapter = PandasAdapter(pd.DataFrame({"fibo": [1, None, 2, 3, 5, None, 13, 21, None]}))
    not_null = RowFilter(
        filter_id=guid(),
        filter_type="not_null",
        column_schema=adapter.get_column_schema(0),
        condition="and",
        params=None,
    )
    selected = apply_row_filters(adapter, [not_null]).mask.nonzero()[0]
    assert len(selected) == 6

    spec = [ColumnProfileSpec(profile_type="null_count")]
    assert compute_profiles(adapter, np.arange(9), 0, spec, DEFAULT_FORMAT).null_count == 3
    assert compute_profiles(adapter, selected, 0, spec, DEFAULT_FORMAT).null_count == 0


def test_date_median_with_timezone():
    x = pd.Series(pd.date_range("2024-01-01", periods=3, freq="D", tz="US/Eastern"))
    median = _date_median(x)
    assert median == pd.Timestamp("2024-01-02", tz="US/Eastern")
    assert str(median.tz) == "US/Eastern"


def test_histogram_datetime_column():
    col = pd.Series(pd.to_datetime(["2024-01-01", "2024-01-02", "2024-01-03", None]))
    result = prof_histogram(col, ColumnHistogramParams(method="fixed", num_bins=2), DEFAULT_FORMAT)
    assert result.bin_counts == [1, 2]
    assert len(result.bin_edges) == 3


def test_histogram_drops_infinities():
    data = np.array([1.0, 2.0, np.inf, -np.inf, 3.0])
    counts, edges = _get_histogram_numpy(data, 2, method="fixed")
    assert counts.sum() == 3
    assert edges[0] == 1.0
    assert edges[-1] == 3.0
