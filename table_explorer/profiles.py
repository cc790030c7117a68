#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import logging
import warnings
from types import MappingProxyType
from typing import Any, Callable, List

import numpy as np
import pandas as pd

from .data_explorer_comm import (
    ColumnDisplayType,
    ColumnFrequencyTable,
    ColumnFrequencyTableParams,
    ColumnHistogram,
    ColumnHistogramParams,
    ColumnHistogramParamsMethod,
    ColumnProfileResult,
    ColumnProfileSpec,
    ColumnProfileType,
    ColumnSummaryStats,
    FormatOptions,
    SummaryStatsBoolean,
    SummaryStatsDate,
    SummaryStatsDatetime,
    SummaryStatsNumber,
    SummaryStatsOther,
    SummaryStatsString,
)
from .formatting import format_values, get_float_formatter
from .table_adapter import TableAdapter
from .utils import possibly

logger = logging.getLogger(__name__)


class DataExplorerWarning(UserWarning):
    """
    Warning raised when there are issues in the Data Explorer relevant to the user.

    This type of warning is shown once in the Console per session.
    """


SummarizerType = Callable[[pd.Series, FormatOptions], ColumnSummaryStats]


def compute_profiles(
    adapter: TableAdapter,
    filtered_indices: np.ndarray,
    column_index: int,
    profiles: List[ColumnProfileSpec],
    format_options: FormatOptions,
) -> ColumnProfileResult:
    """Compute the requested profiles for one column over the filtered rows."""
    col = adapter.get_column(column_index, filtered_indices)
    type_display = adapter.get_column_schema(column_index).type_display

    results = {}
    for spec in profiles:
        profile_type = spec.profile_type
        if profile_type == ColumnProfileType.NullCount:
            results["null_count"] = prof_null_count(col)
        elif profile_type == ColumnProfileType.SummaryStats:
            results["summary_stats"] = prof_summary_stats(col, type_display, format_options)
        elif profile_type == ColumnProfileType.FrequencyTable:
            if not isinstance(spec.params, ColumnFrequencyTableParams):
                raise ValueError("frequency_table profile requires a 'limit' parameter")
            results["frequency_table"] = prof_freq_table(col, spec.params, format_options)
        elif profile_type == ColumnProfileType.Histogram:
            if not isinstance(spec.params, ColumnHistogramParams):
                raise ValueError("histogram profile requires 'method' and 'num_bins' parameters")
            results["histogram"] = prof_histogram(col, spec.params, format_options)
        else:
            raise NotImplementedError(profile_type)
    return ColumnProfileResult(**results)


def prof_null_count(col: pd.Series) -> int:
    return int(col.isna().sum())


def prof_summary_stats(
    col: pd.Series, type_display: ColumnDisplayType, options: FormatOptions
) -> ColumnSummaryStats:
    handler = _SUMMARIZERS.get(type_display)

    if handler is None:
        # Return nothing for types we don't yet know how to summarize
        return ColumnSummaryStats(type_display=type_display)
    else:
        return handler(col, options)


def prof_freq_table(
    col: pd.Series,
    params: ColumnFrequencyTableParams,
    format_options: FormatOptions,
) -> ColumnFrequencyTable:
    counts = col.value_counts()

    top_counts = counts.iloc[: params.limit]
    other_group = counts.iloc[params.limit :]

    formatted_groups = format_values(top_counts.index, format_options)

    return ColumnFrequencyTable(
        values=formatted_groups,
        counts=[int(x) for x in top_counts],
        other_count=int(other_group.sum()),
    )


def prof_histogram(
    col: pd.Series,
    params: ColumnHistogramParams,
    format_options: FormatOptions,
) -> ColumnHistogram:
    values = _non_null_values(col)

    # Datetimes are binned on their integer representation
    is_datetime64 = np.issubdtype(values.dtype, np.datetime64)
    if is_datetime64:
        datetime_dtype = values.dtype
        values = values.view(np.int64)
    elif values.dtype == bool:
        values = values.astype(np.int64)

    if len(values) == 0:
        return ColumnHistogram(bin_edges=[], bin_counts=[])

    method = _get_histogram_method(params.method)
    bin_counts, bin_edges = _get_histogram_numpy(values, params.num_bins, method=method)

    if is_datetime64:
        bin_edges = pd.Series(np.floor(bin_edges).astype(np.int64).view(datetime_dtype))

    return ColumnHistogram(
        bin_edges=[str(x) for x in format_values(bin_edges, format_options)],
        bin_counts=[int(x) for x in bin_counts],
    )


def _get_histogram_method(method: ColumnHistogramParamsMethod) -> str:
    return {
        ColumnHistogramParamsMethod.Fixed: "fixed",
        ColumnHistogramParamsMethod.Sturges: "sturges",
        ColumnHistogramParamsMethod.FreedmanDiaconis: "fd",
        ColumnHistogramParamsMethod.Scott: "scott",
    }[method]


def _non_null_values(col: pd.Series) -> np.ndarray:
    return col[col.notna()].to_numpy()


def _get_histogram_numpy(values: np.ndarray, num_bins: int, method: str = "fd"):
    """
    Bin `values` into at most `num_bins` equal-width bins.

    For the numpy estimators ("fd", "sturges", "scott") the estimate is
    used as long as it does not exceed `num_bins`. Integer data never
    gets more bins than there are integers in its range.
    """
    if num_bins <= 0:
        raise ValueError(f"num_bins must be positive, got {num_bins}")

    if values.dtype == object:
        # Decimals and other boxed numbers
        warnings.warn(
            "Histogram computed on object column by converting values to float",
            category=DataExplorerWarning,
            stacklevel=2,
        )
        values = values.astype(np.float64)

    is_integer = issubclass(values.dtype.type, np.integer)
    if not is_integer:
        values = values[np.isfinite(values)]

    if len(values) == 0:
        return np.array([], dtype=np.int64), np.array([], dtype=np.float64)

    low, high = values.min(), values.max()
    if low == high:
        return np.array([len(values)]), np.array([low, high])

    if method == "fixed":
        bins = num_bins
    else:
        estimated_edges = np.histogram_bin_edges(values, bins=method)
        bins = min(max(len(estimated_edges) - 1, 1), num_bins)

    if is_integer:
        # int64 arithmetic, so small integer types do not overflow
        bins = min(bins, int(high) - int(low) + 1)

    # Binning in float64 sidesteps platform integer issues in numpy
    return np.histogram(values.astype(np.float64), bins=bins, range=(float(low), float(high)))


def _box_other_stats(num_unique, type_display=ColumnDisplayType.Object):
    return ColumnSummaryStats(
        type_display=type_display,
        other_stats=SummaryStatsOther(num_unique=int(num_unique)),
    )


def _box_string_stats(num_empty, num_unique):
    return ColumnSummaryStats(
        type_display=ColumnDisplayType.String,
        string_stats=SummaryStatsString(num_empty=int(num_empty), num_unique=int(num_unique)),
    )


def _box_boolean_stats(true_count, false_count):
    return ColumnSummaryStats(
        type_display=ColumnDisplayType.Boolean,
        boolean_stats=SummaryStatsBoolean(true_count=int(true_count), false_count=int(false_count)),
    )


def _box_date_stats(num_unique, min_date, mean_date, median_date, max_date):
    def format_date(x):
        if x is None or x is pd.NaT:
            return None
        return x.strftime("%Y-%m-%d")

    return ColumnSummaryStats(
        type_display=ColumnDisplayType.Date,
        date_stats=SummaryStatsDate(
            num_unique=None if num_unique is None else int(num_unique),
            min_date=format_date(min_date),
            mean_date=format_date(mean_date),
            median_date=format_date(median_date),
            max_date=format_date(max_date),
        ),
    )


def _format_utc_offset(x) -> str:
    if x.tzinfo is None:
        return ""

    offset_seconds = x.utcoffset().total_seconds()
    sign = "+" if offset_seconds >= 0 else "-"

    offset_seconds = abs(offset_seconds)
    offset_hours = int(offset_seconds // 3600)
    offset_minutes = int((offset_seconds % 3600) // 60)
    return f"{sign}{offset_hours:02d}:{offset_minutes:02d}"


def _box_datetime_stats(num_unique, min_date, mean_date, median_date, max_date, timezone):
    def format_date(x):
        if x is None or x is pd.NaT:
            return None

        utc_offset = _format_utc_offset(x)
        if x.microsecond == 0:
            return x.strftime("%Y-%m-%d %H:%M:%S") + utc_offset
        return x.strftime("%Y-%m-%d %H:%M:%S.%f") + utc_offset

    return ColumnSummaryStats(
        type_display=ColumnDisplayType.Datetime,
        datetime_stats=SummaryStatsDatetime(
            num_unique=None if num_unique is None else int(num_unique),
            min_date=format_date(min_date),
            mean_date=format_date(mean_date),
            median_date=format_date(median_date),
            max_date=format_date(max_date),
            timezone=timezone,
        ),
    )


def _summarize_number(col: pd.Series, options: FormatOptions):
    float_format = get_float_formatter(options)
    values = _non_null_values(col)

    stats = {}
    if np.iscomplexobj(values):
        # Complex numbers are unordered, only central values are reported
        if len(values) > 0:
            stats["mean"] = float_format(values.mean())
            stats["median"] = float_format(np.median(values))
    elif len(values) > 0:
        values = values.astype(np.float64)
        low, high = values.min(), values.max()
        stats["min_value"] = float_format(low)
        stats["max_value"] = float_format(high)

        # Moments are undefined with inf/-inf in the data
        if np.isfinite(low) and np.isfinite(high):
            stats["mean"] = float_format(values.mean())
            stats["median"] = float_format(np.median(values))
            if len(values) > 1:
                stats["stdev"] = float_format(values.std(ddof=1))

    return ColumnSummaryStats(
        type_display=ColumnDisplayType.Number,
        number_stats=SummaryStatsNumber(**stats),
    )


def _summarize_string(col: pd.Series, _options: FormatOptions):
    num_empty = (col.str.len() == 0).sum()

    # Missing values count as one distinct value
    num_unique = col.nunique(dropna=False)
    return _box_string_stats(num_empty, num_unique)


def _summarize_object(col: pd.Series, _options: FormatOptions):
    num_unique = possibly(col.nunique, otherwise=0)
    return _box_other_stats(num_unique)


def _summarize_boolean(col: pd.Series, _options: FormatOptions):
    true_count = (col == True).sum()  # noqa: E712
    false_count = (col == False).sum()  # noqa: E712
    return _box_boolean_stats(true_count, false_count)


def _summarize_date(col: pd.Series, _options: FormatOptions):
    non_null = col[col.notna()]
    if len(non_null) == 0:
        return _box_date_stats(0, None, None, None, None)

    col_dttm = pd.to_datetime(non_null)
    min_date = non_null.min()
    mean_date = pd.to_datetime(col_dttm.mean()).date()
    median_date = _date_median(col_dttm).date()
    max_date = non_null.max()
    num_unique = non_null.nunique()
    return _box_date_stats(num_unique, min_date, mean_date, median_date, max_date)


def _summarize_datetime(col: pd.Series, _options: FormatOptions):
    # when there are mixed timezones in a single column, any of the
    # operations below can fail, in which case the field is None
    min_date = possibly(col.min)
    mean_date = possibly(col.mean)
    median_date = possibly(lambda: _date_median(col[col.notna()]))
    max_date = possibly(col.max)

    num_unique = possibly(col.nunique)

    timezones = col.apply(lambda x: getattr(x, "tz", None)).unique()
    if len(timezones) == 1:
        timezone = str(timezones[0])
    else:
        timezone = [f"{x!s}" for x in timezones[:2]]
        timezone = ", ".join(timezone)
        if len(timezones) > 2:
            timezone = timezone + f", ... ({len(timezones) - 2} more)"

    return _box_datetime_stats(num_unique, min_date, mean_date, median_date, max_date, timezone)


def _date_median(x: pd.Series) -> Any:
    """Median of a datetime series, in the series' own timezone, or None if empty."""
    if len(x) == 0:
        return None
    return x.median()


_SUMMARIZERS: MappingProxyType[ColumnDisplayType, SummarizerType] = MappingProxyType(
    {
        ColumnDisplayType.Boolean: _summarize_boolean,
        ColumnDisplayType.Number: _summarize_number,
        ColumnDisplayType.String: _summarize_string,
        ColumnDisplayType.Date: _summarize_date,
        ColumnDisplayType.Datetime: _summarize_datetime,
        ColumnDisplayType.Object: _summarize_object,
    }
)
