#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import logging
import operator
import re
from typing import List, NamedTuple, Optional

import numpy as np
import pandas as pd
import pandas.api.types as pat
import pytz

from .data_explorer_comm import (
    ColumnDisplayType,
    ColumnSchema,
    FilterBetween,
    FilterComparison,
    FilterComparisonOp,
    FilterSetMembership,
    FilterTextSearch,
    RowFilter,
    RowFilterCondition,
    RowFilterType,
    TextSearchType,
)
from .table_adapter import PandasAdapter, TableAdapter

logger = logging.getLogger(__name__)


class FilterValidationError(ValueError):
    """Raised when a row filter cannot be applied to its column."""


class FilterOutcome(NamedTuple):
    # Boolean mask over source rows
    mask: np.ndarray

    # Copies of the input filters annotated with validity
    filters: List[RowFilter]

    had_errors: bool


COMPARE_OPS = {
    FilterComparisonOp.Gt: operator.gt,
    FilterComparisonOp.GtEq: operator.ge,
    FilterComparisonOp.Lt: operator.lt,
    FilterComparisonOp.LtEq: operator.le,
    FilterComparisonOp.Eq: operator.eq,
    FilterComparisonOp.NotEq: operator.ne,
}

_FILTER_RANGE_COMPARE_SUPPORTED = {
    ColumnDisplayType.Number,
    ColumnDisplayType.Date,
    ColumnDisplayType.Datetime,
    ColumnDisplayType.Time,
}

_FILTER_PARAMS = {
    RowFilterType.Between: FilterBetween,
    RowFilterType.NotBetween: FilterBetween,
    RowFilterType.Compare: FilterComparison,
    RowFilterType.Search: FilterTextSearch,
    RowFilterType.SetMembership: FilterSetMembership,
}

SUPPORTED_FILTERS = frozenset(RowFilterType)


def apply_row_filters(adapter: TableAdapter, filters: List[RowFilter]) -> FilterOutcome:
    """
    Evaluate an ordered list of row filters.

    The first valid filter seeds the selection, and each later valid
    filter is combined into it using its own condition. Invalid
    filters are kept, marked with an error message, and skipped.
    """
    new_filters = []
    combined_mask = None
    had_errors = False

    for filt in filters:
        filt = filt.model_copy(deep=True)
        new_filters.append(filt)

        try:
            schema = resolve_filter_column(adapter, filt)
            filt.column_schema = schema
            check_filter_supported(filt)
            single_mask = eval_filter(adapter, filt)
        except Exception as e:
            had_errors = True

            # Filter fails: we capture the error message and mark
            # the filter as invalid
            filt.is_valid = False
            filt.error_message = str(e) or type(e).__name__
            logger.warning(e, exc_info=True)
            continue

        filt.is_valid = True
        filt.error_message = None

        if combined_mask is None:
            combined_mask = single_mask
        elif filt.condition == RowFilterCondition.And:
            combined_mask &= single_mask
        elif filt.condition == RowFilterCondition.Or:
            combined_mask |= single_mask

    if combined_mask is None:
        combined_mask = np.ones(adapter.num_rows, dtype=bool)

    return FilterOutcome(combined_mask, new_filters, had_errors)


def resolve_filter_column(adapter: TableAdapter, filt: RowFilter) -> ColumnSchema:
    """
    Find the column a filter refers to in the current schema.

    The stored index is tried first, then the column name anywhere in
    the table, so filters follow their column when columns move.
    """
    column_index = filt.column_schema.column_index
    column_name = filt.column_schema.column_name

    if 0 <= column_index < adapter.num_columns:
        if adapter.get_column_name(column_index) == column_name:
            return adapter.get_column_schema(column_index)

    new_index = adapter.find_column(column_name)
    if new_index is None:
        raise FilterValidationError(f"Column '{column_name}' was deleted")
    return adapter.get_column_schema(new_index)


def is_supported_filter(filt: RowFilter) -> bool:
    try:
        check_filter_supported(filt)
    except FilterValidationError:
        return False
    return True


def check_filter_supported(filt: RowFilter) -> None:
    if filt.filter_type not in SUPPORTED_FILTERS:
        raise FilterValidationError(f"Unsupported filter type: {filt.filter_type}")

    params_cls = _FILTER_PARAMS.get(filt.filter_type)
    if params_cls is not None and not isinstance(filt.params, params_cls):
        raise FilterValidationError(f"Missing or invalid parameters for '{filt.filter_type.value}'")

    display_type = filt.column_schema.type_display

    if filt.filter_type in [
        RowFilterType.IsEmpty,
        RowFilterType.NotEmpty,
        RowFilterType.Search,
    ]:
        # String-only filter types
        supported = display_type == ColumnDisplayType.String
    elif filt.filter_type == RowFilterType.Compare:
        if filt.params.op in [
            FilterComparisonOp.Eq,
            FilterComparisonOp.NotEq,
        ]:
            supported = True
        else:
            supported = display_type in _FILTER_RANGE_COMPARE_SUPPORTED
    elif filt.filter_type in [
        RowFilterType.Between,
        RowFilterType.NotBetween,
    ]:
        supported = display_type in _FILTER_RANGE_COMPARE_SUPPORTED
    elif filt.filter_type in [
        RowFilterType.IsTrue,
        RowFilterType.IsFalse,
    ]:
        supported = display_type == ColumnDisplayType.Boolean
    else:
        # IsNull, NotNull and SetMembership work with any column
        supported = True

    if not supported:
        raise FilterValidationError(
            f"Unsupported column type '{display_type.value}' for filter '{filt.filter_type.value}'"
        )


def eval_filter(adapter: PandasAdapter, filt: RowFilter) -> np.ndarray:
    column_index = filt.column_schema.column_index
    col = adapter.get_column(column_index)

    dtype = col.dtype
    inferred_type = adapter.get_inferred_dtype(column_index)

    mask = None
    if filt.filter_type in (
        RowFilterType.Between,
        RowFilterType.NotBetween,
    ):
        params = filt.params
        left_value = coerce_value(params.left_value, dtype, inferred_type)
        right_value = coerce_value(params.right_value, dtype, inferred_type)
        if filt.filter_type == RowFilterType.Between:
            mask = (col >= left_value) & (col <= right_value)
        else:
            mask = (col < left_value) | (col > right_value)
    elif filt.filter_type == RowFilterType.Compare:
        params = filt.params
        op = COMPARE_OPS[params.op]
        mask = op(col, coerce_value(params.value, dtype, inferred_type)) & col.notna()
    elif filt.filter_type == RowFilterType.IsEmpty:
        mask = col.str.len() == 0
    elif filt.filter_type == RowFilterType.IsNull:
        mask = col.isna()
    elif filt.filter_type == RowFilterType.NotEmpty:
        mask = (col.str.len() != 0) & col.notna()
    elif filt.filter_type == RowFilterType.NotNull:
        mask = col.notna()
    elif filt.filter_type == RowFilterType.IsTrue:
        mask = col == True  # noqa: E712
    elif filt.filter_type == RowFilterType.IsFalse:
        mask = col == False  # noqa: E712
    elif filt.filter_type == RowFilterType.SetMembership:
        params = filt.params
        boxed_values = pd.Series(
            [coerce_value(val, dtype, inferred_type) for val in params.values]  # noqa: PD011
        )
        mask = col.isin(boxed_values)
        if not params.inclusive:
            mask = ~mask
    elif filt.filter_type == RowFilterType.Search:
        mask = _eval_search(col, filt.params, inferred_type)

    if mask is None:
        raise NotImplementedError(f"Unknown filter type: {filt.filter_type}")

    # Nulls are possible in the mask, so we just fill them if any
    if mask.dtype != bool:
        mask = mask.copy()
        mask[mask.isna()] = False
        mask = mask.astype(bool)

    # A fresh array, since the caller combines masks in place
    return mask.to_numpy(dtype=bool, copy=True)


def _eval_search(col: pd.Series, params: FilterTextSearch, inferred_type: str) -> pd.Series:
    if inferred_type != "string":
        col = col.astype(str)

    term = params.term

    if params.search_type == TextSearchType.RegexMatch:
        return col.str.contains(term, case=params.case_sensitive, regex=True)

    if not params.case_sensitive:
        col = col.str.lower()
        term = term.lower()

    if params.search_type == TextSearchType.Contains:
        return col.str.contains(term, regex=False)
    elif params.search_type == TextSearchType.NotContains:
        return ~col.str.contains(term, regex=False, na=True)
    elif params.search_type == TextSearchType.StartsWith:
        return col.str.startswith(term)
    elif params.search_type == TextSearchType.EndsWith:
        return col.str.endswith(term)
    raise NotImplementedError(f"Unknown search type: {params.search_type}")


def coerce_value(value: str, dtype, inferred_type: str):
    """Convert a filter operand from its string form to the column's type."""
    if pat.is_integer_dtype(dtype):
        return _coerce_number(value)
    elif pat.is_bool_dtype(dtype) or inferred_type == "boolean":
        return _coerce_boolean(value)
    elif "datetime" in inferred_type:
        return _coerce_datetime(value, tz=getattr(dtype, "tz", None))

    # Everything else goes through the column's own dtype
    return pd.Series([value]).astype(dtype).iloc[0]


def _coerce_number(value: str):
    # Integer columns still accept fractional operands like "3.5"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Unable to convert {value!r} to a number") from None


_BOOLEAN_OPERANDS = {"true": True, "false": False}


def _coerce_boolean(value: str) -> bool:
    try:
        return _BOOLEAN_OPERANDS[value.strip().lower()]
    except KeyError:
        raise ValueError(f"Unable to convert {value!r} to boolean") from None


# YYYY-MM-DD, optionally followed by HH:MM or HH:MM:SS
_DATETIME_OPERAND = re.compile(r"^\d{4}-\d{2}-\d{2}( \d{2}:\d{2}(:\d{2})?)?$")


def _coerce_datetime(value: str, tz: Optional[object] = None) -> pd.Timestamp:
    if not _DATETIME_OPERAND.match(value.strip()):
        raise ValueError(f'"{value}" not ISO8601 YYYY-MM-DD HH:MM:SS format')

    result = pd.Timestamp(value.strip())

    # Naive operands compare against tz-aware columns in the column's zone
    if tz is not None:
        if isinstance(tz, str):
            tz = pytz.timezone(tz)
        result = result.tz_localize(tz)
    return result
