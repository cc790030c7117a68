#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import enum
from typing import Callable, Iterable, List

import numpy as np
import pandas as pd

from .data_explorer_comm import ColumnValue, FormatOptions


@enum.unique
class SpecialValueCode(enum.IntEnum):
    """
    Codes sent in place of a formatted string for values that the
    frontend renders itself.
    """

    EMPTY = 0
    NA = 1
    NAN = 2
    NAT = 3
    NONE = 4
    INF = 10
    NEGINF = 11


# Special value codes for the protocol
_VALUE_NULL = int(SpecialValueCode.EMPTY)
_VALUE_NA = int(SpecialValueCode.NA)
_VALUE_NAN = int(SpecialValueCode.NAN)
_VALUE_NAT = int(SpecialValueCode.NAT)
_VALUE_NONE = int(SpecialValueCode.NONE)
_VALUE_INF = int(SpecialValueCode.INF)
_VALUE_NEGINF = int(SpecialValueCode.NEGINF)


def _is_float_scalar(value) -> bool:
    return isinstance(value, (float, np.floating))


def _isnan(value) -> bool:
    return bool(np.isnan(value))


def _isinf(value) -> bool:
    return bool(np.isinf(value))


def _is_empty_collection(value) -> bool:
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, np.ndarray):
        return value.size == 0
    return False


def get_float_formatter(options: FormatOptions) -> Callable[[float], str]:
    sci_format = f".{options.large_num_digits}E"
    medium_format = f".{options.large_num_digits}f"
    small_format = f".{options.small_num_digits}f"

    # The limit for large numbers before switching to scientific
    # notation
    upper_threshold = float("1" + "0" * options.max_integral_digits)

    # The limit for small numbers before switching to scientific
    # notation
    lower_threshold = float("0." + "0" * (options.small_num_digits - 1) + "1")

    thousands_sep = options.thousands_sep

    if thousands_sep is not None:
        # We format with comma then replace later
        medium_format = "," + medium_format

    def base_float_format(x) -> str:
        abs_x = abs(x)

        if abs_x >= 1:
            if abs_x < upper_threshold:
                return format(x, medium_format)
            else:
                return format(x, sci_format)
        elif abs_x == 0:
            # Zero lines up with the other "medium" numbers
            return format(x, medium_format)
        else:
            if abs_x >= lower_threshold:
                return format(x, small_format)
            else:
                return format(x, sci_format)

    if thousands_sep is not None and thousands_sep != ",":

        def float_format(x) -> str:
            return base_float_format(x).replace(",", thousands_sep)

        return float_format

    return base_float_format


def safe_stringify(x, max_length: int | None) -> str:
    formatted = str(x)
    if max_length is not None and len(formatted) > max_length:
        formatted = formatted[:max_length]
    return formatted


def format_values(values: Iterable, options: FormatOptions) -> List[ColumnValue]:
    """
    Format a sequence of raw cells for display.

    Floats are rendered with the float formatter built from `options`;
    missing and non-finite values, as well as empty collections, are
    returned as special value codes; everything else is stringified
    and truncated to `options.max_value_length`.
    """
    float_format = get_float_formatter(options)
    max_length = options.max_value_length

    def _format_value(x):
        if _is_float_scalar(x):
            if _isnan(x):
                return _VALUE_NAN
            elif _isinf(x):
                return _VALUE_INF if x > 0 else _VALUE_NEGINF
            else:
                return float_format(x)
        elif x is None:
            return _VALUE_NONE
        elif x is pd.NaT:
            return _VALUE_NAT
        elif x is pd.NA:
            return _VALUE_NA
        elif _is_empty_collection(x):
            return _VALUE_NULL
        else:
            return safe_stringify(x, max_length)

    return [_format_value(x) for x in values]
