#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

import numpy as np
import pandas as pd
import pytest

from table_explorer.data_explorer_comm import FormatOptions
from table_explorer.formatting import (
    _VALUE_INF,
    _VALUE_NA,
    _VALUE_NAN,
    _VALUE_NAT,
    _VALUE_NEGINF,
    _VALUE_NONE,
    _VALUE_NULL,
    SpecialValueCode,
    format_values,
    get_float_formatter,
    safe_stringify,
)

DEFAULT_FORMAT = FormatOptions(
    large_num_digits=2,
    small_num_digits=4,
    max_integral_digits=7,
    max_value_length=1000,
    thousands_sep=",",
)


def test_special_value_codes():
    assert _VALUE_NULL == 0
    assert _VALUE_NA == 1
    assert _VALUE_NAN == 2
    assert _VALUE_NAT == 3
    assert _VALUE_NONE == 4
    assert _VALUE_INF == 10
    assert _VALUE_NEGINF == 11
    assert SpecialValueCode.NEGINF == 11


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0.00"),
        (1, "1.00"),
        (1.5, "1.50"),
        (-1.5, "-1.50"),
        (1234.5, "1,234.50"),
        (1234567.891, "1,234,567.89"),
        (12345678.9, "1.23E+07"),
        (0.5, "0.5000"),
        (0.0001, "0.0001"),
        (0.00009, "9.00E-05"),
        (-0.00009, "-9.00E-05"),
    ],
)
def test_float_formatter(value, expected):
    float_format = get_float_formatter(DEFAULT_FORMAT)
    assert float_format(value) == expected


def test_float_formatter_thousands_sep():
    no_sep = DEFAULT_FORMAT.model_copy(update={"thousands_sep": None})
    assert get_float_formatter(no_sep)(1234567.891) == "1234567.89"

    underscore = DEFAULT_FORMAT.model_copy(update={"thousands_sep": "_"})
    assert get_float_formatter(underscore)(1234567.891) == "1_234_567.89"


def test_float_formatter_digits():
    options = FormatOptions(
        large_num_digits=3,
        small_num_digits=2,
        max_integral_digits=3,
        thousands_sep=None,
    )
    float_format = get_float_formatter(options)
    assert float_format(999.5) == "999.500"
    assert float_format(1000) == "1.000E+03"
    assert float_format(0.25) == "0.25"
    assert float_format(0.001) == "1.000E-03"


def test_format_values_special():
    values = [np.nan, np.inf, -np.inf, None, pd.NaT, pd.NA, [], {}, np.array([])]
    assert format_values(values, DEFAULT_FORMAT) == [
        _VALUE_NAN,
        _VALUE_INF,
        _VALUE_NEGINF,
        _VALUE_NONE,
        _VALUE_NAT,
        _VALUE_NA,
        _VALUE_NULL,
        _VALUE_NULL,
        _VALUE_NULL,
    ]


def test_format_values_scalars():
    values = [
        1,
        np.int64(-5),
        True,
        "foo",
        3.25,
        np.float32(0.5),
        pd.Timestamp("2024-01-01 12:00:00"),
        [1, 2],
    ]
    assert format_values(values, DEFAULT_FORMAT) == [
        "1",
        "-5",
        "True",
        "foo",
        "3.25",
        "0.5000",
        "2024-01-01 12:00:00",
        "[1, 2]",
    ]


def test_format_values_series():
    series = pd.Series([1.0, np.nan, 2.5])
    assert format_values(series, DEFAULT_FORMAT) == ["1.00", _VALUE_NAN, "2.50"]


def test_format_values_truncate():
    options = DEFAULT_FORMAT.model_copy(update={"max_value_length": 3})
    assert format_values(["abcdef", "ab"], options) == ["abc", "ab"]

    assert safe_stringify("abcdef", None) == "abcdef"
    assert safe_stringify(12345, 2) == "12"
