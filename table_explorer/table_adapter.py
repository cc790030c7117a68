#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import hashlib
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd
from pandas.api.types import infer_dtype

from .data_explorer_comm import ColumnDisplayType, ColumnSchema

logger = logging.getLogger(__name__)


# For long data frames, inferring an exact data type for dtype=object
# columns can significantly slow down get_schema requests. Past this
# many cells we only look at a prefix of the column, and accept being
# wrong in exceptional cases like a column of nulls with a single
# string at the very end.
PANDAS_INFER_DTYPE_SIZE_LIMIT = 1_000_000


class TableAdapter:
    """
    A tabular data source.

    Interface used by the data explorer to reach the underlying data
    without knowing its concrete type: dimensions, column schemas,
    per-column values, row labels and a content token used for change
    detection. Implementations must never modify the user's data.
    """

    # The object that was bound by the user, before any wrapping
    source: Any

    @property
    def num_rows(self) -> int:
        raise NotImplementedError

    @property
    def num_columns(self) -> int:
        raise NotImplementedError

    @property
    def has_row_labels(self) -> bool:
        return False

    def get_column_name(self, column_index: int) -> str:
        raise NotImplementedError

    def get_column_schema(self, column_index: int) -> ColumnSchema:
        raise NotImplementedError

    def get_schema(self) -> List[ColumnSchema]:
        return [self.get_column_schema(i) for i in range(self.num_columns)]

    def find_column(self, column_name: str) -> int | None:
        for i in range(self.num_columns):
            if self.get_column_name(i) == column_name:
                return i
        return None

    def get_column(self, column_index: int, row_indices=None) -> pd.Series:
        raise NotImplementedError

    def get_cell(self, row_index: int, column_index: int):
        raise NotImplementedError

    def get_row_labels(self, row_indices) -> List[List[str]]:
        return []

    def take(self, row_indices, column_selector) -> pd.DataFrame:
        raise NotImplementedError

    def content_token(self) -> str:
        raise NotImplementedError


class PandasAdapter(TableAdapter):
    """TableAdapter for pandas DataFrame/Series and 2-D NumPy arrays."""

    TYPE_NAME_MAPPING = MappingProxyType({"boolean": "bool"})

    TYPE_DISPLAY_MAPPING = MappingProxyType(
        {
            "integer": "number",
            "int8": "number",
            "int16": "number",
            "int32": "number",
            "int64": "number",
            "uint8": "number",
            "uint16": "number",
            "uint32": "number",
            "uint64": "number",
            "floating": "number",
            "float16": "number",
            "float32": "number",
            "float64": "number",
            "complex64": "number",
            "complex128": "number",
            "mixed-integer": "object",
            "mixed-integer-float": "object",
            "mixed": "object",
            "decimal": "number",
            "complex": "number",
            "bool": "boolean",
            "datetime64": "datetime",
            "datetime": "datetime",
            "timedelta": "interval",
            "date": "date",
            "time": "time",
            "bytes": "string",
            "string": "string",
            "empty": "unknown",
            # NA-enabled numeric data types
            "Int8": "number",
            "Int16": "number",
            "Int32": "number",
            "Int64": "number",
            "UInt8": "number",
            "UInt16": "number",
            "UInt32": "number",
            "UInt64": "number",
            "Float32": "number",
            "Float64": "number",
            # NA-enabled bool
            "boolean": "boolean",
            "str": "string",
        }
    )

    def __init__(self, source):
        self.source = source
        self.table = self._maybe_wrap(source)

        # Object column inference is expensive, so we remember it for
        # the lifetime of the adapter
        self._inferred_dtypes: Dict[int, str] = {}
        self._schema_memo: Dict[int, ColumnSchema] = {}

    @staticmethod
    def _maybe_wrap(value) -> pd.DataFrame:
        if isinstance(value, pd.Series):
            if value.name is None:
                return pd.DataFrame({"unnamed": value})
            else:
                return pd.DataFrame(value)
        elif isinstance(value, np.ndarray):
            if value.ndim == 1:
                return pd.DataFrame({"unnamed": value})
            return pd.DataFrame(value)
        else:
            return value

    @classmethod
    def is_supported(cls, value) -> bool:
        if isinstance(value, (pd.DataFrame, pd.Series)):
            return True
        return isinstance(value, np.ndarray) and value.ndim in (1, 2)

    @property
    def num_rows(self) -> int:
        return self.table.shape[0]

    @property
    def num_columns(self) -> int:
        return self.table.shape[1]

    @property
    def has_row_labels(self) -> bool:
        # pandas always has row labels
        return True

    def get_column_name(self, column_index: int) -> str:
        return str(self.table.columns[column_index])

    def get_column_schema(self, column_index: int) -> ColumnSchema:
        if column_index < 0 or column_index >= self.num_columns:
            raise IndexError(f"Column index {column_index} out of range")

        if column_index not in self._schema_memo:
            type_name, type_display = self._get_type(column_index)
            self._schema_memo[column_index] = ColumnSchema(
                column_name=self.get_column_name(column_index),
                column_index=column_index,
                type_name=type_name,
                type_display=type_display,
            )
        return self._schema_memo[column_index]

    def _get_inferred_dtype(self, column: pd.Series, column_index: int) -> str:
        if column_index not in self._inferred_dtypes:
            if len(column) > PANDAS_INFER_DTYPE_SIZE_LIMIT:
                column = column.iloc[:PANDAS_INFER_DTYPE_SIZE_LIMIT]
            self._inferred_dtypes[column_index] = infer_dtype(column, skipna=True)
        return self._inferred_dtypes[column_index]

    def get_inferred_dtype(self, column_index: int) -> str:
        return self._get_inferred_dtype(self.table.iloc[:, column_index], column_index)

    def _get_type(self, column_index: int) -> Tuple[str, ColumnDisplayType]:
        column = self.table.iloc[:, column_index]
        dtype = column.dtype

        if dtype == object:  # noqa: E721
            type_name = self._get_inferred_dtype(column, column_index)
            type_name = self.TYPE_NAME_MAPPING.get(type_name, type_name)
        elif isinstance(dtype, pd.CategoricalDtype):
            categories = dtype.categories
            if categories.dtype == object:  # noqa: E721
                categories_type = infer_dtype(categories, skipna=True)
                categories_type = self.TYPE_NAME_MAPPING.get(categories_type, categories_type)
            else:
                categories_type = str(categories.dtype)
            return str(dtype), self._get_type_display(categories_type)
        else:
            type_name = str(dtype)

        return type_name, self._get_type_display(type_name)

    @classmethod
    def _get_type_display(cls, type_name: str) -> ColumnDisplayType:
        if type_name in cls.TYPE_DISPLAY_MAPPING:
            return ColumnDisplayType(cls.TYPE_DISPLAY_MAPPING[type_name])
        elif "datetime64" in type_name:
            return ColumnDisplayType.Datetime
        elif "timedelta64" in type_name:
            return ColumnDisplayType.Interval
        elif type_name.startswith("string"):
            return ColumnDisplayType.String
        return ColumnDisplayType.Unknown

    def get_column(self, column_index: int, row_indices=None) -> pd.Series:
        column = self.table.iloc[:, column_index]
        if row_indices is not None:
            column = column.take(row_indices)
        return column

    def get_cell(self, row_index: int, column_index: int):
        return self.table.iloc[row_index, column_index]

    def get_row_labels(self, row_indices) -> List[List[str]]:
        labels = self.table.index.take(row_indices)

        # A MultiIndex is formatted in its flat tuple representation
        if isinstance(self.table.index, pd.MultiIndex):
            labels = labels.to_flat_index()
        return [[str(x) for x in labels]]

    def take(self, row_indices, column_selector) -> pd.DataFrame:
        return self.table.iloc[row_indices, column_selector]

    def content_token(self) -> str:
        try:
            hashed = pd.util.hash_pandas_object(self.table, index=True)
        except TypeError:
            # Unhashable cells (lists, dicts) are compared by their
            # string representation
            hashed = pd.util.hash_pandas_object(self.table.astype(str), index=True)
        digest = hashlib.sha1(hashed.to_numpy().tobytes())
        digest.update(str(self.table.shape).encode())
        return digest.hexdigest()


def get_table_adapter(value) -> TableAdapter:
    """Wrap a supported tabular value, raising TypeError otherwise."""
    if PandasAdapter.is_supported(value):
        return PandasAdapter(value)
    raise TypeError(f"Unsupported table type: {type(value)}")


def is_supported(value) -> bool:
    return value is not None and PandasAdapter.is_supported(value)
