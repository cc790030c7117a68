#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

from io import StringIO

import numpy as np

from .data_explorer_comm import (
    DataSelectionCellRange,
    DataSelectionIndices,
    DataSelectionRange,
    DataSelectionSingleCell,
    ExportedData,
    ExportFormat,
    TableSelection,
    TableSelectionKind,
)
from .table_adapter import TableAdapter


def _check_index(index: int, size: int, what: str) -> None:
    if index < 0 or index >= size:
        raise IndexError(f"{what} index {index} out of range for size {size}")


def _check_range(first: int, last: int, size: int, what: str) -> slice:
    _check_index(first, size, what)
    _check_index(last, size, what)
    if last < first:
        raise ValueError(f"Invalid {what.lower()} range: {first} > {last}")
    return slice(first, last + 1)


def _check_indices(indices, size: int, what: str) -> list:
    for index in indices:
        _check_index(index, size, what)
    return list(indices)


_SELECTION_TYPES = {
    TableSelectionKind.SingleCell: DataSelectionSingleCell,
    TableSelectionKind.CellRange: DataSelectionCellRange,
    TableSelectionKind.RowRange: DataSelectionRange,
    TableSelectionKind.ColumnRange: DataSelectionRange,
    TableSelectionKind.RowIndices: DataSelectionIndices,
    TableSelectionKind.ColumnIndices: DataSelectionIndices,
}


def export_selection(
    adapter: TableAdapter,
    row_view_indices: np.ndarray,
    selection: TableSelection,
    fmt: ExportFormat,
) -> ExportedData:
    """
    Serialize a selection expressed in view coordinates.

    Row indices in the selection are positions in the filtered and
    sorted view; they are mapped through `row_view_indices` to source
    rows before any data is read.
    """
    kind = selection.kind
    sel = selection.selection
    if not isinstance(sel, _SELECTION_TYPES[kind]):
        raise ValueError(f"Selection {type(sel).__name__} does not match kind '{kind.value}'")

    num_rows = len(row_view_indices)
    num_columns = adapter.num_columns

    if kind == TableSelectionKind.SingleCell:
        _check_index(sel.row_index, num_rows, "Row")
        _check_index(sel.column_index, num_columns, "Column")
        value = adapter.get_cell(int(row_view_indices[sel.row_index]), sel.column_index)
        return ExportedData(data=str(value), format=fmt)
    elif kind == TableSelectionKind.CellRange:
        row_selector = _check_range(sel.first_row_index, sel.last_row_index, num_rows, "Row")
        column_selector = _check_range(
            sel.first_column_index, sel.last_column_index, num_columns, "Column"
        )
    elif kind == TableSelectionKind.RowRange:
        row_selector = _check_range(sel.first_index, sel.last_index, num_rows, "Row")
        column_selector = slice(None)
    elif kind == TableSelectionKind.ColumnRange:
        row_selector = slice(None)
        column_selector = _check_range(sel.first_index, sel.last_index, num_columns, "Column")
    elif kind == TableSelectionKind.RowIndices:
        row_selector = _check_indices(sel.indices, num_rows, "Row")
        column_selector = slice(None)
    elif kind == TableSelectionKind.ColumnIndices:
        row_selector = slice(None)
        column_selector = _check_indices(sel.indices, num_columns, "Column")
    else:
        raise NotImplementedError(f"Unknown data export: {kind}")

    return _export_tabular(adapter, row_view_indices[row_selector], column_selector, fmt)


def _export_tabular(adapter: TableAdapter, row_indices, column_selector, fmt: ExportFormat):
    to_export = adapter.take(row_indices, column_selector)
    buf = StringIO()

    if fmt == ExportFormat.Csv:
        to_export.to_csv(buf, index=False)
    elif fmt == ExportFormat.Tsv:
        to_export.to_csv(buf, sep="\t", index=False)
    elif fmt == ExportFormat.Html:
        to_export.to_html(buf, index=False)
    else:
        raise NotImplementedError(f"Unsupported export format {fmt}")

    result = buf.getvalue()

    # pandas will put a line break at the end of CSV data. If
    # present, remove it
    if result.endswith("\n"):
        result = result[:-1]

    return ExportedData(data=result, format=fmt)
