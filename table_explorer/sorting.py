#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

from typing import List

import numpy as np
from pandas.core.sorting import lexsort_indexer, nargsort

from .data_explorer_comm import ColumnSortKey
from .table_adapter import TableAdapter


def unique_sort_keys(sort_keys: List[ColumnSortKey]) -> List[ColumnSortKey]:
    """
    Drop repeated keys for the same column.

    A later key for a column that is already ordered could never break
    a tie, so the first occurrence is the one that takes effect.
    """
    seen = set()
    result = []
    for key in sort_keys:
        if key.column_index in seen:
            continue
        seen.add(key.column_index)
        result.append(key)
    return result


def check_sort_keys(adapter: TableAdapter, sort_keys: List[ColumnSortKey]) -> None:
    for key in sort_keys:
        if key.column_index < 0 or key.column_index >= adapter.num_columns:
            raise IndexError(f"Sort column index {key.column_index} out of range")


def sort_rows(
    adapter: TableAdapter,
    filtered_indices: np.ndarray,
    sort_keys: List[ColumnSortKey],
) -> np.ndarray:
    """
    Order the selected source rows by the sort keys.

    Sorting is stable, so rows that tie on every key keep their source
    order, and missing values go last whatever the direction of the key.
    """
    sort_keys = unique_sort_keys(sort_keys)

    if len(sort_keys) == 0:
        return filtered_indices

    if len(sort_keys) == 1:
        key = sort_keys[0]
        column = adapter.get_column(key.column_index, filtered_indices)

        # pandas's univariate null-friendly argsort. Mergesort is
        # needed to make it stable
        sort_indexer = nargsort(column, kind="mergesort", ascending=key.ascending)
    else:
        cols_to_sort = []
        directions = []
        for key in sort_keys:
            cols_to_sort.append(adapter.get_column(key.column_index, filtered_indices))
            directions.append(key.ascending)

        # lexsort_indexer uses np.lexsort and so is always stable
        sort_indexer = lexsort_indexer(cols_to_sort, directions)

    return filtered_indices.take(sort_indexer)
