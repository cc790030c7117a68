#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

import numpy as np
import pandas as pd

from table_explorer.change_detection import (
    ChangeKind,
    classify,
    take_fingerprint,
    take_snapshot,
)
from table_explorer.table_adapter import PandasAdapter


def _snapshot(value):
    return take_snapshot(PandasAdapter(value))


def test_fingerprint():
    df = pd.DataFrame({"a": [1, 2], "b": ["x", "y"]})
    fingerprint = take_fingerprint(PandasAdapter(df))
    assert fingerprint.num_rows == 2
    assert fingerprint.num_columns == 2
    assert fingerprint.columns[0] == ("a", "int64", "number")
    assert fingerprint.columns[1][0] == "b"
    assert fingerprint.columns[1][2] == "string"


def test_no_change():
    df = pd.DataFrame({"a": [1, 2, 3]})
    snapshot = _snapshot(df)
    assert classify(PandasAdapter(df), snapshot) == ChangeKind.NoChange

    # Writing the same value in place is not a change
    df.iloc[0, 0] = 1
    assert classify(PandasAdapter(df), snapshot) == ChangeKind.NoChange


def test_source_removed():
    snapshot = _snapshot(pd.DataFrame({"a": [1]}))
    assert classify(None, snapshot) == ChangeKind.SourceRemoved


def test_in_place_data_change():
    df = pd.DataFrame({"a": [1, 2, 3]})
    snapshot = _snapshot(df)
    df.iloc[1, 0] = 20
    assert classify(PandasAdapter(df), snapshot) == ChangeKind.DataChanged


def test_row_count_change():
    snapshot = _snapshot(pd.DataFrame({"a": [1, 2, 3]}))
    assert classify(PandasAdapter(pd.DataFrame({"a": [1, 2]})), snapshot) == ChangeKind.DataChanged


def test_rebinding_to_copy_is_data_change():
    df = pd.DataFrame({"a": [1, 2, 3]})
    snapshot = _snapshot(df)
    assert classify(PandasAdapter(df.copy()), snapshot) == ChangeKind.DataChanged


def test_index_change_is_data_change():
    df = pd.DataFrame({"a": [1, 2, 3]})
    snapshot = _snapshot(df)
    df.index = ["x", "y", "z"]
    assert classify(PandasAdapter(df), snapshot) == ChangeKind.DataChanged


def test_schema_changes():
    df = pd.DataFrame({"a": [1, 2, 3], "b": [4, 5, 6]})
    snapshot = _snapshot(df)

    # New column
    added = df.assign(c=[7, 8, 9])
    assert classify(PandasAdapter(added), snapshot) == ChangeKind.SchemaChanged

    # Dropped column
    assert classify(PandasAdapter(df[["a"]]), snapshot) == ChangeKind.SchemaChanged

    # Renamed column
    renamed = df.rename(columns={"b": "B"})
    assert classify(PandasAdapter(renamed), snapshot) == ChangeKind.SchemaChanged

    # Retyped column
    retyped = df.astype({"b": "float64"})
    assert classify(PandasAdapter(retyped), snapshot) == ChangeKind.SchemaChanged

    # Reordered columns
    assert classify(PandasAdapter(df[["b", "a"]]), snapshot) == ChangeKind.SchemaChanged


def test_schema_change_wins_over_data_change():
    df = pd.DataFrame({"a": [1, 2, 3]})
    snapshot = _snapshot(df)
    changed = pd.DataFrame({"a": ["x", "y"]})
    assert classify(PandasAdapter(changed), snapshot) == ChangeKind.SchemaChanged


def test_unhashable_cells():
    df = pd.DataFrame({"a": [[1, 2], [3]]})
    snapshot = _snapshot(df)
    assert classify(PandasAdapter(df), snapshot) == ChangeKind.NoChange

    changed = pd.DataFrame({"a": [[1, 2], [4]]})
    assert PandasAdapter(changed).content_token() != snapshot.content_token


def test_numpy_source():
    arr = np.arange(6, dtype=np.float64).reshape(3, 2)
    snapshot = _snapshot(arr)
    assert classify(PandasAdapter(arr), snapshot) == ChangeKind.NoChange

    arr[0, 0] = 100
    assert classify(PandasAdapter(arr), snapshot) == ChangeKind.DataChanged
