#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import enum
import logging
from typing import NamedTuple, Optional, Tuple

from .table_adapter import TableAdapter

logger = logging.getLogger(__name__)


@enum.unique
class ChangeKind(str, enum.Enum):
    """How a tabular source changed since it was last observed."""

    NoChange = "no_change"

    DataChanged = "data_changed"

    SchemaChanged = "schema_changed"

    SourceRemoved = "source_removed"


ColumnFingerprint = Tuple[str, str, str]


class Fingerprint(NamedTuple):
    """Structural summary of a table: row count plus each column's name and type."""

    num_rows: int
    columns: Tuple[ColumnFingerprint, ...]

    @property
    def num_columns(self) -> int:
        return len(self.columns)


class TableSnapshot(NamedTuple):
    fingerprint: Fingerprint

    # Hash of every cell value and row label
    content_token: str

    # id() of the bound object, to notice rebinding to an equal copy
    source_id: int


def take_fingerprint(adapter: TableAdapter) -> Fingerprint:
    columns = tuple(
        (schema.column_name, schema.type_name, schema.type_display.value)
        for schema in adapter.get_schema()
    )
    return Fingerprint(adapter.num_rows, columns)


def take_snapshot(adapter: TableAdapter) -> TableSnapshot:
    return TableSnapshot(
        fingerprint=take_fingerprint(adapter),
        content_token=adapter.content_token(),
        source_id=id(adapter.source),
    )


def classify(adapter: Optional[TableAdapter], snapshot: TableSnapshot) -> ChangeKind:
    """
    Compare the current state of a source against a cached snapshot.

    `adapter` is None when the bound object no longer resolves or is no
    longer a supported table.
    """
    if adapter is None:
        return ChangeKind.SourceRemoved

    fingerprint = take_fingerprint(adapter)
    if fingerprint.columns != snapshot.fingerprint.columns:
        kind = ChangeKind.SchemaChanged
    elif (
        fingerprint.num_rows != snapshot.fingerprint.num_rows
        or id(adapter.source) != snapshot.source_id
        or adapter.content_token() != snapshot.content_token
    ):
        kind = ChangeKind.DataChanged
    else:
        kind = ChangeKind.NoChange

    logger.debug("Classified table change as %s", kind.value)
    return kind
