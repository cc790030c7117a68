#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

import comm
import numpy as np
from pydantic import BaseModel

from .change_detection import ChangeKind, TableSnapshot, classify, take_snapshot
from .data_explorer_comm import (
    BackendState,
    ColumnProfileType,
    ColumnProfileTypeSupportStatus,
    ColumnSortKey,
    DataExplorerBackendMessageContent,
    DataExplorerFrontendEvent,
    ExportDataSelectionFeatures,
    ExportDataSelectionParams,
    ExportFormat,
    FilterResult,
    GetColumnProfilesFeatures,
    GetColumnProfilesParams,
    GetDataValuesParams,
    GetSchemaParams,
    RowFilter,
    RowFilterTypeSupportStatus,
    SetRowFiltersFeatures,
    SetRowFiltersParams,
    SetSortColumnsFeatures,
    SetSortColumnsParams,
    SupportedFeatures,
    SupportStatus,
    TableSchema,
    TableShape,
)
from .explorer_comm import CommMessage, ExplorerComm, JsonRpcErrorCode
from .export import export_selection
from .filters import SUPPORTED_FILTERS, apply_row_filters
from .formatting import format_values
from .profiles import compute_profiles
from .sorting import check_sort_keys, sort_rows
from .table_adapter import TableAdapter, get_table_adapter, is_supported
from .utils import JsonRecord, guid

logger = logging.getLogger(__name__)


DATA_EXPLORER_COMM_TARGET = "positron.dataExplorer"

PathKey = Tuple[str, ...]


class DataExplorerState:
    name: str
    row_filters: List[RowFilter]
    sort_keys: List[ColumnSortKey]

    def __init__(
        self,
        name: str,
        *,
        row_filters=None,
        sort_keys=None,
    ):
        self.name = name
        self.row_filters = row_filters or []
        self.sort_keys = sort_keys or []


class DataExplorerTableView:
    """
    The view state and request handlers for one open data explorer.

    Holds the adapter over the current table, the filters and sort
    keys set by the frontend, and the derived array of source row
    indices in view order. Every request is answered against that
    array; it is only replaced by set_row_filters, set_sort_columns,
    and check_for_updates.
    """

    FEATURES = SupportedFeatures(
        set_row_filters=SetRowFiltersFeatures(
            support_status=SupportStatus.Supported,
            supports_conditions=SupportStatus.Supported,
            supported_types=[
                RowFilterTypeSupportStatus(
                    row_filter_type=x, support_status=SupportStatus.Supported
                )
                for x in sorted(SUPPORTED_FILTERS, key=lambda x: x.value)
            ],
        ),
        get_column_profiles=GetColumnProfilesFeatures(
            support_status=SupportStatus.Supported,
            supported_types=[
                ColumnProfileTypeSupportStatus(
                    profile_type=profile_type,
                    support_status=SupportStatus.Supported,
                )
                for profile_type in ColumnProfileType
            ],
        ),
        set_sort_columns=SetSortColumnsFeatures(support_status=SupportStatus.Supported),
        export_data_selection=ExportDataSelectionFeatures(
            support_status=SupportStatus.Supported,
            supported_formats=[
                ExportFormat.Csv,
                ExportFormat.Tsv,
                ExportFormat.Html,
            ],
        ),
    )

    def __init__(
        self,
        adapter: TableAdapter,
        comm: ExplorerComm,
        state: DataExplorerState,
    ):
        # Note: we must not ever modify the user's data
        self.adapter = adapter
        self.comm = comm
        self.state = state
        self.snapshot: TableSnapshot = take_snapshot(adapter)

        # Source row indices selected by the filters, in source order
        self.filtered_indices = np.arange(adapter.num_rows)

        # Selected AND reordered source row indices
        self.row_view_indices = self.filtered_indices

        # Column names for each sort key, so that keys can follow
        # their column across schema changes
        self._sort_key_names = self._get_sort_key_names(state.sort_keys)

        if len(state.row_filters) > 0 or len(state.sort_keys) > 0:
            self._recompute()

    @property
    def table(self):
        return self.adapter.source

    def _get_sort_key_names(self, sort_keys: List[ColumnSortKey]) -> List[str]:
        return [self.adapter.get_column_name(key.column_index) for key in sort_keys]

    def _recompute(self) -> FilterResult:
        # Filters are evaluated and sorted before anything is assigned,
        # so a failure leaves the previous view in place
        outcome = apply_row_filters(self.adapter, self.state.row_filters)
        filtered_indices = outcome.mask.nonzero()[0]
        row_view_indices = sort_rows(self.adapter, filtered_indices, self.state.sort_keys)

        self.state.row_filters = outcome.filters
        self.filtered_indices = filtered_indices
        self.row_view_indices = row_view_indices

        return FilterResult(
            selected_num_rows=len(filtered_indices),
            had_errors=outcome.had_errors,
        )

    def get_schema(self, params: GetSchemaParams):
        num_columns = self.adapter.num_columns
        if params.start_index < 0 or params.num_columns < 0:
            raise IndexError(
                f"Invalid schema range: start_index={params.start_index}, "
                f"num_columns={params.num_columns}"
            )
        if params.start_index > 0 and params.start_index >= num_columns:
            raise IndexError(f"Column index {params.start_index} out of range")

        end_index = min(params.start_index + params.num_columns, num_columns)
        column_schemas = [
            self.adapter.get_column_schema(i) for i in range(params.start_index, end_index)
        ]
        return TableSchema(columns=column_schemas)

    def get_data_values(self, params: GetDataValuesParams):
        num_view_rows = len(self.row_view_indices)
        if params.row_start_index < 0 or params.num_rows < 0:
            raise IndexError(
                f"Invalid row range: row_start_index={params.row_start_index}, "
                f"num_rows={params.num_rows}"
            )
        if params.row_start_index > 0 and params.row_start_index >= num_view_rows:
            raise IndexError(f"Row index {params.row_start_index} out of range")
        for column_index in params.column_indices:
            if column_index < 0 or column_index >= self.adapter.num_columns:
                raise IndexError(f"Column index {column_index} out of range")

        view_slice = self.row_view_indices[
            params.row_start_index : params.row_start_index + params.num_rows
        ]

        formatted_columns = [
            format_values(self.adapter.get_column(i, view_slice), params.format_options)
            for i in params.column_indices
        ]

        # Bypass pydantic model for speed
        result = {"columns": formatted_columns}
        if self.adapter.has_row_labels:
            result["row_labels"] = self.adapter.get_row_labels(view_slice)
        return result

    def set_row_filters(self, params: SetRowFiltersParams):
        return self._set_row_filters(params.filters)

    def _set_row_filters(self, filters: List[RowFilter]) -> FilterResult:
        prior_filters = self.state.row_filters
        self.state.row_filters = filters
        try:
            return self._recompute()
        except Exception:
            self.state.row_filters = prior_filters
            raise

    def set_sort_columns(self, params: SetSortColumnsParams):
        check_sort_keys(self.adapter, params.sort_keys)

        prior_keys = self.state.sort_keys
        self.state.sort_keys = params.sort_keys
        try:
            self.row_view_indices = sort_rows(
                self.adapter, self.filtered_indices, self.state.sort_keys
            )
        except Exception:
            self.state.sort_keys = prior_keys
            raise
        self._sort_key_names = self._get_sort_key_names(self.state.sort_keys)

    def get_column_profiles(self, params: GetColumnProfilesParams):
        for request in params.profiles:
            if request.column_index < 0 or request.column_index >= self.adapter.num_columns:
                raise IndexError(f"Column index {request.column_index} out of range")

        results = []
        for request in params.profiles:
            try:
                result = compute_profiles(
                    self.adapter,
                    self.filtered_indices,
                    request.column_index,
                    request.profiles,
                    params.format_options,
                )
                results.append(result.model_dump(mode="json", exclude_none=True))
            except Exception as e:  # noqa: PERF203
                logger.error(e, exc_info=True)
                # Append an empty result so the other profiles get computed
                results.append({})

        return results

    def export_data_selection(self, params: ExportDataSelectionParams):
        return export_selection(
            self.adapter,
            self.row_view_indices,
            params.selection,
            params.format,
        )

    def get_state(self, _unused):
        num_rows = self.adapter.num_rows
        num_columns = self.adapter.num_columns

        return BackendState(
            display_name=self.state.name,
            table_shape=TableShape(
                num_rows=len(self.row_view_indices),
                num_columns=num_columns,
            ),
            table_unfiltered_shape=TableShape(num_rows=num_rows, num_columns=num_columns),
            has_row_labels=self.adapter.has_row_labels,
            row_filters=self.state.row_filters,
            sort_keys=self.state.sort_keys,
            supported_features=self.FEATURES,
        )

    def check_for_updates(self, adapter: Optional[TableAdapter]) -> ChangeKind:
        """
        Reconcile the view with the current state of the source.

        Sends schema_update or data_update to the frontend as needed.
        Removal is reported to the caller, who owns the comm's lifetime.
        """
        kind = classify(adapter, self.snapshot)
        if kind == ChangeKind.SourceRemoved:
            return kind

        assert adapter is not None
        if kind == ChangeKind.NoChange:
            self.adapter = adapter
            return kind

        sort_keys, sort_key_names = self.state.sort_keys, self._sort_key_names
        if kind == ChangeKind.SchemaChanged:
            sort_keys, sort_key_names = self._get_adjusted_sort_keys(adapter)

        # Everything is computed against the new table before the view
        # adopts it, so the row mapping never refers to the old source
        outcome = apply_row_filters(adapter, self.state.row_filters)
        filtered_indices = outcome.mask.nonzero()[0]
        try:
            row_view_indices = sort_rows(adapter, filtered_indices, sort_keys)
        except Exception as e:
            # The new data cannot be ordered by the current keys
            logger.warning(f"Dropping sort keys after table update: {e}", exc_info=True)
            sort_keys, sort_key_names = [], []
            row_view_indices = filtered_indices

        self.adapter = adapter
        self.snapshot = take_snapshot(adapter)
        self.state.row_filters = outcome.filters
        self.state.sort_keys = sort_keys
        self._sort_key_names = sort_key_names
        self.filtered_indices = filtered_indices
        self.row_view_indices = row_view_indices

        if kind == ChangeKind.SchemaChanged:
            self.comm.send_event(DataExplorerFrontendEvent.SchemaUpdate.value, {})
        else:
            self.comm.send_event(DataExplorerFrontendEvent.DataUpdate.value, {})
        return kind

    def _get_adjusted_sort_keys(self, new_adapter: TableAdapter):
        new_sort_keys = []
        new_names = []
        for key, prior_name in zip(self.state.sort_keys, self._sort_key_names):
            new_index = new_adapter.find_column(prior_name)

            # Evict any sort key whose column was deleted
            if new_index is None:
                continue

            key = key.model_copy()
            key.column_index = new_index
            new_sort_keys.append(key)
            new_names.append(prior_name)

        return new_sort_keys, new_names


def _resolve_value_from_path(value: Any, path: PathKey) -> Tuple[bool, Any]:
    """Follow item lookups down `path`, returning (is_found, value)."""
    for key in path:
        try:
            value = value[key]
        except (KeyError, IndexError, TypeError):
            return False, None
    return True, value


class DataExplorerService:
    def __init__(self, comm_target: str = DATA_EXPLORER_COMM_TARGET) -> None:
        self.comm_target = comm_target

        # Maps comm_id for each dataset being viewed to ExplorerComm
        self.comms: Dict[str, ExplorerComm] = {}
        self.table_views: Dict[str, DataExplorerTableView] = {}

        # Maps from variable path to set of comm_ids serving DE
        # requests. The user could have multiple DE windows open
        # referencing the same dataset.
        self.path_to_comm_ids: Dict[PathKey, Set[str]] = {}

        # Mapping from comm_id to the corresponding variable path, if any
        self.comm_id_to_path: Dict[str, PathKey] = {}

        # Called when comm closure is initiated from the frontend
        self._close_callback: Optional[Callable[[str], None]] = None

    def shutdown(self) -> None:
        for comm_id in list(self.comms.keys()):
            self._close_explorer(comm_id)
        self.path_to_comm_ids.clear()
        self.comm_id_to_path.clear()

    def is_supported(self, value) -> bool:
        return is_supported(value)

    def register_table(
        self,
        table,
        title,
        variable_path: Optional[List[str]] = None,
        comm_id=None,
    ):
        """
        Set up a new comm and data explorer table view to handle requests and manage state.

        Parameters
        ----------
        table : table-like object
        title : str
            Display name in UI
        variable_path : List[str], default None
            If the data explorer references an assigned variable in
            the user namespace, we track it so that namespace changes
            (variable deletions or assignments) can reflect the
            appropriate change on active data explorer tabs.
        comm_id : str, default None
            A specific comm identifier to use, otherwise generate a
            random uuid.

        Returns
        -------
        comm_id : str
            The associated (generated or passed in) comm_id
        """
        if not self.is_supported(table):
            raise TypeError(type(table))

        if variable_path is not None and not isinstance(variable_path, list):
            raise ValueError(variable_path)

        if comm_id is None:
            comm_id = guid()

        adapter = get_table_adapter(table)

        base_comm = comm.create_comm(
            target_name=self.comm_target,
            comm_id=comm_id,
            data={"title": title},
        )

        def close_callback(_):
            # Notify via callback that the comm_id has closed
            if self._close_callback:
                self._close_callback(comm_id)

            if comm_id in self.comms:
                self._close_explorer(comm_id)

        base_comm.on_close(close_callback)
        wrapped_comm = ExplorerComm(base_comm)
        wrapped_comm.on_msg(self.handle_msg, DataExplorerBackendMessageContent)

        self.table_views[comm_id] = DataExplorerTableView(
            adapter, wrapped_comm, DataExplorerState(title)
        )

        if variable_path is not None:
            key = tuple(variable_path)
            self.comm_id_to_path[comm_id] = key
            self.path_to_comm_ids.setdefault(key, set()).add(comm_id)

        self.comms[comm_id] = wrapped_comm
        return comm_id

    def _close_explorer(self, comm_id: str):
        try:
            # This is idempotent, so if the comm is already closed, we
            # can call this again. This will also notify the UI with
            # the comm_close event
            self.comms[comm_id].close()
        except Exception as err:
            logger.warning(err, exc_info=True)

        del self.comms[comm_id]
        del self.table_views[comm_id]

        if comm_id in self.comm_id_to_path:
            path = self.comm_id_to_path[comm_id]
            self.path_to_comm_ids[path].discard(comm_id)
            if len(self.path_to_comm_ids[path]) == 0:
                del self.path_to_comm_ids[path]
            del self.comm_id_to_path[comm_id]

    def on_comm_closed(self, callback: Callable[[str], None]):
        """Register a callback to invoke when a comm was closed by the frontend."""
        self._close_callback = callback

    def variable_has_active_explorers(self, variable_name):
        return len(self.get_paths_for_variable(variable_name)) > 0

    def get_paths_for_variable(self, variable_name):
        return [
            path
            for path, comm_ids in self.path_to_comm_ids.items()
            if path[0] == variable_name and len(comm_ids) > 0
        ]

    def handle_variable_deleted(self, variable_name):
        """
        Clean up.

        If a variable with active data explorers is deleted, we must
        shut down and delete unneeded state and object references
        stored here.
        """
        for path in self.get_paths_for_variable(variable_name):
            for comm_id in list(self.path_to_comm_ids.get(path, ())):
                self._close_explorer(comm_id)

    def handle_variable_updated(self, variable_name, new_variable):
        for path in self.get_paths_for_variable(variable_name):
            is_found, new_table = _resolve_value_from_path(new_variable, path[1:])
            for comm_id in list(self.path_to_comm_ids.get(path, ())):
                self._update_explorer_for_comm(comm_id, new_table if is_found else None)

    def check_for_updates(self, namespace: Optional[Mapping[str, Any]] = None):
        """
        Check every open explorer for changes to its table.

        Called by the host after it has run code that may have mutated
        or rebound data. Explorers opened with a variable path are
        re-resolved in `namespace` when one is given; all others are
        checked against the object they were opened with.

        Returns a mapping of comm_id to the detected ChangeKind.
        """
        results = {}
        for comm_id in list(self.comms.keys()):
            path = self.comm_id_to_path.get(comm_id)
            if namespace is not None and path is not None:
                is_found, new_table = _resolve_value_from_path(namespace, path)
                if not is_found:
                    new_table = None
            else:
                new_table = self.table_views[comm_id].table
            results[comm_id] = self._update_explorer_for_comm(comm_id, new_table)
        return results

    def _update_explorer_for_comm(self, comm_id: str, new_table) -> ChangeKind:
        table_view = self.table_views[comm_id]

        try:
            adapter = get_table_adapter(new_table) if self.is_supported(new_table) else None
            kind = table_view.check_for_updates(adapter)
        except Exception as err:
            # A view that cannot be reconciled with its table is closed
            # like a removed one; the other explorers are still updated
            logger.error(err, exc_info=True)
            kind = ChangeKind.SourceRemoved

        if kind == ChangeKind.SourceRemoved:
            # The binding is gone or no longer holds a supported
            # table, so we tear down everything and let the
            # comm_close event tell the UI
            self._close_explorer(comm_id)

        return kind

    def handle_msg(self, msg: CommMessage[DataExplorerBackendMessageContent], _raw_msg: JsonRecord):
        """Handle messages received from the client via the data explorer comm."""
        comm_id = msg.content.comm_id
        request = msg.content.data

        comm = self.comms[comm_id]
        table = self.table_views[comm_id]

        try:
            # GetState is the only method that doesn't have params
            result = getattr(table, request.method)(getattr(request, "params", None))
        except (IndexError, ValueError) as e:
            comm.send_error(JsonRpcErrorCode.INVALID_PARAMS, str(e))
            return
        except Exception as e:
            logger.error(e, exc_info=True)
            comm.send_error(
                JsonRpcErrorCode.INTERNAL_ERROR,
                f"Error handling '{request.method}': {e}",
            )
            return

        comm.send_result(_to_json(result))


def _to_json(result):
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    elif isinstance(result, list):
        return [_to_json(x) for x in result]
    return result
