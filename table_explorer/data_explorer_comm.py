#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

# flake8: noqa

# For forward declarations
from __future__ import annotations

import enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr


@enum.unique
class ColumnDisplayType(str, enum.Enum):
    """
    Possible values for ColumnDisplayType
    """

    Number = "number"

    Boolean = "boolean"

    String = "string"

    Date = "date"

    Datetime = "datetime"

    Time = "time"

    Interval = "interval"

    Object = "object"

    Unknown = "unknown"


@enum.unique
class RowFilterCondition(str, enum.Enum):
    """
    Possible values for Condition in RowFilter
    """

    And = "and"

    Or = "or"


@enum.unique
class RowFilterType(str, enum.Enum):
    """
    Possible values for RowFilterType
    """

    Between = "between"

    Compare = "compare"

    IsEmpty = "is_empty"

    IsFalse = "is_false"

    IsNull = "is_null"

    IsTrue = "is_true"

    NotBetween = "not_between"

    NotEmpty = "not_empty"

    NotNull = "not_null"

    Search = "search"

    SetMembership = "set_membership"


@enum.unique
class FilterComparisonOp(str, enum.Enum):
    """
    Possible values for Op in FilterComparison
    """

    Eq = "="

    NotEq = "!="

    Lt = "<"

    LtEq = "<="

    Gt = ">"

    GtEq = ">="


@enum.unique
class TextSearchType(str, enum.Enum):
    """
    Possible values for TextSearchType
    """

    Contains = "contains"

    NotContains = "not_contains"

    StartsWith = "starts_with"

    EndsWith = "ends_with"

    RegexMatch = "regex_match"


@enum.unique
class ColumnProfileType(str, enum.Enum):
    """
    Possible values for ColumnProfileType
    """

    NullCount = "null_count"

    SummaryStats = "summary_stats"

    FrequencyTable = "frequency_table"

    Histogram = "histogram"


@enum.unique
class ColumnHistogramParamsMethod(str, enum.Enum):
    """
    Possible values for Method in ColumnHistogramParams
    """

    Sturges = "sturges"

    FreedmanDiaconis = "freedman_diaconis"

    Scott = "scott"

    Fixed = "fixed"


@enum.unique
class TableSelectionKind(str, enum.Enum):
    """
    Possible values for Kind in TableSelection
    """

    SingleCell = "single_cell"

    CellRange = "cell_range"

    ColumnRange = "column_range"

    RowRange = "row_range"

    ColumnIndices = "column_indices"

    RowIndices = "row_indices"


@enum.unique
class ExportFormat(str, enum.Enum):
    """
    Possible values for ExportFormat
    """

    Csv = "csv"

    Tsv = "tsv"

    Html = "html"


@enum.unique
class SupportStatus(str, enum.Enum):
    """
    Possible values for SupportStatus
    """

    Unsupported = "unsupported"

    Supported = "supported"


class ExportedData(BaseModel):
    """
    Exported result
    """

    data: StrictStr = Field(
        description="Exported data as a string suitable for copy and paste",
    )

    format: ExportFormat = Field(
        description="The exported data format",
    )


class FilterResult(BaseModel):
    """
    The result of applying filters to a table
    """

    selected_num_rows: StrictInt = Field(
        description="Number of rows in table after applying filters",
    )

    had_errors: Optional[StrictBool] = Field(
        default=None,
        description="Flag indicating if there were errors in evaluation",
    )


class BackendState(BaseModel):
    """
    The current backend state for the data explorer
    """

    display_name: StrictStr = Field(
        description="Variable name or other string to display for tab name in UI",
    )

    table_shape: TableShape = Field(
        description="Number of rows and columns in table with row filters applied",
    )

    table_unfiltered_shape: TableShape = Field(
        description="Number of rows and columns in table without any filters applied",
    )

    has_row_labels: StrictBool = Field(
        description="Indicates whether table has row labels or whether rows should be labeled by ordinal position",
    )

    row_filters: List[RowFilter] = Field(
        description="The currently applied row filters",
    )

    sort_keys: List[ColumnSortKey] = Field(
        description="The currently applied column sort keys",
    )

    supported_features: SupportedFeatures = Field(
        description="The features currently supported by the backend instance",
    )


class ColumnSchema(BaseModel):
    """
    Schema for a column in a table
    """

    column_name: StrictStr = Field(
        description="Name of column as UTF-8 string",
    )

    column_index: StrictInt = Field(
        description="The position of the column within the schema",
    )

    type_name: StrictStr = Field(
        description="Exact name of data type used by underlying table",
    )

    type_display: ColumnDisplayType = Field(
        description="Canonical display name of data type",
    )


class TableData(BaseModel):
    """
    Table values formatted as strings
    """

    columns: List[List[ColumnValue]] = Field(
        description="The columns of data",
    )

    row_labels: Optional[List[List[StrictStr]]] = Field(
        default=None,
        description="Zero or more arrays of row labels",
    )


class FormatOptions(BaseModel):
    """
    Formatting options for returning data values as strings
    """

    large_num_digits: StrictInt = Field(
        description="Fixed number of decimal places to display for numbers over 1, or in scientific notation",
    )

    small_num_digits: StrictInt = Field(
        description="Fixed number of decimal places to display for small numbers, and to determine lower threshold for switching to scientific notation",
    )

    max_integral_digits: StrictInt = Field(
        description="Maximum number of integral digits to display before switching to scientific notation",
    )

    thousands_sep: Optional[StrictStr] = Field(
        default=None,
        description="Thousands separator string",
    )

    max_value_length: Optional[StrictInt] = Field(
        default=None,
        description="Maximum size of formatted value, for truncating large strings or other large formatted values",
    )


class TableSchema(BaseModel):
    """
    The schema for a table-like object
    """

    columns: List[ColumnSchema] = Field(
        description="Schema for each column in the table",
    )


class TableShape(BaseModel):
    """
    Provides number of rows and columns in a table
    """

    num_rows: StrictInt = Field(
        description="Numbers of rows in the table",
    )

    num_columns: StrictInt = Field(
        description="Number of columns in the table",
    )


class RowFilter(BaseModel):
    """
    Specifies a table row filter based on a single column's values
    """

    filter_id: StrictStr = Field(
        description="Unique identifier for this filter",
    )

    filter_type: RowFilterType = Field(
        description="Type of row filter to apply",
    )

    column_schema: ColumnSchema = Field(
        description="Column to apply filter to",
    )

    condition: RowFilterCondition = Field(
        description="The binary condition to use to combine with preceding row filters",
    )

    is_valid: Optional[StrictBool] = Field(
        default=None,
        description="Whether the filter is valid and supported by the backend, if undefined then true",
    )

    error_message: Optional[StrictStr] = Field(
        default=None,
        description="Optional error message when the filter is invalid",
    )

    params: Optional[RowFilterParams] = Field(
        default=None,
        description="The row filter type-specific parameters",
    )


class RowFilterTypeSupportStatus(BaseModel):
    """
    Support status for a row filter type
    """

    row_filter_type: RowFilterType = Field(
        description="Type of row filter",
    )

    support_status: SupportStatus = Field(
        description="The support status for this row filter type",
    )


class FilterBetween(BaseModel):
    """
    Parameters for the 'between' and 'not_between' filter types
    """

    left_value: StrictStr = Field(
        description="The lower limit for filtering",
    )

    right_value: StrictStr = Field(
        description="The upper limit for filtering",
    )


class FilterComparison(BaseModel):
    """
    Parameters for the 'compare' filter type
    """

    op: FilterComparisonOp = Field(
        description="String representation of a binary comparison",
    )

    value: StrictStr = Field(
        description="A stringified column value for a comparison filter",
    )


class FilterSetMembership(BaseModel):
    """
    Parameters for the 'set_membership' filter type
    """

    values: List[StrictStr] = Field(
        description="Array of values for a set membership filter",
    )

    inclusive: StrictBool = Field(
        description="Filter by including only values passed (true) or excluding (false)",
    )


class FilterTextSearch(BaseModel):
    """
    Parameters for the 'search' filter type
    """

    search_type: TextSearchType = Field(
        description="Type of search to perform",
    )

    term: StrictStr = Field(
        description="String value/regex to search for",
    )

    case_sensitive: StrictBool = Field(
        description="If true, do a case-sensitive search, otherwise case-insensitive",
    )


class ColumnProfileRequest(BaseModel):
    """
    A single column profile request
    """

    column_index: StrictInt = Field(
        description="The column index to profile",
    )

    profiles: List[ColumnProfileSpec] = Field(
        description="Column profiles needed",
    )


class ColumnProfileSpec(BaseModel):
    """
    Parameters for a single column profile for a request for profiles
    """

    profile_type: ColumnProfileType = Field(
        description="Type of column profile",
    )

    params: Optional[ColumnProfileParams] = Field(
        default=None,
        description="Extra parameters for different profile types",
    )


class ColumnProfileTypeSupportStatus(BaseModel):
    """
    Support status for a given column profile type
    """

    profile_type: ColumnProfileType = Field(
        description="The type of analytical column profile",
    )

    support_status: SupportStatus = Field(
        description="The support status for this column profile type",
    )


class ColumnProfileResult(BaseModel):
    """
    Result of computing column profile
    """

    null_count: Optional[StrictInt] = Field(
        default=None,
        description="Result from null_count request",
    )

    summary_stats: Optional[ColumnSummaryStats] = Field(
        default=None,
        description="Results from summary_stats request",
    )

    histogram: Optional[ColumnHistogram] = Field(
        default=None,
        description="Results from histogram request",
    )

    frequency_table: Optional[ColumnFrequencyTable] = Field(
        default=None,
        description="Results from frequency_table request",
    )


class ColumnSummaryStats(BaseModel):
    """
    Profile result containing summary stats for a column based on the data
    type
    """

    type_display: ColumnDisplayType = Field(
        description="Canonical display name of data type",
    )

    number_stats: Optional[SummaryStatsNumber] = Field(
        default=None,
        description="Statistics for a numeric data type",
    )

    string_stats: Optional[SummaryStatsString] = Field(
        default=None,
        description="Statistics for a string-like data type",
    )

    boolean_stats: Optional[SummaryStatsBoolean] = Field(
        default=None,
        description="Statistics for a boolean data type",
    )

    date_stats: Optional[SummaryStatsDate] = Field(
        default=None,
        description="Statistics for a date data type",
    )

    datetime_stats: Optional[SummaryStatsDatetime] = Field(
        default=None,
        description="Statistics for a datetime data type",
    )

    other_stats: Optional[SummaryStatsOther] = Field(
        default=None,
        description="Summary statistics for any other data types",
    )


class SummaryStatsNumber(BaseModel):
    """
    SummaryStatsNumber in Schemas
    """

    min_value: Optional[StrictStr] = Field(
        default=None,
        description="Minimum value as string",
    )

    max_value: Optional[StrictStr] = Field(
        default=None,
        description="Maximum value as string",
    )

    mean: Optional[StrictStr] = Field(
        default=None,
        description="Average value as string",
    )

    median: Optional[StrictStr] = Field(
        default=None,
        description="Sample median (50% value) value as string",
    )

    stdev: Optional[StrictStr] = Field(
        default=None,
        description="Sample standard deviation as a string",
    )


class SummaryStatsBoolean(BaseModel):
    """
    SummaryStatsBoolean in Schemas
    """

    true_count: StrictInt = Field(
        description="The number of non-null true values",
    )

    false_count: StrictInt = Field(
        description="The number of non-null false values",
    )


class SummaryStatsOther(BaseModel):
    """
    SummaryStatsOther in Schemas
    """

    num_unique: Optional[StrictInt] = Field(
        default=None,
        description="The number of unique values",
    )


class SummaryStatsString(BaseModel):
    """
    SummaryStatsString in Schemas
    """

    num_empty: StrictInt = Field(
        description="The number of empty / length-zero values",
    )

    num_unique: StrictInt = Field(
        description="The exact number of distinct values",
    )


class SummaryStatsDate(BaseModel):
    """
    SummaryStatsDate in Schemas
    """

    num_unique: Optional[StrictInt] = Field(
        default=None,
        description="The exact number of distinct values",
    )

    min_date: Optional[StrictStr] = Field(
        default=None,
        description="Minimum date value as string",
    )

    mean_date: Optional[StrictStr] = Field(
        default=None,
        description="Average date value as string",
    )

    median_date: Optional[StrictStr] = Field(
        default=None,
        description="Sample median (50% value) date value as string",
    )

    max_date: Optional[StrictStr] = Field(
        default=None,
        description="Maximum date value as string",
    )


class SummaryStatsDatetime(BaseModel):
    """
    SummaryStatsDatetime in Schemas
    """

    num_unique: Optional[StrictInt] = Field(
        default=None,
        description="The exact number of distinct values",
    )

    min_date: Optional[StrictStr] = Field(
        default=None,
        description="Minimum date value as string",
    )

    mean_date: Optional[StrictStr] = Field(
        default=None,
        description="Average date value as string",
    )

    median_date: Optional[StrictStr] = Field(
        default=None,
        description="Sample median (50% value) date value as string",
    )

    max_date: Optional[StrictStr] = Field(
        default=None,
        description="Maximum date value as string",
    )

    timezone: Optional[StrictStr] = Field(
        default=None,
        description="Time zone for timestamp with time zone",
    )


class ColumnHistogramParams(BaseModel):
    """
    Parameters for a column histogram profile request
    """

    method: ColumnHistogramParamsMethod = Field(
        description="Method for determining number of bins",
    )

    num_bins: StrictInt = Field(
        description="Maximum number of bins in the computed histogram.",
    )


class ColumnHistogram(BaseModel):
    """
    Result from a histogram profile request
    """

    bin_edges: List[StrictStr] = Field(
        description="String-formatted versions of the bin edges, there are N + 1 where N is the number of bins",
    )

    bin_counts: List[StrictInt] = Field(
        description="Absolute count of values in each histogram bin",
    )


class ColumnFrequencyTableParams(BaseModel):
    """
    Parameters for a frequency_table profile request
    """

    limit: StrictInt = Field(
        description="Number of most frequently-occurring values to return.",
    )


class ColumnFrequencyTable(BaseModel):
    """
    Result from a frequency_table profile request
    """

    values: List[ColumnValue] = Field(
        description="The formatted top values",
    )

    counts: List[StrictInt] = Field(
        description="Counts of top values",
    )

    other_count: Optional[StrictInt] = Field(
        default=None,
        description="Number of other values not accounted for in counts, excluding nulls/NA values. May be omitted",
    )


class ColumnSortKey(BaseModel):
    """
    Specifies a column to sort by
    """

    column_index: StrictInt = Field(
        description="Column index to sort by",
    )

    ascending: StrictBool = Field(
        description="Sort order, ascending (true) or descending (false)",
    )


class SupportedFeatures(BaseModel):
    """
    For each field, returns flags indicating supported features
    """

    set_row_filters: SetRowFiltersFeatures = Field(
        description="Support for 'set_row_filters' RPC and its features",
    )

    get_column_profiles: GetColumnProfilesFeatures = Field(
        description="Support for 'get_column_profiles' RPC and its features",
    )

    set_sort_columns: SetSortColumnsFeatures = Field(
        description="Support for 'set_sort_columns' RPC and its features",
    )

    export_data_selection: ExportDataSelectionFeatures = Field(
        description="Support for 'export_data_selection' RPC and its features",
    )


class SetRowFiltersFeatures(BaseModel):
    """
    Feature flags for 'set_row_filters' RPC
    """

    support_status: SupportStatus = Field(
        description="The support status for this RPC method",
    )

    supports_conditions: SupportStatus = Field(
        description="Whether AND/OR filter conditions are supported",
    )

    supported_types: List[RowFilterTypeSupportStatus] = Field(
        description="A list of supported types",
    )


class GetColumnProfilesFeatures(BaseModel):
    """
    Feature flags for 'get_column_profiles' RPC
    """

    support_status: SupportStatus = Field(
        description="The support status for this RPC method",
    )

    supported_types: List[ColumnProfileTypeSupportStatus] = Field(
        description="A list of supported types",
    )


class ExportDataSelectionFeatures(BaseModel):
    """
    Feature flags for 'export_data_selction' RPC
    """

    support_status: SupportStatus = Field(
        description="The support status for this RPC method",
    )

    supported_formats: List[ExportFormat] = Field(
        description="Export data formats supported",
    )


class SetSortColumnsFeatures(BaseModel):
    """
    Feature flags for 'set_sort_columns' RPC
    """

    support_status: SupportStatus = Field(
        description="The support status for this RPC method",
    )


class TableSelection(BaseModel):
    """
    A selection on the data grid, for copying to the clipboard or other
    actions
    """

    kind: TableSelectionKind = Field(
        description="Type of selection, all indices relative to filtered row/column indices",
    )

    selection: Selection = Field(
        description="A union of selection types",
    )


class DataSelectionSingleCell(BaseModel):
    """
    A selection that contains a single data cell
    """

    row_index: StrictInt = Field(
        description="The selected row index",
    )

    column_index: StrictInt = Field(
        description="The selected column index",
    )


class DataSelectionCellRange(BaseModel):
    """
    A selection that contains a rectangular range of data cells
    """

    first_row_index: StrictInt = Field(
        description="The starting selected row index (inclusive)",
    )

    last_row_index: StrictInt = Field(
        description="The final selected row index (inclusive)",
    )

    first_column_index: StrictInt = Field(
        description="The starting selected column index (inclusive)",
    )

    last_column_index: StrictInt = Field(
        description="The final selected column index (inclusive)",
    )


class DataSelectionRange(BaseModel):
    """
    A contiguous selection bounded by inclusive start and end indices
    """

    first_index: StrictInt = Field(
        description="The starting selected index (inclusive)",
    )

    last_index: StrictInt = Field(
        description="The final selected index (inclusive)",
    )


class DataSelectionIndices(BaseModel):
    """
    A selection defined by a sequence of indices to include
    """

    indices: List[StrictInt] = Field(
        description="The selected indices",
    )


# ColumnValue
ColumnValue = Union[
    StrictInt,
    StrictStr,
]
# Union of row filter parameters
RowFilterParams = Union[
    FilterBetween,
    FilterComparison,
    FilterTextSearch,
    FilterSetMembership,
]
# Extra parameters for different profile types
ColumnProfileParams = Union[
    ColumnHistogramParams,
    ColumnFrequencyTableParams,
]
# A union of selection types
Selection = Union[
    DataSelectionSingleCell,
    DataSelectionCellRange,
    DataSelectionRange,
    DataSelectionIndices,
]


@enum.unique
class DataExplorerBackendRequest(str, enum.Enum):
    """
    An enumeration of all the possible requests that can be sent to the backend data_explorer comm.
    """

    # Request a contiguous range of column schemas
    GetSchema = "get_schema"

    # Request formatted values from table columns
    GetDataValues = "get_data_values"

    # Export data selection as a string in different formats
    ExportDataSelection = "export_data_selection"

    # Set row filters based on column values
    SetRowFilters = "set_row_filters"

    # Set or clear sort-by-column(s)
    SetSortColumns = "set_sort_columns"

    # Request a batch of column profiles
    GetColumnProfiles = "get_column_profiles"

    # Get the state
    GetState = "get_state"


class GetSchemaParams(BaseModel):
    """
    Request a contiguous range of column schemas for a table-like object
    """

    start_index: StrictInt = Field(
        description="First column schema to fetch (inclusive)",
    )

    num_columns: StrictInt = Field(
        description="Number of column schemas to fetch from start_index",
    )


class GetSchemaRequest(BaseModel):
    """
    Request a contiguous range of column schemas for a table-like object
    """

    params: GetSchemaParams = Field(
        description="Parameters to the GetSchema method",
    )

    method: Literal["get_schema"] = Field(
        description="The JSON-RPC method name (get_schema)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class GetDataValuesParams(BaseModel):
    """
    Request a rectangular subset of data with values formatted as strings
    """

    row_start_index: StrictInt = Field(
        description="First row to fetch (inclusive)",
    )

    num_rows: StrictInt = Field(
        description="Number of rows to fetch from start index. May extend beyond end of table",
    )

    column_indices: List[StrictInt] = Field(
        description="Indices to select, which can be a sequential, sparse, or random selection",
    )

    format_options: FormatOptions = Field(
        description="Formatting options for returning data values as strings",
    )


class GetDataValuesRequest(BaseModel):
    """
    Request a rectangular subset of data with values formatted as strings
    """

    params: GetDataValuesParams = Field(
        description="Parameters to the GetDataValues method",
    )

    method: Literal["get_data_values"] = Field(
        description="The JSON-RPC method name (get_data_values)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class ExportDataSelectionParams(BaseModel):
    """
    Export data selection as a string in different formats like CSV, TSV,
    HTML
    """

    selection: TableSelection = Field(
        description="The data selection",
    )

    format: ExportFormat = Field(
        description="Result string format",
    )


class ExportDataSelectionRequest(BaseModel):
    """
    Export data selection as a string in different formats like CSV, TSV,
    HTML
    """

    params: ExportDataSelectionParams = Field(
        description="Parameters to the ExportDataSelection method",
    )

    method: Literal["export_data_selection"] = Field(
        description="The JSON-RPC method name (export_data_selection)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class SetRowFiltersParams(BaseModel):
    """
    Row filters to apply (or pass an empty array to clear row filters)
    """

    filters: List[RowFilter] = Field(
        description="Zero or more filters to apply",
    )


class SetRowFiltersRequest(BaseModel):
    """
    Row filters to apply (or pass an empty array to clear row filters)
    """

    params: SetRowFiltersParams = Field(
        description="Parameters to the SetRowFilters method",
    )

    method: Literal["set_row_filters"] = Field(
        description="The JSON-RPC method name (set_row_filters)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class SetSortColumnsParams(BaseModel):
    """
    Set or clear the columns(s) to sort by, replacing any previous sort
    columns.
    """

    sort_keys: List[ColumnSortKey] = Field(
        description="Pass zero or more keys to sort by. Clears any existing keys",
    )


class SetSortColumnsRequest(BaseModel):
    """
    Set or clear the columns(s) to sort by, replacing any previous sort
    columns.
    """

    params: SetSortColumnsParams = Field(
        description="Parameters to the SetSortColumns method",
    )

    method: Literal["set_sort_columns"] = Field(
        description="The JSON-RPC method name (set_sort_columns)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class GetColumnProfilesParams(BaseModel):
    """
    Requests a batch of column profiles, computed over the current
    filtered rows and returned in request order
    """

    profiles: List[ColumnProfileRequest] = Field(
        description="Array of requested profiles",
    )

    format_options: FormatOptions = Field(
        description="Formatting options for returning data values as strings",
    )


class GetColumnProfilesRequest(BaseModel):
    """
    Requests a batch of column profiles, computed over the current
    filtered rows and returned in request order
    """

    params: GetColumnProfilesParams = Field(
        description="Parameters to the GetColumnProfiles method",
    )

    method: Literal["get_column_profiles"] = Field(
        description="The JSON-RPC method name (get_column_profiles)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class GetStateRequest(BaseModel):
    """
    Request the current backend state (table metadata, explorer state, and
    features)
    """

    method: Literal["get_state"] = Field(
        description="The JSON-RPC method name (get_state)",
    )

    jsonrpc: str = Field(
        default="2.0",
        description="The JSON-RPC version specifier",
    )


class DataExplorerBackendMessageContent(BaseModel):
    comm_id: str
    data: Union[
        GetSchemaRequest,
        GetDataValuesRequest,
        ExportDataSelectionRequest,
        SetRowFiltersRequest,
        SetSortColumnsRequest,
        GetColumnProfilesRequest,
        GetStateRequest,
    ] = Field(..., discriminator="method")


@enum.unique
class DataExplorerFrontendEvent(str, enum.Enum):
    """
    An enumeration of all the possible events that can be sent to the frontend data_explorer comm.
    """

    # Request to sync after a schema change
    SchemaUpdate = "schema_update"

    # Clear cache and request fresh data
    DataUpdate = "data_update"


ExportedData.model_rebuild()

FilterResult.model_rebuild()

BackendState.model_rebuild()

ColumnSchema.model_rebuild()

TableData.model_rebuild()

FormatOptions.model_rebuild()

TableSchema.model_rebuild()

TableShape.model_rebuild()

RowFilter.model_rebuild()

RowFilterTypeSupportStatus.model_rebuild()

FilterBetween.model_rebuild()

FilterComparison.model_rebuild()

FilterSetMembership.model_rebuild()

FilterTextSearch.model_rebuild()

ColumnProfileRequest.model_rebuild()

ColumnProfileSpec.model_rebuild()

ColumnProfileTypeSupportStatus.model_rebuild()

ColumnProfileResult.model_rebuild()

ColumnSummaryStats.model_rebuild()

SummaryStatsNumber.model_rebuild()

SummaryStatsBoolean.model_rebuild()

SummaryStatsOther.model_rebuild()

SummaryStatsString.model_rebuild()

SummaryStatsDate.model_rebuild()

SummaryStatsDatetime.model_rebuild()

ColumnHistogramParams.model_rebuild()

ColumnHistogram.model_rebuild()

ColumnFrequencyTableParams.model_rebuild()

ColumnFrequencyTable.model_rebuild()

ColumnSortKey.model_rebuild()

SupportedFeatures.model_rebuild()

SetRowFiltersFeatures.model_rebuild()

GetColumnProfilesFeatures.model_rebuild()

ExportDataSelectionFeatures.model_rebuild()

SetSortColumnsFeatures.model_rebuild()

TableSelection.model_rebuild()

DataSelectionSingleCell.model_rebuild()

DataSelectionCellRange.model_rebuild()

DataSelectionRange.model_rebuild()

DataSelectionIndices.model_rebuild()

GetSchemaParams.model_rebuild()

GetSchemaRequest.model_rebuild()

GetDataValuesParams.model_rebuild()

GetDataValuesRequest.model_rebuild()

ExportDataSelectionParams.model_rebuild()

ExportDataSelectionRequest.model_rebuild()

SetRowFiltersParams.model_rebuild()

SetRowFiltersRequest.model_rebuild()

SetSortColumnsParams.model_rebuild()

SetSortColumnsRequest.model_rebuild()

GetColumnProfilesParams.model_rebuild()

GetColumnProfilesRequest.model_rebuild()

GetStateRequest.model_rebuild()

DataExplorerBackendMessageContent.model_rebuild()
