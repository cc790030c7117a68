#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from __future__ import annotations

import enum
import logging
from typing import Callable, Generic, Optional, Type, TypeVar

import comm
from pydantic import BaseModel, ValidationError

from .data_explorer_comm import DataExplorerBackendMessageContent
from .utils import JsonData, JsonRecord

logger = logging.getLogger(__name__)


## Create an enum of JSON-RPC error codes
@enum.unique
class JsonRpcErrorCode(enum.IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


T_content = TypeVar("T_content", bound=DataExplorerBackendMessageContent)


class CommMessage(BaseModel, Generic[T_content]):
    content: T_content


class ExplorerComm:
    """A wrapper around a base comm that provides a JSON-RPC interface"""

    def __init__(self, comm: comm.base_comm.BaseComm) -> None:
        self.comm = comm

    @property
    def comm_id(self) -> str:
        return self.comm.comm_id

    def on_msg(
        self,
        callback: Callable[[CommMessage[T_content], JsonRecord], None],
        content_cls: Type[T_content],
    ) -> None:
        """
        Register a callback for an RPC request from the frontend.

        Will be called with both the parsed `msg: CommMessage` and the original `raw_msg`.

        If the `raw_msg` could not be parsed, a JSON-RPC error will be sent to the frontend.
        """

        def handle_msg(
            raw_msg: JsonRecord,
        ) -> None:
            try:
                comm_msg = CommMessage[content_cls].model_validate(raw_msg)
            except ValidationError as exception:
                # Check if the error is due to an unknown method
                for error in exception.errors():
                    if (
                        error["loc"] == ("content", "data")
                        and error["type"] == "union_tag_invalid"
                    ):
                        method = error.get("ctx", {}).get("tag")
                        self.send_error(
                            JsonRpcErrorCode.METHOD_NOT_FOUND, f"Unknown method '{method}'"
                        )
                        return

                self.send_error(JsonRpcErrorCode.INVALID_REQUEST, f"Invalid request: {exception}")
                return

            callback(comm_msg, raw_msg)

        self.comm.on_msg(handle_msg)

    def send_result(self, data: JsonData = None, metadata: Optional[JsonRecord] = None) -> None:
        """Send a JSON-RPC result to the frontend-side version of this comm"""
        result = dict(
            jsonrpc="2.0",
            result=data,
        )
        self.comm.send(
            data=result,
            metadata=metadata,
            buffers=None,
        )

    def send_event(self, name: str, payload: JsonRecord) -> None:
        """Send a JSON-RPC notification (event) to the frontend-side version of this comm"""
        event = dict(
            jsonrpc="2.0",
            method=name,
            params=payload,
        )
        self.comm.send(data=event)

    def send_error(self, code: JsonRpcErrorCode, message: Optional[str] = None) -> None:
        """Send a JSON-RPC error to the frontend-side version of this comm"""
        logger.debug("Sending JSON-RPC error %s on comm %s: %s", code.name, self.comm_id, message)
        error = dict(
            jsonrpc="2.0",
            error=dict(
                code=code.value,
                message=message,
            ),
        )
        self.comm.send(
            data=error,
            metadata=None,
            buffers=None,
        )

    def close(self) -> None:
        """Close the underlying comm."""
        self.comm.close()
