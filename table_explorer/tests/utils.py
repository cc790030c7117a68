#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from typing import Any, Dict, Optional

from pydantic import BaseModel

from table_explorer.utils import JsonData, JsonRecord


def _to_json(value: Any) -> JsonData:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    elif isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    return value


def comm_message(data: Optional[JsonRecord] = None, comm_id: str = "dummy_comm_id") -> JsonRecord:
    return {"content": {"comm_id": comm_id, "data": data or {}}}


def json_rpc_request(
    method: str,
    params: Optional[Dict[str, Any]] = None,
    comm_id: str = "dummy_comm_id",
) -> JsonRecord:
    data: JsonRecord = {"jsonrpc": "2.0", "method": method}
    if params is not None:
        data["params"] = _to_json(params)
    return comm_message(data, comm_id)


def json_rpc_notification(method: str, params: JsonRecord) -> JsonRecord:
    return {
        "data": {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
        },
        "metadata": None,
        "buffers": None,
        "msg_type": "comm_msg",
    }


def json_rpc_response(result: JsonData) -> JsonRecord:
    return {
        "data": {
            "jsonrpc": "2.0",
            "result": result,
        },
        "metadata": None,
        "buffers": None,
        "msg_type": "comm_msg",
    }


def json_rpc_error(code: int, message: str) -> JsonRecord:
    return {
        "data": {
            "jsonrpc": "2.0",
            "error": {
                "code": code,
                "message": message,
            },
        },
        "metadata": None,
        "buffers": None,
        "msg_type": "comm_msg",
    }
