#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

from typing import Iterable

import comm
import pytest

from table_explorer.data_explorer import DataExplorerService


class DummyComm(comm.base_comm.BaseComm):
    """A comm that records published messages for testing purposes."""

    def __init__(self, *args, **kwargs):
        self.messages = []
        super().__init__(*args, **kwargs)

    def publish_msg(self, msg_type, **msg):  # type: ignore ReportIncompatibleMethodOverride
        msg["msg_type"] = msg_type
        self.messages.append(msg)

    def handle_msg(self, msg, *, raise_errors=True):
        message_count = len(self.messages)

        # Dispatch directly rather than through BaseComm.handle_msg,
        # which requires a running IPython kernel
        if self._msg_callback:
            self._msg_callback(msg)

        # Raise JSON RPC error responses as test failures.
        if raise_errors:
            new_messages = self.messages[message_count:]
            for message in new_messages:
                error = message.get("data", {}).get("error")
                if error is not None:
                    raise AssertionError(error["message"])


# Enable autouse so that all comms are created as DummyComms.
@pytest.fixture(autouse=True)
def patch_create_comm(monkeypatch: pytest.MonkeyPatch) -> None:
    """Patch the `comm.create_comm` function to use our dummy comm."""
    monkeypatch.setattr(comm, "create_comm", DummyComm)


@pytest.fixture
def de_service() -> Iterable[DataExplorerService]:
    """The data explorer service, shut down after each test."""
    service = DataExplorerService()

    yield service

    service.shutdown()
