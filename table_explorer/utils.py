#
# Copyright (C) 2023-2024 Posit Software, PBC. All rights reserved.
# Licensed under the Elastic License 2.0. See LICENSE.txt for license information.
#

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

JsonData = Union[Dict[str, "JsonData"], List["JsonData"], str, int, float, bool, None]
JsonRecord = Dict[str, JsonData]


def guid():
    return str(uuid.uuid4())


def possibly(f: Callable[[], Any], otherwise: Optional[Any] = None) -> Any:
    """Executes a function and if an error occurs, returns `otherwise`."""
    try:
        return f()
    except Exception as err:
        logger.debug("Suppressed error in %s: %s", getattr(f, "__name__", f), err)
        return otherwise
