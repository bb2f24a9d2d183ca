# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record query helpers and a whitelisted RPC bridge for low-code platform applications.
"""

from .client import RecordBridge
from .core.config import BridgeConfig
from .core.errors import BridgeError, RemoteCallError, ValidationError
from .rpc.client import BridgeClient
from .rpc.dispatcher import Dispatcher

__version__ = "0.1.0"

__all__ = [
    "RecordBridge",
    "BridgeConfig",
    "BridgeClient",
    "Dispatcher",
    "BridgeError",
    "ValidationError",
    "RemoteCallError",
    "__version__",
]
