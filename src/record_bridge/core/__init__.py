# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the record bridge.

This module contains the foundational components including configuration,
authentication, the HTTP client, telemetry and error handling.
"""

from .config import BridgeConfig
from .errors import BridgeError, DispatchError, HttpError, RemoteCallError, ValidationError
from .telemetry import TelemetryConfig, TelemetryHook

__all__ = [
    "BridgeConfig",
    "TelemetryConfig",
    "TelemetryHook",
    "BridgeError",
    "ValidationError",
    "DispatchError",
    "RemoteCallError",
    "HttpError",
]
