# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from ..common.constants import (
    DEFAULT_ALLOWED_CALLS,
    ENV_ALLOWED_CALLS,
    ENV_HTTP_TIMEOUT,
)
from .telemetry import TelemetryConfig


@dataclass(frozen=True)
class BridgeConfig:
    """
    Configuration settings for record bridge services and the RPC dispatcher.

    :param allowed_calls: Comma-delimited whitelist of ``"Target.method"`` entries the
        dispatcher may invoke. Membership is exact and case-sensitive.
    :type allowed_calls: str
    :param strict_order_direction: When True, ``orderDescending`` is honoured as documented.
        When False (default), the legacy polarity is kept: descending order is applied
        when the flag is falsy.
    :type strict_order_direction: bool
    :param http_timeout: Request timeout in seconds for transports built with
        :meth:`~record_bridge.rpc.transport.HttpTransport.from_config` (default: 30).
    :type http_timeout: float or None
    :param telemetry: Logging and hook configuration.
    :type telemetry: ~record_bridge.core.telemetry.TelemetryConfig
    """
    allowed_calls: str = DEFAULT_ALLOWED_CALLS
    strict_order_direction: bool = False
    http_timeout: Optional[float] = None
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        """
        Create a configuration instance from environment variables.

        ``RECORD_BRIDGE_ALLOWED_CALLS`` overrides the whitelist and
        ``RECORD_BRIDGE_HTTP_TIMEOUT`` the transport timeout. Unset variables
        fall back to the defaults.

        :return: Configuration instance.
        :rtype: ~record_bridge.core.config.BridgeConfig
        """
        allowed = os.getenv(ENV_ALLOWED_CALLS)
        timeout = os.getenv(ENV_HTTP_TIMEOUT, "").strip()
        return cls(
            allowed_calls=allowed if allowed is not None else DEFAULT_ALLOWED_CALLS,
            http_timeout=float(timeout) if timeout else None,
        )
