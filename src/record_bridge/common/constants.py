# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants shared by record services and the RPC bridge.
"""

# Separator used in dotted field paths, e.g. "caller_id.manager.name"
FIELD_PATH_SEPARATOR = "."

# returnValue modes
RETURN_VALUE = "value"
RETURN_DISPLAY = "display"
RETURN_BOTH = "both"

# Row limit meaning "no limit"
UNBOUNDED = -1

# Whitelist configuration
DEFAULT_ALLOWED_CALLS = "RecordQueryService.getRecordList,RecordAccessService.getRecord"
"""Calls allowed when no whitelist is configured."""

ENV_ALLOWED_CALLS = "RECORD_BRIDGE_ALLOWED_CALLS"
ENV_HTTP_TIMEOUT = "RECORD_BRIDGE_HTTP_TIMEOUT"

DEFAULT_LOGGER_NAME = "record_bridge"

# Message set on responses that arrive without a state marker
NO_RESPONSE_STATE_MESSAGE = "Uncaught error - no response state available"

# OpenTelemetry span attributes
OTEL_ATTR_DB_SYSTEM = "db.system"
OTEL_ATTR_DB_OPERATION = "db.operation"
OTEL_ATTR_BRIDGE_TABLE = "record_bridge.table"
OTEL_ATTR_BRIDGE_SERVICE = "service.name"
