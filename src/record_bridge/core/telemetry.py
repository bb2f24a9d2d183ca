# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Telemetry infrastructure for the record bridge.

Provides logging and optional OpenTelemetry tracing of service and dispatch
operations, with an extensible hook system for custom telemetry providers.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generator,
    List,
    Optional,
    Protocol,
    runtime_checkable,
)

from ..common.constants import (
    DEFAULT_LOGGER_NAME,
    OTEL_ATTR_BRIDGE_SERVICE,
    OTEL_ATTR_BRIDGE_TABLE,
    OTEL_ATTR_DB_OPERATION,
    OTEL_ATTR_DB_SYSTEM,
)

# Optional OpenTelemetry imports (install the "telemetry" extra)
try:
    from opentelemetry import trace
    from opentelemetry.trace import Status, StatusCode

    _OTEL_AVAILABLE = True
except ImportError:
    _OTEL_AVAILABLE = False
    trace = None  # type: ignore
    Status = None  # type: ignore
    StatusCode = None  # type: ignore


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for bridge telemetry.

    Logging and tracing are opt-in. When ``enable_logging`` is set, the manager
    sets the level of the ``logger_name`` logger; records are always emitted
    through :mod:`logging` so host applications can attach their own handlers.
    When ``enable_tracing`` is set and ``opentelemetry-api`` is installed, every
    operation runs inside a span.

    Example:
        Debug logging::

            config = BridgeConfig(
                telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG")
            )

        Tracing::

            config = BridgeConfig(
                telemetry=TelemetryConfig(enable_tracing=True, service_name="task-portal")
            )

        Custom hook::

            config = BridgeConfig(
                telemetry=TelemetryConfig(hooks=[MyCustomTelemetryHook()])
            )
    """

    enable_tracing: bool = False
    enable_logging: bool = False

    service_name: Optional[str] = None

    log_level: str = "WARNING"
    logger_name: str = DEFAULT_LOGGER_NAME

    hooks: List["TelemetryHook"] = field(default_factory=list)


# ============================================================================
# Context Objects
# ============================================================================


@dataclass
class OperationContext:
    """Context passed to telemetry hooks for each bridge operation."""

    operation: str  # e.g., "query.getRecordList", "rpc.RecordAccessService.getRecord"
    table_name: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    # Custom data bag for hooks to share state
    custom_data: Dict[str, Any] = field(default_factory=dict)

    # Active span, when tracing is enabled
    _span: Optional[Any] = field(default=None, repr=False)


# ============================================================================
# Hook Protocol
# ============================================================================


@runtime_checkable
class TelemetryHook(Protocol):
    """Protocol for custom telemetry hooks.

    All methods are optional - implement only what you need.
    """

    def on_operation_start(self, context: OperationContext) -> None:
        ...

    def on_operation_end(self, context: OperationContext, duration_ms: float) -> None:
        ...

    def on_operation_error(self, context: OperationContext, error: Exception) -> None:
        ...


# ============================================================================
# Telemetry Manager
# ============================================================================


class TelemetryManager:
    """Manages telemetry instrumentation for the record bridge.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._hooks = list(self._config.hooks)
        self._tracer: Optional[Any] = None  # Tracer type when available
        self.logger = logging.getLogger(self._config.logger_name)
        if self._config.enable_logging:
            self.logger.setLevel(getattr(logging, self._config.log_level.upper()))
        if self.is_tracing_enabled:
            self._tracer = trace.get_tracer(DEFAULT_LOGGER_NAME)

    @property
    def is_tracing_enabled(self) -> bool:
        """Check if tracing is enabled and available."""
        return self._config.enable_tracing and _OTEL_AVAILABLE

    @contextmanager
    def trace_operation(
        self,
        operation: str,
        table_name: Optional[str] = None,
    ) -> Generator[OperationContext, None, None]:
        """Create a traced operation context.

        Usage:
            with telemetry.trace_operation("query.getRecordList", "task") as ctx:
                rows = ...
                ctx.custom_data["rows"] = len(rows)
        """
        ctx = OperationContext(operation=operation, table_name=table_name)
        self._dispatch("on_operation_start", ctx)

        span = None
        if self._tracer:
            span = self._tracer.start_span(
                f"RecordBridge {operation}" + (f" {table_name}" if table_name else ""),
                kind=trace.SpanKind.INTERNAL,
                attributes=self._span_attributes(operation, table_name),
            )
            ctx._span = span

        try:
            yield ctx
        except Exception as exc:
            if span:
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                span.record_exception(exc)
            self.logger.warning(
                "%s failed on %s: %s", operation, table_name or "-", exc
            )
            self._dispatch("on_operation_error", ctx, exc)
            raise
        else:
            duration_ms = (time.perf_counter() - ctx.start_time) * 1000
            if span:
                for key, value in ctx.custom_data.items():
                    if isinstance(value, (str, bool, int, float)):
                        span.set_attribute(f"record_bridge.{key}", value)
            self.logger.debug(
                "%s on %s completed in %.2f ms %s",
                operation,
                table_name or "-",
                duration_ms,
                ctx.custom_data or "",
            )
            self._dispatch("on_operation_end", ctx, duration_ms)
        finally:
            if span:
                span.end()

    def add_hook(self, hook: "TelemetryHook") -> None:
        self._hooks.append(hook)

    def _span_attributes(self, operation: str, table_name: Optional[str]) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {
            OTEL_ATTR_DB_SYSTEM: "record_bridge",
            OTEL_ATTR_DB_OPERATION: operation,
        }
        if table_name:
            attributes[OTEL_ATTR_BRIDGE_TABLE] = table_name
        if self._config.service_name:
            attributes[OTEL_ATTR_BRIDGE_SERVICE] = self._config.service_name
        return attributes

    def _dispatch(self, method_name: str, *args: Any) -> None:
        for hook in self._hooks:
            method = getattr(hook, method_name, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception:
                # Hooks must never break the operation they observe
                self.logger.exception("Telemetry hook %r failed in %s", hook, method_name)


__all__ = ["TelemetryConfig", "OperationContext", "TelemetryHook", "TelemetryManager"]
