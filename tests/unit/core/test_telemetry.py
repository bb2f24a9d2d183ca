# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for telemetry infrastructure."""

import logging

import pytest
from unittest.mock import MagicMock, patch

from record_bridge.core.telemetry import TelemetryConfig, TelemetryManager


class TestTelemetryConfig:
    def test_default_values(self):
        config = TelemetryConfig()
        assert config.enable_logging is False
        assert config.enable_tracing is False
        assert config.log_level == "WARNING"
        assert config.logger_name == "record_bridge"
        assert config.hooks == []


class TestTraceOperation:
    def test_hooks_receive_start_and_end(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with manager.trace_operation("query.getRecordList", "task") as ctx:
            ctx.custom_data["rows"] = 3

        hook.on_operation_start.assert_called_once_with(ctx)
        hook.on_operation_end.assert_called_once()
        context, duration_ms = hook.on_operation_end.call_args.args
        assert context.table_name == "task"
        assert duration_ms >= 0
        hook.on_operation_error.assert_not_called()

    def test_errors_are_reported_and_reraised(self, caplog):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with caplog.at_level(logging.WARNING, logger="record_bridge"):
            with pytest.raises(RuntimeError):
                with manager.trace_operation("records.getRecord", "task"):
                    raise RuntimeError("boom")

        hook.on_operation_error.assert_called_once()
        hook.on_operation_end.assert_not_called()
        assert "records.getRecord failed on task: boom" in caplog.text

    def test_failing_hook_does_not_break_operation(self):
        hook = MagicMock()
        hook.on_operation_start.side_effect = ValueError("bad hook")
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with manager.trace_operation("op"):
            pass

        hook.on_operation_end.assert_called_once()

    def test_enable_logging_sets_level(self):
        manager = TelemetryManager(
            TelemetryConfig(enable_logging=True, log_level="debug", logger_name="record_bridge.test")
        )
        assert manager.logger.level == logging.DEBUG


class TestOpenTelemetryIntegration:
    """Span creation with a stubbed OpenTelemetry API."""

    @pytest.fixture
    def mock_otel(self):
        with patch("record_bridge.core.telemetry._OTEL_AVAILABLE", True):
            with patch("record_bridge.core.telemetry.trace") as mock_trace:
                with patch("record_bridge.core.telemetry.Status") as mock_status:
                    with patch("record_bridge.core.telemetry.StatusCode") as mock_status_code:
                        mock_tracer = MagicMock()
                        mock_trace.get_tracer.return_value = mock_tracer
                        mock_trace.SpanKind.INTERNAL = "INTERNAL"
                        mock_span = MagicMock()
                        mock_tracer.start_span.return_value = mock_span
                        mock_status_code.ERROR = "ERROR"
                        yield {
                            "trace": mock_trace,
                            "tracer": mock_tracer,
                            "span": mock_span,
                            "status": mock_status,
                        }

    def test_no_tracer_unless_enabled(self, mock_otel):
        TelemetryManager(TelemetryConfig())
        mock_otel["trace"].get_tracer.assert_not_called()

    def test_span_wraps_operation(self, mock_otel):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True, service_name="task-portal"))

        with manager.trace_operation("query.getRecordList", "task") as ctx:
            ctx.custom_data["rows"] = 2

        mock_otel["trace"].get_tracer.assert_called_once_with("record_bridge")
        args, kwargs = mock_otel["tracer"].start_span.call_args
        assert args[0] == "RecordBridge query.getRecordList task"
        assert kwargs["kind"] == "INTERNAL"
        assert kwargs["attributes"]["db.operation"] == "query.getRecordList"
        assert kwargs["attributes"]["record_bridge.table"] == "task"
        assert kwargs["attributes"]["service.name"] == "task-portal"
        mock_otel["span"].set_attribute.assert_called_once_with("record_bridge.rows", 2)
        mock_otel["span"].end.assert_called_once()
        assert ctx._span is mock_otel["span"]

    def test_span_records_exception_on_error(self, mock_otel):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True))

        with pytest.raises(ValueError):
            with manager.trace_operation("records.getRecord"):
                raise ValueError("Test error")

        mock_otel["status"].assert_called_once_with("ERROR", "Test error")
        mock_otel["span"].record_exception.assert_called_once()
        mock_otel["span"].end.assert_called_once()

    def test_span_name_without_table(self, mock_otel):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True))
        with manager.trace_operation("rpc.RecordQueryService.getRecordList"):
            pass
        assert mock_otel["tracer"].start_span.call_args.args[0] == "RecordBridge rpc.RecordQueryService.getRecordList"


class TestTelemetryManagerProperties:
    def test_is_tracing_enabled_false_when_otel_unavailable(self):
        with patch("record_bridge.core.telemetry._OTEL_AVAILABLE", False):
            manager = TelemetryManager(TelemetryConfig(enable_tracing=True))
            assert manager.is_tracing_enabled is False
            with manager.trace_operation("op"):
                pass
