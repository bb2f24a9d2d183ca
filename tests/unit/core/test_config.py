# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from record_bridge.core.config import BridgeConfig


class TestBridgeConfig:
    def test_defaults(self):
        config = BridgeConfig()
        assert config.allowed_calls == "RecordQueryService.getRecordList,RecordAccessService.getRecord"
        assert config.strict_order_direction is False
        assert config.http_timeout is None

    def test_immutability(self):
        config = BridgeConfig()
        with pytest.raises(AttributeError):
            config.allowed_calls = ""

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("RECORD_BRIDGE_ALLOWED_CALLS", raising=False)
        monkeypatch.delenv("RECORD_BRIDGE_HTTP_TIMEOUT", raising=False)
        assert BridgeConfig.from_env() == BridgeConfig()

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("RECORD_BRIDGE_ALLOWED_CALLS", "MutationService.insertRecord")
        monkeypatch.setenv("RECORD_BRIDGE_HTTP_TIMEOUT", "2.5")
        config = BridgeConfig.from_env()
        assert config.allowed_calls == "MutationService.insertRecord"
        assert config.http_timeout == 2.5
