# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the RecordBridge entry point."""

import json
import unittest
from unittest.mock import MagicMock

import pytest

from record_bridge.client import RecordBridge
from record_bridge.core.config import BridgeConfig
from record_bridge.operations.mutations import MutationService
from record_bridge.operations.query import RecordQueryService
from record_bridge.operations.records import RecordAccessService


class TestRecordBridge(unittest.TestCase):
    def setUp(self):
        self.store = MagicMock()
        self.bridge = RecordBridge(self.store, BridgeConfig())

    def test_namespaces(self):
        self.assertIsInstance(self.bridge.query, RecordQueryService)
        self.assertIsInstance(self.bridge.records, RecordAccessService)
        self.assertIsInstance(self.bridge.mutations, MutationService)

    def test_records_share_query_service(self):
        self.assertIs(self.bridge.records._query, self.bridge.query)

    def test_requires_store(self):
        with self.assertRaises(ValueError):
            RecordBridge(None)

    def test_dispatcher_uses_configured_whitelist(self):
        bridge = RecordBridge(self.store, BridgeConfig(allowed_calls="MutationService.deleteRecords"))
        self.assertEqual(bridge.dispatcher().whitelist, ("MutationService.deleteRecords",))


def test_config_from_env_when_omitted(monkeypatch, store):
    monkeypatch.setenv("RECORD_BRIDGE_ALLOWED_CALLS", "RecordAccessService.getRecord")
    bridge = RecordBridge(store)
    response = json.loads(
        bridge.dispatcher().run(
            {"targetName": "RecordQueryService", "methodName": "getRecordList", "methodArgs": {}}
        )
    )
    assert response["state"]["hasError"] is True


@pytest.mark.parametrize("mode", ["value", "display"])
def test_namespaces_over_store(store, mode):
    bridge = RecordBridge(store, BridgeConfig())
    rows = bridge.query.get_record_list({"collection": "task", "fieldList": ["priority"], "max": 1, "returnValue": mode})
    expected = 3 if mode == "value" else "3 - Moderate"
    assert rows == [{"priority": expected}]
