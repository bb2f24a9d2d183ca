# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the RPC client proxy."""

import json
import threading

import pytest

from record_bridge.core.errors import RemoteCallError
from record_bridge.rpc.client import BridgeClient


class ScriptedTransport:
    """Transport returning canned response texts and recording payloads."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.payloads = []
        self.threads = []

    def send(self, payload):
        self.payloads.append(json.loads(payload))
        self.threads.append(threading.current_thread().name)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response if isinstance(response, str) else json.dumps(response)


class TestInvoke:
    def test_serializes_the_four_inputs(self):
        transport = ScriptedTransport({"state": {"hasError": False}, "data": []})
        with BridgeClient(transport) as client:
            client.invoke("RecordQueryService", "getRecordList", {"collection": "task"}, {"mode": 1}).result()

        assert transport.payloads == [
            {
                "targetName": "RecordQueryService",
                "methodName": "getRecordList",
                "methodArgs": {"collection": "task"},
                "constructorArgs": {"mode": 1},
            }
        ]

    def test_resolves_with_data(self):
        transport = ScriptedTransport({"state": {"hasError": False}, "data": [{"number": "TASK0001"}]})
        with BridgeClient(transport) as client:
            assert client.invoke("A", "b").result(timeout=5) == [{"number": "TASK0001"}]

    def test_rejects_with_response_data(self):
        transport = ScriptedTransport({"state": {"hasError": True, "message": "A.b is not whitelisted."}, "data": {"why": "x"}})
        with BridgeClient(transport) as client:
            future = client.invoke("A", "b")
            with pytest.raises(RemoteCallError) as info:
                future.result(timeout=5)

        assert info.value.data == {"why": "x"}
        assert info.value.message == "A.b is not whitelisted."

    def test_missing_state_is_synthesized_failure(self):
        transport = ScriptedTransport({"data": {"partial": True}})
        with BridgeClient(transport) as client:
            with pytest.raises(RemoteCallError) as info:
                client.invoke("A", "b").result(timeout=5)

        assert info.value.message == "Uncaught error - no response state available"
        assert info.value.subcode == "remote_no_state"
        assert info.value.data == {"partial": True}

    def test_transport_failure_fails_the_future(self):
        transport = ScriptedTransport(ConnectionError("down"))
        with BridgeClient(transport) as client:
            future = client.invoke("A", "b")
            with pytest.raises(ConnectionError):
                future.result(timeout=5)
            assert future.done()

    def test_runs_off_the_calling_thread(self):
        transport = ScriptedTransport({"state": {"hasError": False}, "data": 1})
        with BridgeClient(transport) as client:
            client.invoke("A", "b").result(timeout=5)
        assert transport.threads[0].startswith("record-bridge")

    def test_unserializable_arguments_raise_immediately(self):
        transport = ScriptedTransport()
        with BridgeClient(transport) as client:
            with pytest.raises(TypeError):
                client.invoke("A", "b", {"when": object()})
        assert transport.payloads == []


class TestCall:
    def test_blocking_call(self):
        transport = ScriptedTransport({"state": {"hasError": False}, "data": "ok"})
        client = BridgeClient(transport)
        try:
            assert client.call("A", "b", timeout=5) == "ok"
        finally:
            client.close()

    def test_close_is_idempotent(self):
        client = BridgeClient(ScriptedTransport())
        client.close()
        client.close()
