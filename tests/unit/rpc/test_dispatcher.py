# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the RPC dispatcher."""

import json

import pytest

from record_bridge.core.errors import ValidationError
from record_bridge.rpc.dispatcher import Dispatcher, parse_whitelist
from record_bridge.rpc.registry import ServiceRegistry, default_registry


class AllowedService:
    def get_data(self, args):
        return {"echo": args}

    def explode(self, args):
        raise RuntimeError("kaboom")

    def reject(self, args):
        raise ValidationError("bad input", operation="reject")


@pytest.fixture
def registry():
    registry = ServiceRegistry()
    registry.register(
        "AllowedService",
        lambda args: AllowedService(),
        {"getData": "get_data", "explode": "explode", "reject": "reject"},
    )
    return registry


def _request(target, method, method_args=None, constructor_args=None):
    return json.dumps(
        {"targetName": target, "methodName": method, "methodArgs": method_args, "constructorArgs": constructor_args}
    )


class TestWhitelist:
    def test_default_whitelist(self):
        assert parse_whitelist(None) == ("RecordQueryService.getRecordList", "RecordAccessService.getRecord")

    def test_entries_are_exact(self):
        assert parse_whitelist("A.b, C.d,,") == ("A.b", " C.d")

    def test_iterable(self):
        assert parse_whitelist(["A.b"]) == ("A.b",)

    def test_not_whitelisted(self, registry):
        dispatcher = Dispatcher(registry, "OtherService.method")
        response = json.loads(dispatcher.run(_request("AllowedService", "getData", {"x": 1})))
        assert response["state"]["hasError"] is True
        assert "AllowedService.getData" in response["state"]["message"]
        assert response["data"] == {}

    def test_membership_is_case_sensitive(self, registry):
        dispatcher = Dispatcher(registry, "allowedservice.getdata")
        response = json.loads(dispatcher.run(_request("AllowedService", "getData")))
        assert response["state"]["hasError"] is True

    def test_no_wildcards(self, registry):
        dispatcher = Dispatcher(registry, "AllowedService.*")
        assert not dispatcher.is_allowed("AllowedService", "getData")

    def test_callable_whitelist_is_read_per_dispatch(self, registry):
        current = {"value": ""}
        dispatcher = Dispatcher(registry, lambda: current["value"])
        assert json.loads(dispatcher.run(_request("AllowedService", "getData")))["state"]["hasError"] is True
        current["value"] = "AllowedService.getData"
        assert json.loads(dispatcher.run(_request("AllowedService", "getData")))["state"]["hasError"] is False


class TestDispatch:
    def test_whitelisted_call_returns_data(self, registry):
        dispatcher = Dispatcher(registry, "AllowedService.getData")
        response = json.loads(dispatcher.run(_request("AllowedService", "getData", {"x": 1}, {})))
        assert response == {"state": {"hasError": False}, "data": {"echo": {"x": 1}}}

    def test_whitelisted_but_not_registered(self, registry):
        dispatcher = Dispatcher(registry, "Ghost.method")
        response = json.loads(dispatcher.run(_request("Ghost", "method")))
        assert response["state"] == {"hasError": True, "message": "Ghost.method is not registered."}
        assert response["data"]["subcode"] == "dispatch_not_registered"

    def test_bridge_errors_become_failure_responses(self, registry):
        dispatcher = Dispatcher(registry, "AllowedService.reject")
        response = json.loads(dispatcher.run(_request("AllowedService", "reject")))
        assert response["state"] == {"hasError": True, "message": "bad input"}
        assert response["data"]["code"] == "validation_error"

    def test_other_exceptions_propagate(self, registry):
        dispatcher = Dispatcher(registry, "AllowedService.explode")
        with pytest.raises(RuntimeError, match="kaboom"):
            dispatcher.run(_request("AllowedService", "explode"))

    def test_malformed_request(self, registry):
        dispatcher = Dispatcher(registry, "AllowedService.getData")
        response = json.loads(dispatcher.run("{not json"))
        assert response["state"]["hasError"] is True
        assert response["data"] == {}

    def test_accepts_mapping(self, registry):
        dispatcher = Dispatcher(registry, "AllowedService.getData")
        response = json.loads(dispatcher.run({"targetName": "AllowedService", "methodName": "getData", "methodArgs": 7}))
        assert response["data"] == {"echo": 7}


class TestRecordServicesOverDispatcher:
    def test_default_whitelist_excludes_mutations(self, store):
        dispatcher = Dispatcher(default_registry(store))
        response = json.loads(
            dispatcher.run(_request("MutationService", "insertRecord", {"collection": "task", "values": {"short_description": "x"}}))
        )
        assert response["state"]["message"] == "MutationService.insertRecord is not whitelisted."
        assert store.count("task") == 5

    def test_validation_error_from_service(self, store):
        dispatcher = Dispatcher(default_registry(store))
        response = json.loads(dispatcher.run(_request("RecordQueryService", "getRecordList", {"collection": "task"})))
        assert response["state"] == {"hasError": True, "message": "fieldList should be a non-empty array"}
        assert response["data"]["details"]["operation"] == "getRecordList"

    def test_get_record(self, store):
        dispatcher = Dispatcher(default_registry(store))
        response = json.loads(
            dispatcher.run(
                _request("RecordAccessService", "getRecord", {"collection": "task", "identifier": "abc123", "fieldList": ["number"]})
            )
        )
        assert response == {"state": {"hasError": False}, "data": {"number": "TASK0001"}}

    def test_get_record_not_found_is_null(self, store):
        dispatcher = Dispatcher(default_registry(store))
        response = json.loads(
            dispatcher.run(
                _request("RecordAccessService", "getRecord", {"collection": "task", "identifier": "zzz", "fieldList": ["number"]})
            )
        )
        assert response == {"state": {"hasError": False}, "data": None}
