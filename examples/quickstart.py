"""Query, look up and insert records through the bridge, locally and over the RPC proxy."""

from __future__ import annotations

import logging

from record_bridge import BridgeClient, BridgeConfig, RecordBridge, RemoteCallError
from record_bridge.core.telemetry import TelemetryConfig
from record_bridge.data._memory import InMemoryRecordStore
from record_bridge.rpc.transport import LocalTransport


def build_store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    store.define_table("sys_user", ["name"], display_field="name")
    store.define_table(
        "task",
        ["number", "short_description", "priority"],
        references={"caller_id": "sys_user"},
        required=["short_description"],
    )
    abel = store.add("sys_user", {"name": "Abel Tuter"})
    for n, priority in enumerate((3, 1, 2), start=1):
        store.add(
            "task",
            {"number": f"TASK{n:04d}", "short_description": f"Sample {n}", "priority": priority, "caller_id": abel},
        )
    return store


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = BridgeConfig(
        allowed_calls="RecordQueryService.getRecordList,RecordAccessService.getRecord,MutationService.insertRecord",
        telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG"),
    )
    bridge = RecordBridge(build_store(), config)

    rows = bridge.query.get_record_list(
        {
            "collection": "task",
            "fieldList": ["number", "priority", "caller_id.name"],
            "orderBy": "priority",
            "orderDescending": True,
            "returnValue": "both",
        }
    )
    print({"rows": rows})

    record = bridge.records.get_record({"collection": "task", "fieldName": "number", "fieldValue": "TASK0002", "fieldList": ["short_description"]})
    print({"record": record})

    with BridgeClient(LocalTransport(bridge.dispatcher())) as client:
        rid = client.call("MutationService", "insertRecord", {"collection": "task", "values": {"short_description": "From the proxy"}})
        print({"inserted": rid})
        try:
            client.call("MutationService", "deleteRecords", {"collection": "task", "query": "priority>0"})
        except RemoteCallError as exc:
            print({"refused": exc.message})


if __name__ == "__main__":
    main()
