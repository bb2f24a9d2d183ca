"""FastAPI host serving the bridge dispatcher over an in-memory store.

Run with ``uvicorn app:app``. ``RECORD_BRIDGE_ALLOWED_CALLS`` sets the
whitelist and ``CONNECTOR_API_KEY`` enables the ``x-api-key`` check.
"""

from __future__ import annotations

import os

from record_bridge import BridgeConfig, RecordBridge
from record_bridge.data._memory import InMemoryRecordStore
from record_bridge.rpc.host import create_app

store = InMemoryRecordStore()
store.define_table("task", ["number", "short_description"], required=["short_description"])
store.add("task", {"number": "TASK0001", "short_description": "Hello from the host"})

bridge = RecordBridge(store, BridgeConfig.from_env())
app = create_app(bridge.dispatcher(), api_key=os.getenv("CONNECTOR_API_KEY", "").strip() or None)
