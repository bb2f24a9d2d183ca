# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for record bridge tests.

The ``store`` fixture seeds two collections:

- ``sys_user``: Abel Tuter (managed by Beth Anglin) and Beth Anglin
- ``task``: TASK0001..TASK0005 with priorities 3, 1, 2, 5, 4
"""

import pytest

from record_bridge.core.config import BridgeConfig
from record_bridge.data._memory import InMemoryRecordStore

ABEL = "u-abel"
BETH = "u-beth"

TASKS = [
    ("abc123", {"number": "TASK0001", "short_description": "Reset password", "priority": 3, "active": True, "caller_id": ABEL}),
    ("def456", {"number": "TASK0002", "short_description": "Printer jam", "priority": 1, "active": True, "caller_id": ABEL}),
    ("ghi789", {"number": "TASK0003", "short_description": "VPN outage", "priority": 2, "active": True, "caller_id": ABEL}),
    ("jkl012", {"number": "TASK0004", "short_description": "New laptop", "priority": 5, "active": False, "caller_id": BETH}),
    ("mno345", {"number": "TASK0005", "short_description": "Email quota", "priority": 4, "active": True, "caller_id": None}),
]

PRIORITY_LABELS = {1: "1 - Critical", 2: "2 - High", 3: "3 - Moderate", 4: "4 - Low", 5: "5 - Planning"}


def build_store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    store.define_table("sys_user", ["name", "email"], references={"manager": "sys_user"}, display_field="name")
    store.define_table(
        "task",
        ["number", "short_description", "priority", "active"],
        references={"caller_id": "sys_user"},
        display_field="number",
        required=["short_description"],
    )
    store.add("sys_user", {"name": "Beth Anglin", "email": "beth@example.com", "manager": None}, record_id=BETH)
    store.add("sys_user", {"name": "Abel Tuter", "email": "abel@example.com", "manager": BETH}, record_id=ABEL)
    for record_id, data in TASKS:
        store.add("task", dict(data), record_id=record_id, display={"priority": PRIORITY_LABELS[data["priority"]]})
    return store


@pytest.fixture
def store():
    """Freshly seeded in-memory store."""
    return build_store()


@pytest.fixture
def test_config():
    """Configuration with the default whitelist."""
    return BridgeConfig()
