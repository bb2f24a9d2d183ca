# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for store rows.

Provides a representation of a single record with dict-like access to its
raw field values and an optional map of display values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

# Type aliases for semantic clarity
RecordId = str
CollectionName = str  # e.g., "task", "sys_user"


@dataclass
class Record:
    """
    A single record held by a record store.

    :param id: Record identifier (primary key).
    :type id: str
    :param table: Collection the record belongs to.
    :type table: str
    :param data: Raw field values keyed by field name.
    :type data: dict[str, Any]
    :param display: Display values keyed by field name. Fields without an entry
        display as the string form of their value.
    :type display: dict[str, Any]

    Example::

        record = Record(id="abc123", table="task", data={"number": "TASK0001"})
        print(record["number"])
        if "priority" in record:
            print(record["priority"])
    """

    id: RecordId
    table: CollectionName
    data: Dict[str, Any] = field(default_factory=dict)
    display: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value
        # A new raw value invalidates any stale display value
        self.display.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a field value with optional default.

        :param key: Field name to access.
        :type key: str
        :param default: Default value if field doesn't exist.
        :return: Field value or default.
        """
        return self.data.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary of raw values.

        :return: Dictionary of field data.
        :rtype: dict[str, Any]
        """
        return dict(self.data)


__all__ = ["Record", "RecordId", "CollectionName"]
