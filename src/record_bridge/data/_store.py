# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record store protocol.

The record bridge never owns storage. Every read and write goes through an
object implementing :class:`RecordStore`, typically an adapter over the host
platform's record cursor API.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence, runtime_checkable

from ..models.record import Record


@runtime_checkable
class RecordStore(Protocol):
    """Operations the record services consume from the underlying store."""

    def query(
        self,
        table: str,
        filters: Sequence[str],
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> Iterable[Record]:
        """Yield records of ``table`` matching every clause in ``filters``."""
        ...

    def get(self, table: str, record_id: str) -> Optional[Record]:
        ...

    def get_by_field(self, table: str, field: str, value: Any) -> Optional[Record]:
        ...

    def get_value(self, record: Record, field: str) -> Any:
        ...

    def get_display_value(self, record: Record, field: str) -> Any:
        ...

    def get_reference(self, record: Record, field: str) -> Optional[Record]:
        """Return the record referenced by ``field``, or None when unset or not a reference."""
        ...

    def is_valid_field(self, table: str, field: str) -> bool:
        ...

    def new_record(self, table: str) -> Record:
        ...

    def set_value(self, record: Record, field: str, value: Any) -> None:
        ...

    def insert(self, record: Record) -> Optional[str]:
        """Persist ``record`` and return its identifier, or None when the store declines."""
        ...

    def delete_matching(self, table: str, query: str) -> int:
        """Delete all records of ``table`` matching ``query`` and return how many were removed."""
        ...


__all__ = ["RecordStore"]
