# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record insert and bulk delete."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union, TYPE_CHECKING

from ..core.config import BridgeConfig
from ..core.telemetry import TelemetryManager
from ..data._store import RecordStore
from ..models.options import DeleteRequest, MutationRequest

if TYPE_CHECKING:
    import pandas as pd


class MutationService:
    """
    Write operations against a record store.

    Not whitelisted by default; add ``MutationService.insertRecord`` or
    ``MutationService.deleteRecords`` to ``allowed_calls`` to expose them remotely.
    """

    def __init__(
        self,
        store: RecordStore,
        config: Optional[BridgeConfig] = None,
        telemetry: Optional[TelemetryManager] = None,
    ) -> None:
        self._store = store
        self._config = config or BridgeConfig()
        self._telemetry = telemetry or TelemetryManager(self._config.telemetry)

    def insert_record(self, options: Union[MutationRequest, Mapping[str, Any], None]) -> Optional[str]:
        """
        Insert a record.

        :param options: ``{"collection": str, "values": {field: value}}``.
        :type options: MutationRequest or dict
        :return: Identifier of the new record, or None when the store declines the insert.
        :rtype: str or None
        :raises ~record_bridge.core.errors.ValidationError: If collection is not a
            string or values is not a mapping.

        Example::

            rid = service.insert_record({"collection": "task", "values": {"short_description": "Test"}})
        """
        request = MutationRequest.from_options(options)
        with self._telemetry.trace_operation("mutations.insertRecord", request.collection) as ctx:
            record = self._store.new_record(request.collection)
            for name, value in request.values.items():
                self._store.set_value(record, name, value)
            record_id = self._store.insert(record)
            ctx.custom_data["inserted"] = record_id is not None
        if record_id is None:
            self._telemetry.logger.info("Insert into %s was declined by the store", request.collection)
        return record_id

    def insert_frame(self, collection: str, df: "pd.DataFrame", na_as_null: bool = False) -> List[Optional[str]]:
        """
        Insert one record per DataFrame row.

        :param collection: Target collection.
        :param df: Rows to insert; columns are field names.
        :param na_as_null: Send missing cells as None instead of omitting them.
        :return: Identifier (or None when declined) per row, in row order.
        """
        from ..utils._pandas import dataframe_to_values

        return [
            self.insert_record({"collection": collection, "values": values})
            for values in dataframe_to_values(df, na_as_null=na_as_null)
        ]

    def delete_records(self, options: Union[DeleteRequest, Mapping[str, Any], None]) -> int:
        """
        Delete every record of a collection matching a query.

        This is irreversible.

        :param options: ``{"collection": str, "query": str}``; the query must not be empty.
        :type options: DeleteRequest or dict
        :return: Number of deleted records.
        :rtype: int
        """
        request = DeleteRequest.from_options(options)
        with self._telemetry.trace_operation("mutations.deleteRecords", request.collection) as ctx:
            deleted = self._store.delete_matching(request.collection, request.query)
            ctx.custom_data["deleted"] = deleted
        return deleted


__all__ = ["MutationService"]
