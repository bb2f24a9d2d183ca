# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record list queries."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple, Union, TYPE_CHECKING

from ..core.config import BridgeConfig
from ..core.telemetry import TelemetryManager
from ..data._projection import FieldResult, build_projector
from ..data._store import RecordStore
from ..models.options import QueryOptions

if TYPE_CHECKING:
    import pandas as pd


def _row_limit(max_rows: Any) -> Optional[int]:
    """Return the limit to apply, or None for ``-1`` and anything that is not a number."""
    if isinstance(max_rows, bool) or not isinstance(max_rows, (int, float)):
        return None
    if max_rows > -1:
        return int(max_rows)
    return None


class RecordQueryService:
    """
    Query a collection and project every matched record.

    Remote callers reach :meth:`get_record_list` as ``RecordQueryService.getRecordList``.

    :param store: Record store to query.
    :type store: ~record_bridge.data._store.RecordStore
    :param config: Bridge configuration; defaults are used when omitted.
    :type config: ~record_bridge.core.config.BridgeConfig or None
    :param telemetry: Shared telemetry manager.
    :type telemetry: ~record_bridge.core.telemetry.TelemetryManager or None

    Example::

        service = RecordQueryService(store)
        rows = service.get_record_list({
            "collection": "task",
            "queries": ["active=true"],
            "query": "priority<3",
            "fieldList": ["number", "caller_id.name"],
            "orderBy": "number",
            "max": 10,
            "returnValue": "both",
        })
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

    def get_record_list(self, options: Union[QueryOptions, Mapping[str, Any], None]) -> List[FieldResult]:
        """
        Retrieve projected records from a collection.

        :param options: Query options, see :class:`~record_bridge.models.options.QueryOptions`.
        :type options: QueryOptions or dict
        :return: One field result per matched record, in store order.
        :rtype: list[dict]
        :raises ~record_bridge.core.errors.ValidationError: If options, collection or
            fieldList are missing or malformed. Raised before the store is queried.
        """
        opts = QueryOptions.from_options(options)
        project = build_projector(self._store, opts.field_list, opts.return_value)

        with self._telemetry.trace_operation("query.getRecordList", opts.collection) as ctx:
            order_by, descending = self._ordering(opts)
            records = self._store.query(
                opts.collection,
                opts.filters,
                order_by=order_by,
                descending=descending,
                limit=_row_limit(opts.max),
            )
            rows = [project(record) for record in records]
            ctx.custom_data["rows"] = len(rows)
        return rows

    def get_record_frame(self, options: Union[QueryOptions, Mapping[str, Any], None]) -> "pd.DataFrame":
        """
        Same as :meth:`get_record_list`, returned as a pandas DataFrame.

        Columns follow ``fieldList`` order.
        """
        from ..utils._pandas import rows_to_dataframe

        opts = QueryOptions.from_options(options)
        return rows_to_dataframe(self.get_record_list(opts), opts.field_list)

    def _ordering(self, opts: QueryOptions) -> Tuple[Optional[str], bool]:
        if not isinstance(opts.order_by, str) or not self._store.is_valid_field(opts.collection, opts.order_by):
            return None, False
        if self._config.strict_order_direction:
            return opts.order_by, bool(opts.order_descending)
        # Legacy polarity: a falsy orderDescending sorts descending
        return opts.order_by, not opts.order_descending


__all__ = ["RecordQueryService"]
