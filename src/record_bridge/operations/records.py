# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Single record lookup."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..core.config import BridgeConfig
from ..core.telemetry import TelemetryManager
from ..data._projection import FieldResult, build_projector
from ..data._store import RecordStore
from ..models.options import LookupOptions, QueryOptions
from .query import RecordQueryService


class RecordAccessService:
    """
    Resolve one record by identifier, by field match or by query.

    Remote callers reach :meth:`get_record` as ``RecordAccessService.getRecord``.

    :param store: Record store to read from.
    :type store: ~record_bridge.data._store.RecordStore
    :param config: Bridge configuration; defaults are used when omitted.
    :type config: ~record_bridge.core.config.BridgeConfig or None
    :param telemetry: Shared telemetry manager.
    :type telemetry: ~record_bridge.core.telemetry.TelemetryManager or None
    """

    def __init__(
        self,
        store: RecordStore,
        config: Optional[BridgeConfig] = None,
        telemetry: Optional[TelemetryManager] = None,
        query_service: Optional[RecordQueryService] = None,
    ) -> None:
        self._store = store
        self._config = config or BridgeConfig()
        self._telemetry = telemetry or TelemetryManager(self._config.telemetry)
        self._query = query_service or RecordQueryService(store, self._config, self._telemetry)

    def get_record(self, options: Union[LookupOptions, Mapping[str, Any], None]) -> Optional[FieldResult]:
        """
        Retrieve a single projected record.

        The first strategy that applies and finds a record wins:

        1. ``identifier``
        2. ``fieldName`` together with ``fieldValue``
        3. ``query``, taking the first match

        :param options: Lookup options, see :class:`~record_bridge.models.options.LookupOptions`.
        :type options: LookupOptions or dict
        :return: The projected record, or None when nothing matched or no strategy applied.
        :rtype: dict or None
        :raises ~record_bridge.core.errors.ValidationError: If collection or fieldList
            are missing or malformed.
        """
        opts = LookupOptions.from_options(options)
        project = build_projector(self._store, opts.field_list, opts.return_value)

        with self._telemetry.trace_operation("records.getRecord", opts.collection) as ctx:
            if isinstance(opts.identifier, str):
                record = self._store.get(opts.collection, opts.identifier)
                if record is not None:
                    ctx.custom_data["matched_by"] = "identifier"
                    return project(record)

            if isinstance(opts.field_name, str) and isinstance(opts.field_value, str):
                record = self._store.get_by_field(opts.collection, opts.field_name, opts.field_value)
                if record is not None:
                    ctx.custom_data["matched_by"] = "field"
                    return project(record)

            if isinstance(opts.query, str):
                ctx.custom_data["matched_by"] = "query"
                rows = self._query.get_record_list(
                    QueryOptions(
                        collection=opts.collection,
                        field_list=opts.field_list,
                        query=opts.query,
                        max=1,
                        return_value=opts.return_value,
                    )
                )
                return rows[0] if rows else None

        return None


__all__ = ["RecordAccessService"]
