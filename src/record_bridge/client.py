# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Optional

from .core.config import BridgeConfig
from .core.telemetry import TelemetryManager
from .data._store import RecordStore
from .operations.mutations import MutationService
from .operations.query import RecordQueryService
from .operations.records import RecordAccessService
from .rpc.dispatcher import Dispatcher
from .rpc.registry import ServiceRegistry, default_registry


class RecordBridge:
    """
    Entry point bundling the record services over one store.

    Operations are organized under namespaces:

    - ``bridge.query``: record lists (:class:`~record_bridge.operations.query.RecordQueryService`)
    - ``bridge.records``: single records (:class:`~record_bridge.operations.records.RecordAccessService`)
    - ``bridge.mutations``: insert and delete (:class:`~record_bridge.operations.mutations.MutationService`)

    :param store: Record store adapter.
    :type store: ~record_bridge.data._store.RecordStore
    :param config: Optional configuration. If not provided, defaults are loaded from
        :meth:`~record_bridge.core.config.BridgeConfig.from_env`.
    :type config: ~record_bridge.core.config.BridgeConfig or None

    Example::

        bridge = RecordBridge(store)
        rows = bridge.query.get_record_list({"collection": "task", "fieldList": ["number"]})
        app = create_app(bridge.dispatcher())
    """

    def __init__(self, store: RecordStore, config: Optional[BridgeConfig] = None) -> None:
        if store is None:
            raise ValueError("store is required.")
        self._store = store
        self._config = config or BridgeConfig.from_env()
        self._telemetry = TelemetryManager(self._config.telemetry)

        self.query = RecordQueryService(store, self._config, self._telemetry)
        self.records = RecordAccessService(store, self._config, self._telemetry, query_service=self.query)
        self.mutations = MutationService(store, self._config, self._telemetry)

    @property
    def config(self) -> BridgeConfig:
        return self._config

    def registry(self) -> ServiceRegistry:
        """A registry exposing this bridge's store through the record services."""
        return default_registry(self._store, self._config, self._telemetry)

    def dispatcher(self, registry: Optional[ServiceRegistry] = None) -> Dispatcher:
        """
        Build a dispatcher whitelisting ``config.allowed_calls``.

        :param registry: Registry to dispatch into; defaults to :meth:`registry`.
        """
        return Dispatcher(registry or self.registry(), self._config.allowed_calls, self._telemetry)


__all__ = ["RecordBridge"]
