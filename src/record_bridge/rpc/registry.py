# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Name-based service registry used by the dispatcher.

Remote callers address services by string. Instead of looking names up
reflectively, every callable target is registered up front with a factory and
a table mapping wire method names to Python attribute names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.config import BridgeConfig
    from ..core.telemetry import TelemetryManager
    from ..data._store import RecordStore

Factory = Callable[[Any], Any]
Invoker = Callable[[Any, Any], Any]


@dataclass
class ServiceEntry:
    """
    A registered target.

    :param name: Target name used on the wire, e.g. ``"RecordQueryService"``.
    :param factory: Builds a service instance from the request's ``constructorArgs``.
    :param methods: Wire method name -> attribute name on the instance.
    """

    name: str
    factory: Factory
    methods: Dict[str, str] = field(default_factory=dict)

    def invoker(self, method_name: str) -> Optional[Invoker]:
        attribute = self.methods.get(method_name)
        if attribute is None:
            return None

        def invoke(constructor_args: Any, method_args: Any) -> Any:
            instance = self.factory(constructor_args)
            return getattr(instance, attribute)(method_args)

        return invoke


class ServiceRegistry:
    """Registry of services the dispatcher can construct and call."""

    def __init__(self) -> None:
        self._entries: Dict[str, ServiceEntry] = {}

    def register(self, name: str, factory: Factory, methods: Dict[str, str]) -> ServiceEntry:
        """
        Register (or replace) a target.

        Example::

            registry.register(
                "GreetingService",
                lambda constructor_args: GreetingService(**(constructor_args or {})),
                {"greet": "greet"},
            )
        """
        entry = ServiceEntry(name=name, factory=factory, methods=dict(methods))
        self._entries[name] = entry
        return entry

    def resolve(self, target_name: str, method_name: str) -> Optional[Invoker]:
        entry = self._entries.get(target_name)
        if entry is None:
            return None
        return entry.invoker(method_name)

    def __contains__(self, call_name: object) -> bool:
        if not isinstance(call_name, str) or "." not in call_name:
            return False
        target, _, method = call_name.partition(".")
        return self.resolve(target, method) is not None

    def __iter__(self) -> Iterator[str]:
        for entry in self._entries.values():
            for method in entry.methods:
                yield f"{entry.name}.{method}"


def default_registry(
    store: "RecordStore",
    config: Optional["BridgeConfig"] = None,
    telemetry: Optional["TelemetryManager"] = None,
) -> ServiceRegistry:
    """
    Registry exposing the record services over one store.

    Each call builds fresh service instances; ``constructorArgs`` are ignored.
    """
    from ..operations.mutations import MutationService
    from ..operations.query import RecordQueryService
    from ..operations.records import RecordAccessService

    registry = ServiceRegistry()
    registry.register(
        "RecordQueryService",
        lambda _args: RecordQueryService(store, config, telemetry),
        {"getRecordList": "get_record_list"},
    )
    registry.register(
        "RecordAccessService",
        lambda _args: RecordAccessService(store, config, telemetry),
        {"getRecord": "get_record"},
    )
    registry.register(
        "MutationService",
        lambda _args: MutationService(store, config, telemetry),
        {"insertRecord": "insert_record", "deleteRecords": "delete_records"},
    )
    return registry


__all__ = ["ServiceEntry", "ServiceRegistry", "default_registry"]
