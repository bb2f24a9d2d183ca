# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Server side of the RPC bridge."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from ..common.constants import DEFAULT_ALLOWED_CALLS
from ..core import _error_codes as ec
from ..core.errors import BridgeError, DispatchError
from ..core.telemetry import TelemetryManager
from .envelope import RpcRequest, RpcResponse
from .registry import ServiceRegistry

AllowedCalls = Union[str, Iterable[str], Callable[[], str], None]


def parse_whitelist(value: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """
    Split a comma-delimited whitelist into its entries.

    Entries are kept verbatim (membership is exact and case-sensitive); empty
    entries are dropped. ``None`` yields the built-in default.
    """
    if value is None:
        value = DEFAULT_ALLOWED_CALLS
    entries = value.split(",") if isinstance(value, str) else list(value)
    return tuple(entry for entry in entries if entry)


class Dispatcher:
    """
    Deserialize, authorize and run remote calls.

    :param registry: Services the dispatcher may construct.
    :type registry: ~record_bridge.rpc.registry.ServiceRegistry
    :param allowed_calls: Whitelist as a comma-delimited string, an iterable of
        ``"Target.method"`` entries, or a zero-argument callable returning the string.
        A callable is evaluated on every dispatch. Defaults to
        ``RecordQueryService.getRecordList,RecordAccessService.getRecord``.
    :param telemetry: Telemetry manager used for logging.
    :type telemetry: ~record_bridge.core.telemetry.TelemetryManager or None

    Example::

        dispatcher = Dispatcher(default_registry(store), "RecordQueryService.getRecordList")
        wire = dispatcher.run('{"targetName": "RecordQueryService", "methodName": "getRecordList", '
                              '"methodArgs": {"collection": "task", "fieldList": ["number"]}}')
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        allowed_calls: AllowedCalls = None,
        telemetry: Optional[TelemetryManager] = None,
    ) -> None:
        self._registry = registry
        self._allowed_calls = allowed_calls
        self._telemetry = telemetry or TelemetryManager()

    @property
    def whitelist(self) -> Tuple[str, ...]:
        source = self._allowed_calls
        if callable(source):
            source = source()
        return parse_whitelist(source)

    def is_allowed(self, target_name: str, method_name: str) -> bool:
        return f"{target_name}.{method_name}" in self.whitelist

    def run(self, raw_request: Union[str, bytes, Mapping[str, Any]]) -> str:
        """
        Handle one wire request and return the JSON response text.

        Refused and malformed calls, and :class:`~record_bridge.core.errors.BridgeError`
        raised by the target, become ``hasError`` responses. Any other exception
        raised by the target propagates to the host.
        """
        try:
            request = RpcRequest.from_wire(raw_request)
        except DispatchError as exc:
            self._telemetry.logger.warning("Rejected malformed bridge request: %s", exc.message)
            return RpcResponse.failure(exc.message).to_json()
        return self.handle(request).to_json()

    def handle(self, request: RpcRequest) -> RpcResponse:
        call_name = request.call_name
        if not self.is_allowed(request.target_name, request.method_name):
            self._telemetry.logger.warning("Refused call to %s: not whitelisted", call_name)
            return RpcResponse.failure(f"{call_name} is not whitelisted.")

        invoke = self._registry.resolve(request.target_name, request.method_name)
        if invoke is None:
            self._telemetry.logger.warning("Refused call to %s: not registered", call_name)
            return RpcResponse.failure(
                f"{call_name} is not registered.",
                DispatchError(f"{call_name} is not registered.", subcode=ec.DISPATCH_NOT_REGISTERED).to_dict(),
            )

        with self._telemetry.trace_operation(f"rpc.{call_name}"):
            try:
                data = invoke(request.constructor_args, request.method_args)
            except BridgeError as exc:
                return RpcResponse.failure(exc.message, exc.to_dict())
        return RpcResponse.success(data)


__all__ = ["Dispatcher", "parse_whitelist"]
