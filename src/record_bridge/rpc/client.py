# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Client side of the RPC bridge."""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

from ..common.constants import DEFAULT_LOGGER_NAME, NO_RESPONSE_STATE_MESSAGE
from ..core import _error_codes as ec
from ..core.errors import RemoteCallError
from .envelope import RpcRequest
from .transport import Transport

_logger = logging.getLogger(DEFAULT_LOGGER_NAME)


def _settle(text: str) -> Any:
    """Return the data of a successful response, raise :class:`RemoteCallError` otherwise."""
    response = json.loads(text)
    state = response.get("state") if isinstance(response, dict) else None
    data = response.get("data") if isinstance(response, dict) else None
    if not isinstance(state, dict):
        raise RemoteCallError(NO_RESPONSE_STATE_MESSAGE, data=data, subcode=ec.REMOTE_NO_STATE)
    if state.get("hasError"):
        raise RemoteCallError(state.get("message") or "Remote call failed", data=data, subcode=ec.REMOTE_REJECTED)
    return data


class BridgeClient:
    """
    Invoke whitelisted server-side methods by name.

    Every :meth:`invoke` returns a :class:`concurrent.futures.Future` at once; the
    transport round trip runs on a single worker thread and settles the future
    exactly once. A failed call raises :class:`~record_bridge.core.errors.RemoteCallError`
    from ``future.result()``; its ``data`` attribute holds the response payload.

    :param transport: Channel to the dispatcher.
    :type transport: ~record_bridge.rpc.transport.Transport

    Example::

        with BridgeClient(HttpTransport("https://app.example.com/bridge")) as bridge:
            future = bridge.invoke(
                "RecordQueryService",
                "getRecordList",
                {"collection": "task", "fieldList": ["number"], "max": 1},
            )
            rows = future.result()
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> "BridgeClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def invoke(
        self,
        target_name: str,
        method_name: str,
        method_args: Any = None,
        constructor_args: Any = None,
    ) -> "Future[Any]":
        """
        Send a call and return a future for its result.

        :param target_name: Registered service name.
        :param method_name: Wire method name on that service.
        :param method_args: JSON-serializable argument passed to the method.
        :param constructor_args: JSON-serializable argument passed to the service factory.
        :raises TypeError: If the arguments are not JSON-serializable.
        """
        payload = RpcRequest(target_name, method_name, method_args, constructor_args).to_json()
        _logger.debug("Invoking %s.%s", target_name, method_name)
        return self._get_executor().submit(self._round_trip, payload)

    def call(
        self,
        target_name: str,
        method_name: str,
        method_args: Any = None,
        constructor_args: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """Blocking form of :meth:`invoke`."""
        return self.invoke(target_name, method_name, method_args, constructor_args).result(timeout)

    def close(self) -> None:
        """Wait for pending calls and stop the worker thread. Safe to call multiple times."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="record-bridge")
        return self._executor

    def _round_trip(self, payload: str) -> Any:
        return _settle(self._transport.send(payload))


__all__ = ["BridgeClient"]
