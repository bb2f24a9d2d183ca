# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Wire envelopes exchanged by the bridge client and dispatcher.

Both directions are plain JSON objects::

    request  = {"targetName": ..., "methodName": ..., "methodArgs": ..., "constructorArgs": ...}
    response = {"state": {"hasError": bool, "message": str}, "data": ...}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from ..core import _error_codes as ec
from ..core.errors import DispatchError


@dataclass
class RpcRequest:
    """A method invocation addressed to a registered service."""

    target_name: str
    method_name: str
    method_args: Any = None
    constructor_args: Any = None

    @property
    def call_name(self) -> str:
        """The ``"Target.method"`` string checked against the whitelist."""
        return f"{self.target_name}.{self.method_name}"

    def to_wire(self) -> Dict[str, Any]:
        return {
            "targetName": self.target_name,
            "methodName": self.method_name,
            "methodArgs": self.method_args,
            "constructorArgs": self.constructor_args,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_wire())

    @classmethod
    def from_wire(cls, raw: Union[str, bytes, Mapping[str, Any]]) -> "RpcRequest":
        """
        Decode a request from JSON text, bytes or an already-parsed mapping.

        :raises ~record_bridge.core.errors.DispatchError: If the payload is not a JSON
            object or lacks a target or method name.
        """
        if isinstance(raw, (str, bytes, bytearray)):
            try:
                raw = json.loads(raw)
            except ValueError as exc:
                raise DispatchError(
                    f"Request is not valid JSON: {exc}", subcode=ec.DISPATCH_MALFORMED_REQUEST
                ) from exc
        if not isinstance(raw, Mapping):
            raise DispatchError("Request must be a JSON object", subcode=ec.DISPATCH_MALFORMED_REQUEST)

        target, method = raw.get("targetName"), raw.get("methodName")
        if not isinstance(target, str) or not target or not isinstance(method, str) or not method:
            raise DispatchError(
                "Request must name a targetName and a methodName",
                subcode=ec.DISPATCH_MALFORMED_REQUEST,
            )
        return cls(
            target_name=target,
            method_name=method,
            method_args=raw.get("methodArgs"),
            constructor_args=raw.get("constructorArgs"),
        )


@dataclass
class ResponseState:
    has_error: bool = False
    message: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        state: Dict[str, Any] = {"hasError": self.has_error}
        if self.message is not None:
            state["message"] = self.message
        return state


@dataclass
class RpcResponse:
    """Outcome of a dispatched call."""

    state: ResponseState = field(default_factory=ResponseState)
    data: Any = field(default_factory=dict)

    @classmethod
    def success(cls, data: Any) -> "RpcResponse":
        return cls(ResponseState(has_error=False), data)

    @classmethod
    def failure(cls, message: str, data: Any = None) -> "RpcResponse":
        return cls(ResponseState(has_error=True, message=message), {} if data is None else data)

    def to_wire(self) -> Dict[str, Any]:
        return {"state": self.state.to_wire(), "data": self.data}

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), default=str)


__all__ = ["RpcRequest", "RpcResponse", "ResponseState"]
