# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the record bridge.

All errors derive from :class:`BridgeError`, which carries a stable ``code``,
an optional ``subcode`` and a ``details`` bag so errors can be encoded into an
RPC response envelope via :meth:`BridgeError.to_dict`.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base structured error for the record bridge."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasError": True,
            "name": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(BridgeError):
    """Malformed or missing required input, raised before any store call."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> None:
        d = dict(details or {})
        if operation is not None:
            d["operation"] = operation
        super().__init__(message, code="validation_error", subcode=subcode, details=d, source="client")
        self.operation = operation


class DispatchError(BridgeError):
    """A remote call the dispatcher refuses to run."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="dispatch_error", subcode=subcode, details=details, source="server")


class RemoteCallError(BridgeError):
    """
    Rejection of a remote call, raised from a :class:`concurrent.futures.Future`.

    :param message: Message from the response state.
    :param data: The ``data`` payload of the failed response, unchanged.
    """

    def __init__(self, message: str, *, data: Any = None, subcode: Optional[str] = None) -> None:
        super().__init__(message, code="remote_call_error", subcode=subcode, source="server")
        self.data = data


class HttpError(BridgeError):
    def __init__(
        self,
        message: str,
        status_code: int,
        subcode: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
        )


__all__ = ["BridgeError", "ValidationError", "DispatchError", "RemoteCallError", "HttpError"]
