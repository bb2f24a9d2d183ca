# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Transports carrying bridge envelopes between client and dispatcher.

A transport takes the JSON request text and returns the JSON response text.
It is called on the client's worker thread and may block.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, TYPE_CHECKING, runtime_checkable

import requests
from azure.core.credentials import TokenCredential

from ..core._auth import _BearerTokenAuth
from ..core._error_codes import _http_subcode
from ..core._http import _HttpClient
from ..core.config import BridgeConfig
from ..core.errors import HttpError

if TYPE_CHECKING:
    from .dispatcher import Dispatcher


@runtime_checkable
class Transport(Protocol):
    def send(self, payload: str) -> str:
        ...


class LocalTransport:
    """Deliver requests to a dispatcher in the same process."""

    def __init__(self, dispatcher: "Dispatcher") -> None:
        self._dispatcher = dispatcher

    def send(self, payload: str) -> str:
        return self._dispatcher.run(payload)


class HttpTransport:
    """
    POST requests to a bridge endpoint served by :func:`~record_bridge.rpc.host.create_app`.

    :param url: Full URL of the bridge endpoint, e.g. ``"https://app.example.com/bridge"``.
    :type url: str
    :param credential: Optional Azure Identity credential; when given, every request
        carries a bearer token for ``scope``.
    :type credential: ~azure.core.credentials.TokenCredential or None
    :param scope: Token scope requested from ``credential``.
    :type scope: str or None
    :param timeout: Request timeout in seconds.
    :type timeout: float or None
    :param session: Optional requests.Session for connection pooling.
    :type session: requests.Session or None
    :param headers: Extra headers sent with every request (e.g. ``{"x-api-key": ...}``).
    :type headers: dict or None
    """

    def __init__(
        self,
        url: str,
        *,
        credential: Optional[TokenCredential] = None,
        scope: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._url = (url or "").strip()
        if not self._url:
            raise ValueError("url is required.")
        self._auth = _BearerTokenAuth(credential, scope) if credential is not None else None
        self._http = _HttpClient(timeout=timeout, session=session)
        self._headers = dict(headers or {})

    @classmethod
    def from_config(cls, url: str, config: Optional[BridgeConfig] = None, **kwargs: Any) -> "HttpTransport":
        """
        Build a transport using ``config.http_timeout`` as its request timeout.

        :param url: Full URL of the bridge endpoint.
        :param config: Bridge configuration; read from the environment when omitted.
        :type config: ~record_bridge.core.config.BridgeConfig or None
        :param kwargs: Other :class:`HttpTransport` arguments. An explicit ``timeout`` wins.
        """
        config = config or BridgeConfig.from_env()
        kwargs.setdefault("timeout", config.http_timeout)
        return cls(url, **kwargs)

    def send(self, payload: str) -> str:
        headers = {"Content-Type": "application/json", "Accept": "application/json", **self._headers}
        response = self._http._request("post", self._url, data=payload, headers=headers, auth=self._auth)
        if response.status_code >= 400:
            body = response.text or ""
            raise HttpError(
                f"Bridge endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
                subcode=_http_subcode(response.status_code),
                body_excerpt=body[:200],
            )
        return response.text

    def close(self) -> None:
        self._http.close()


__all__ = ["Transport", "LocalTransport", "HttpTransport"]
