# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with timeout handling and optional session support.

This module provides :class:`~record_bridge.core._http._HttpClient`, a thin
wrapper around the requests library that applies a default timeout and reuses
a session for connection pooling. Requests are issued exactly once; failed
calls are surfaced to the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

_DEFAULT_TIMEOUT = 30.0


class _HttpClient:
    """
    HTTP client with timeout handling and optional session support.

    :param timeout: Default request timeout in seconds. Default is 30.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection pooling. When omitted the
        client creates and owns one.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: float = timeout if timeout is not None else _DEFAULT_TIMEOUT
        self._owns_session = session is None
        self._session: Optional[requests.Session] = session or requests.Session()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        :param method: HTTP method (GET, POST, ...).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``session.request()``.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If the request fails.
        """
        if self._session is None:
            raise RuntimeError("HTTP client is closed")
        kwargs.setdefault("timeout", self.default_timeout)
        return self._session.request(method, url, **kwargs)

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        Only sessions created by the client itself are closed. Safe to call multiple times.
        """
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
