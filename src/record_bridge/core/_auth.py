# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Bearer token authentication for HTTP transports."""

from __future__ import annotations

import requests
from requests.auth import AuthBase
from azure.core.credentials import TokenCredential


class _BearerTokenAuth(AuthBase):
    """
    requests auth hook stamping an ``Authorization: Bearer`` header on every request.

    A fresh token is requested from the credential for each request; azure-identity
    credentials keep their own token cache.

    :param credential: Azure Identity credential.
    :type credential: ~azure.core.credentials.TokenCredential
    :param scope: Scope the bridge endpoint expects, e.g. ``"api://bridge/.default"``.
    :type scope: str
    """

    def __init__(self, credential: TokenCredential, scope: str) -> None:
        if not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential.")
        if not scope:
            raise ValueError("scope is required when a credential is given.")
        self.credential: TokenCredential = credential
        self.scope = scope

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self.credential.get_token(self.scope).token}"
        return request
