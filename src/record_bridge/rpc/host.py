# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""FastAPI façade that exposes a bridge dispatcher over HTTP."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from .dispatcher import Dispatcher


class BridgeRequestModel(BaseModel):
    targetName: str = Field(..., min_length=1, description="Registered service name.")
    methodName: str = Field(..., min_length=1, description="Wire method name on the service.")
    methodArgs: Any = Field(default=None, description="Argument passed to the method.")
    constructorArgs: Any = Field(default=None, description="Argument passed to the service factory.")


def create_app(dispatcher: Dispatcher, *, api_key: Optional[str] = None) -> FastAPI:
    """
    Build an application serving ``POST /bridge`` and ``GET /health``.

    Envelopes the request model rejects (missing names, invalid JSON) are still
    answered by the dispatcher, so callers receive a ``hasError`` response with
    HTTP 200 rather than a 422.

    :param dispatcher: Dispatcher handling every bridge request.
    :param api_key: When set, requests must carry a matching ``x-api-key`` header.
    """
    app = FastAPI(title="Record Bridge Host", version="1.0.0")
    app.state.dispatcher = dispatcher

    @app.middleware("http")
    async def _require_api_key(request: Request, call_next):
        if api_key and request.headers.get("x-api-key") != api_key:
            return JSONResponse(status_code=401, content={"message": "Invalid API key"})
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def _malformed_envelope(request: Request, exc: RequestValidationError) -> Response:
        # exc.body is the parsed body, or the raw text when it was not valid JSON
        return Response(content=dispatcher.run(exc.body), media_type="application/json")

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok", "whitelist": list(dispatcher.whitelist)}

    @app.post("/bridge")
    def bridge(payload: BridgeRequestModel) -> Response:
        return Response(content=dispatcher.run(payload.model_dump()), media_type="application/json")

    return app


__all__ = ["BridgeRequestModel", "create_app"]
