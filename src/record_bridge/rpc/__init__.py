# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Remote procedure bridge.

The client proxy (:class:`~record_bridge.rpc.client.BridgeClient`) sends a
``targetName``/``methodName`` envelope through a transport; the server
dispatcher (:class:`~record_bridge.rpc.dispatcher.Dispatcher`) checks the call
against the whitelist, invokes the registered service and returns a
``state``/``data`` envelope.
"""

__all__ = []
