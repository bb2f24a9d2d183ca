# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the record bridge.

This module contains the record store protocol, the in-memory reference
store, and the field projector.
"""

__all__ = []
