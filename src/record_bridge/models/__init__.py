# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the record bridge.

- :class:`~record_bridge.models.record.Record`: a store row with dict-like access.
- :mod:`~record_bridge.models.options`: validated option objects for the services.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from the
    specific module files.
"""

__all__ = []
