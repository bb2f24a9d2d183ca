# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record services exposed by the bridge.

- RecordQueryService: filtered, ordered, limited record lists
- RecordAccessService: single record lookup
- MutationService: record insert and bulk delete
"""

__all__ = []
