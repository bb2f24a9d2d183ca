# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Field projection: turn a record into a field/value mapping.

Dotted field names (``caller_id.manager.name``) require walking references,
which costs a split and one store lookup per segment. The field list is known
before any record is read, so :func:`build_projector` inspects it once and
picks the direct extractor whenever no field needs walking.
"""

from __future__ import annotations

from functools import partial, reduce
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..common.constants import FIELD_PATH_SEPARATOR, RETURN_DISPLAY, RETURN_VALUE
from ..core import _error_codes as ec
from ..core.errors import ValidationError
from ..models.record import Record
from ._store import RecordStore

FieldResult = Dict[str, Any]
Projector = Callable[[Record], FieldResult]


def _shape(value: Any, display: Any, return_value: Optional[str]) -> Any:
    if return_value == RETURN_VALUE:
        return value
    if return_value == RETURN_DISPLAY:
        return display
    return {"value": value, "display": display}


def _field_values(store: RecordStore, record: Record, field: str, return_value: Optional[str]) -> Any:
    """Value and/or display value of a plain field."""
    if return_value == RETURN_VALUE:
        return store.get_value(record, field)
    if return_value == RETURN_DISPLAY:
        return store.get_display_value(record, field)
    return _shape(store.get_value(record, field), store.get_display_value(record, field), return_value)


def _path_values(store: RecordStore, record: Record, field: str, return_value: Optional[str]) -> Any:
    """Value and/or display value of a field reached through references."""
    *hops, leaf = field.split(FIELD_PATH_SEPARATOR)
    target = reduce(
        lambda current, segment: None if current is None else store.get_reference(current, segment),
        hops,
        record,
    )
    if target is None:
        return _shape(None, None, return_value)
    return _field_values(store, target, leaf, return_value)


def _check_field_names(field_list: Sequence[Any]) -> List[str]:
    fields = list(field_list)
    for name in fields:
        if not isinstance(name, str) or not name:
            raise ValidationError(
                f"Invalid field name {name!r} in fieldList",
                subcode=ec.VALIDATION_FIELD_PATH_INVALID,
            )
        if FIELD_PATH_SEPARATOR in name and not all(name.split(FIELD_PATH_SEPARATOR)):
            raise ValidationError(
                f"Field path {name!r} contains an empty segment",
                subcode=ec.VALIDATION_FIELD_PATH_INVALID,
            )
    return fields


def build_projector(store: RecordStore, field_list: Sequence[str], return_value: Optional[str]) -> Projector:
    """
    Build a function mapping a record to a :data:`FieldResult`.

    :param store: Store used to read values, display values and references.
    :type store: ~record_bridge.data._store.RecordStore
    :param field_list: Field names, optionally dotted.
    :type field_list: list[str]
    :param return_value: ``"value"`` or ``"display"`` for scalars; anything else
        yields ``{"value": ..., "display": ...}`` per field.
    :type return_value: str or None
    :return: Projector callable.
    :raises ~record_bridge.core.errors.ValidationError: If a field name is not a
        non-empty string or a dotted path has an empty segment.
    """
    fields = _check_field_names(field_list)
    walk = any(FIELD_PATH_SEPARATOR in name for name in fields)
    extract = partial(_path_values if walk else _field_values, store)

    def project(record: Record) -> FieldResult:
        return {name: extract(record, name, return_value) for name in fields}

    return project


__all__ = ["FieldResult", "Projector", "build_projector"]
