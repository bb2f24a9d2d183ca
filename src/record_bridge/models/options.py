# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Option objects accepted by the record services.

Callers may pass either one of these dataclasses or a plain mapping using the
camelCase wire keys (``collection``, ``fieldList``, ``orderBy``, ...). The
``from_options`` constructors validate the input and raise
:class:`~record_bridge.core.errors.ValidationError` with the messages remote
callers see.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..common.constants import RETURN_VALUE, UNBOUNDED
from ..core import _error_codes as ec
from ..core.errors import ValidationError


def _pick(options: Mapping[str, Any], *keys: str) -> Any:
    """Return the value of the first key present in ``options``."""
    for key in keys:
        if key in options:
            return options[key]
    return None


def _is_field_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 0


@dataclass
class QueryOptions:
    """
    Options for :meth:`~record_bridge.operations.query.RecordQueryService.get_record_list`.

    :param collection: Collection to query.
    :param field_list: Fields to project from every matched record.
    :param query: Encoded filter clause, appended after ``queries``.
    :param queries: Filter clauses; all clauses are AND-combined.
    :param order_by: Field to order by, ignored when not a valid field.
    :param order_descending: Ordering flag, see ``BridgeConfig.strict_order_direction``.
    :param max: Row limit, ``-1`` for no limit.
    :param return_value: ``"value"``, ``"display"`` or ``"both"``.
    """

    collection: str
    field_list: List[str]
    query: Optional[str] = None
    queries: List[str] = field(default_factory=list)
    order_by: Optional[str] = None
    order_descending: bool = False
    max: int = UNBOUNDED
    return_value: str = RETURN_VALUE

    @property
    def filters(self) -> List[str]:
        """All filter clauses in the order they are applied."""
        clauses = list(self.queries)
        if isinstance(self.query, str):
            clauses.append(self.query)
        return clauses

    @classmethod
    def from_options(cls, options: Union["QueryOptions", Mapping[str, Any], None]) -> "QueryOptions":
        op = "getRecordList"
        if isinstance(options, QueryOptions):
            options = options.to_dict()
        if not isinstance(options, Mapping):
            raise ValidationError("No options provided", subcode=ec.VALIDATION_OPTIONS_MISSING, operation=op)
        collection = _pick(options, "collection", "table")
        if not isinstance(collection, str):
            raise ValidationError(
                "No table provided or table is not a string",
                subcode=ec.VALIDATION_TABLE_NOT_STRING,
                operation=op,
            )
        field_list = _pick(options, "fieldList", "field_list")
        if not _is_field_list(field_list):
            raise ValidationError(
                "fieldList should be a non-empty array",
                subcode=ec.VALIDATION_FIELD_LIST_INVALID,
                operation=op,
            )

        max_rows = _pick(options, "max")
        return_value = _pick(options, "returnValue", "return_value")
        queries = _pick(options, "queries") or []
        if isinstance(queries, str):
            queries = [queries]
        return cls(
            collection=collection,
            field_list=list(field_list),
            query=_pick(options, "query"),
            queries=[q for q in queries if isinstance(q, str)],
            order_by=_pick(options, "orderBy", "order_by"),
            order_descending=bool(_pick(options, "orderDescending", "order_descending")),
            max=UNBOUNDED if max_rows is None else max_rows,
            return_value=RETURN_VALUE if return_value is None else return_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire (camelCase) form of these options."""
        return {
            "collection": self.collection,
            "fieldList": self.field_list,
            "query": self.query,
            "queries": list(self.queries or []),
            "orderBy": self.order_by,
            "orderDescending": self.order_descending,
            "max": self.max,
            "returnValue": self.return_value,
        }


@dataclass
class LookupOptions:
    """
    Options for :meth:`~record_bridge.operations.records.RecordAccessService.get_record`.

    Resolution precedence is ``identifier``, then ``field_name``/``field_value``,
    then ``query``.
    """

    collection: str
    field_list: List[str]
    identifier: Optional[str] = None
    field_name: Optional[str] = None
    field_value: Optional[str] = None
    query: Optional[str] = None
    return_value: str = RETURN_VALUE

    @classmethod
    def from_options(cls, options: Union["LookupOptions", Mapping[str, Any], None]) -> "LookupOptions":
        op = "getRecord"
        if isinstance(options, LookupOptions):
            options = options.to_dict()
        if not isinstance(options, Mapping):
            raise ValidationError("No options provided", subcode=ec.VALIDATION_OPTIONS_MISSING, operation=op)
        collection = _pick(options, "collection", "table")
        if not isinstance(collection, str):
            raise ValidationError(
                "Property table is not provided to options argument",
                subcode=ec.VALIDATION_TABLE_NOT_STRING,
                operation=op,
            )
        field_list = _pick(options, "fieldList", "field_list")
        if not field_list:
            message = (
                "Property fieldList is an empty array"
                if isinstance(field_list, (list, tuple))
                else "Property fieldList is not provided to options argument"
            )
            raise ValidationError(message, subcode=ec.VALIDATION_FIELD_LIST_INVALID, operation=op)
        if not isinstance(field_list, (list, tuple)):
            raise ValidationError(
                "Property fieldList is not an array",
                subcode=ec.VALIDATION_FIELD_LIST_INVALID,
                operation=op,
            )

        return_value = _pick(options, "returnValue", "return_value")
        return cls(
            collection=collection,
            field_list=list(field_list),
            identifier=_pick(options, "identifier", "sys_id"),
            field_name=_pick(options, "fieldName", "field_name", "field"),
            field_value=_pick(options, "fieldValue", "field_value", "value"),
            query=_pick(options, "query"),
            return_value=RETURN_VALUE if return_value is None else return_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire (camelCase) form of these options."""
        return {
            "collection": self.collection,
            "fieldList": self.field_list,
            "identifier": self.identifier,
            "fieldName": self.field_name,
            "fieldValue": self.field_value,
            "query": self.query,
            "returnValue": self.return_value,
        }


@dataclass
class MutationRequest:
    """A record to insert: target collection plus field/value pairs."""

    collection: str
    values: Dict[str, Any]

    @classmethod
    def from_options(cls, options: Union["MutationRequest", Mapping[str, Any], None]) -> "MutationRequest":
        op = "insertRecord"
        if isinstance(options, MutationRequest):
            options = {"collection": options.collection, "values": options.values}
        if not isinstance(options, Mapping):
            raise ValidationError("No options provided", subcode=ec.VALIDATION_OPTIONS_MISSING, operation=op)
        collection = _pick(options, "collection", "table")
        if not isinstance(collection, str):
            raise ValidationError(
                "No table provided or table is not a string",
                subcode=ec.VALIDATION_TABLE_NOT_STRING,
                operation=op,
            )
        values = _pick(options, "values")
        if not isinstance(values, Mapping):
            raise ValidationError(
                "No values provided or values is not an object",
                subcode=ec.VALIDATION_VALUES_NOT_MAPPING,
                operation=op,
            )
        return cls(collection=collection, values=dict(values))


@dataclass
class DeleteRequest:
    """Bulk delete of every record in ``collection`` matching ``query``."""

    collection: str
    query: str

    @classmethod
    def from_options(cls, options: Union["DeleteRequest", Mapping[str, Any], None]) -> "DeleteRequest":
        op = "deleteRecords"
        if isinstance(options, DeleteRequest):
            options = {"collection": options.collection, "query": options.query}
        if not isinstance(options, Mapping):
            raise ValidationError("No options provided", subcode=ec.VALIDATION_OPTIONS_MISSING, operation=op)
        collection = _pick(options, "collection", "table")
        if not isinstance(collection, str):
            raise ValidationError(
                "No table provided or table is not a string",
                subcode=ec.VALIDATION_TABLE_NOT_STRING,
                operation=op,
            )
        query = _pick(options, "query")
        # An empty query would match the whole collection
        if not isinstance(query, str) or not query.strip():
            raise ValidationError(
                "No query provided or query is not a non-empty string",
                subcode=ec.VALIDATION_QUERY_INVALID,
                operation=op,
            )
        return cls(collection=collection, query=query)


__all__ = ["QueryOptions", "LookupOptions", "MutationRequest", "DeleteRequest"]
