# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
In-memory record store.

:class:`InMemoryRecordStore` implements :class:`~record_bridge.data._store.RecordStore`
over plain dictionaries. It backs the test suite and is handy when embedding the
bridge without a platform behind it.

Filters use the encoded query syntax: conditions joined with ``^``, each
condition written as ``<field><operator><value>``. Supported operators are
``=``, ``!=``, ``<``, ``<=``, ``>``, ``>=``, ``LIKE``, ``NOTLIKE``,
``STARTSWITH``, ``ENDSWITH``, ``IN``, ``NOT IN``, ``ISEMPTY`` and
``ISNOTEMPTY``. Field names may be dotted to compare against a referenced
record.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from ..common.constants import FIELD_PATH_SEPARATOR
from ..models.record import Record

ID_FIELD = "sys_id"

_CONDITION = re.compile(
    r"^(?P<field>[A-Za-z0-9_.]+?)"
    r"(?P<op>ISNOTEMPTY|ISEMPTY|NOTLIKE|LIKE|STARTSWITH|ENDSWITH|NOT IN|IN|!=|>=|<=|=|>|<)"
    r"(?P<value>.*)$"
)


@dataclass
class TableSchema:
    """
    Field definitions of one collection.

    :param fields: Names of the plain and reference fields.
    :param references: Reference field name -> referenced collection.
    :param display_field: Field shown as the display value when another record references this one.
    :param required: Fields that must be set for an insert to succeed.
    """

    fields: Set[str] = field(default_factory=set)
    references: Dict[str, str] = field(default_factory=dict)
    display_field: Optional[str] = None
    required: Set[str] = field(default_factory=set)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _compare(left: Any, right: str, op: str) -> bool:
    ln, rn = _as_number(left), _as_number(right)
    if ln is not None and rn is not None:
        a, b = ln, rn
    else:
        a, b = str(left), right
    if op == "<":
        return a < b
    if op == "<=":
        return a <= b
    if op == ">":
        return a > b
    return a >= b


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _sort_key(value: Any) -> Tuple[int, Any]:
    if value is None:
        return (2, "")
    number = _as_number(value)
    if number is not None:
        return (0, number)
    return (1, str(value))


class InMemoryRecordStore:
    """
    Dictionary-backed :class:`~record_bridge.data._store.RecordStore`.

    Example::

        store = InMemoryRecordStore()
        store.define_table("sys_user", ["name"], display_field="name")
        store.define_table("task", ["number", "priority"], references={"caller_id": "sys_user"})
        user_id = store.add("sys_user", {"name": "Abel Tuter"})
        store.add("task", {"number": "TASK0001", "priority": 2, "caller_id": user_id})
    """

    def __init__(self) -> None:
        self._schemas: Dict[str, TableSchema] = {}
        self._rows: Dict[str, Dict[str, Record]] = {}

    # ------------------------------------------------------------------ schema

    def define_table(
        self,
        table: str,
        fields: Iterable[str] = (),
        *,
        references: Optional[Dict[str, str]] = None,
        display_field: Optional[str] = None,
        required: Iterable[str] = (),
    ) -> TableSchema:
        references = dict(references or {})
        schema = TableSchema(
            fields=set(fields) | set(references) | {ID_FIELD},
            references=references,
            display_field=display_field,
            required=set(required),
        )
        self._schemas[table] = schema
        self._rows.setdefault(table, {})
        return schema

    def add(
        self,
        table: str,
        data: Dict[str, Any],
        *,
        record_id: Optional[str] = None,
        display: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Seed a record directly, defining the table from ``data`` when unknown.

        :return: The record identifier.
        """
        schema = self._schemas.get(table) or self.define_table(table, data)
        schema.fields.update(data)
        rid = record_id or uuid.uuid4().hex
        self._rows[table][rid] = Record(id=rid, table=table, data=dict(data), display=dict(display or {}))
        return rid

    def count(self, table: str) -> int:
        return len(self._rows.get(table, {}))

    # ------------------------------------------------------------------- reads

    def query(
        self,
        table: str,
        filters: Sequence[str],
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> Iterator[Record]:
        predicates = [self._compile(clause) for clause in filters]
        rows = [r for r in self._rows.get(table, {}).values() if all(p(r) for p in predicates)]
        if order_by:
            rows.sort(key=lambda r: _sort_key(self.get_value(r, order_by)), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return iter(rows)

    def get(self, table: str, record_id: str) -> Optional[Record]:
        return self._rows.get(table, {}).get(record_id)

    def get_by_field(self, table: str, field: str, value: Any) -> Optional[Record]:
        for record in self._rows.get(table, {}).values():
            if _text(self.get_value(record, field)) == _text(value):
                return record
        return None

    def get_value(self, record: Record, field: str) -> Any:
        if field == ID_FIELD:
            return record.id
        return record.get(field)

    def get_display_value(self, record: Record, field: str) -> Any:
        if field in record.display:
            return record.display[field]
        schema = self._schemas.get(record.table)
        if schema is not None and field in schema.references:
            target = self.get_reference(record, field)
            if target is None:
                return ""
            target_schema = self._schemas.get(target.table)
            if target_schema is not None and target_schema.display_field:
                return self.get_display_value(target, target_schema.display_field)
            return target.id
        return _text(self.get_value(record, field))

    def get_reference(self, record: Record, field: str) -> Optional[Record]:
        schema = self._schemas.get(record.table)
        if schema is None or field not in schema.references:
            return None
        target_id = record.get(field)
        if not target_id:
            return None
        return self.get(schema.references[field], target_id)

    def is_valid_field(self, table: str, field: str) -> bool:
        schema = self._schemas.get(table)
        return schema is not None and field in schema.fields

    # ------------------------------------------------------------------ writes

    def new_record(self, table: str) -> Record:
        return Record(id="", table=table)

    def set_value(self, record: Record, field: str, value: Any) -> None:
        record[field] = value

    def insert(self, record: Record) -> Optional[str]:
        schema = self._schemas.get(record.table)
        if schema is None:
            return None
        if any(record.get(name) in (None, "") for name in schema.required):
            return None
        if any(name not in schema.fields for name in record):
            return None
        rid = record.id or uuid.uuid4().hex
        record.id = rid
        self._rows[record.table][rid] = record
        return rid

    def delete_matching(self, table: str, query: str) -> int:
        doomed = [r.id for r in self.query(table, [query])]
        rows = self._rows.get(table, {})
        for rid in doomed:
            del rows[rid]
        return len(doomed)

    # ----------------------------------------------------------------- filters

    def _resolve(self, record: Record, path: str) -> Any:
        *hops, leaf = path.split(FIELD_PATH_SEPARATOR)
        target = reduce(
            lambda current, segment: None if current is None else self.get_reference(current, segment),
            hops,
            record,
        )
        return None if target is None else self.get_value(target, leaf)

    def _compile(self, clause: str) -> Callable[[Record], bool]:
        conditions = [self._condition(part) for part in clause.split("^") if part.strip()]
        return lambda record: all(cond(record) for cond in conditions)

    def _condition(self, text: str) -> Callable[[Record], bool]:
        match = _CONDITION.match(text.strip())
        if match is None:
            raise ValueError(f"Unsupported query condition: {text!r}")
        path, op, expected = match.group("field"), match.group("op"), match.group("value")
        choices: List[str] = expected.split(",")

        def test(record: Record) -> bool:
            actual = self._resolve(record, path)
            text_value = _text(actual)
            if op == "=":
                return text_value == expected
            if op == "!=":
                return text_value != expected
            if op == "ISEMPTY":
                return text_value == ""
            if op == "ISNOTEMPTY":
                return text_value != ""
            if op == "LIKE":
                return expected.lower() in text_value.lower()
            if op == "NOTLIKE":
                return expected.lower() not in text_value.lower()
            if op == "STARTSWITH":
                return text_value.lower().startswith(expected.lower())
            if op == "ENDSWITH":
                return text_value.lower().endswith(expected.lower())
            if op == "IN":
                return text_value in choices
            if op == "NOT IN":
                return text_value not in choices
            if actual is None:
                return False
            return _compare(actual, expected, op)

        return test


__all__ = ["InMemoryRecordStore", "TableSchema", "ID_FIELD"]
