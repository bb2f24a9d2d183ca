# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pandas as pd

_OMIT = object()


def rows_to_dataframe(rows: List[Dict[str, Any]], columns: Sequence[str]) -> pd.DataFrame:
    """Build a DataFrame from projected rows, one column per field in ``columns``.

    Rows projected with ``returnValue="both"`` keep their ``{"value", "display"}`` dicts as cell values.
    """
    return pd.DataFrame.from_records(rows, columns=list(columns))


def _is_missing(cell: Any) -> bool:
    # pd.isna is element-wise on list-like cells
    if isinstance(cell, (list, tuple, dict, set)):
        return False
    return bool(pd.isna(cell))


def _field_value(cell: Any, na_as_null: bool) -> Any:
    if _is_missing(cell):
        return None if na_as_null else _OMIT
    if isinstance(cell, pd.Timestamp):
        return cell.isoformat()
    return cell


def dataframe_to_values(df: pd.DataFrame, na_as_null: bool = False) -> List[Dict[str, Any]]:
    """One ``values`` mapping per row, ready for ``MutationService.insert_record``.

    Column labels become field names (as strings) and Timestamps ISO 8601 strings.
    Missing cells (None, NaN, NaT) are left out of the row so the store keeps its
    defaults, or sent as None when ``na_as_null`` is set.
    """
    rows = []
    for row in df.to_dict(orient="records"):
        cells = ((str(label), _field_value(cell, na_as_null)) for label, cell in row.items())
        rows.append({name: value for name, value in cells if value is not _OMIT})
    return rows
