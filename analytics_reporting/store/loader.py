# analytics_reporting/store/loader.py
"""Materialize store documents into a result table."""

from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from analytics_reporting.reporting.schemas import ResultTable

_MISSING = object()


def get_field_value(document: Mapping[str, Any], field_path: str) -> Any:
    """Read a top-level or dotted field from a document; missing paths give None."""
    if field_path in document:
        return document[field_path]

    value: Any = document
    for part in field_path.split("."):
        if isinstance(value, Mapping):
            value = value.get(part, _MISSING)
        elif isinstance(value, list) and part.isdigit() and int(part) < len(value):
            value = value[int(part)]
        else:
            value = _MISSING
        if value is _MISSING:
            return None
    return value


class DocumentLoader:
    """Loads documents from a cursor into a table with one column per field."""

    def get_data_table(self, fields: List[str], documents: Iterable[Dict[str, Any]], name: str = "") -> ResultTable:
        rows = [[get_field_value(document, field) for field in fields] for document in documents]
        # object dtype keeps identifiers, None and mixed values as read
        frame = pd.DataFrame(rows, columns=list(fields), dtype=object)
        return ResultTable(name=name, frame=frame)
