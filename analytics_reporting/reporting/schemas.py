"""Result schemas for the reporting module."""

from typing import Any, Dict, List, Mapping
from dataclasses import dataclass
import pandas as pd
from bson import ObjectId
from pydantic import BaseModel


@dataclass
class ResultTable:
    """Named tabular result of a report read, backed by a DataFrame."""

    name: str
    frame: pd.DataFrame

    @property
    def columns(self) -> List[str]:
        return [str(column) for column in self.frame.columns]

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return self.frame.to_dict(orient="records")

    def __len__(self) -> int:
        return len(self.frame)


def _encode_value(value: Any) -> Any:
    """Replace ObjectIds with their hex strings, including inside subdocuments and arrays."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {key: _encode_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    return value

class ResultTableRead(BaseModel):
    """Response schema for a report data read."""

    name: str
    columns: List[str]
    rows: List[Dict[str, Any]]

    @classmethod
    def from_table(cls, table: ResultTable) -> "ResultTableRead":
        rows = [{key: _encode_value(value) for key, value in row.items()} for row in table.rows]
        return cls(name=table.name, columns=table.columns, rows=rows)
