"""
Query schemas and types for the report data source.

ReportQuery and FilterSpec describe what the caller asks for. NativeQuery is
the store-native translation owned by a single retrieval call.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import IntEnum
from pydantic import BaseModel, ConfigDict, Field


class SortDirection(IntEnum):
    """Sort directions understood by the document store."""

    ASCENDING = 1
    DESCENDING = -1


# Sentinel limit meaning "no limit"
UNBOUNDED_LIMIT = -1

VALUE_LIST_FILTER = "value_list"


class FilterSpec(BaseModel):
    """A named, typed filter attached to a report query."""

    name: str
    kind: str = VALUE_LIST_FILTER
    field: str
    values: List[Any] = []

    model_config = ConfigDict(frozen=True)


class ReportQuery(BaseModel):
    """Abstract report query as received from the caller."""

    query: str
    parameters: List[Tuple[str, Any]] = Field(default_factory=list)
    filters: List[FilterSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_parameter_map(self) -> Dict[str, Any]:
        """Parameters by name; a later duplicate wins."""
        return {name: value for name, value in self.parameters}


@dataclass
class NativeQuery:
    """Store-native query built for exactly one retrieval call."""

    collection_name: str
    fields: List[str]
    filter_document: Dict[str, Any] = field(default_factory=dict)
    sort_spec: Optional[List[Tuple[str, int]]] = None
    skip: int = 0
    limit: int = UNBOUNDED_LIMIT
