# analytics_reporting/query/filters.py
"""Report filters and their injection into native filter documents."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional

from analytics_reporting.core.exceptions import UnsupportedFilterKind
from analytics_reporting.query.schemas import FilterSpec, VALUE_LIST_FILTER

logger = logging.getLogger(__name__)


class DataSourceFilter(ABC):
    """A filter that can inject its predicate into a native filter document."""

    def __init__(self, spec: FilterSpec):
        self.spec = spec

    @abstractmethod
    def inject(self, filter_document: Dict[str, Any]) -> None:
        """Add this filter's predicate to the filter document in place."""

    def _set_predicate(self, filter_document: Dict[str, Any], key: str, predicate: Any) -> None:
        if key in filter_document:
            # Two filters on one key is a configuration problem; the later one wins.
            logger.warning(
                "Filter '%s' overwrites existing predicate on '%s': %r",
                self.spec.name,
                key,
                filter_document[key],
            )
        filter_document[key] = predicate


class ValueListFilter(DataSourceFilter):
    """Restricts a field to a list of accepted values."""

    def inject(self, filter_document: Dict[str, Any]) -> None:
        self._set_predicate(filter_document, self.spec.field, {"$in": list(self.spec.values)})


FilterFactory = Callable[[FilterSpec], DataSourceFilter]


class FilterRegistry:
    """Resolves filter specs to implementations by kind."""

    def __init__(self, factories: Optional[Dict[str, FilterFactory]] = None):
        self._factories: Dict[str, FilterFactory] = dict(factories or {})

    @classmethod
    def default(cls) -> "FilterRegistry":
        return cls({VALUE_LIST_FILTER: ValueListFilter})

    def register(self, kind: str, factory: FilterFactory) -> None:
        self._factories[kind] = factory

    def kinds(self) -> list:
        return sorted(self._factories)

    def resolve(self, spec: FilterSpec) -> DataSourceFilter:
        factory = self._factories.get(spec.kind)
        if factory is None:
            raise UnsupportedFilterKind(spec.kind, spec.name)
        return factory(spec)


def inject_filters(
    filters: Iterable[DataSourceFilter], filter_document: Dict[str, Any]
) -> Dict[str, Any]:
    """Inject filters in order into the shared filter document."""
    for data_source_filter in filters:
        data_source_filter.inject(filter_document)
    return filter_document
