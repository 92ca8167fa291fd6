"""
Named Query Registry

Maps query names (e.g. "Location.findAll") to SQLAlchemy select statements
with named bind parameters. Statements are immutable and safe to share
across sessions and tasks.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional

from sqlalchemy import Select
from sqlalchemy.sql import visitors
from sqlalchemy.sql.elements import BindParameter

from wms.common.errors import QueryError

logger = logging.getLogger(__name__)


def _required_parameters(statement: Select) -> frozenset[str]:
    """Collect the names of bind parameters that have no value attached"""
    return frozenset(
        element.key
        for element in visitors.iterate(statement)
        if isinstance(element, BindParameter) and element.required
    )


@dataclass(frozen=True, eq=False)
class NamedQuery:
    """A registered query and the bind parameters it expects"""

    name: str
    statement: Select
    parameters: frozenset[str]
    # Mapped class the statement selects, None for non-entity selects
    entity: Optional[type] = None

    def check_params(self, params: Mapping[str, Any]) -> None:
        """
        Verify the supplied parameter names match the query signature

        Raises:
            QueryError: Missing or unexpected parameters
        """
        supplied = set(params)
        missing = self.parameters - supplied
        unexpected = supplied - self.parameters
        if missing or unexpected:
            raise QueryError(
                message=f"Parameters do not match named query '{self.name}'",
                code="query_parameter_mismatch",
                details={
                    "query": self.name,
                    "missing": sorted(missing),
                    "unexpected": sorted(unexpected),
                },
            )


class NamedQueryRegistry:
    """
    Named Query Registry

    Owned by the persistence configuration; repositories only look queries up.
    """

    def __init__(self) -> None:
        self._queries: dict[str, NamedQuery] = {}

    def register(self, name: str, statement: Select) -> NamedQuery:
        """
        Register a named query

        Args:
            name: Query name, conventionally "<Entity>.<query>"
            statement: Select statement, parameters declared with bindparam()

        Returns:
            NamedQuery: The registered query

        Raises:
            ValueError: Name already registered
        """
        if name in self._queries:
            raise ValueError(f"Named query '{name}' is already registered")
        query = NamedQuery(
            name=name,
            statement=statement,
            parameters=_required_parameters(statement),
            entity=statement.column_descriptions[0].get("entity"),
        )
        self._queries[name] = query
        logger.debug("Registered named query %s with parameters %s", name, sorted(query.parameters))
        return query

    def get(self, name: str) -> NamedQuery:
        """
        Look up a named query

        Raises:
            QueryError: Query is not defined
        """
        query = self._queries.get(name)
        if query is None:
            raise QueryError(
                message=f"Named query '{name}' is not defined",
                code="unknown_named_query",
                details={"query": name},
            )
        return query

    def bind(self, name: str, params: Optional[Mapping[str, Any]] = None) -> tuple[Select, dict[str, Any]]:
        """
        Resolve a named query and validate its parameters

        Returns:
            tuple[Select, dict]: (statement, parameters) ready for execution
        """
        query = self.get(name)
        values = dict(params or {})
        query.check_params(values)
        return query.statement, values

    def __contains__(self, name: object) -> bool:
        return name in self._queries

    def __iter__(self) -> Iterator[str]:
        return iter(self._queries)

    def __len__(self) -> int:
        return len(self._queries)
