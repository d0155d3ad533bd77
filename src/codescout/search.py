"""Free-text and regex filtering over extracted entities.

One SearchFilter applies the same matching rules to every entity kind: an
entity is kept when any of its searchable fields (name first, then props,
hooks, methods, parameters, ...) matches. Highlighting wraps matches in an
emphasis marker on a copy of the entity; stored entities are never changed.
"""

import dataclasses
import re
from dataclasses import dataclass
from typing import Iterable, TypeVar

from codescout.models import (
    STATUS_EMPTY,
    STATUS_NO_MATCHES,
    STATUS_OK,
    MethodEntity,
    QuerySpec,
    SourceEntity,
)

DEFAULT_MARKER = "**"

EntityT = TypeVar("EntityT", bound=SourceEntity)


class InvalidSearchPatternError(ValueError):
    """Raised when a regex search term does not compile."""


@dataclass
class FilterResult:
    """Entities kept by a filter and why the list looks the way it does.

    ``status`` tells an empty list caused by filtering (``no_matches``) apart
    from one where nothing was extracted in the first place (``empty``).
    """
    entities: list
    status: str


class SearchFilter:
    """Decides per-entity inclusion for a query and produces highlighted copies."""

    def __init__(
        self,
        term: str = "",
        use_regex: bool = False,
        case_sensitive: bool = False,
        marker: str = DEFAULT_MARKER,
    ):
        """Compile the query.

        Args:
            term: Search term; empty matches everything.
            use_regex: Treat ``term`` as a regular expression.
            case_sensitive: Honor case when matching.
            marker: Emphasis marker placed on both sides of a highlighted match.

        Raises:
            InvalidSearchPatternError: If ``use_regex`` is set and ``term``
                does not compile.
        """
        self.term = term
        self.use_regex = use_regex
        self.case_sensitive = case_sensitive
        self.marker = marker

        flags = 0 if case_sensitive else re.IGNORECASE
        self.pattern: re.Pattern | None = None
        if term and use_regex:
            try:
                self.pattern = re.compile(term, flags)
            except re.error as e:
                raise InvalidSearchPatternError(f"Invalid search pattern '{term}': {e}") from e

        # Literal mode highlights through an escaped pattern so that
        # case-insensitive spans line up with the original text.
        self._literal = re.compile(re.escape(term), flags) if term and not use_regex else None

    @classmethod
    def from_query(cls, query: QuerySpec, marker: str = DEFAULT_MARKER) -> "SearchFilter":
        return cls(
            term=query.search_term,
            use_regex=query.use_regex,
            case_sensitive=query.case_sensitive,
            marker=marker,
        )

    @property
    def is_active(self) -> bool:
        return bool(self.term)

    def matches(self, text: str) -> bool:
        """Check a single string against the query."""
        if not self.term:
            return True
        if self.pattern is not None:
            return self.pattern.search(text) is not None
        if self.case_sensitive:
            return self.term in text
        return self._literal.search(text) is not None

    def matches_entity(self, entity: SourceEntity) -> bool:
        """True when any searchable field matches (first match wins)."""
        return any(self.matches(value) for value in entity.searchable_fields())

    def filter(self, entities: Iterable[EntityT]) -> FilterResult:
        """Keep the entities that match, preserving order.

        Returns:
            FilterResult whose status is ``empty`` when ``entities`` was empty,
            ``no_matches`` when the query removed everything, else ``ok``.
        """
        entities = list(entities)
        if not entities:
            return FilterResult(entities=[], status=STATUS_EMPTY)
        if not self.term:
            return FilterResult(entities=entities, status=STATUS_OK)

        kept = [entity for entity in entities if self.matches_entity(entity)]
        return FilterResult(entities=kept, status=STATUS_OK if kept else STATUS_NO_MATCHES)

    def highlight(self, text: str) -> str:
        """Wrap every non-overlapping match in ``text`` with the marker.

        Examples:
            >>> SearchFilter("use").highlight("useState")
            '**use**State'
        """
        pattern = self.pattern if self.pattern is not None else self._literal
        if pattern is None:
            return text

        pieces = []
        position = 0
        for match in pattern.finditer(text):
            start, end = match.span()
            if start == end:
                continue
            pieces.append(text[position:start])
            pieces.append(f"{self.marker}{text[start:end]}{self.marker}")
            position = end
        pieces.append(text[position:])
        return "".join(pieces)

    def highlight_entity(self, entity: EntityT) -> EntityT:
        """Return a copy of ``entity`` with its searchable fields highlighted."""
        if not self.term:
            return entity

        changes = {}
        for field_name in entity.SEARCH_FIELDS:
            value = getattr(entity, field_name)
            if isinstance(value, str):
                changes[field_name] = self.highlight(value)
            else:
                changes[field_name] = tuple(self._highlight_item(item) for item in value)
        return dataclasses.replace(entity, **changes)

    def _highlight_item(self, item):
        if isinstance(item, MethodEntity):
            return dataclasses.replace(item, name=self.highlight(item.name))
        return self.highlight(item)
