import logging
from typing import Mapping

from codescout.attributes import ComponentAttributes, resolve_component_attributes
from codescout.models import ComponentEntity, SourceEntity
from codescout.parsers.base import BaseParser
from codescout.patterns import REACT_PATTERNS, EntityPattern, patterns_of_kind

logger = logging.getLogger(__name__)


class ReactParser(BaseParser):
    """Heuristic extractor for React function, arrow and class components."""

    dialect = "react"
    extensions = (".jsx", ".tsx")

    def __init__(self, patterns: Mapping[str, EntityPattern] = REACT_PATTERNS):
        self.patterns = patterns

    def extract_entities(self, source_code: str, file_path: str) -> list[SourceEntity]:
        """Extract components from JSX/TSX source code.

        Component patterns run in table order (function, arrow, class). A
        name already found in this file by an earlier pattern is skipped, and
        only names starting with an uppercase letter count as components.

        Args:
            source_code: JSX or TSX source code to scan
            file_path: Path to the file

        Returns:
            List of ComponentEntity objects
        """
        components: list[SourceEntity] = []
        seen: set[str] = set()

        for pattern in patterns_of_kind(self.patterns, "component"):
            for match in pattern.regex.finditer(source_code):
                name = pattern.name(match)
                if not name or not name[0].isupper() or name in seen:
                    continue
                seen.add(name)

                if pattern.resolves_body:
                    attributes = resolve_component_attributes(
                        source_code, match.end(), pattern.params(match), self.patterns
                    )
                else:
                    # Class components: props/hooks are not recovered
                    attributes = ComponentAttributes()

                components.append(ComponentEntity(
                    name=name,
                    file_path=file_path,
                    props=tuple(attributes.props),
                    hooks=tuple(attributes.hooks),
                ))

        logger.debug(f"Found {len(components)} React components in {file_path}")
        return components
