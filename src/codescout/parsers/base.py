from abc import ABC, abstractmethod

from codescout.models import SourceEntity


class BaseParser(ABC):
    """Abstract base class for dialect-specific entity extractors.

    Implementations are either grammar-backed (tree-sitter) or heuristic
    (regex tables plus the delimiter scanner); callers cannot tell them apart.
    """

    dialect: str = ""
    extensions: tuple[str, ...] = ()

    @abstractmethod
    def extract_entities(self, source_code: str, file_path: str) -> list[SourceEntity]:
        """Extract all entities (functions, classes, components) from source code.

        Args:
            source_code: The source code to parse
            file_path: Path to the file (for SourceEntity.file_path)

        Returns:
            List of entities in discovery order, possibly with duplicates
        """
        pass
