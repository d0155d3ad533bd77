import tree_sitter_c_sharp
from tree_sitter import Language, Parser

from codescout.models import (
    GLOBAL_NAMESPACE,
    ClassEntity,
    MethodEntity,
    NamespaceEntity,
    SourceEntity,
)
from codescout.parsers.base import BaseParser

_NAMESPACE_TYPES = ("namespace_declaration", "file_scoped_namespace_declaration")
# Type declarations whose bodies may hold nested classes
_CONTAINER_TYPES = (
    "struct_declaration",
    "record_declaration",
    "interface_declaration",
)


class CSharpParser(BaseParser):
    """Parser for extracting namespaces and classes from C# using tree-sitter."""

    dialect = "csharp"
    extensions = (".cs",)

    def __init__(self):
        self.language = Language(tree_sitter_c_sharp.language())
        self.parser = Parser(self.language)

    def extract_entities(self, source_code: str, file_path: str) -> list[SourceEntity]:
        """Extract namespaces and classes (with their methods) from C# source.

        Args:
            source_code: C# source code to parse
            file_path: Path to the file

        Returns:
            List of NamespaceEntity and ClassEntity objects in source order
        """
        source = bytes(source_code, "utf8")
        tree = self.parser.parse(source)
        entities: list[SourceEntity] = []

        self._walk(tree.root_node, source, file_path, GLOBAL_NAMESPACE, entities)

        return entities

    def _walk(self, node, source: bytes, file_path: str, namespace: str, entities: list) -> None:
        """Collect declarations below ``node``.

        A file-scoped namespace (``namespace Foo;``) applies to every sibling
        that follows it, so ``namespace`` is rebound while iterating.
        """
        for child in node.children:
            if child.type in _NAMESPACE_TYPES:
                name = self._text(child.child_by_field_name("name"), source)
                entities.append(NamespaceEntity(name=name, file_path=file_path))

                if child.type == "file_scoped_namespace_declaration":
                    namespace = name
                    self._walk(child, source, file_path, name, entities)
                else:
                    body = child.child_by_field_name("body")
                    if body:
                        self._walk(body, source, file_path, name, entities)

            elif child.type == "class_declaration":
                entities.append(self._build_class(child, source, file_path, namespace))
                body = child.child_by_field_name("body")
                if body:
                    self._walk(body, source, file_path, namespace, entities)

            elif child.type in _CONTAINER_TYPES:
                body = child.child_by_field_name("body")
                if body:
                    self._walk(body, source, file_path, namespace, entities)

            elif child.type == "declaration_list":
                self._walk(child, source, file_path, namespace, entities)

    def _build_class(self, node, source: bytes, file_path: str, namespace: str) -> ClassEntity:
        """Build a ClassEntity including every method declared beneath it."""
        name = self._text(node.child_by_field_name("name"), source)

        base_class = None
        for child in node.children:
            if child.type == "base_list":
                base_class = self._text(child, source).lstrip(":").strip()
                break

        methods = tuple(
            self._build_method(method_node, source)
            for method_node in self._descendants(node, "method_declaration")
        )

        return ClassEntity(
            name=name,
            file_path=file_path,
            namespace=namespace,
            base_class=base_class,
            methods=methods,
        )

    def _build_method(self, node, source: bytes) -> MethodEntity:
        """Build a MethodEntity from a method_declaration node."""
        name = self._text(node.child_by_field_name("name"), source)

        # Older grammars name the return type field "type"
        return_node = node.child_by_field_name("returns") or node.child_by_field_name("type")
        return_type = self._text(return_node, source)

        modifiers = {
            self._text(child, source) for child in node.children if child.type == "modifier"
        }

        return MethodEntity(
            name=name,
            return_type=return_type,
            is_public="public" in modifiers,
            is_static="static" in modifiers,
            parameters=tuple(self._extract_parameters(node, source)),
        )

    def _extract_parameters(self, node, source: bytes) -> list[str]:
        """Render each parameter as ``"<type> <name>"``."""
        parameters = []

        params_node = node.child_by_field_name("parameters")
        if not params_node:
            return parameters

        for child in params_node.children:
            # Skip punctuation tokens (, ), ,
            if child.type != "parameter":
                continue

            param_type = self._text(child.child_by_field_name("type"), source)
            param_name = self._text(child.child_by_field_name("name"), source)
            parameters.append(f"{param_type} {param_name}".strip())

        return parameters

    def _descendants(self, node, node_type: str) -> list:
        """Return all descendants of ``node`` with the given type, in source order."""
        found = []
        stack = list(reversed(node.children))
        while stack:
            current = stack.pop()
            if current.type == node_type:
                found.append(current)
            stack.extend(reversed(current.children))
        return found

    @staticmethod
    def _text(node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte:node.end_byte].decode("utf8", errors="replace")
