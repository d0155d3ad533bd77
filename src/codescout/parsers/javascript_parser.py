from typing import Mapping

from codescout.models import ClassEntity, FunctionEntity, MethodEntity, SourceEntity
from codescout.parsers.base import BaseParser
from codescout.patterns import JAVASCRIPT_PATTERNS, JS_KEYWORDS, EntityPattern, patterns_of_kind
from codescout.scanner import brace_contents, split_parameters

ANONYMOUS = "<anonymous>"


class JavaScriptParser(BaseParser):
    """Heuristic extractor for plain JavaScript functions and classes."""

    dialect = "javascript"
    extensions = (".js",)

    def __init__(self, patterns: Mapping[str, EntityPattern] = JAVASCRIPT_PATTERNS):
        self.patterns = patterns

    def extract_entities(self, source_code: str, file_path: str) -> list[SourceEntity]:
        """Extract functions and classes from JavaScript source code.

        Every function pattern runs over the whole file independently, so the
        same function is often found more than once; the aggregator keeps the
        first discovery.

        Args:
            source_code: JavaScript source code to scan
            file_path: Path to the file

        Returns:
            List of FunctionEntity and ClassEntity objects
        """
        entities: list[SourceEntity] = []
        entities.extend(self._extract_functions(source_code, file_path))
        entities.extend(self._extract_classes(source_code, file_path))
        return entities

    def _extract_functions(self, source_code: str, file_path: str) -> list[FunctionEntity]:
        functions = []

        for pattern in patterns_of_kind(self.patterns, "function"):
            for match in pattern.regex.finditer(source_code):
                name = pattern.name(match) or ANONYMOUS
                if name in JS_KEYWORDS:
                    continue

                functions.append(FunctionEntity(
                    name=name,
                    file_path=file_path,
                    parameters=tuple(split_parameters(pattern.params(match))),
                ))

        return functions

    def _extract_classes(self, source_code: str, file_path: str) -> list[ClassEntity]:
        classes = []

        for pattern in patterns_of_kind(self.patterns, "class"):
            for match in pattern.regex.finditer(source_code):
                body = brace_contents(source_code, match.end())
                methods = self._extract_methods(body) if body is not None else ()

                classes.append(ClassEntity(
                    name=pattern.name(match),
                    file_path=file_path,
                    base_class=pattern.base(match),
                    methods=methods,
                ))

        return classes

    def _extract_methods(self, class_body: str) -> tuple[MethodEntity, ...]:
        """Extract methods from a class body, first occurrence of each name wins."""
        methods: dict[str, MethodEntity] = {}

        for pattern in patterns_of_kind(self.patterns, "class_member"):
            for match in pattern.regex.finditer(class_body):
                name = pattern.name(match)
                if not name or name in JS_KEYWORDS or name in methods:
                    continue

                methods[name] = MethodEntity(
                    name=name,
                    is_public=not name.startswith("#"),
                    is_static="static" in pattern.modifiers(match),
                    parameters=tuple(split_parameters(pattern.params(match))),
                )

        return tuple(methods.values())
