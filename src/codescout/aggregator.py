"""Merging, de-duplication and ordering of extracted entities.

Per-file extraction may run in any order; everything that leaves this module
is sorted so that a fixed input produces identical output on every run.
"""

import dataclasses
import logging
from typing import Iterable

from codescout.models import (
    STATUS_EMPTY,
    STATUS_NO_MATCHES,
    STATUS_OK,
    AnalysisResult,
    ClassEntity,
    ComponentAnalysis,
    ComponentEntity,
    CSharpAnalysis,
    FunctionEntity,
    JavaScriptAnalysis,
    NamespaceEntity,
    SourceEntity,
)
from codescout.search import SearchFilter

logger = logging.getLogger(__name__)


def deduplicate(entities: Iterable[SourceEntity]) -> list[SourceEntity]:
    """Drop later entities sharing (kind, name, file path) with an earlier one."""
    seen = set()
    unique = []
    for entity in entities:
        if entity.key in seen:
            continue
        seen.add(entity.key)
        unique.append(entity)
    return unique


def aggregate(partials: Iterable[list[SourceEntity]]) -> list[SourceEntity]:
    """Merge per-file entity lists into one de-duplicated, sorted list.

    Args:
        partials: One list per file, each in that file's discovery order.

    Returns:
        Entities ordered by kind, then by each entity's sort key.
    """
    merged = [entity for partial in partials for entity in partial]
    unique = deduplicate(merged)
    return sorted(unique, key=lambda entity: (entity.kind, *entity.sort_key()))


def build_csharp_result(
    classes: list[ClassEntity],
    namespaces: Iterable[str],
    search_filter: SearchFilter,
) -> CSharpAnalysis:
    """Build the C# result set.

    Without a search term every declared namespace is listed, plus ``Global``
    when a class sits outside any namespace. With one, a namespace is listed
    when its own name matches or it holds a kept class.
    """
    namespaces = sorted(set(namespaces) | {cls.namespace for cls in classes})
    declared = namespaces
    filtered = search_filter.filter(classes)
    kept_classes = filtered.entities

    if search_filter.is_active:
        holders = {cls.namespace for cls in kept_classes}
        declared = [ns for ns in declared if ns in holders or search_filter.matches(ns)]

    index: dict[str, list[str]] = {}
    for namespace in declared:
        index[namespace] = sorted({cls.name for cls in kept_classes if cls.namespace == namespace})

    if not classes and not namespaces:
        logger.info("No C# classes were found in the analyzed files.")
        status = STATUS_EMPTY
    elif search_filter.is_active and not kept_classes and not declared:
        logger.info("No C# classes matched the search criteria.")
        status = STATUS_NO_MATCHES
    else:
        status = STATUS_OK

    return CSharpAnalysis(namespaces=index, classes=kept_classes, status=status)


def build_javascript_result(
    functions: list[FunctionEntity],
    classes: list[ClassEntity],
    search_filter: SearchFilter,
) -> JavaScriptAnalysis:
    filtered = search_filter.filter([*functions, *classes])

    if filtered.status == STATUS_EMPTY:
        logger.info("No JavaScript functions or classes were found in the analyzed files.")
    elif filtered.status == STATUS_NO_MATCHES:
        logger.info("No JavaScript functions or classes matched the search criteria.")

    return JavaScriptAnalysis(
        functions=[e for e in filtered.entities if isinstance(e, FunctionEntity)],
        classes=[e for e in filtered.entities if isinstance(e, ClassEntity)],
        status=filtered.status,
    )


def build_component_result(
    components: list[ComponentEntity],
    search_filter: SearchFilter,
    label: str,
) -> ComponentAnalysis:
    filtered = search_filter.filter(components)

    if filtered.status == STATUS_EMPTY:
        logger.info(f"No {label} components were found in the analyzed files.")
    elif filtered.status == STATUS_NO_MATCHES:
        logger.info(f"No {label} components matched the search criteria.")

    return ComponentAnalysis(components=filtered.entities, status=filtered.status)


def build_dialect_result(dialect: str, entities: list[SourceEntity], search_filter: SearchFilter):
    """Split a dialect's aggregated entities by type and build its result set."""
    classes = [e for e in entities if isinstance(e, ClassEntity)]

    if dialect == "csharp":
        namespaces = [e.name for e in entities if isinstance(e, NamespaceEntity)]
        return build_csharp_result(classes, namespaces, search_filter)
    if dialect == "javascript":
        functions = [e for e in entities if isinstance(e, FunctionEntity)]
        return build_javascript_result(functions, classes, search_filter)

    components = [e for e in entities if isinstance(e, ComponentEntity)]
    label = "React" if dialect == "react" else "Vue"
    return build_component_result(components, search_filter, label)


def refilter_result(result: AnalysisResult, search_filter: SearchFilter) -> AnalysisResult:
    """Apply another filter to an existing result without rescanning files."""
    return dataclasses.replace(
        result,
        csharp=build_csharp_result(
            result.csharp.classes, result.csharp.namespaces.keys(), search_filter
        ),
        javascript=build_javascript_result(
            result.javascript.functions, result.javascript.classes, search_filter
        ),
        react=build_component_result(result.react.components, search_filter, "React"),
        vue=build_component_result(result.vue.components, search_filter, "Vue"),
    )


def highlight_result(result: AnalysisResult, search_filter: SearchFilter) -> AnalysisResult:
    """Return a display copy of ``result`` with matches highlighted."""
    if not search_filter.is_active:
        return result

    def _highlight(entities):
        return [search_filter.highlight_entity(entity) for entity in entities]

    return dataclasses.replace(
        result,
        csharp=dataclasses.replace(result.csharp, classes=_highlight(result.csharp.classes)),
        javascript=dataclasses.replace(
            result.javascript,
            functions=_highlight(result.javascript.functions),
            classes=_highlight(result.javascript.classes),
        ),
        react=dataclasses.replace(result.react, components=_highlight(result.react.components)),
        vue=dataclasses.replace(result.vue, components=_highlight(result.vue.components)),
    )
