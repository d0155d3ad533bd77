"""Regex tables for the heuristic dialects.

Each dialect is an immutable, ordered mapping from pattern name to an
``EntityPattern``. Extractors iterate the patterns of the kind they need in
table order, so adding a pattern (or a dialect) only touches this module.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

IDENT = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

# Names the shorthand method patterns pick up from control-flow statements
# such as ``if (ready) {``.
JS_KEYWORDS = frozenset({
    "if", "for", "while", "switch", "catch", "function", "return", "with",
    "do", "else", "typeof", "new", "super", "await", "yield",
})


@dataclass(frozen=True)
class EntityPattern:
    """A compiled pattern plus the capture groups it reports.

    Attributes:
        kind: Role of the pattern ("function", "class", "component", "hook",
            "section", "member", ...).
        regex: Compiled regular expression.
        name_groups: Groups holding the entity name; the first that
            participated in the match wins.
        params_groups: Groups holding raw parameter (or prop) text.
        base_group: Group holding an inheritance clause, if any.
        modifier_group: Group holding leading modifiers, if any.
        resolves_body: Whether a body should be scanned after the match.
    """
    kind: str
    regex: re.Pattern
    name_groups: tuple[int, ...] = (1,)
    params_groups: tuple[int, ...] = ()
    base_group: int | None = None
    modifier_group: int | None = None
    resolves_body: bool = True

    def name(self, match: re.Match) -> str:
        return _first_group(match, self.name_groups).strip()

    def params(self, match: re.Match) -> str:
        return _first_group(match, self.params_groups)

    def base(self, match: re.Match) -> str | None:
        if self.base_group is None:
            return None
        return match.group(self.base_group)

    def modifiers(self, match: re.Match) -> list[str]:
        if self.modifier_group is None:
            return []
        return (match.group(self.modifier_group) or "").split()


def _first_group(match: re.Match, groups: tuple[int, ...]) -> str:
    for group in groups:
        value = match.group(group)
        if value is not None:
            return value
    return ""


def _compile(pattern: str, flags: int = re.MULTILINE) -> re.Pattern:
    return re.compile(pattern, flags)


JAVASCRIPT_PATTERNS: Mapping[str, EntityPattern] = MappingProxyType({
    # function name(a, b) / function (a, b)
    "function_declaration": EntityPattern(
        kind="function",
        regex=_compile(rf"\bfunction\b\s*({IDENT})?\s*\(([^)]*)\)"),
        params_groups=(2,),
    ),
    # const name = (a, b) => / const name = a =>
    "arrow_function": EntityPattern(
        kind="function",
        regex=_compile(
            rf"\b(?:const|let|var)\s+({IDENT})\s*=\s*(?:async\s+)?"
            rf"(?:\(([^)]*)\)|({IDENT}))\s*=>"
        ),
        params_groups=(2, 3),
    ),
    # name: function (a, b)
    "object_function_value": EntityPattern(
        kind="function",
        regex=_compile(rf"({IDENT})\s*:\s*function\s*\(([^)]*)\)"),
        params_groups=(2,),
    ),
    # name(a, b) {
    "method_shorthand": EntityPattern(
        kind="function",
        regex=_compile(rf"({IDENT})\s*\(([^)]*)\)\s*\{{"),
        params_groups=(2,),
    ),
    # [export [default]] class Name [extends Base]
    "class_declaration": EntityPattern(
        kind="class",
        regex=_compile(
            rf"(?:\bexport\s+(?:default\s+)?)?\bclass\s+({IDENT})"
            rf"(?:\s+extends\s+({IDENT}(?:\.{IDENT})*))?"
        ),
        base_group=2,
    ),
    # [static|get|set|async] name(a, b) {  (inside a class body)
    "class_method": EntityPattern(
        kind="class_member",
        regex=_compile(
            rf"((?:(?:static|get|set|async)\s+)*)(#?{IDENT})\s*\(([^)]*)\)\s*\{{"
        ),
        name_groups=(2,),
        params_groups=(3,),
        modifier_group=1,
    ),
})


REACT_PATTERNS: Mapping[str, EntityPattern] = MappingProxyType({
    # function Name<T>(props)
    "component_function": EntityPattern(
        kind="component",
        regex=_compile(rf"\bfunction\s+([A-Z][a-zA-Z0-9_$]*)(?:<[^>]*>)?\s*\(([^)]*)\)"),
        params_groups=(2,),
    ),
    # const Name[: React.FC<P>] = (props) =>
    "component_arrow": EntityPattern(
        kind="component",
        regex=_compile(
            rf"\b(?:const|let|var)\s+([A-Z][a-zA-Z0-9_$]*)"
            rf"(?:\s*:\s*React\.(?:FC|FunctionComponent)<[^>]*>)?"
            rf"\s*=\s*(?:async\s+)?(?:\(([^)]*)\)|({IDENT}))\s*=>"
        ),
        params_groups=(2, 3),
    ),
    # class Name extends [React.]Component|PureComponent
    "component_class": EntityPattern(
        kind="component",
        regex=_compile(
            r"\bclass\s+([A-Z][a-zA-Z0-9_$]*)\s+extends\s+"
            r"((?:React\.)?(?:Component|PureComponent))\b"
        ),
        base_group=2,
        resolves_body=False,
    ),
    "hook": EntityPattern(
        kind="hook",
        regex=_compile(
            r"\buse(?:State|Effect|Context|Reducer|Callback|Memo|Ref|ImperativeHandle"
            r"|LayoutEffect|DebugValue|[A-Z][a-zA-Z0-9_$]*)\("
        ),
        name_groups=(0,),
    ),
    # ({ label, onClick = noop, value: alias, ...rest })
    "props_destructure": EntityPattern(
        kind="props",
        regex=_compile(r"\{([^}]+)\}"),
    ),
    # props.label (only consulted when the sole parameter is ``props``)
    "props_access": EntityPattern(
        kind="props",
        regex=_compile(rf"\bprops\.({IDENT})"),
    ),
    # (props: ButtonProps)
    "props_typed": EntityPattern(
        kind="props",
        regex=_compile(rf"^\s*{IDENT}\s*:\s*(\w+)\s*$"),
    ),
})


VUE_PATTERNS: Mapping[str, EntityPattern] = MappingProxyType({
    "setup_tag": EntityPattern(
        kind="marker",
        regex=_compile(r"<script[^>]*\ssetup[^>]*>", re.IGNORECASE),
        name_groups=(0,),
    ),
    "options_script": EntityPattern(
        kind="section",
        regex=_compile(r"<script(?![^>]*\ssetup)[^>]*>(.*?)</script>", re.DOTALL | re.IGNORECASE),
    ),
    "setup_script": EntityPattern(
        kind="section",
        regex=_compile(r"<script[^>]*\ssetup[^>]*>(.*?)</script>", re.DOTALL | re.IGNORECASE),
    ),
    "component_name": EntityPattern(
        kind="name",
        regex=_compile(r"\bname\s*:\s*['\"]([^'\"]+)['\"]"),
    ),
    # Block openers: the block itself is captured with the delimiter scanner.
    "props_block": EntityPattern(
        kind="section",
        regex=_compile(r"\bprops\s*:\s*(?=\{)"),
        name_groups=(0,),
    ),
    "props_array": EntityPattern(
        kind="section",
        regex=_compile(r"\bprops\s*:\s*\[([^\]]*)\]"),
    ),
    "data_block": EntityPattern(
        kind="section",
        regex=_compile(r"\bdata\s*\(\s*\)\s*\{\s*return\s*(?=\{)"),
        name_groups=(0,),
    ),
    "methods_block": EntityPattern(
        kind="section",
        regex=_compile(r"\bmethods\s*:\s*(?=\{)"),
        name_groups=(0,),
    ),
    "computed_block": EntityPattern(
        kind="section",
        regex=_compile(r"\bcomputed\s*:\s*(?=\{)"),
        name_groups=(0,),
    ),
    # Line-anchored members inside a captured block
    "property_member": EntityPattern(
        kind="member",
        regex=_compile(rf"^\s*({IDENT})\s*:"),
    ),
    "method_member": EntityPattern(
        kind="member",
        regex=_compile(
            rf"^\s*(?:async\s+)?({IDENT})\s*(?:\([^)]*\)\s*\{{|:\s*function\s*\([^)]*\))"
        ),
    ),
    "computed_member": EntityPattern(
        kind="member",
        regex=_compile(
            rf"^\s*({IDENT})\s*(?:\([^)]*\)\s*\{{|:\s*(?:function\s*\(|\{{\s*get\s*\())"
        ),
    ),
    # <script setup> helpers
    "define_props_type": EntityPattern(
        kind="props",
        regex=_compile(r"\bdefineProps\s*<\s*([^>]+?)\s*>\s*\(\s*\)"),
    ),
    "define_props_runtime": EntityPattern(
        kind="props",
        regex=_compile(r"\bdefineProps\s*\(\s*(?=[\[{])"),
        name_groups=(0,),
    ),
    "setup_binding": EntityPattern(
        kind="member",
        regex=_compile(
            rf"^(?:export\s+)?(?:async\s+)?function\s+({IDENT})"
            rf"|^(?:export\s+)?(?:const|let)\s+({IDENT})\s*="
        ),
        name_groups=(1, 2),
    ),
})


def patterns_of_kind(patterns: Mapping[str, EntityPattern], kind: str) -> list[EntityPattern]:
    """Return the patterns of one kind, in table order."""
    return [pattern for pattern in patterns.values() if pattern.kind == kind]
