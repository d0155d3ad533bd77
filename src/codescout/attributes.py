"""Secondary attributes of component-shaped entities.

Given where a component signature ends, the resolver finds the body with the
delimiter scanner and runs independent regex passes over that body only:
hooks, props, and (for Vue option objects) data/methods/computed members.
"""

from dataclasses import dataclass, field
from typing import Mapping

from codescout.patterns import REACT_PATTERNS, VUE_PATTERNS, EntityPattern
from codescout.scanner import NO_BLOCK, block_contents, find_block_end, split_parameters

TYPED_PROPS_PREFIX = "Type: "
SETUP_SUFFIX = " (setup)"


@dataclass
class ComponentAttributes:
    props: list[str] = field(default_factory=list)
    hooks: list[str] = field(default_factory=list)


@dataclass
class OptionSections:
    """Members enumerated from a Vue options object."""
    name: str = ""
    props: list[str] = field(default_factory=list)
    data: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)
    computed: list[str] = field(default_factory=list)


def resolve_component_attributes(
    content: str,
    signature_end: int,
    params_text: str,
    patterns: Mapping[str, EntityPattern] = REACT_PATTERNS,
) -> ComponentAttributes:
    """Recover hooks and props for a function or arrow component.

    Args:
        content: Full file text.
        signature_end: Offset just past the component signature.
        params_text: Raw text of the component's parameter list.
        patterns: Pattern table providing ``hook`` and ``props_*`` entries.

    Returns:
        ComponentAttributes. Both collections are empty when no body follows
        the signature; the component is still worth recording.
    """
    body_end = find_block_end(content, signature_end)
    if body_end == NO_BLOCK or body_end <= signature_end:
        return ComponentAttributes()

    body = content[signature_end:body_end]
    return ComponentAttributes(
        props=extract_props(params_text, body, patterns),
        hooks=extract_hooks(body, patterns),
    )


def extract_hooks(body: str, patterns: Mapping[str, EntityPattern] = REACT_PATTERNS) -> list[str]:
    """Return the distinct hooks called in ``body``, sorted alphabetically."""
    hook_pattern = patterns["hook"]
    hooks = {hook_pattern.name(match).rstrip("(") for match in hook_pattern.regex.finditer(body)}
    return sorted(hooks)


def extract_props(
    params_text: str,
    body: str,
    patterns: Mapping[str, EntityPattern] = REACT_PATTERNS,
) -> list[str]:
    """Collect props from the signature and body.

    Strategies, unioned in order:
    - destructured parameter: ``({ a, b = 1, c: alias })`` gives a, b, c
    - dotted access: ``props.a`` in the body, only when the sole parameter is
      literally ``props``
    - typed parameter: ``(props: ButtonProps)`` gives ``Type: ButtonProps``
    """
    params = params_text.strip()
    props: list[str] = []

    destructure = patterns["props_destructure"].regex.search(params)
    if destructure:
        props.extend(_destructured_names(destructure.group(1)))
    elif params == "props":
        props.extend(match.group(1) for match in patterns["props_access"].regex.finditer(body))

    typed = patterns["props_typed"].regex.search(params)
    if typed:
        props.append(f"{TYPED_PROPS_PREFIX}{typed.group(1)}")

    return _distinct(props)


def _destructured_names(text: str) -> list[str]:
    names = []
    for part in split_parameters(text):
        if "..." in part:
            continue
        name = part.split(":")[0].split("=")[0].strip()
        if name:
            names.append(name)
    return names


def resolve_option_sections(
    script: str,
    patterns: Mapping[str, EntityPattern] = VUE_PATTERNS,
) -> OptionSections:
    """Enumerate name, props, data, methods and computed of an options object."""
    sections = OptionSections()

    name_match = patterns["component_name"].regex.search(script)
    if name_match:
        sections.name = name_match.group(1)

    sections.props.extend(
        block_members(script, patterns["props_block"], patterns["property_member"])
    )
    array_match = patterns["props_array"].regex.search(script)
    if array_match:
        sections.props.extend(array_items(array_match.group(1)))

    sections.data = block_members(script, patterns["data_block"], patterns["property_member"])
    sections.methods = block_members(script, patterns["methods_block"], patterns["method_member"])
    sections.computed = block_members(
        script, patterns["computed_block"], patterns["computed_member"]
    )
    return sections


def resolve_setup_bindings(
    script: str,
    patterns: Mapping[str, EntityPattern] = VUE_PATTERNS,
) -> tuple[list[str], list[str]]:
    """Lighter heuristic for ``<script setup>`` components.

    Returns:
        Tuple of (props, bindings). Bindings are the top-level function and
        const/let names, each suffixed with `` (setup)``.
    """
    props: list[str] = []

    typed = patterns["define_props_type"].regex.search(script)
    if typed:
        props.append(f"{TYPED_PROPS_PREFIX}{typed.group(1)}")

    runtime = patterns["define_props_runtime"].regex.search(script)
    if runtime:
        if script[runtime.end()] == "[":
            closing = script.find("]", runtime.end())
            props.extend(array_items(script[runtime.end() + 1:closing if closing != -1 else None]))
        else:
            contents = block_contents(script, runtime.end())
            if contents is not None:
                props.extend(_member_names(contents, patterns["property_member"]))

    binding_pattern = patterns["setup_binding"]
    bindings = [
        f"{binding_pattern.name(match)}{SETUP_SUFFIX}"
        for match in binding_pattern.regex.finditer(script)
    ]
    return _distinct(props), bindings


def block_members(script: str, section: EntityPattern, member: EntityPattern) -> list[str]:
    """Find the first ``section`` block and enumerate its members.

    The block is captured brace-balanced, so members of nested objects that
    sit on their own line are reported too.
    """
    match = section.regex.search(script)
    if not match:
        return []

    contents = block_contents(script, match.end())
    if contents is None:
        return []
    return _member_names(contents, member)


def array_items(text: str) -> list[str]:
    """Split ``'a', "b", c`` into bare names."""
    items = [part.strip().strip("'\"") for part in text.split(",")]
    return [item for item in items if item]


def _member_names(contents: str, member: EntityPattern) -> list[str]:
    return [member.name(match) for match in member.regex.finditer(contents)]


def _distinct(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))
