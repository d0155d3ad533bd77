from pathlib import Path
from typing import Mapping

from codescout.attributes import resolve_option_sections, resolve_setup_bindings
from codescout.models import ComponentEntity, SourceEntity
from codescout.parsers.base import BaseParser
from codescout.patterns import VUE_PATTERNS, EntityPattern


class VueParser(BaseParser):
    """Heuristic extractor for Vue single-file components.

    Handles the Options API (``export default { props, data, methods,
    computed }``) and detects ``<script setup>``, for which only defineProps
    and top-level bindings are recovered.
    """

    dialect = "vue"
    extensions = (".vue",)

    def __init__(self, patterns: Mapping[str, EntityPattern] = VUE_PATTERNS):
        self.patterns = patterns

    def extract_entities(self, source_code: str, file_path: str) -> list[SourceEntity]:
        is_setup = self.patterns["setup_tag"].regex.search(source_code) is not None
        options_script = self.patterns["options_script"].regex.search(source_code)

        name = ""
        props: list[str] = []
        data: list[str] = []
        methods: list[str] = []
        computed: list[str] = []

        if options_script:
            sections = resolve_option_sections(options_script.group(1), self.patterns)
            name = sections.name
            props, data, methods, computed = (
                sections.props, sections.data, sections.methods, sections.computed
            )
        elif is_setup:
            name = Path(file_path).stem
            setup_script = self.patterns["setup_script"].regex.search(source_code)
            script = setup_script.group(1) if setup_script else source_code
            props, methods = resolve_setup_bindings(script, self.patterns)

        if not (name or is_setup or props or data or methods or computed):
            return []

        return [ComponentEntity(
            name=name,
            file_path=file_path,
            props=tuple(props),
            data=tuple(data),
            methods=tuple(methods),
            computed_properties=tuple(computed),
            is_alternate_syntax=is_setup,
        )]
