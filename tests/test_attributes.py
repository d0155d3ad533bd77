"""Tests for component attribute resolution."""

from codescout.attributes import (
    array_items,
    extract_hooks,
    extract_props,
    resolve_component_attributes,
    resolve_option_sections,
    resolve_setup_bindings,
)

OPTIONS_SCRIPT = """
export default {
  name: 'TodoList',
  props: {
    items: Array,
    title: String
  },
  data() {
    return {
      newItem: '',
      count: 0
    }
  },
  methods: {
    addItem() {
      this.count++
    },
    removeItem: function (index) {
      this.count--
    }
  },
  computed: {
    total() {
      return this.count
    }
  }
}
"""


class TestExtractHooks:
    """Tests for hook discovery."""

    def test_distinct_and_sorted(self):
        body = "useState(0); useEffect(() => {}); useState(1); useCustomThing();"
        assert extract_hooks(body) == ["useCustomThing", "useEffect", "useState"]

    def test_no_hooks(self):
        assert extract_hooks("return null;") == []


class TestExtractProps:
    """Tests for prop discovery strategies."""

    def test_destructured_parameter(self):
        props = extract_props("{ label, onClick = noop, value: alias, ...rest }", "")
        assert props == ["label", "onClick", "value"]

    def test_props_access_when_parameter_is_props(self):
        props = extract_props("props", "props.title + props.count + props.title")
        assert props == ["title", "count"]

    def test_props_access_ignored_for_other_parameter_names(self):
        assert extract_props("other", "props.title") == []

    def test_typed_parameter(self):
        assert extract_props("props: ButtonProps", "") == ["Type: ButtonProps"]

    def test_no_parameters(self):
        assert extract_props("", "props.title") == []


class TestResolveComponentAttributes:
    """Tests for body location plus attribute passes."""

    def test_scans_body_only(self):
        content = (
            "import { useState } from 'react';\n"
            "function Widget({ label }) {\n"
            "  useEffect(() => {}, []);\n"
            "  return null;\n"
            "}\n"
            "function Other() { useRef(); }\n"
        )
        signature_end = content.index("{ label })") + len("{ label })")

        attributes = resolve_component_attributes(content, signature_end, "{ label }")

        assert attributes.props == ["label"]
        assert attributes.hooks == ["useEffect"]

    def test_no_body_yields_empty_attributes(self):
        content = "const Empty = () => null;\n"
        signature_end = content.index("=>") + 2

        attributes = resolve_component_attributes(content, signature_end, "")

        assert attributes.props == []
        assert attributes.hooks == []


class TestResolveOptionSections:
    """Tests for Vue options object enumeration."""

    def test_all_sections(self):
        sections = resolve_option_sections(OPTIONS_SCRIPT)

        assert sections.name == "TodoList"
        assert sections.props == ["items", "title"]
        assert sections.data == ["newItem", "count"]
        assert sections.methods == ["addItem", "removeItem"]
        assert sections.computed == ["total"]

    def test_props_array_form(self):
        sections = resolve_option_sections("export default { props: ['size', \"color\"] }")
        assert sections.props == ["size", "color"]

    def test_missing_sections(self):
        sections = resolve_option_sections("export default {}")

        assert sections.name == ""
        assert sections.props == []
        assert sections.data == []
        assert sections.methods == []
        assert sections.computed == []


class TestResolveSetupBindings:
    """Tests for the <script setup> heuristic."""

    def test_runtime_array_props_and_bindings(self):
        script = (
            "\nconst props = defineProps(['title', 'count'])\n"
            "const total = ref(0)\n"
            "function increment() {\n"
            "  total.value++\n"
            "}\n"
        )

        props, bindings = resolve_setup_bindings(script)

        assert props == ["title", "count"]
        assert bindings == ["props (setup)", "total (setup)", "increment (setup)"]

    def test_runtime_object_props(self):
        script = "defineProps({\n  title: String,\n  count: Number\n})\n"

        props, bindings = resolve_setup_bindings(script)

        assert props == ["title", "count"]
        assert bindings == []

    def test_typed_props(self):
        props, _ = resolve_setup_bindings("const props = defineProps<Props>()\n")
        assert props == ["Type: Props"]


def test_array_items_strips_quotes_and_blanks():
    assert array_items(" 'a', \"b\" , c, ") == ["a", "b", "c"]
