import pytest

from codescout.patterns import (
    JAVASCRIPT_PATTERNS,
    REACT_PATTERNS,
    VUE_PATTERNS,
    patterns_of_kind,
)


def test_pattern_tables_are_immutable():
    with pytest.raises(TypeError):
        JAVASCRIPT_PATTERNS["extra"] = JAVASCRIPT_PATTERNS["function_declaration"]


def test_patterns_of_kind_keeps_table_order():
    functions = patterns_of_kind(JAVASCRIPT_PATTERNS, "function")

    assert functions == [
        JAVASCRIPT_PATTERNS["function_declaration"],
        JAVASCRIPT_PATTERNS["arrow_function"],
        JAVASCRIPT_PATTERNS["object_function_value"],
        JAVASCRIPT_PATTERNS["method_shorthand"],
    ]


def test_patterns_of_kind_unknown_kind():
    assert patterns_of_kind(REACT_PATTERNS, "nope") == []


def test_arrow_function_with_parenthesized_params():
    pattern = JAVASCRIPT_PATTERNS["arrow_function"]
    match = pattern.regex.search("const add = (a, b) => a + b;")

    assert pattern.name(match) == "add"
    assert pattern.params(match) == "a, b"


def test_arrow_function_with_single_bare_param():
    pattern = JAVASCRIPT_PATTERNS["arrow_function"]
    match = pattern.regex.search("let inc = x => x + 1;")

    assert pattern.name(match) == "inc"
    assert pattern.params(match) == "x"


def test_anonymous_function_declaration_has_empty_name():
    pattern = JAVASCRIPT_PATTERNS["function_declaration"]
    match = pattern.regex.search("setTimeout(function () { run(); });")

    assert pattern.name(match) == ""


def test_class_declaration_with_dotted_base():
    pattern = JAVASCRIPT_PATTERNS["class_declaration"]
    match = pattern.regex.search("export default class App extends React.Component {")

    assert pattern.name(match) == "App"
    assert pattern.base(match) == "React.Component"


def test_class_declaration_without_base():
    pattern = JAVASCRIPT_PATTERNS["class_declaration"]
    match = pattern.regex.search("class Queue {")

    assert pattern.base(match) is None


def test_class_method_modifiers():
    pattern = JAVASCRIPT_PATTERNS["class_method"]
    match = pattern.regex.search("static async create(x) {")

    assert pattern.name(match) == "create"
    assert pattern.modifiers(match) == ["static", "async"]
    assert pattern.params(match) == "x"


def test_modifiers_empty_without_modifier_group():
    pattern = JAVASCRIPT_PATTERNS["function_declaration"]
    match = pattern.regex.search("function f() {}")

    assert pattern.modifiers(match) == []


def test_component_arrow_with_fc_annotation():
    pattern = REACT_PATTERNS["component_arrow"]
    match = pattern.regex.search("const Card: React.FC<CardProps> = ({ title }) => (")

    assert pattern.name(match) == "Card"
    assert pattern.params(match) == "{ title }"


def test_component_function_requires_uppercase_name():
    pattern = REACT_PATTERNS["component_function"]

    assert pattern.regex.search("function helper(x) {}") is None


def test_component_class_known_bases():
    pattern = REACT_PATTERNS["component_class"]

    assert pattern.regex.search("class A extends Component {")
    assert pattern.regex.search("class B extends React.PureComponent {")
    assert pattern.regex.search("class C extends Base {") is None
    assert pattern.resolves_body is False


def test_hook_requires_word_boundary():
    pattern = REACT_PATTERNS["hook"]

    assert pattern.regex.search("reuseState(1)") is None
    assert pattern.name(pattern.regex.search("x = useMemo(() => 1)")) == "useMemo("


def test_vue_options_script_skips_setup_tag():
    pattern = VUE_PATTERNS["options_script"]

    assert pattern.regex.search("<script setup>\nconst a = 1\n</script>") is None
    assert pattern.regex.search('<script lang="ts">\nexport default {}\n</script>')


def test_vue_setup_binding_name_groups():
    pattern = VUE_PATTERNS["setup_binding"]
    names = [
        pattern.name(match)
        for match in pattern.regex.finditer("const count = ref(0)\nfunction bump() {}\n")
    ]

    assert names == ["count", "bump"]
