from dataclasses import dataclass, field
from typing import ClassVar, Iterator

# Result set statuses
STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_NO_MATCHES = "no_matches"
STATUS_INVALID_PATTERN = "invalid_pattern"

GLOBAL_NAMESPACE = "Global"


@dataclass(frozen=True)
class MethodEntity:
    """A method recovered from a class body."""
    name: str
    return_type: str = ""
    is_public: bool = True
    is_static: bool = False
    parameters: tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceEntity:
    """Base for every entity recovered from a source file.

    Subclasses list the fields a search looks at in ``SEARCH_FIELDS``, name
    first. String fields are searched as-is, tuple fields element by element,
    and nested methods by their name.
    """
    kind: ClassVar[str] = "entity"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("name",)

    name: str
    file_path: str

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity used for de-duplication: (kind, name, file path)."""
        return (self.kind, self.name, self.file_path)

    def sort_key(self) -> tuple[str, ...]:
        return (self.name, self.file_path)

    def searchable_fields(self) -> Iterator[str]:
        for field_name in self.SEARCH_FIELDS:
            value = getattr(self, field_name)
            if isinstance(value, str):
                yield value
            else:
                for item in value:
                    yield item.name if isinstance(item, MethodEntity) else item


@dataclass(frozen=True)
class FunctionEntity(SourceEntity):
    """A free function, arrow binding, or object method."""
    kind: ClassVar[str] = "function"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("name", "parameters")

    parameters: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassEntity(SourceEntity):
    """A class declaration and the methods found in its body."""
    kind: ClassVar[str] = "class"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("name", "methods")

    namespace: str = ""
    base_class: str | None = None
    methods: tuple[MethodEntity, ...] = ()

    def sort_key(self) -> tuple[str, ...]:
        return (self.namespace, self.name, self.file_path)


@dataclass(frozen=True)
class NamespaceEntity(SourceEntity):
    """A namespace declared in a file (kept even when it holds no classes)."""
    kind: ClassVar[str] = "namespace"


@dataclass(frozen=True)
class ComponentEntity(SourceEntity):
    """A UI component.

    React components fill ``props`` and ``hooks``. Vue single-file components
    fill ``props``, ``data``, ``methods`` and ``computed_properties``, and set
    ``is_alternate_syntax`` when declared with ``<script setup>``.
    """
    kind: ClassVar[str] = "component"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = (
        "name", "props", "hooks", "data", "methods", "computed_properties"
    )

    props: tuple[str, ...] = ()
    hooks: tuple[str, ...] = ()  # Sorted
    data: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    computed_properties: tuple[str, ...] = ()
    is_alternate_syntax: bool = False


@dataclass
class QuerySpec:
    """Free-text search options applied to every extracted entity."""
    search_term: str = ""
    use_regex: bool = False
    case_sensitive: bool = False
    highlight_matches: bool = True


@dataclass
class DirectoryNode:
    """Snapshot of one directory in the project tree."""
    name: str
    files: list[str] = field(default_factory=list)
    subdirectories: list["DirectoryNode"] = field(default_factory=list)


@dataclass
class CSharpAnalysis:
    namespaces: dict[str, list[str]] = field(default_factory=dict)
    classes: list[ClassEntity] = field(default_factory=list)
    status: str = STATUS_EMPTY


@dataclass
class JavaScriptAnalysis:
    functions: list[FunctionEntity] = field(default_factory=list)
    classes: list[ClassEntity] = field(default_factory=list)
    status: str = STATUS_EMPTY


@dataclass
class ComponentAnalysis:
    components: list[ComponentEntity] = field(default_factory=list)
    status: str = STATUS_EMPTY


@dataclass
class AnalysisResult:
    """Everything one analysis run produced for a project root."""
    file_types: dict[str, int] = field(default_factory=dict)
    directory_tree: DirectoryNode = field(default_factory=lambda: DirectoryNode(name=""))
    csharp: CSharpAnalysis = field(default_factory=CSharpAnalysis)
    javascript: JavaScriptAnalysis = field(default_factory=JavaScriptAnalysis)
    react: ComponentAnalysis = field(default_factory=ComponentAnalysis)
    vue: ComponentAnalysis = field(default_factory=ComponentAnalysis)
    failed_files: list[str] = field(default_factory=list)  # Sorted, distinct
