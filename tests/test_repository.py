from pathlib import Path

import pytest

from codescout.repository import (
    NO_EXTENSION,
    ProjectNotFoundError,
    build_directory_tree,
    count_file_types,
    file_extension,
    find_project_root,
    find_source_files,
    is_excluded,
    iter_files,
    parse_extensions,
)


def _write(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_find_project_root_resolves_directory(tmp_path):
    assert find_project_root(tmp_path) == tmp_path.resolve()


def test_find_project_root_missing_directory(tmp_path):
    with pytest.raises(ProjectNotFoundError):
        find_project_root(tmp_path / "missing")


def test_find_project_root_rejects_file(tmp_path):
    file_path = _write(tmp_path, "a.js")

    with pytest.raises(ProjectNotFoundError):
        find_project_root(file_path)


def test_file_extension_is_lower_cased():
    assert file_extension(Path("Program.CS")) == ".cs"


def test_file_extension_none():
    assert file_extension(Path("Makefile")) == NO_EXTENSION


def test_parse_extensions_normalizes():
    assert parse_extensions(" .CS, js ,") == [".cs", ".js"]


def test_parse_extensions_empty():
    assert parse_extensions("") == []


@pytest.mark.parametrize(
    "path,pattern,expected",
    [
        ("src/bin/Debug/App.cs", "*/bin/*", True),
        ("bin/App.cs", "*/bin/*", True),
        ("src/binary/App.cs", "*/bin/*", False),
        ("src\\Obj\\App.cs", "obj", True),
        ("web/node_modules/lib/index.js", "node_modules", True),
        ("web/app.test.js", "*.test.js", True),
        ("web/app.js", "*.test.js", False),
        ("web/app.js", "", False),
    ],
)
def test_is_excluded(path, pattern, expected):
    assert is_excluded(path, pattern) is expected


def test_iter_files_skips_hidden_and_skip_directories(tmp_path):
    _write(tmp_path, ".git/config")
    _write(tmp_path, "bin/out.js")
    _write(tmp_path, "src/b.js")
    _write(tmp_path, "src/a.js")

    files = [path.relative_to(tmp_path).as_posix() for path in iter_files(tmp_path, ["bin"])]

    assert files == ["src/a.js", "src/b.js"]


def test_count_file_types_most_common_first(tmp_path):
    _write(tmp_path, "a.js")
    _write(tmp_path, "lib/b.js")
    _write(tmp_path, "c.cs")
    _write(tmp_path, "README")

    counts = count_file_types(tmp_path)

    assert list(counts.items()) == [(".js", 2), (NO_EXTENSION, 1), (".cs", 1)]


def test_count_file_types_extension_filter(tmp_path):
    _write(tmp_path, "a.js")
    _write(tmp_path, "c.CS")

    assert count_file_types(tmp_path, ".cs") == {".cs": 1}


def test_count_file_types_exclude_pattern(tmp_path):
    _write(tmp_path, "src/bin/Debug/App.cs")
    _write(tmp_path, "src/App.cs")

    assert count_file_types(tmp_path, exclude_pattern="*/bin/*") == {".cs": 1}


def test_find_source_files_honors_skip_directories(tmp_path):
    _write(tmp_path, "obj/Generated.cs")
    _write(tmp_path, "src/App.cs")
    _write(tmp_path, "src/app.js")

    files = find_source_files(tmp_path, [".cs"], skip_directories=["bin", "obj"])

    assert files == [tmp_path / "src" / "App.cs"]


def test_find_source_files_exclude_pattern(tmp_path):
    _write(tmp_path, "web/app.test.js")
    _write(tmp_path, "web/app.js")

    files = find_source_files(tmp_path, [".js"], exclude_pattern="*.test.js")

    assert files == [tmp_path / "web" / "app.js"]


def test_build_directory_tree(tmp_path):
    _write(tmp_path, "b.js")
    _write(tmp_path, "a.js")
    _write(tmp_path, ".hidden")
    _write(tmp_path, "src/main.cs")
    _write(tmp_path, "bin/out.dll")

    tree = build_directory_tree(tmp_path, ["bin"])

    assert tree.name == tmp_path.name
    assert tree.files == ["a.js", "b.js"]
    assert [d.name for d in tree.subdirectories] == ["src"]
    assert tree.subdirectories[0].files == ["main.cs"]
    assert tree.subdirectories[0].subdirectories == []
