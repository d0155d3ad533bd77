"""Project traversal: root validation, file discovery, histogram and tree."""

import logging
import os
import re
from collections import Counter
from pathlib import Path
from typing import Iterable, Iterator

from codescout.models import DirectoryNode

logger = logging.getLogger(__name__)

NO_EXTENSION = "(no extension)"


class ProjectNotFoundError(Exception):
    """Raised when the project root does not exist or is not a directory."""


def find_project_root(path: Path) -> Path:
    """Validate and resolve the directory to analyze.

    Raises:
        ProjectNotFoundError: If ``path`` is not an existing directory.
    """
    path = Path(path)
    if not path.is_dir():
        raise ProjectNotFoundError(f"Directory not found: {path}")
    return path.resolve()


def file_extension(path: Path) -> str:
    """Lower-cased extension including the dot, or ``(no extension)``."""
    return path.suffix.lower() or NO_EXTENSION


def parse_extensions(extensions: str) -> list[str]:
    """Parse a comma-separated extension filter such as ``".cs, js"``.

    Returns:
        Lower-cased extensions, each with a leading dot. Empty when no filter.
    """
    parsed = []
    for extension in extensions.split(","):
        extension = extension.strip().lower()
        if not extension:
            continue
        parsed.append(extension if extension.startswith(".") else f".{extension}")
    return parsed


def _glob_to_regex(pattern: str) -> str:
    return re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")


def is_excluded(file_path: str | Path, exclude_pattern: str) -> bool:
    """Check if a path matches a simple exclusion pattern.

    Separators are normalized to ``/`` and every comparison ignores case. A
    path is excluded when:

    - the pattern occurs in the path as a plain substring, or
    - a ``/``-separated segment of the pattern, read as a glob (``*`` any
      run, ``?`` any character), matches a whole path segment; segments made
      only of wildcards are skipped since they would match every path, or
    - the whole pattern, read as a glob, matches the whole path.

    Examples:
        >>> is_excluded("project/bin/Debug/App.cs", "*/bin/*")
        True
        >>> is_excluded("project/bins/App.cs", "*/bin/*")
        False
    """
    if not exclude_pattern:
        return False

    normalized_path = str(file_path).replace("\\", "/")
    normalized_pattern = exclude_pattern.replace("\\", "/")

    if normalized_pattern.lower() in normalized_path.lower():
        return True

    try:
        path_segments = normalized_path.split("/")
        for pattern_segment in normalized_pattern.split("/"):
            if not pattern_segment.strip("*?"):
                continue
            segment_regex = re.compile(f"^{_glob_to_regex(pattern_segment)}$", re.IGNORECASE)
            if any(segment_regex.match(segment) for segment in path_segments):
                return True

        full_regex = re.compile(_glob_to_regex(normalized_pattern), re.IGNORECASE)
        return full_regex.fullmatch(normalized_path) is not None
    except re.error as e:
        logger.warning(f"Invalid regex generated from exclude pattern '{exclude_pattern}': {e}")
        return normalized_pattern.lower() in normalized_path.lower()


def iter_files(root: Path, skip_directories: Iterable[str] = ()) -> Iterator[Path]:
    """Yield every file below ``root`` in a stable order.

    Hidden directories (leading dot) and directories named in
    ``skip_directories`` are not descended into.
    """
    skipped = set(skip_directories)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            name for name in dirnames if not name.startswith(".") and name not in skipped
        )
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def _relative(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


def count_file_types(root: Path, extensions: str = "", exclude_pattern: str = "") -> dict[str, int]:
    """Histogram of file extensions under ``root``.

    Args:
        root: Project root.
        extensions: Optional comma-separated extension filter.
        exclude_pattern: Optional exclusion pattern, matched against paths
            relative to ``root``.

    Returns:
        Mapping of extension to file count, most common first.
    """
    allowed = parse_extensions(extensions)
    counts: Counter[str] = Counter()

    for path in iter_files(root):
        if is_excluded(_relative(path, root), exclude_pattern):
            continue
        extension = file_extension(path)
        if allowed and extension not in allowed:
            continue
        counts[extension] += 1

    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


def find_source_files(
    root: Path,
    extensions: Iterable[str],
    exclude_pattern: str = "",
    skip_directories: Iterable[str] = (),
) -> list[Path]:
    """Find the files a dialect extractor should read.

    Returns:
        Sorted absolute paths whose extension is in ``extensions``.
    """
    wanted = {extension.lower() for extension in extensions}
    return [
        path
        for path in iter_files(root, skip_directories)
        if path.suffix.lower() in wanted and not is_excluded(_relative(path, root), exclude_pattern)
    ]


def build_directory_tree(path: Path, skip_directories: Iterable[str] = ()) -> DirectoryNode:
    """Snapshot the directory structure below ``path``.

    Hidden files and directories are left out, as are directories named in
    ``skip_directories``. A root that is itself hidden or skipped yields a
    node with no children.
    """
    skipped = set(skip_directories)
    node = DirectoryNode(name=path.name)

    if path.name.startswith(".") or path.name in skipped:
        return node

    try:
        entries = sorted(path.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        logger.warning(f"Cannot list directory {path}: {e}")
        return node

    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            if entry.name not in skipped:
                node.subdirectories.append(build_directory_tree(entry, skipped))
        else:
            node.files.append(entry.name)

    return node
