"""Project analysis: one extraction batch per dialect, merged into a result.

Files are extracted independently on a thread pool. Results are reduced in
the calling thread only, then aggregated, sorted and filtered, so the output
does not depend on which worker finished first.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from codescout.aggregator import aggregate, build_dialect_result
from codescout.config import CodescoutConfig, load_config
from codescout.models import (
    STATUS_INVALID_PATTERN,
    AnalysisResult,
    ComponentAnalysis,
    CSharpAnalysis,
    JavaScriptAnalysis,
    QuerySpec,
    SourceEntity,
)
from codescout.parsers import DIALECT_PARSERS
from codescout.parsers.base import BaseParser
from codescout.repository import (
    build_directory_tree,
    count_file_types,
    find_project_root,
    find_source_files,
)
from codescout.search import InvalidSearchPatternError, SearchFilter

logger = logging.getLogger(__name__)

DIALECT_LABELS = {
    "csharp": "C#",
    "javascript": "JavaScript",
    "react": "React",
    "vue": "Vue component",
}

_EMPTY_RESULTS = {
    "csharp": CSharpAnalysis,
    "javascript": JavaScriptAnalysis,
    "react": ComponentAnalysis,
    "vue": ComponentAnalysis,
}


def analyze_project(
    root: Path | str,
    query: QuerySpec | None = None,
    extensions: str = "",
    exclude_pattern: str = "",
    config: CodescoutConfig | None = None,
) -> AnalysisResult:
    """Analyze a codebase and return its structure.

    Args:
        root: Directory to analyze.
        query: Search options; None extracts everything.
        extensions: Optional comma-separated extension filter (".cs,.js").
        exclude_pattern: Optional exclusion pattern for paths.
        config: Analysis configuration. If None, loads from .codescout file.

    Returns:
        AnalysisResult with one result set per dialect. Dialects with no
        files, or whose batch could not compile the search pattern, have
        empty result sets.

    Raises:
        ProjectNotFoundError: If ``root`` is not an existing directory.
    """
    root = find_project_root(Path(root))
    query = query or QuerySpec()
    if config is None:
        config = load_config(root)

    logger.info(f"Starting code analysis of directory: {root}")
    if query.search_term:
        logger.info(f"Using search filter: {query.search_term}")
        if query.use_regex:
            logger.info("Using regular expression search")
        if query.case_sensitive:
            logger.info("Search is case sensitive")
    if extensions:
        logger.info(f"Filtering by file extensions: {extensions}")
    if exclude_pattern:
        logger.info(f"Excluding patterns: {exclude_pattern}")

    result = AnalysisResult(
        file_types=count_file_types(root, extensions, exclude_pattern),
        directory_tree=build_directory_tree(root, config.analysis.skip_directories),
    )

    failed_files: set[str] = set()
    for dialect, parser_class in DIALECT_PARSERS.items():
        if not any(result.file_types.get(extension) for extension in parser_class.extensions):
            continue
        dialect_result = _run_batch(
            root, parser_class, query, exclude_pattern, config, failed_files
        )
        setattr(result, dialect, dialect_result)

    result.failed_files = sorted(failed_files)
    return result


def _run_batch(
    root: Path,
    parser_class: type[BaseParser],
    query: QuerySpec,
    exclude_pattern: str,
    config: CodescoutConfig,
    failed_files: set[str],
):
    """Extract, aggregate and filter one dialect.

    An invalid regex short-circuits the batch before any file is read.
    """
    dialect = parser_class.dialect
    label = DIALECT_LABELS.get(dialect, dialect)

    try:
        search_filter = SearchFilter.from_query(query, marker=config.search.highlight_marker)
    except InvalidSearchPatternError as e:
        logger.warning(f"Error compiling search regular expression for {label}: {e}")
        return _EMPTY_RESULTS[dialect](status=STATUS_INVALID_PATTERN)

    files = find_source_files(
        root, parser_class.extensions, exclude_pattern, config.analysis.skip_directories
    )
    logger.info(f"Processing {len(files)} {label} files...")

    entities = extract_files(files, parser_class, config.analysis.max_workers, failed_files)
    return build_dialect_result(dialect, entities, search_filter)


def extract_files(
    files: list[Path],
    parser_class: type[BaseParser],
    max_workers: int,
    failed_files: set[str],
) -> list[SourceEntity]:
    """Extract entities from every file on a worker pool.

    Args:
        files: Files to read and extract.
        parser_class: Extractor to instantiate per file.
        max_workers: Worker pool size.
        failed_files: Receives the path of every file that could not be
            read or extracted.

    Returns:
        Aggregated (de-duplicated, sorted) entities across all files.
    """
    if not files:
        return []

    partials = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        outcomes = executor.map(lambda path: _extract_file(path, parser_class), files)
        for path, entities in outcomes:
            if entities is None:
                failed_files.add(str(path))
            else:
                partials.append(entities)

    return aggregate(partials)


def _extract_file(
    path: Path,
    parser_class: type[BaseParser],
) -> tuple[Path, list[SourceEntity] | None]:
    """Read and extract one file; None in place of entities marks a failure."""
    try:
        source_code = path.read_text(encoding="utf-8-sig")
        # Parsers hold per-instance state (tree-sitter), one per task
        entities = parser_class().extract_entities(source_code, str(path))
    except Exception as e:
        logger.error(f"Error analyzing file: {path}: {e}")
        return path, None
    return path, entities
