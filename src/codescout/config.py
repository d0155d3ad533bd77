"""Configuration management for codescout analysis and search."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = ".codescout"


@dataclass
class AnalysisConfig:
    """Configuration for the extraction pass.

    Attributes:
        max_workers: Size of the per-file worker pool.
        skip_directories: Directory names never descended into when looking
            for source files or building the tree.
    """
    max_workers: int = 8
    skip_directories: tuple[str, ...] = ("bin", "obj")


@dataclass
class SearchDefaults:
    """Default search options, overridable per query.

    Attributes:
        case_sensitive: Honor case when matching.
        use_regex: Treat search terms as regular expressions.
        highlight_matches: Highlight matches in rendered output.
        highlight_marker: Marker placed on both sides of a highlighted match.
    """
    case_sensitive: bool = False
    use_regex: bool = False
    highlight_matches: bool = True
    highlight_marker: str = "**"


@dataclass
class CodescoutConfig:
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    search: SearchDefaults = field(default_factory=SearchDefaults)


def _get(section: dict, key: str, expected: type, default: Any) -> Any:
    value = section.get(key, default)
    # bool is an int subclass; keep the two apart
    if expected is int and isinstance(value, bool):
        return default
    return value if isinstance(value, expected) else default


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    return section if isinstance(section, dict) else {}


def load_config(project_root: Path | None = None) -> CodescoutConfig:
    """Load configuration from the .codescout file in the project root.

    Args:
        project_root: Path to the project root. If None, uses current directory.

    Returns:
        CodescoutConfig with loaded or default values.

    Notes:
        If the file doesn't exist or can't be parsed, returns default config.
        Invalid individual values fall back to their defaults.
        Expected YAML structure:

        ```yaml
        analysis:
          max_workers: 8
          skip_directories: [bin, obj]
        search:
          case_sensitive: false
          use_regex: false
          highlight_matches: true
          highlight_marker: "**"
        ```
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / CONFIG_FILE_NAME

    if not config_path.is_file():
        return CodescoutConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError, UnicodeDecodeError):
        return CodescoutConfig()

    if not isinstance(data, dict):
        return CodescoutConfig()

    analysis = _section(data, "analysis")
    search = _section(data, "search")

    max_workers = _get(analysis, "max_workers", int, AnalysisConfig.max_workers)
    if max_workers < 1:
        max_workers = AnalysisConfig.max_workers

    skip_directories = analysis.get("skip_directories", AnalysisConfig.skip_directories)
    if not isinstance(skip_directories, (list, tuple)) or not all(
        isinstance(name, str) for name in skip_directories
    ):
        skip_directories = AnalysisConfig.skip_directories

    return CodescoutConfig(
        analysis=AnalysisConfig(
            max_workers=max_workers,
            skip_directories=tuple(skip_directories),
        ),
        search=SearchDefaults(
            case_sensitive=_get(search, "case_sensitive", bool, SearchDefaults.case_sensitive),
            use_regex=_get(search, "use_regex", bool, SearchDefaults.use_regex),
            highlight_matches=_get(
                search, "highlight_matches", bool, SearchDefaults.highlight_matches
            ),
            highlight_marker=_get(
                search, "highlight_marker", str, SearchDefaults.highlight_marker
            ),
        ),
    )
