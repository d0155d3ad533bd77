"""Tests for config module."""

from pathlib import Path

from codescout.config import AnalysisConfig, CodescoutConfig, SearchDefaults, load_config


class TestDefaults:
    """Tests for the config dataclasses."""

    def test_analysis_defaults(self):
        config = AnalysisConfig()
        assert config.max_workers == 8
        assert config.skip_directories == ("bin", "obj")

    def test_search_defaults(self):
        config = SearchDefaults()
        assert config.case_sensitive is False
        assert config.use_regex is False
        assert config.highlight_matches is True
        assert config.highlight_marker == "**"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_config_file_returns_defaults(self, tmp_path):
        """Test that missing .codescout file returns default config."""
        assert load_config(tmp_path) == CodescoutConfig()

    def test_load_valid_config(self, tmp_path):
        """Test loading valid .codescout configuration file."""
        (tmp_path / ".codescout").write_text("""
analysis:
  max_workers: 2
  skip_directories: [dist, build]
search:
  case_sensitive: true
  use_regex: true
  highlight_matches: false
  highlight_marker: "__"
""")
        config = load_config(tmp_path)

        assert config.analysis.max_workers == 2
        assert config.analysis.skip_directories == ("dist", "build")
        assert config.search.case_sensitive is True
        assert config.search.use_regex is True
        assert config.search.highlight_matches is False
        assert config.search.highlight_marker == "__"

    def test_partial_config_uses_defaults(self, tmp_path):
        """Test that missing keys fall back to defaults."""
        (tmp_path / ".codescout").write_text("search:\n  use_regex: true\n")

        config = load_config(tmp_path)

        assert config.search.use_regex is True
        assert config.search.case_sensitive is False
        assert config.analysis == AnalysisConfig()

    def test_invalid_yaml_returns_defaults(self, tmp_path):
        """Test that malformed YAML falls back to defaults."""
        (tmp_path / ".codescout").write_text("analysis: [unclosed\n")

        assert load_config(tmp_path) == CodescoutConfig()

    def test_non_mapping_returns_defaults(self, tmp_path):
        (tmp_path / ".codescout").write_text("- just\n- a list\n")

        assert load_config(tmp_path) == CodescoutConfig()

    def test_invalid_values_fall_back_per_key(self, tmp_path):
        """Test that wrongly typed values are replaced by their defaults."""
        (tmp_path / ".codescout").write_text("""
analysis:
  max_workers: 0
  skip_directories: bin
search:
  case_sensitive: "yes"
  highlight_marker: 5
""")
        config = load_config(tmp_path)

        assert config.analysis.max_workers == 8
        assert config.analysis.skip_directories == ("bin", "obj")
        assert config.search.case_sensitive is False
        assert config.search.highlight_marker == "**"

    def test_bool_is_not_accepted_as_worker_count(self, tmp_path):
        (tmp_path / ".codescout").write_text("analysis:\n  max_workers: true\n")

        assert load_config(tmp_path).analysis.max_workers == 8

    def test_defaults_to_current_directory(self, tmp_path, monkeypatch):
        (tmp_path / ".codescout").write_text("analysis:\n  max_workers: 3\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().analysis.max_workers == 3
