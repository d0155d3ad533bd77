"""Explicit analysis context carried between an analysis and later queries."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

from codescout.aggregator import refilter_result
from codescout.analyzer import analyze_project
from codescout.config import CodescoutConfig, load_config
from codescout.models import AnalysisResult, QuerySpec
from codescout.search import InvalidSearchPatternError, SearchFilter

logger = logging.getLogger(__name__)


class SessionEmptyError(RuntimeError):
    """Raised when a query needs a previous analysis and none has run."""


@dataclass
class AnalysisSession:
    """Holds the most recent analysis for a caller.

    The caller creates and owns the session; nothing is shared between
    sessions. ``result`` is the unfiltered analysis, so later queries can
    narrow it without rescanning.
    """
    root: Path | None = None
    query: QuerySpec = field(default_factory=QuerySpec)
    result: AnalysisResult | None = None
    marker: str = "**"
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def analyze(
        self,
        root: Path | str,
        query: QuerySpec | None = None,
        extensions: str = "",
        exclude_pattern: str = "",
        config: CodescoutConfig | None = None,
    ) -> AnalysisResult:
        """Run a fresh analysis, remember it, and return it filtered by ``query``."""
        query = query or QuerySpec()
        if config is None:
            config = load_config(Path(root))
        marker = config.search.highlight_marker

        try:
            search_filter = SearchFilter.from_query(query, marker=marker)
        except InvalidSearchPatternError:
            # Every batch reports the invalid pattern without reading files;
            # the previous result stays available for refiltering.
            return analyze_project(root, query, extensions, exclude_pattern, config)

        unfiltered = analyze_project(root, QuerySpec(), extensions, exclude_pattern, config)
        self._remember(root, query, unfiltered, marker)
        return refilter_result(unfiltered, search_filter)

    def _remember(self, root, query, result, marker):
        with self._lock:
            self.root = Path(root)
            self.query = query
            self.result = result
            self.marker = marker

    def _snapshot(self) -> tuple[Path | None, AnalysisResult, str]:
        with self._lock:
            root, result, marker = self.root, self.result, self.marker
        if result is None:
            raise SessionEmptyError(
                "No code analysis result available. Please analyze a codebase first."
            )
        return root, result, marker

    def require_result(self) -> AnalysisResult:
        return self._snapshot()[1]

    def refilter(self, query: QuerySpec) -> AnalysisResult:
        """Narrow the stored result with another query, without rescanning.

        The stored result is left untouched.

        Raises:
            SessionEmptyError: If no analysis has run yet.
            InvalidSearchPatternError: If the query's regex does not compile.
        """
        root, result, marker = self._snapshot()
        search_filter = SearchFilter.from_query(query, marker=marker)
        logger.info(f"Refiltering last analysis of {root} with '{query.search_term}'")
        return refilter_result(result, search_filter)
