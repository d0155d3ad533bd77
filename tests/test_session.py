from concurrent.futures import ThreadPoolExecutor

import pytest

from codescout.models import QuerySpec
from codescout.search import InvalidSearchPatternError
from codescout.session import AnalysisSession, SessionEmptyError


@pytest.fixture
def project(tmp_path):
    (tmp_path / "items.js").write_text(
        "function addItem(item) { }\nfunction removeItem(item) { }\nfunction reset() { }\n"
    )
    return tmp_path


def test_require_result_before_analysis():
    with pytest.raises(SessionEmptyError):
        AnalysisSession().require_result()


def test_refilter_before_analysis():
    with pytest.raises(SessionEmptyError):
        AnalysisSession().refilter(QuerySpec(search_term="x"))


def test_analyze_remembers_root_and_query(project):
    session = AnalysisSession()
    query = QuerySpec(search_term="item")

    result = session.analyze(project, query)

    assert [f.name for f in result.javascript.functions] == ["addItem", "removeItem"]
    assert session.root == project
    assert session.query is query


def test_refilter_uses_unfiltered_result(project):
    session = AnalysisSession()
    session.analyze(project, QuerySpec(search_term="add"))

    result = session.refilter(QuerySpec(search_term="reset"))

    assert [f.name for f in result.javascript.functions] == ["reset"]


def test_refilter_does_not_rescan(project):
    session = AnalysisSession()
    session.analyze(project)
    (project / "items.js").unlink()

    result = session.refilter(QuerySpec(search_term="remove"))

    assert [f.name for f in result.javascript.functions] == ["removeItem"]


def test_refilter_no_matches(project):
    session = AnalysisSession()
    session.analyze(project)

    result = session.refilter(QuerySpec(search_term="zzz"))

    assert result.javascript.status == "no_matches"
    assert len(session.require_result().javascript.functions) == 3


def test_refilter_invalid_regex(project):
    session = AnalysisSession()
    session.analyze(project)

    with pytest.raises(InvalidSearchPatternError):
        session.refilter(QuerySpec(search_term="[", use_regex=True))


def test_analyze_with_invalid_regex(project):
    session = AnalysisSession()

    result = session.analyze(project, QuerySpec(search_term="[", use_regex=True))

    assert result.javascript.status == "invalid_pattern"
    with pytest.raises(SessionEmptyError):
        session.require_result()


def test_sessions_are_independent(project, tmp_path_factory):
    other = tmp_path_factory.mktemp("other")
    (other / "other.js").write_text("function other() { }\n")

    first = AnalysisSession()
    second = AnalysisSession()
    first.analyze(project)
    second.analyze(other)

    assert len(first.require_result().javascript.functions) == 3
    assert [f.name for f in second.require_result().javascript.functions] == ["other"]


def test_marker_comes_from_config(project):
    (project / ".codescout").write_text('search:\n  highlight_marker: "__"\n')
    session = AnalysisSession()

    session.analyze(project)

    assert session.marker == "__"


def test_invalid_regex_keeps_previous_result(project):
    session = AnalysisSession()
    session.analyze(project)

    session.analyze(project, QuerySpec(search_term="(", use_regex=True))
    result = session.refilter(QuerySpec(search_term="reset"))

    assert [f.name for f in result.javascript.functions] == ["reset"]


def test_refilter_while_analyzing_in_another_thread(project):
    session = AnalysisSession()
    session.analyze(project)

    with ThreadPoolExecutor(max_workers=4) as executor:
        analyses = [executor.submit(session.analyze, project) for _ in range(4)]
        searches = [
            executor.submit(session.refilter, QuerySpec(search_term="item")) for _ in range(20)
        ]

    for future in analyses:
        assert len(future.result().javascript.functions) == 3
    for future in searches:
        assert [f.name for f in future.result().javascript.functions] == ["addItem", "removeItem"]
