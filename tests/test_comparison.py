"""
End-to-end comparisons through the full pipeline.
"""

import pytest

from simcheck.config import load_config
from simcheck.utils.comparison import compare_submissions, score_pair

from samples import ADD_A, ADD_B, FIVE_LINES, UNRELATED_A, UNRELATED_B


def test_renamed_function_is_flagged(config, make_submission):
    a = make_submission(ADD_A, author="ana")
    b = make_submission(ADD_B, author="ben")
    report = compare_submissions(a, b, config)
    match = report.match

    assert match.algorithms["levenshtein"] > 0.7
    assert match.algorithms["lcs"] > 0.7
    assert match.algorithms["ast"] == 1.0
    assert "winnowing" not in match.algorithms
    assert match.flagged
    assert match.overall_score >= 0.5
    assert (match.author_a, match.author_b) == ("ana", "ben")

    assert any(
        s.span_a.start_line == 1 and s.span_a.end_line == 2 and
        s.span_b.start_line == 1 and s.span_b.end_line == 2
        for s in match.segments
    )


def test_unrelated_text_scores_near_zero(config, make_submission):
    report = compare_submissions(make_submission(UNRELATED_A), make_submission(UNRELATED_B), config)
    match = report.match

    assert match.overall_score < 0.2
    assert match.segments == []
    assert not match.flagged
    assert match.algorithms["jaccard"] == 0.0
    assert match.algorithms["cosine"] == 0.0
    assert "ast" not in match.algorithms


def test_identical_submissions(config, make_submission):
    report = compare_submissions(make_submission(FIVE_LINES), make_submission(FIVE_LINES), config)

    assert report.match.overall_score == 1.0
    assert report.match.flagged
    for side in (report.side_a, report.side_b):
        assert len(side.lines) == 5
        assert all(r.similarity == 1.0 and r.matched for r in side.lines)
        assert side.analytics.distribution.exact == 5
        assert side.analytics.match_percentage == 100.0
        assert side.token_threshold == 0.20


def test_overall_score_is_mean_of_reported_algorithms(config, make_submission):
    match = score_pair(make_submission(FIVE_LINES), make_submission(ADD_A), config)
    expected = sum(match.algorithms.values()) / len(match.algorithms)
    assert match.overall_score == pytest.approx(expected, abs=1e-4)


def test_flag_threshold_is_configuration(config, make_submission):
    strict = load_config(config.model_dump(), flag_threshold=0.99)
    match = score_pair(make_submission(ADD_A), make_submission(ADD_B), strict)
    assert not match.flagged
    assert match.flag_threshold == 0.99


def test_empty_submissions_are_valid_input(config, make_submission):
    report = compare_submissions(make_submission(""), make_submission(""), config)
    assert report.match.algorithms["levenshtein"] == 1.0
    assert report.match.algorithms["lcs"] == 1.0
    assert report.side_a.analytics.total_lines == 1
    assert report.side_a.analytics.distribution.none == 1


def test_comparison_is_reproducible(config, make_submission):
    a = make_submission(FIVE_LINES)
    b = make_submission("How vexingly quick daft zebras jump\nThe five boxing wizards jump quickly")
    assert compare_submissions(a, b, config) == compare_submissions(a, b, config)


def test_report_serializes(config, make_submission):
    report = compare_submissions(make_submission(ADD_A), make_submission(ADD_B), config)
    data = report.model_dump(mode="json")
    assert set(data) == {"match", "side_a", "side_b"}
    assert data["side_a"]["analytics"]["heatmap"][0]["line"] == 1


def test_unrelated_comma_lists_get_no_structural_score(config, make_submission):
    report = compare_submissions(
        make_submission("apples, oranges"), make_submission("completely, different"), config,
    )
    assert "ast" not in report.match.algorithms
    assert report.match.overall_score < 0.2


def test_deeply_nested_submission_still_compares(config, make_submission):
    nested = "x = " + "[" * 150 + "]" * 150 + "\ny = " + "-" * 3000 + "1"
    report = compare_submissions(make_submission(nested), make_submission("x"), config)
    assert "ast" not in report.match.algorithms
    assert "levenshtein" in report.match.algorithms
    assert report.side_a.analytics.total_lines == 2
