from simcheck.config import load_config
from simcheck.utils.batch import run_batch
from simcheck.utils.structural_utils import python_fingerprint

from samples import ADD_A, ADD_B, FIVE_LINES, UNRELATED_A


def test_all_pairs_are_compared(config, make_submission):
    subs = [make_submission(ADD_A), make_submission(ADD_B), make_submission(UNRELATED_A)]
    result = run_batch(subs, config)
    assert result.total_pairs == 3
    assert len(result.matches) == 3
    assert result.skipped == []
    scores = [m.overall_score for m in result.matches]
    assert scores == sorted(scores, reverse=True)
    top = result.matches[0]
    assert {top.submission_a, top.submission_b} == {subs[0].id, subs[1].id}


def test_min_report_score_bounds_output(config, make_submission):
    floor = load_config(config.model_dump(), min_report_score=0.5)
    subs = [make_submission(ADD_A), make_submission(ADD_B), make_submission(UNRELATED_A)]
    result = run_batch(subs, floor)
    assert result.total_pairs == 3
    assert len(result.matches) == 1
    assert result.matches[0].flagged


def test_failing_pair_is_skipped_not_fatal(config, make_submission):
    def fragile_fingerprint(code):
        if "boom" in code:
            raise RuntimeError("parser crashed")
        return python_fingerprint(code)

    subs = [
        make_submission(ADD_A, sub_id="a"),
        make_submission(ADD_B, sub_id="b"),
        make_submission("boom = 1", sub_id="c"),
    ]
    result = run_batch(subs, config, fingerprinter=fragile_fingerprint)
    assert result.total_pairs == 3
    assert [(m.submission_a, m.submission_b) for m in result.matches] == [("a", "b")]
    assert [(s.submission_a, s.submission_b) for s in result.skipped] == [("a", "c"), ("b", "c")]
    assert all("parser crashed" in s.reason for s in result.skipped)


def test_single_submission_has_no_pairs(config, make_submission):
    result = run_batch([make_submission(FIVE_LINES)], config)
    assert result.total_pairs == 0
    assert result.matches == []
