import pytest

from paristrace.bound import Bound, main, node_confidence


@pytest.fixture
def bound16():
    return Bound(0.05, 16, 1)


def test_node_confidence_single_branch_is_identity():
    assert node_confidence(0.05, 1) == pytest.approx(0.05)


@pytest.mark.parametrize("branches", [2, 5, 16])
def test_node_confidence_round_trip(branches):
    per_node = node_confidence(0.05, branches)
    assert 1 - (1 - per_node) ** branches == pytest.approx(0.05)
    assert per_node < 0.05


def test_node_confidence_rejects_zero_branch():
    with pytest.raises(ValueError):
        node_confidence(0.05, 0)


def test_dummy_hypotheses_are_zero(bound16):
    assert bound16.nk(0) == 0
    assert bound16.nk(1) == 0


def test_two_interfaces_worked_example(bound16):
    # Six probes all on the same path happen with probability 1/32 <= 5%.
    assert bound16.nk(2) == 6
    assert bound16.pr_failure[2] == pytest.approx(0.03125)


def test_stopping_points_grow(bound16):
    points = bound16.stopping_points()
    assert len(points) == 17
    assert points[3] > points[2]
    assert all(a <= b for a, b in zip(points[2:], points[3:]))


def test_failure_stays_under_confidence(bound16):
    for k in range(2, bound16.max_n + 1):
        assert 0.0 < bound16.pr_failure[k] <= bound16.confidence


def test_nk_outside_table_is_zero(bound16):
    assert bound16.nk(17) == 0
    assert bound16.nk(-1) == 0


def test_extending_matches_fresh_build():
    extended = Bound(0.05, 8, 1)
    extended.build(12)
    fresh = Bound(0.05, 12, 1)
    assert extended.max_n == 12
    assert extended.stopping_points() == fresh.stopping_points()


def test_rebuild_keeps_table():
    bound = Bound(0.05, 8, 2)
    before = bound.stopping_points()
    bound.build(8)
    assert bound.stopping_points() == before
    assert bound.max_n == 8


def test_stricter_confidence_needs_more_probes():
    loose = Bound(0.05, 6, 1)
    strict = Bound(0.01, 6, 1)
    assert all(s >= l for s, l in zip(strict.stopping_points(), loose.stopping_points()))
    assert strict.nk(2) > loose.nk(2)


def test_more_branches_need_more_probes():
    one = Bound(0.05, 6, 1)
    many = Bound(0.05, 6, 5)
    assert many.confidence < one.confidence
    assert many.nk(4) >= one.nk(4)


@pytest.mark.parametrize("confidence", [0.0, 1.0, -0.5, 2.0])
def test_invalid_confidence(confidence):
    with pytest.raises(ValueError):
        Bound(confidence, 4, 1)


def test_invalid_branch():
    with pytest.raises(ValueError):
        Bound(0.05, 4, 0)


def test_failure_lines_format():
    bound = Bound(0.05, 4, 1)
    lines = bound.failure_lines()
    assert lines[0] == "Expected failure:"
    assert len(lines) == bound.max_n + 2
    assert lines[1] == "0 - 0.000000"
    assert lines[3].startswith("2 - ")


def test_main_prints_tables(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "0 - 0"
    assert out[2] == "2 - 6"
    assert "Expected failure:" in out
    assert len(out) == 17 + 1 + 17


def test_main_reports_bad_arguments(capsys):
    assert main(["0", "4", "1"]) == 1
    assert capsys.readouterr().err != ""