import pytest

from court_rotation.minutes import compute_minutes_distribution, longest_stretch_minutes, minutes_dashboard_df
from court_rotation.models import PlayerAssignment, TimeSegment
from court_rotation.optimizer import generate_staggered_rotation
from court_rotation.rotation import apply_assignments, new_rotation
from court_rotation.rotation_test_helpers import quick_player, quick_rotation


def test_single_quarter():
    [dist] = compute_minutes_distribution(quick_rotation({"p1": [(0, 720)]}))
    assert dist.player_id == "p1"
    assert dist.total_minutes == 12
    assert dist.minutes_by_period == {"Q1": 12, "Q2": 0, "Q3": 0, "Q4": 0}


def test_segment_split_across_periods():
    [dist] = compute_minutes_distribution(quick_rotation({"p1": [(600, 900)]}))
    assert dist.minutes_by_period["Q1"] == pytest.approx(2)
    assert dist.minutes_by_period["Q2"] == pytest.approx(3)
    assert dist.total_minutes == pytest.approx(5)


def test_bench_segments_ignored():
    [dist] = compute_minutes_distribution(quick_rotation({"p1": [(0, 720)]}, on_court=False))
    assert dist.total_minutes == 0
    assert set(dist.minutes_by_period) == {"Q1", "Q2", "Q3", "Q4"}


def test_empty_inputs():
    assert compute_minutes_distribution(None) == []
    assert compute_minutes_distribution(new_rotation()) == []


def test_period_minutes_sum_to_total():
    rotation = new_rotation()
    apply_assignments(rotation, generate_staggered_rotation([f"p{i}" for i in range(12)]))
    for dist in compute_minutes_distribution(rotation):
        assert sum(dist.minutes_by_period.values()) == pytest.approx(dist.total_minutes)


def test_longest_stretch_merges_touching_segments():
    pa = PlayerAssignment(player_id="p1", segments=[
        TimeSegment(start_time=0, end_time=300),
        TimeSegment(start_time=300, end_time=600),
        TimeSegment(start_time=900, end_time=1000),
    ])
    assert longest_stretch_minutes(pa) == pytest.approx(10)


def test_dashboard_flags():
    rotation = quick_rotation({"p1": [(0, 720)], "p2": [(720, 2880)]})
    roster = [
        quick_player("p1", consecutive=8, target=24, max_minutes=32),
        quick_player("p2", consecutive=40, target=20, max_minutes=30),
    ]
    dash = minutes_dashboard_df(rotation, roster).set_index("player_id")
    assert dash.loc["p1", "Q1"] == 12
    assert bool(dash.loc["p1", "flag_under_target"])
    assert bool(dash.loc["p1", "flag_over_consecutive"])
    assert bool(dash.loc["p2", "flag_over_max"])
    assert not bool(dash.loc["p2", "flag_over_consecutive"])
    # over-max rows first
    assert minutes_dashboard_df(rotation, roster).iloc[0]["player_id"] == "p2"
