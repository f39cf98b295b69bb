import pytest

from court_rotation.lineups import evaluate_lineups, lineup_slices
from court_rotation.optimizer import generate_staggered_rotation
from court_rotation.ratings import FixedBaseRatings, RandomBaseRatings, skill_variety
from court_rotation.rotation import apply_assignments, new_rotation
from court_rotation.rotation_test_helpers import quick_player, quick_rotation

FIVE = ["p1", "p2", "p3", "p4", "p5"]


def test_five_players_one_slice():
    rotation = quick_rotation({pid: [(600, 900)] for pid in FIVE})
    [entry] = evaluate_lineups(rotation, [quick_player(pid) for pid in FIVE])
    assert entry.players == FIVE
    assert (entry.start_time, entry.end_time) == (600, 900)


def test_wrong_lineup_sizes_omitted():
    four = quick_rotation({pid: [(0, 600)] for pid in FIVE[:4]})
    six = quick_rotation({pid: [(0, 600)] for pid in FIVE + ["p6"]})
    assert evaluate_lineups(four, []) == []
    assert evaluate_lineups(six, []) == []


def test_sub_minute_slivers_skipped():
    rotation = quick_rotation({pid: [(0, 30)] for pid in FIVE})
    assert evaluate_lineups(rotation, []) == []


def test_touching_segments_form_one_interval():
    plan = {pid: [(0, 600)] for pid in FIVE}
    plan["p1"] = [(0, 300), (300, 600)]
    [entry] = evaluate_lineups(quick_rotation(plan), [])
    assert (entry.start_time, entry.end_time) == (0, 600)


def test_substitution_splits_lineups_in_time_order():
    plan = {pid: [(0, 600)] for pid in FIVE[:4]}
    plan["p5"] = [(0, 300)]
    plan["p6"] = [(300, 600)]
    entries = evaluate_lineups(quick_rotation(plan), [])
    assert [e.players for e in entries] == [FIVE, ["p1", "p2", "p3", "p4", "p6"]]
    assert [e.start_time for e in entries] == [0, 300]


def test_rating_formula_with_fixed_base():
    skills = ["Shooter", "Defender", "Playmaker", "Rebounder", "Finisher"]
    roster = [quick_player(pid, skills=[s]) for pid, s in zip(FIVE, skills)]
    rotation = quick_rotation({pid: [(0, 600)] for pid in FIVE})
    [entry] = evaluate_lineups(rotation, roster, ratings=FixedBaseRatings(90, 80))
    assert entry.offensive_rating == pytest.approx(108)
    assert entry.defensive_rating == pytest.approx(96)
    assert entry.plus_minus == pytest.approx(-3.8)


def test_unknown_players_have_no_skills():
    rotation = quick_rotation({pid: [(0, 600)] for pid in FIVE})
    [entry] = evaluate_lineups(rotation, [], ratings=FixedBaseRatings(100, 100))
    assert entry.offensive_rating == pytest.approx(80)
    assert entry.plus_minus == pytest.approx(-5)


def test_skill_variety():
    a = quick_player("a", skills=["Shooter", "Defender"])
    b = quick_player("b", skills=["Shooter"])
    assert skill_variety([a, b]) == pytest.approx(2 / 3)
    assert skill_variety([None]) == 0


def test_default_ratings_are_reproducible_and_bounded():
    rotation = new_rotation()
    apply_assignments(rotation, generate_staggered_rotation([f"p{i}" for i in range(10)]))
    roster = [quick_player(f"p{i}", skills=["Energy"]) for i in range(10)]
    first = evaluate_lineups(rotation, roster)
    second = evaluate_lineups(rotation, roster)
    assert first == second
    assert first
    for entry in first:
        assert len(entry.players) == 5
        assert 80 * 0.8 <= entry.offensive_rating <= 100 * 1.2
        assert 80 * 0.8 <= entry.defensive_rating <= 100 * 1.2


def test_random_base_ratings_range():
    source = RandomBaseRatings(low=80, high=100, seed=7)
    for _ in range(20):
        off, dfn = source.base_ratings(FIVE)
        assert 80 <= off < 100 and 80 <= dfn < 100


def test_lineup_slices_cover_breakpoints():
    slices = lineup_slices(quick_rotation({"p1": [(0, 300)], "p2": [(120, 600)]}))
    assert [(s.start_time, s.end_time) for s in slices] == [(0, 120), (120, 300), (300, 600)]
    assert slices[1].players == ["p1", "p2"]
