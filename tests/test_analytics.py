import asyncio

from court_rotation.analytics import build_report, build_report_async
from court_rotation.config import DEFAULT_SAMPLE_ROSTER_CSV
from court_rotation.io import load_roster_csv
from court_rotation.optimizer import generate_staggered_rotation
from court_rotation.rotation import apply_assignments, new_rotation


def _game():
    roster = load_roster_csv(DEFAULT_SAMPLE_ROSTER_CSV.encode("utf-8"))
    rotation = new_rotation(name="Sample")
    apply_assignments(rotation, generate_staggered_rotation([p.id for p in roster]), roster)
    return rotation, roster


def test_report_keeps_assignment_order():
    rotation, roster = _game()
    report = build_report(rotation, roster)
    ids = [p.id for p in roster]
    assert [m.player_id for m in report.fatigue] == ids
    assert [m.player_id for m in report.minutes] == ids
    assert report.lineups and all(len(e.players) == 5 for e in report.lineups)


def test_empty_report():
    report = build_report(None, [])
    assert report.fatigue == [] and report.minutes == [] and report.lineups == []


def test_async_matches_sync():
    rotation, roster = _game()
    report = asyncio.run(build_report_async(rotation, roster, timeout=30))
    assert report == build_report(rotation, roster)
