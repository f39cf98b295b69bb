import json

import pytest

from court_rotation.config import DEFAULT_PERIODS_YAML, DEFAULT_SAMPLE_ROSTER_CSV
from court_rotation.constants import Position, Skill
from court_rotation.io import (
    generate_template_csv_bytes, load_roster_csv, parse_periods_yaml, rotation_from_json,
    rotation_to_json, save_roster_csv_bytes,
)
from court_rotation.rotation_test_helpers import quick_rotation


def test_load_sample_roster():
    players = load_roster_csv(DEFAULT_SAMPLE_ROSTER_CSV.encode("utf-8"))
    assert [p.id for p in players] == ["p1", "p2", "p3", "p4", "p5"]
    john = players[0]
    assert john.positions == [Position.PointGuard]
    assert john.skills == [Skill.Playmaker, Skill.Defender]
    assert john.minutes.consecutive == 8
    assert john.number == 1


def test_saved_roster_loads_back():
    players = load_roster_csv(DEFAULT_SAMPLE_ROSTER_CSV.encode("utf-8"))
    assert load_roster_csv(save_roster_csv_bytes(players)) == players


def test_invalid_roster_raises():
    bad = DEFAULT_SAMPLE_ROSTER_CSV.replace("p2,Mike", "p1,Mike")
    with pytest.raises(ValueError, match="Duplicate player_id"):
        load_roster_csv(bad.encode("utf-8"))


def test_template_has_headers_only():
    text = generate_template_csv_bytes().decode("utf-8").strip()
    assert text.split(",")[0] == "player_id"
    assert "\n" not in text


def test_periods_yaml():
    periods = parse_periods_yaml(DEFAULT_PERIODS_YAML)
    assert [p.id for p in periods] == ["Q1", "Q2", "Q3", "Q4"]
    assert periods[-1].end_time == 2880

    halves = parse_periods_yaml("periods:\n  - minutes: 20\n  - minutes: 20\n")
    assert [(p.id, p.start_time, p.end_time) for p in halves] == [("Q1", 0, 1200), ("Q2", 1200, 2400)]
    with pytest.raises(ValueError):
        parse_periods_yaml("periods: []")


def test_rotation_json_is_camel_case():
    rotation = quick_rotation({"p1": [(0, 720)]})
    text = rotation_to_json(rotation)
    obj = json.loads(text)
    assert obj["gameId"] == "g1"
    assert obj["playerAssignments"][0]["segments"][0] == {"startTime": 0, "endTime": 720, "onCourt": True}
    assert obj["periods"][0]["startTime"] == 0
    assert rotation_from_json(text) == rotation


def _saved_rotation_text(segments):
    obj = json.loads(rotation_to_json(quick_rotation({"p1": [(0, 60)]})))
    obj["playerAssignments"][0]["segments"] = [
        {"startTime": s, "endTime": e, "onCourt": True} for s, e in segments
    ]
    return json.dumps(obj)


def test_rotation_json_rejects_backwards_segment():
    with pytest.raises(ValueError, match="Invalid rotation: p1: empty segment"):
        rotation_from_json(_saved_rotation_text([(900, 300)]))


def test_rotation_json_rejects_overlapping_segments():
    with pytest.raises(ValueError, match="overlap"):
        rotation_from_json(_saved_rotation_text([(0, 600), (300, 900)]))


def test_rotation_json_rejects_segment_past_final_buzzer():
    with pytest.raises(ValueError, match="outside the game"):
        rotation_from_json(_saved_rotation_text([(2700, 3000)]))
