# court_rotation/validation.py
from __future__ import annotations
from typing import Iterable, List, Optional
import pandas as pd

from .constants import ROSTER_COLUMNS, parse_position, parse_skill, split_tokens
from .models import Player, Rotation
from .timeline import intervals_overlap, sort_segments


def _bad_rows(df: pd.DataFrame, mask) -> str:
    # +2: header row and 1-based numbering, as a spreadsheet shows it
    return ", ".join(str(i + 2) for i in df.index[mask.to_numpy(dtype=bool)].tolist())


def validate_roster_df(df: pd.DataFrame) -> List[str]:
    errs: List[str] = []
    missing = [c for c in ROSTER_COLUMNS if c not in df.columns]
    if missing:
        errs.append(f"Missing required columns: {missing}")
        return errs

    ids = df["player_id"].astype(str).str.strip()
    if (ids == "").any() or df["player_id"].isna().any():
        errs.append(f"Empty player_id at rows: {_bad_rows(df, (ids == '') | df['player_id'].isna())}")
    if ids.duplicated().any():
        errs.append(f"Duplicate player_id detected: {', '.join(ids[ids.duplicated()].tolist())}")

    def _tokens_ok(cell, parser, required: bool) -> bool:
        tokens = split_tokens(cell)
        if required and not tokens:
            return False
        try:
            for t in tokens:
                parser(t)
        except ValueError:
            return False
        return True

    bad_pos = ~df["positions"].map(lambda c: _tokens_ok(c, parse_position, True)).astype(bool)
    if bad_pos.any():
        errs.append(f"Invalid positions at rows: {_bad_rows(df, bad_pos)}")
    bad_skill = ~df["skills"].map(lambda c: _tokens_ok(c, parse_skill, False)).astype(bool)
    if bad_skill.any():
        errs.append(f"Invalid skills at rows: {_bad_rows(df, bad_skill)}")

    nums = {c: pd.to_numeric(df[c], errors="coerce") for c in ["target_minutes", "max_minutes", "consecutive_minutes"]}
    for c, s in nums.items():
        if s.isna().any():
            errs.append(f"Non-numeric {c} at rows: {_bad_rows(df, s.isna())}")
    over = nums["target_minutes"] > nums["max_minutes"]
    if over.any():
        errs.append(f"target_minutes above max_minutes at rows: {_bad_rows(df, over)}")
    bad_consec = nums["consecutive_minutes"] <= 0
    if bad_consec.any():
        errs.append(f"consecutive_minutes must be positive at rows: {_bad_rows(df, bad_consec)}")
    return errs


def check_rotation(rotation: Rotation, players: Optional[Iterable[Player]] = None) -> List[str]:
    """
    Report structural problems in a rotation without raising.
    """
    issues: List[str] = []
    expected = 0
    for p in rotation.periods:
        if p.start_time != expected:
            issues.append(f"Period {p.id} starts at {p.start_time}, expected {expected}")
        if p.end_time - p.start_time != p.duration:
            issues.append(f"Period {p.id} duration does not match its bounds")
        expected = p.end_time

    total = rotation.total_seconds
    known = {p.id for p in players} if players is not None else None
    for pa in rotation.player_assignments:
        if known is not None and pa.player_id not in known:
            issues.append(f"Assignment references unknown player {pa.player_id}")
        for seg in pa.segments:
            if seg.start_time >= seg.end_time:
                issues.append(f"{pa.player_id}: empty segment [{seg.start_time}, {seg.end_time})")
            elif seg.start_time < 0 or seg.end_time > total:
                issues.append(f"{pa.player_id}: segment [{seg.start_time}, {seg.end_time}) outside the game")
        if list(pa.segments) != sort_segments(pa.segments):
            issues.append(f"{pa.player_id}: segments are not sorted by start time")
        ordered = sort_segments(pa.segments)
        for a, b in zip(ordered, ordered[1:]):
            if intervals_overlap(a, b):
                issues.append(
                    f"{pa.player_id}: segments [{a.start_time}, {a.end_time}) and "
                    f"[{b.start_time}, {b.end_time}) overlap"
                )
    return issues


def run_self_test():
    """
    Run a basic suite of self-tests.
    """
    from .fatigue import compute_fatigue
    from .lineups import evaluate_lineups
    from .minutes import compute_minutes_distribution
    from .optimizer import generate_staggered_rotation
    from .rotation import apply_assignments, new_rotation

    results = {"tests": []}
    rotation = new_rotation(name="Self test")
    results["tests"].append(("Default periods cover 48 minutes", rotation.total_seconds == 48 * 60))

    ids = [f"p{i}" for i in range(1, 11)]
    apply_assignments(rotation, generate_staggered_rotation(ids))
    results["tests"].append(("Staggered rotation is consistent", check_rotation(rotation) == []))

    dists = compute_minutes_distribution(rotation)
    results["tests"].append((
        "Period minutes sum to total",
        all(abs(sum(d.minutes_by_period.values()) - d.total_minutes) < 1e-9 for d in dists),
    ))
    fatigue = compute_fatigue(rotation, [])
    results["tests"].append((
        "Fatigue within 0..100",
        all(0 <= v <= 100 for m in fatigue for v in m.fatigue_values),
    ))
    lineups = evaluate_lineups(rotation, [])
    results["tests"].append(("Lineups have five players", all(len(entry.players) == 5 for entry in lineups)))
    return results
