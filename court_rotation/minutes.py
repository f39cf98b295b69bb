# court_rotation/minutes.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import pandas as pd

from .models import MinutesDistribution, Player, PlayerAssignment, Rotation
from .rotation_logging import get_logger
from .timeline import overlap, sort_segments

log = get_logger(__name__)


def player_minutes(assignment: PlayerAssignment, rotation: Rotation) -> MinutesDistribution:
    by_period: Dict[str, float] = {p.id: 0.0 for p in rotation.periods}
    total = 0.0
    for seg in assignment.on_court_segments():
        total += seg.duration / 60
        for period in rotation.periods:
            shared = overlap(seg, period)
            if shared > 0:
                by_period[period.id] += shared / 60
    return MinutesDistribution(player_id=assignment.player_id, total_minutes=total, minutes_by_period=by_period)


def compute_minutes_distribution(rotation: Optional[Rotation]) -> List[MinutesDistribution]:
    if rotation is None or not rotation.player_assignments:
        return []
    out = [player_minutes(pa, rotation) for pa in rotation.player_assignments]
    log.debug("minutes_computed", rotation_id=rotation.id, players=len(out))
    return out


def longest_stretch_minutes(assignment: PlayerAssignment) -> float:
    """Longest continuous on-court stretch; touching segments count as one stretch."""
    best = 0.0
    run_start = run_end = None
    for seg in sort_segments(assignment.on_court_segments()):
        if run_end is not None and seg.start_time <= run_end:
            run_end = max(run_end, seg.end_time)
        else:
            run_start, run_end = seg.start_time, seg.end_time
        best = max(best, run_end - run_start)
    return best / 60


def minutes_dashboard_df(rotation: Optional[Rotation], players: Iterable[Player]) -> pd.DataFrame:
    """
    Minutes played against each player's minutes policy.
    Advisory only: nothing here changes the rotation.
    """
    by_id = {p.id: p for p in players}
    rows = []
    for pa in (rotation.player_assignments if rotation else []):
        dist = player_minutes(pa, rotation)
        p = by_id.get(pa.player_id)
        row = {
            "player_id": pa.player_id,
            "name": p.name if p else f"#{pa.player_id}",
        }
        for period in rotation.periods:
            row[period.id] = round(dist.minutes_by_period[period.id], 2)
        stretch = longest_stretch_minutes(pa)
        row.update({
            "total_minutes": round(dist.total_minutes, 2),
            "target": p.minutes.target if p else None,
            "max": p.minutes.max if p else None,
            "consecutive": p.minutes.consecutive if p else None,
            "longest_stretch": round(stretch, 2),
            "flag_over_max": bool(p and dist.total_minutes > p.minutes.max),
            "flag_under_target": bool(p and dist.total_minutes < p.minutes.target),
            "flag_over_consecutive": bool(p and stretch > p.minutes.consecutive),
        })
        rows.append(row)

    if not rows:
        return pd.DataFrame()
    dash = pd.DataFrame(rows).sort_values(["flag_over_max", "total_minutes", "name"], ascending=[False, False, True])
    return dash.reset_index(drop=True)
