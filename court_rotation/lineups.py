# court_rotation/lineups.py
from __future__ import annotations
from typing import Dict, Iterable, List, NamedTuple, Optional

from .models import EngineConfig, LineupEffectiveness, Player, Rotation
from .ratings import BaseRatingSource, RandomBaseRatings, lineup_ratings, skill_variety
from .rotation_logging import get_logger
from .timeline import breakpoints, spans

log = get_logger(__name__)


class LineupSlice(NamedTuple):
    start_time: float
    end_time: float
    players: List[str]


def lineup_slices(rotation: Rotation) -> List[LineupSlice]:
    """
    Maximal intervals of constant on-court set, in time order.
    Player order inside a slice follows the rotation's assignment order.
    """
    on_court = {pa.player_id: pa.on_court_segments() for pa in rotation.player_assignments}
    points = breakpoints(s for segs in on_court.values() for s in segs)

    slices: List[LineupSlice] = []
    for t0, t1 in zip(points, points[1:]):
        ids = [
            pa.player_id
            for pa in rotation.player_assignments
            if any(spans(s, t0, t1) for s in on_court[pa.player_id])
        ]
        if slices and slices[-1].end_time == t0 and slices[-1].players == ids:
            slices[-1] = slices[-1]._replace(end_time=t1)
        else:
            slices.append(LineupSlice(t0, t1, ids))
    return slices


def evaluate_lineups(
    rotation: Optional[Rotation],
    players: Iterable[Player],
    ratings: Optional[BaseRatingSource] = None,
    config: Optional[EngineConfig] = None,
) -> List[LineupEffectiveness]:
    if rotation is None or not rotation.player_assignments:
        return []
    config = config or EngineConfig()
    ratings = ratings or RandomBaseRatings.from_config(config)
    by_id: Dict[str, Player] = {p.id: p for p in players}

    out: List[LineupEffectiveness] = []
    for sl in lineup_slices(rotation):
        if sl.end_time - sl.start_time < config.min_lineup_seconds:
            continue
        if len(sl.players) != config.lineup_size:
            continue
        variety = skill_variety([by_id.get(pid) for pid in sl.players])
        base_off, base_def = ratings.base_ratings(sl.players)
        offensive, defensive, plus_minus = lineup_ratings(variety, base_off, base_def, config)
        out.append(LineupEffectiveness(
            players=list(sl.players),
            start_time=sl.start_time,
            end_time=sl.end_time,
            offensive_rating=offensive,
            defensive_rating=defensive,
            plus_minus=plus_minus,
        ))
    log.info("lineups_evaluated", rotation_id=rotation.id, count=len(out))
    return out
