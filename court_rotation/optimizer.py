# court_rotation/optimizer.py
from __future__ import annotations
from typing import List, Sequence

from .constants import (
    GAME_SECONDS, LINEUP_SIZE, MIDDLE_PERIODS, MIDDLE_STINT_SECONDS,
    PERIOD_SECONDS, STAGGER_SECONDS, STARTER_STINT_SECONDS,
)
from .models import PlayerAssignment, TimeSegment
from .rotation_logging import get_logger
from .timeline import sort_segments

log = get_logger(__name__)


def generate_staggered_rotation(player_ids: Sequence[str]) -> List[PlayerAssignment]:
    """Constructive seed for a standard 4 x 12 game:
    - first five ids (starters) open the game [0, 6:00) and close it [42:00, 48:00)
    - every id plays two stints at the start of periods 2 and 3, offset by
      (index mod 5) * 3:00 so substitutions never all land at once
    No minutes target / max / consecutive policy is enforced here.
    """
    ids = list(player_ids)
    if not ids:
        raise ValueError("generate_staggered_rotation needs at least one player id")
    if len(set(ids)) != len(ids):
        raise ValueError("player ids must be unique")

    out: List[PlayerAssignment] = []
    for index, pid in enumerate(ids):
        segments: List[TimeSegment] = []
        starter = index < LINEUP_SIZE
        if starter:
            segments.append(TimeSegment(start_time=0, end_time=STARTER_STINT_SECONDS, on_court=True))

        stagger = (index % LINEUP_SIZE) * STAGGER_SECONDS
        for period in MIDDLE_PERIODS:
            start = (period - 1) * PERIOD_SECONDS + stagger
            segments.append(TimeSegment(start_time=start, end_time=start + MIDDLE_STINT_SECONDS, on_court=True))

        if starter:
            segments.append(TimeSegment(
                start_time=GAME_SECONDS - STARTER_STINT_SECONDS, end_time=GAME_SECONDS, on_court=True
            ))
        out.append(PlayerAssignment(player_id=pid, segments=sort_segments(segments)))

    log.info("staggered_rotation_generated", players=len(out), starters=min(LINEUP_SIZE, len(out)))
    return out
