# court_rotation/analytics.py
from __future__ import annotations
import asyncio
from typing import Iterable, List, Optional

from .fatigue import compute_fatigue
from .lineups import evaluate_lineups
from .minutes import compute_minutes_distribution
from .models import AnalyticsReport, EngineConfig, Player, Rotation
from .ratings import BaseRatingSource
from .rotation_logging import get_logger

log = get_logger(__name__)


def build_report(
    rotation: Optional[Rotation],
    players: Iterable[Player],
    config: Optional[EngineConfig] = None,
    ratings: Optional[BaseRatingSource] = None,
) -> AnalyticsReport:
    config = config or EngineConfig()
    roster: List[Player] = list(players)
    report = AnalyticsReport(
        fatigue=compute_fatigue(rotation, roster, config),
        minutes=compute_minutes_distribution(rotation),
        lineups=evaluate_lineups(rotation, roster, ratings=ratings, config=config),
    )
    log.info(
        "report_built",
        rotation_id=rotation.id if rotation else None,
        players=len(report.minutes),
        lineups=len(report.lineups),
    )
    return report


async def build_report_async(
    rotation: Optional[Rotation],
    players: Iterable[Player],
    config: Optional[EngineConfig] = None,
    ratings: Optional[BaseRatingSource] = None,
    timeout: Optional[float] = None,
) -> AnalyticsReport:
    """
    Run ``build_report`` on a worker thread over a private snapshot.
    On timeout ``asyncio.TimeoutError`` propagates and the result is discarded.
    """
    snapshot = rotation.model_copy(deep=True) if rotation is not None else None
    roster = [p.model_copy(deep=True) for p in players]
    return await asyncio.wait_for(
        asyncio.to_thread(build_report, snapshot, roster, config, ratings),
        timeout=timeout,
    )
