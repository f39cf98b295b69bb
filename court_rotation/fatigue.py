# court_rotation/fatigue.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import numpy as np
import pandas as pd

from .models import EngineConfig, FatigueModel, Player, PlayerAssignment, Rotation
from .rotation_logging import get_logger

log = get_logger(__name__)


def _on_court_mask(timestamps: np.ndarray, assignment: PlayerAssignment) -> np.ndarray:
    mask = np.zeros(timestamps.shape, dtype=bool)
    for seg in assignment.on_court_segments():
        mask |= (timestamps >= seg.start_time) & (timestamps < seg.end_time)
    return mask


def simulate_player(
    timestamps: np.ndarray,
    assignment: PlayerAssignment,
    consecutive_minutes: float,
    config: EngineConfig,
) -> List[float]:
    """
    Running fatigue per sample.
    On court: full fatigue after ``consecutive_minutes`` of continuous play.
    Off court: fixed recovery per sample.
    """
    gain = 100.0 / (consecutive_minutes * 60.0) * config.fatigue_step_seconds
    on_court = _on_court_mask(timestamps, assignment)
    values: List[float] = []
    fatigue = 0.0
    for playing in on_court:
        fatigue += gain if playing else -config.recovery_per_step
        fatigue = min(100.0, max(0.0, fatigue))
        values.append(fatigue)
    return values


def compute_fatigue(
    rotation: Optional[Rotation],
    players: Iterable[Player],
    config: Optional[EngineConfig] = None,
) -> List[FatigueModel]:
    if rotation is None or not rotation.player_assignments:
        return []
    config = config or EngineConfig()
    by_id: Dict[str, Player] = {p.id: p for p in players}
    timestamps = np.arange(0, rotation.total_seconds, config.fatigue_step_seconds, dtype=int)

    out: List[FatigueModel] = []
    for pa in rotation.player_assignments:
        player = by_id.get(pa.player_id)
        if player is None:
            log.debug("fatigue_default_policy", player_id=pa.player_id)
            consecutive = config.default_consecutive_minutes
        else:
            consecutive = player.minutes.consecutive
        out.append(FatigueModel(
            player_id=pa.player_id,
            timestamps=timestamps.tolist(),
            fatigue_values=simulate_player(timestamps, pa, consecutive, config),
        ))
    log.debug("fatigue_computed", rotation_id=rotation.id, players=len(out), samples=len(timestamps))
    return out


def peak_fatigue(model: FatigueModel) -> float:
    return max(model.fatigue_values) if model.fatigue_values else 0.0


def fatigue_frame(models: List[FatigueModel]) -> pd.DataFrame:
    """Wide table: one row per sample time, one column per player."""
    if not models:
        return pd.DataFrame()
    data = {m.player_id: m.fatigue_values for m in models}
    df = pd.DataFrame(data, index=pd.Index(models[0].timestamps, name="timestamp"))
    return df
