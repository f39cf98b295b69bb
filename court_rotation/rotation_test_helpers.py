"""
Internal helpers for tests (not imported by the engine).
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from .models import MinutesPolicy, Player, PlayerAssignment, Rotation, TimeSegment
from .rotation import new_rotation


def quick_player(pid: str, name: str = "", skills: Optional[List[str]] = None, consecutive: float = 8,
                 target: float = 24, max_minutes: float = 32, positions="PG") -> Player:
    return Player(
        id=pid, name=name or pid.upper(), number=0,
        positions=positions, skills=skills or [],
        minutes=MinutesPolicy(target=target, max=max_minutes, consecutive=consecutive),
    )


def quick_rotation(plan: Dict[str, Sequence[Tuple[float, float]]], on_court: bool = True) -> Rotation:
    """{player_id: [(start, end), ...]} -> rotation with default periods."""
    rotation = new_rotation(name="Test", rotation_id="r1", game_id="g1")
    rotation.player_assignments = [
        PlayerAssignment(
            player_id=pid,
            segments=[TimeSegment(start_time=s, end_time=e, on_court=on_court) for s, e in spans],
        )
        for pid, spans in plan.items()
    ]
    return rotation
