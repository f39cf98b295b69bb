# court_rotation/rotation.py
from __future__ import annotations
import uuid
from typing import Iterable, List, Optional

from .constants import GAME_SECONDS, PERIOD_COUNT, PERIOD_MINUTES, period_label
from .errors import InvalidSegment, OverlapConflict, RotationError, UnknownPlayerReference
from .models import BuilderState, Period, Player, PlayerAssignment, Rotation, TimeSegment
from .rotation_logging import get_logger
from .timeline import intervals_overlap, sort_segments

log = get_logger(__name__)


# -----------------------
# Construction
# -----------------------
def build_periods(count: int = PERIOD_COUNT, minutes: float = PERIOD_MINUTES) -> List[Period]:
    if count <= 0 or minutes <= 0:
        raise ValueError(f"Need a positive period count and length, got {count} x {minutes}")
    length = int(round(minutes * 60))
    return [
        Period(
            id=f"Q{i}",
            name=period_label(i),
            duration=length,
            start_time=(i - 1) * length,
            end_time=i * length,
        )
        for i in range(1, count + 1)
    ]


def new_rotation(
    name: str = "New Rotation",
    game_id: Optional[str] = None,
    rotation_id: Optional[str] = None,
    periods: Optional[List[Period]] = None,
) -> Rotation:
    return Rotation(
        id=rotation_id or str(uuid.uuid4()),
        game_id=game_id or str(uuid.uuid4()),
        name=name,
        periods=periods if periods is not None else build_periods(),
        player_assignments=[],
    )


# -----------------------
# Segment checks
# -----------------------
def validate_segment(
    assignment: Optional[PlayerAssignment],
    segment: TimeSegment,
    total_seconds: float = GAME_SECONDS,
    ignore_index: Optional[int] = None,
) -> None:
    """
    Raise InvalidSegment for bad bounds, OverlapConflict if ``segment`` shares time
    with any existing segment of ``assignment`` (the one at ``ignore_index`` excluded).
    """
    if segment.start_time >= segment.end_time:
        raise InvalidSegment(
            f"Segment start ({segment.start_time}) must be before end ({segment.end_time})", segment
        )
    if segment.start_time < 0 or segment.end_time > total_seconds:
        raise InvalidSegment(
            f"Segment [{segment.start_time}, {segment.end_time}) is outside the game [0, {total_seconds}]",
            segment,
        )
    if assignment is None:
        return
    for i, existing in enumerate(assignment.segments):
        if i == ignore_index:
            continue
        if intervals_overlap(existing, segment):
            raise OverlapConflict(
                f"Segment [{segment.start_time}, {segment.end_time}) overlaps "
                f"[{existing.start_time}, {existing.end_time}) for player {assignment.player_id}",
                segment=segment,
                existing=existing,
                player_id=assignment.player_id,
            )


def _require_assignment(rotation: Rotation, player_id: str) -> PlayerAssignment:
    pa = rotation.assignment_for(player_id)
    if pa is None:
        raise UnknownPlayerReference(player_id, f"No assignment for player {player_id} in rotation {rotation.id}")
    return pa


def _checked(rotation: Rotation, pa: PlayerAssignment, segment: TimeSegment, ignore_index: Optional[int] = None):
    try:
        validate_segment(pa, segment, rotation.total_seconds, ignore_index=ignore_index)
    except RotationError as exc:
        log.warning("segment_rejected", rotation_id=rotation.id, player_id=pa.player_id, reason=str(exc))
        raise


# -----------------------
# Mutations (single writer: the builder session)
# -----------------------
def add_player_assignment(
    rotation: Rotation, player_id: str, roster: Optional[Iterable[Player]] = None
) -> PlayerAssignment:
    if roster is not None and player_id not in {p.id for p in roster}:
        log.warning("assignment_rejected", rotation_id=rotation.id, player_id=player_id)
        raise UnknownPlayerReference(player_id)
    existing = rotation.assignment_for(player_id)
    if existing is not None:
        return existing
    pa = PlayerAssignment(player_id=player_id, segments=[])
    rotation.player_assignments.append(pa)
    return pa


def remove_player_assignment(rotation: Rotation, player_id: str) -> bool:
    before = len(rotation.player_assignments)
    rotation.player_assignments = [pa for pa in rotation.player_assignments if pa.player_id != player_id]
    return len(rotation.player_assignments) != before


def add_time_segment(rotation: Rotation, player_id: str, segment: TimeSegment) -> PlayerAssignment:
    pa = _require_assignment(rotation, player_id)
    _checked(rotation, pa, segment)
    pa.segments = sort_segments([*pa.segments, segment])
    return pa


def update_time_segment(rotation: Rotation, player_id: str, index: int, segment: TimeSegment) -> PlayerAssignment:
    pa = _require_assignment(rotation, player_id)
    if not 0 <= index < len(pa.segments):
        raise IndexError(f"Player {player_id} has no segment #{index}")
    _checked(rotation, pa, segment, ignore_index=index)
    segs = list(pa.segments)
    segs[index] = segment
    pa.segments = sort_segments(segs)
    return pa


def remove_time_segment(rotation: Rotation, player_id: str, index: int) -> TimeSegment:
    pa = _require_assignment(rotation, player_id)
    if not 0 <= index < len(pa.segments):
        raise IndexError(f"Player {player_id} has no segment #{index}")
    segs = list(pa.segments)
    removed = segs.pop(index)
    pa.segments = segs
    return removed


def rename_rotation(rotation: Rotation, name: str) -> Rotation:
    rotation.name = name
    return rotation


def apply_assignments(
    rotation: Rotation,
    assignments: Iterable[PlayerAssignment],
    roster: Optional[Iterable[Player]] = None,
) -> Rotation:
    """
    Replace every assignment of ``rotation`` (e.g. with generator output).
    All assignments are checked first; nothing changes if any is rejected.
    """
    roster_ids = {p.id for p in roster} if roster is not None else None
    staged: List[PlayerAssignment] = []
    seen = set()
    for pa in assignments:
        if pa.player_id in seen:
            raise RotationError(f"Duplicate assignment for player {pa.player_id}")
        if roster_ids is not None and pa.player_id not in roster_ids:
            raise UnknownPlayerReference(pa.player_id)
        seen.add(pa.player_id)
        scratch = PlayerAssignment(player_id=pa.player_id, segments=[])
        for seg in sort_segments(pa.segments):
            _checked(rotation, scratch, seg)
            scratch.segments.append(seg)
        staged.append(scratch)
    rotation.player_assignments = staged
    log.info("assignments_applied", rotation_id=rotation.id, players=len(staged))
    return rotation


# -----------------------
# Builder session
# -----------------------
def start_rotation(
    state: BuilderState,
    name: str = "New Rotation",
    game_id: Optional[str] = None,
    periods: Optional[List[Period]] = None,
) -> Rotation:
    state.current = new_rotation(name=name, game_id=game_id, periods=periods)
    return state.current


def save_rotation(state: BuilderState) -> Rotation:
    """Store an independent copy of the current rotation, replacing one with the same id."""
    if state.current is None:
        raise RotationError("No rotation in progress")
    snapshot = state.current.model_copy(deep=True)
    for i, r in enumerate(state.saved):
        if r.id == snapshot.id:
            state.saved[i] = snapshot
            break
    else:
        state.saved.append(snapshot)
    log.info("rotation_saved", rotation_id=snapshot.id, name=snapshot.name)
    return snapshot


def open_saved_rotation(state: BuilderState, rotation_id: str) -> Rotation:
    for r in state.saved:
        if r.id == rotation_id:
            state.current = r.model_copy(deep=True)
            return state.current
    raise KeyError(f"No saved rotation with id {rotation_id}")
