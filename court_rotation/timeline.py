# court_rotation/timeline.py
"""
Interval arithmetic shared by every component.

All intervals are half-open ``[start_time, end_time)`` so an instant shared by two
adjacent segments belongs to the later one only.
"""
from __future__ import annotations
from typing import Iterable, List, NamedTuple, Optional, Sequence

from .models import Period, TimeSegment


class Interval(NamedTuple):
    start_time: float
    end_time: float


def overlap(a, b) -> float:
    """Seconds shared by two intervals (segments, periods or ``Interval``)."""
    return max(0.0, min(a.end_time, b.end_time) - max(a.start_time, b.start_time))


def intervals_overlap(a, b) -> bool:
    return overlap(a, b) > 0


def contains(segment, t: float) -> bool:
    return segment.start_time <= t < segment.end_time


def covers(segment: TimeSegment, t: float) -> bool:
    """On-court at instant ``t``."""
    return segment.on_court and contains(segment, t)


def spans(segment, start: float, end: float) -> bool:
    return segment.start_time <= start and end <= segment.end_time


def sort_segments(segments: Iterable[TimeSegment]) -> List[TimeSegment]:
    return sorted(segments, key=lambda s: (s.start_time, s.end_time))


def breakpoints(segments: Iterable[TimeSegment]) -> List[float]:
    points = set()
    for s in segments:
        points.add(s.start_time)
        points.add(s.end_time)
    return sorted(points)


def period_at(periods: Sequence[Period], t: float, closing: bool = False) -> Optional[Period]:
    """
    Period holding instant ``t``. With ``closing`` the instant is read as the end of a
    stint, so a period boundary resolves to the period that just finished.
    """
    for p in periods:
        if closing and p.start_time < t <= p.end_time:
            return p
        if not closing and contains(p, t):
            return p
    # the final buzzer belongs to the last period
    if periods and t == periods[-1].end_time:
        return periods[-1]
    return None


def format_clock(seconds: float, periods: Sequence[Period], closing: bool = False) -> str:
    """Label like ``Q2 3:00``: period id plus elapsed time into that period."""
    p = period_at(periods, seconds, closing=closing)
    if p is None:
        m, s = divmod(int(round(seconds)), 60)
        return f"{m}:{s:02d}"
    m, s = divmod(int(round(seconds - p.start_time)), 60)
    return f"{p.id} {m}:{s:02d}"
