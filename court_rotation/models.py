# court_rotation/models.py
from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .constants import GAME_SECONDS, Position, Skill, parse_position, parse_skill


class WireModel(BaseModel):
    """snake_case in Python, camelCase on the wire; both accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------
# Roster
# ---------------------
class MinutesPolicy(WireModel):
    target: float = Field(ge=0)
    max: float = Field(ge=0)
    consecutive: float = Field(gt=0)

    @model_validator(mode="after")
    def _target_within_max(self):
        if self.target > self.max:
            raise ValueError(f"target minutes ({self.target}) exceed max minutes ({self.max})")
        return self


class Player(WireModel):
    id: str = Field(min_length=1)
    name: str
    number: int = 0
    positions: List[Position] = Field(validation_alias=AliasChoices("positions", "position"))
    skills: List[Skill] = Field(default_factory=list)
    minutes: MinutesPolicy

    @field_validator("positions", mode="before")
    @classmethod
    def _one_or_many(cls, v):
        if v is None or isinstance(v, (str, Position)):
            v = [v] if v else []
        out: List[Position] = []
        for token in v:
            pos = parse_position(token)
            if pos not in out:
                out.append(pos)
        if not out:
            raise ValueError("a player needs at least one position")
        return out

    @field_validator("skills", mode="before")
    @classmethod
    def _skill_set(cls, v):
        if v is None:
            return []
        if isinstance(v, (str, Skill)):
            v = [v]
        out: List[Skill] = []
        for token in v:
            skill = parse_skill(token)
            if skill not in out:
                out.append(skill)
        return out


# ---------------------
# Game clock
# ---------------------
class Period(WireModel):
    id: str
    name: str
    duration: int = Field(gt=0)
    start_time: int = Field(ge=0)
    end_time: int

    @model_validator(mode="after")
    def _duration_matches(self):
        if self.end_time - self.start_time != self.duration:
            raise ValueError(
                f"period {self.id}: end_time - start_time must equal duration "
                f"({self.end_time} - {self.start_time} != {self.duration})"
            )
        return self


class TimeSegment(WireModel):
    model_config = ConfigDict(frozen=True)

    start_time: float
    end_time: float
    on_court: bool = True

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class PlayerAssignment(WireModel):
    player_id: str
    segments: List[TimeSegment] = Field(default_factory=list)

    def on_court_segments(self) -> List[TimeSegment]:
        return [s for s in self.segments if s.on_court]


class Rotation(WireModel):
    id: str
    game_id: str
    name: str = "New Rotation"
    periods: List[Period] = Field(default_factory=list)
    player_assignments: List[PlayerAssignment] = Field(default_factory=list)

    @field_validator("periods")
    @classmethod
    def _contiguous(cls, v: List[Period]):
        expected = 0
        for p in v:
            if p.start_time != expected:
                raise ValueError(f"period {p.id} starts at {p.start_time}, expected {expected}")
            expected = p.end_time
        return v

    @field_validator("player_assignments")
    @classmethod
    def _one_per_player(cls, v: List[PlayerAssignment]):
        seen = set()
        for pa in v:
            if pa.player_id in seen:
                raise ValueError(f"duplicate assignment for player {pa.player_id}")
            seen.add(pa.player_id)
        return v

    @property
    def total_seconds(self) -> int:
        return self.periods[-1].end_time if self.periods else GAME_SECONDS

    def assignment_for(self, player_id: str) -> Optional[PlayerAssignment]:
        for pa in self.player_assignments:
            if pa.player_id == player_id:
                return pa
        return None


# ---------------------
# Derived reports
# ---------------------
class FatigueModel(WireModel):
    player_id: str
    timestamps: List[int] = Field(default_factory=list)
    fatigue_values: List[float] = Field(default_factory=list)


class MinutesDistribution(WireModel):
    player_id: str
    total_minutes: float = 0.0
    minutes_by_period: Dict[str, float] = Field(default_factory=dict)


class LineupEffectiveness(WireModel):
    players: List[str]
    start_time: float
    end_time: float
    offensive_rating: float
    defensive_rating: float
    plus_minus: float


class AnalyticsReport(WireModel):
    fatigue: List[FatigueModel] = Field(default_factory=list)
    minutes: List[MinutesDistribution] = Field(default_factory=list)
    lineups: List[LineupEffectiveness] = Field(default_factory=list)


# ---------------------
# Engine settings / session
# ---------------------
class EngineConfig(BaseModel):
    fatigue_step_seconds: int = 60
    recovery_per_step: float = 0.05
    default_consecutive_minutes: float = 5.0
    min_lineup_seconds: int = 60
    lineup_size: int = 5
    rating_base_low: float = 80.0
    rating_base_high: float = 100.0
    variety_floor: float = 0.8
    variety_weight: float = 0.4
    random_seed: int = 42

    @field_validator("fatigue_step_seconds", "default_consecutive_minutes", "lineup_size")
    @classmethod
    def _positive(cls, v):
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("recovery_per_step", "min_lineup_seconds")
    @classmethod
    def _non_negative(cls, v):
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @model_validator(mode="after")
    def _rating_range(self):
        if self.rating_base_low > self.rating_base_high:
            raise ValueError("rating_base_low must not exceed rating_base_high")
        return self


class BuilderState(BaseModel):
    current: Optional[Rotation] = None
    saved: List[Rotation] = Field(default_factory=list)  # independent snapshots
