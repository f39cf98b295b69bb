# court_rotation/constants.py
from __future__ import annotations
from enum import Enum
from typing import Dict, List

# -----------------------------
# Positions / Skills (closed)
# -----------------------------
class Position(str, Enum):
    PointGuard = "Point Guard"
    ShootingGuard = "Shooting Guard"
    SmallForward = "Small Forward"
    PowerForward = "Power Forward"
    Center = "Center"


class Skill(str, Enum):
    Shooter = "Shooter"
    Defender = "Defender"
    Playmaker = "Playmaker"
    Rebounder = "Rebounder"
    Finisher = "Finisher"
    Energy = "Energy Player"
    Versatile = "Versatile"


POSITION_CODES: Dict[str, Position] = {
    "PG": Position.PointGuard,
    "SG": Position.ShootingGuard,
    "SF": Position.SmallForward,
    "PF": Position.PowerForward,
    "C": Position.Center,
}

SKILL_ALIASES: Dict[str, Skill] = {
    "energy": Skill.Energy,
    "shoot": Skill.Shooter,
    "defense": Skill.Defender,
    "rebounding": Skill.Rebounder,
}

# ---------------------
# Game clock (seconds)
# ---------------------
PERIOD_COUNT = 4
PERIOD_MINUTES = 12
PERIOD_SECONDS = PERIOD_MINUTES * 60
GAME_SECONDS = PERIOD_COUNT * PERIOD_SECONDS

LINEUP_SIZE = 5

# Staggered generator anchors (standard 4 x 12 game)
STARTER_STINT_SECONDS = 6 * 60
STAGGER_SECONDS = 3 * 60
MIDDLE_STINT_SECONDS = 6 * 60
MIDDLE_PERIODS: List[int] = [2, 3]

ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


# ---------------------
# Normalization helpers
# ---------------------
def _key(s: str) -> str:
    return "".join(ch for ch in s.strip().lower() if ch.isalnum())


def parse_position(token) -> Position:
    """Accept enum values, member names or short codes (PG, SG, ...)."""
    if isinstance(token, Position):
        return token
    raw = str(token or "").strip()
    if raw.upper() in POSITION_CODES:
        return POSITION_CODES[raw.upper()]
    k = _key(raw)
    for pos in Position:
        if k in (_key(pos.value), _key(pos.name)):
            return pos
    raise ValueError(f"Unknown position: {token!r}")


def parse_skill(token) -> Skill:
    if isinstance(token, Skill):
        return token
    raw = str(token or "").strip()
    k = _key(raw)
    for skill in Skill:
        if k in (_key(skill.value), _key(skill.name)):
            return skill
    if raw.lower() in SKILL_ALIASES:
        return SKILL_ALIASES[raw.lower()]
    raise ValueError(f"Unknown skill: {token!r}")


def period_label(n: int) -> str:
    return f"{ordinal(n)} Quarter"


def ordinal(n: int) -> str:
    # 11th-13th, 111th... take "th" despite their last digit
    if n % 100 in (11, 12, 13):
        return f"{n}th"
    return f"{n}{ORDINAL_SUFFIXES.get(n % 10, 'th')}"


# ---------------------
# Roster CSV layout
# ---------------------
ROSTER_COLUMNS: List[str] = [
    "player_id", "name", "number", "positions", "skills",
    "target_minutes", "max_minutes", "consecutive_minutes",
]
LIST_SEP = "|"


def split_tokens(cell) -> List[str]:
    if cell is None:
        return []
    text = str(cell).strip()
    if not text or text.lower() == "nan":
        return []
    return [t.strip() for t in text.split(LIST_SEP) if t.strip()]
