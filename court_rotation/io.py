# court_rotation/io.py
from __future__ import annotations
import io
from typing import List

import pandas as pd
import yaml

from .constants import LIST_SEP, POSITION_CODES, ROSTER_COLUMNS, period_label, split_tokens
from .models import MinutesPolicy, Period, Player, Rotation
from .validation import check_rotation, validate_roster_df

_POSITION_TO_CODE = {pos: code for code, pos in POSITION_CODES.items()}


# ===== Roster CSV =====
def load_roster_csv(file_like) -> List[Player]:
    """Parse a roster CSV (path, file-like or bytes) into players; ValueError lists every problem."""
    if isinstance(file_like, (bytes, bytearray)):
        file_like = io.BytesIO(file_like)
    df = pd.read_csv(file_like, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    errs = validate_roster_df(df)
    if errs:
        raise ValueError("Invalid roster: " + "; ".join(errs))
    return dataframe_to_roster(df)


def dataframe_to_roster(df: pd.DataFrame) -> List[Player]:
    players: List[Player] = []
    for _, r in df.iterrows():
        number = str(r.get("number", "") or "").strip()
        players.append(Player(
            id=str(r["player_id"]).strip(),
            name=str(r["name"]).strip(),
            number=int(float(number)) if number else 0,
            positions=split_tokens(r["positions"]),
            skills=split_tokens(r["skills"]),
            minutes=MinutesPolicy(
                target=float(r["target_minutes"]),
                max=float(r["max_minutes"]),
                consecutive=float(r["consecutive_minutes"]),
            ),
        ))
    return players


def roster_to_dataframe(players: List[Player]) -> pd.DataFrame:
    rows = []
    for p in players:
        rows.append({
            "player_id": p.id,
            "name": p.name,
            "number": p.number,
            "positions": LIST_SEP.join(_POSITION_TO_CODE[pos] for pos in p.positions),
            "skills": LIST_SEP.join(s.value for s in p.skills),
            "target_minutes": p.minutes.target,
            "max_minutes": p.minutes.max,
            "consecutive_minutes": p.minutes.consecutive,
        })
    return pd.DataFrame(rows, columns=ROSTER_COLUMNS)


def save_roster_csv_bytes(players: List[Player]) -> bytes:
    buf = io.StringIO()
    roster_to_dataframe(players).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def generate_template_csv_bytes() -> bytes:
    empty = pd.DataFrame(columns=ROSTER_COLUMNS)
    buf = io.StringIO()
    empty.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


# ===== Periods YAML =====
def parse_periods_yaml(text: str) -> List[Period]:
    obj = yaml.safe_load(text) or {}
    items = obj.get("periods") if isinstance(obj, dict) else None
    if not isinstance(items, list) or not items:
        raise ValueError("Periods file must contain a non-empty 'periods' list.")
    periods: List[Period] = []
    start = 0
    for i, item in enumerate(items, start=1):
        if not isinstance(item, dict) or "minutes" not in item:
            raise ValueError(f"Period #{i} must be a mapping with 'minutes'.")
        length = int(round(float(item["minutes"]) * 60))
        periods.append(Period(
            id=str(item.get("id") or f"Q{i}"),
            name=str(item.get("name") or period_label(i)),
            duration=length,
            start_time=start,
            end_time=start + length,
        ))
        start += length
    return periods


def load_periods_yaml(path: str) -> List[Period]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_periods_yaml(f.read())


# ===== Rotation snapshots (opaque to storage) =====
def rotation_to_json(rotation: Rotation) -> str:
    return rotation.model_dump_json(by_alias=True, indent=2)


def rotation_from_json(text) -> Rotation:
    """Load a saved rotation; ValueError lists every segment the builder would have refused."""
    rotation = Rotation.model_validate_json(text)
    issues = check_rotation(rotation)
    if issues:
        raise ValueError("Invalid rotation: " + "; ".join(issues))
    return rotation
