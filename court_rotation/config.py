# court_rotation/config.py
from __future__ import annotations
import os
import textwrap
from typing import Optional

import yaml

from .models import EngineConfig

# ===== Engine defaults =====
DEFAULT_CONFIG = {
    "fatigue_step_seconds": 60,
    "recovery_per_step": 0.05,        # off-court recovery per sample
    "default_consecutive_minutes": 5,  # unknown / deleted players
    "min_lineup_seconds": 60,          # ignore sub-minute slivers
    "lineup_size": 5,
    "rating_base_low": 80.0,
    "rating_base_high": 100.0,
    "variety_floor": 0.8,
    "variety_weight": 0.4,
    "random_seed": 42,
}


def ensure_assets_exist(base_dir: str = "assets") -> None:
    os.makedirs(base_dir, exist_ok=True)
    files = {
        "periods.yaml": DEFAULT_PERIODS_YAML,
        "sample_roster.csv": DEFAULT_SAMPLE_ROSTER_CSV,
        "engine.yaml": DEFAULT_ENGINE_YAML,
    }
    for name, text in files.items():
        path = os.path.join(base_dir, name)
        if not os.path.exists(path):
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)


def load_engine_config(path: Optional[str] = None) -> EngineConfig:
    """Defaults overlaid with the YAML mapping at ``path`` (if given)."""
    values = dict(DEFAULT_CONFIG)
    if path:
        with open(path, "r", encoding="utf-8") as f:
            obj = yaml.safe_load(f) or {}
        if not isinstance(obj, dict):
            raise ValueError(f"{path} must contain a mapping of engine settings.")
        unknown = sorted(set(obj) - set(DEFAULT_CONFIG))
        if unknown:
            raise ValueError(f"Unknown engine settings in {path}: {unknown}")
        values.update(obj)
    return EngineConfig(**values)


# ===== Default game layout (4 x 12) =====
DEFAULT_PERIODS_YAML = textwrap.dedent("""\
periods:
  - id: Q1
    name: 1st Quarter
    minutes: 12
  - id: Q2
    name: 2nd Quarter
    minutes: 12
  - id: Q3
    name: 3rd Quarter
    minutes: 12
  - id: Q4
    name: 4th Quarter
    minutes: 12
""")

DEFAULT_ENGINE_YAML = textwrap.dedent("""\
fatigue_step_seconds: 60
recovery_per_step: 0.05
default_consecutive_minutes: 5
min_lineup_seconds: 60
random_seed: 42
""")

# ===== Sample roster (positions / skills are |-separated) =====
DEFAULT_SAMPLE_ROSTER_CSV = textwrap.dedent("""\
player_id,name,number,positions,skills,target_minutes,max_minutes,consecutive_minutes
p1,John Smith,1,PG,Playmaker|Defender,30,36,8
p2,Mike Johnson,2,SG,Shooter|Finisher,28,32,7
p3,Dave Williams,3,SF,Versatile|Defender,24,30,8
p4,James Brown,4,PF,Rebounder|Finisher,26,32,7
p5,Robert Davis,5,C,Rebounder|Defender,24,28,6
""")
