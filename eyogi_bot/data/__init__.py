# Static YAML data shipped with the package (intents, knowledge, facts, replies, personas).
# Files are parsed once per process; callers must treat the result as read-only.

from __future__ import annotations

import os
from functools import lru_cache

import yaml

DATA_DIR = os.path.dirname(__file__)


@lru_cache(maxsize=16)
def load_data(name: str) -> dict:
    path = os.path.join(DATA_DIR, f"{name}.yaml")
    if not os.path.exists(path):
        raise FileNotFoundError(f"Data file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
