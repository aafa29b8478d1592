#!/usr/bin/env python3
"""Local env loading and typed env lookups for the fontlist scripts.

Reads KEY=value pairs from a local.env file in the repo root and injects them
into os.environ if not already present. Lines starting with '#' and blank
lines are ignored. Values can be optionally quoted with single or double quotes.

local.env is for local runs only and is gitignored.
"""
from __future__ import annotations

import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _parse_line(line: str) -> tuple[str, str] | None:
    if not line or line.strip().startswith("#"):
        return None
    if "=" not in line:
        return None
    key, val = line.split("=", 1)
    key = key.strip()
    if key.startswith("export "):
        key = key[len("export "):].strip()
    val = val.strip()
    if len(val) >= 2 and val[0] == val[-1] and val[0] in ("'", '"'):
        val = val[1:-1]
    if not key:
        return None
    return key, val


def load_local_env(filename: str = "local.env", override: bool = False, root: Path | None = None) -> int:
    """Load `filename` from the repo root; returns how many variables were set."""
    env_path = (root or ROOT) / filename
    if not env_path.is_file():
        return 0
    count = 0
    for raw in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_line(raw)
        if not parsed:
            continue
        k, v = parsed
        if not override and k in os.environ:
            continue
        os.environ[k] = v
        count += 1
    return count


def env_str(name: str, default: str) -> str:
    val = os.getenv(name, "").strip()
    return val or default


def env_positive_float(name: str, default: float) -> float:
    # Unparsable or non-positive values fall back to the default
    try:
        val = float(os.getenv(name, ""))
    except ValueError:
        return default
    if val <= 0 or val != val or val == float("inf"):
        return default
    return val


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


__all__ = ["load_local_env", "env_str", "env_positive_float", "env_flag"]
