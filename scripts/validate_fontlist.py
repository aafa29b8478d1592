#!/usr/bin/env python3
"""Validate fontlist.json against docs/fontlist.schema.json"""
from __future__ import annotations

import json
import sys
from pathlib import Path

from jsonschema import Draft7Validator

try:
    from .util_env import env_str, load_local_env  # type: ignore
except ImportError:
    from util_env import env_str, load_local_env  # type: ignore

ROOT = Path(__file__).resolve().parents[1]
SCHEMA = ROOT / "docs" / "fontlist.schema.json"


def validate(data_path: Path, schema_path: Path = SCHEMA) -> list[str]:
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    try:
        obj = json.loads(data_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        return [f"{data_path} is not valid UTF-8: {e}"]
    except json.JSONDecodeError as e:
        return [f"{data_path} is not valid JSON: {e}"]
    errors = sorted(Draft7Validator(schema).iter_errors(obj), key=lambda e: list(e.path))
    out = []
    for e in errors:
        path = "/".join([str(p) for p in e.path])
        out.append(f"Schema error at {path or 'root'}: {e.message}")
    return out


def main() -> int:
    load_local_env()
    data = Path(env_str("FONTLIST_OUTPUT", "fontlist.json"))
    if not data.exists():
        print(f"{data} not found; skipping validation (no data).", file=sys.stderr)
        return 0
    errors = validate(data)
    if errors:
        for line in errors:
            print(line, file=sys.stderr)
        return 1
    print(f"{data} passes schema")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
