#!/usr/bin/env python3
"""
Look up font families in a generated fontlist.json.

Matches are case-insensitive and ranked in tiers: exact name, prefix, substring,
then names containing every word of the query. Inside a tier the list's own
(popularity) order is kept, so the most popular match comes first.

Usage:
  python scripts/search_fontlist.py <query...>
"""
from __future__ import annotations

import json
import re
import sys
from pathlib import Path

try:
    from .build_fontlist import OUTPUT, ParseError  # type: ignore
    from .util_env import env_str, load_local_env  # type: ignore
except ImportError:
    from build_fontlist import OUTPUT, ParseError  # type: ignore
    from util_env import env_str, load_local_env  # type: ignore


def normalize(name: str) -> str:
    return re.sub(r"\s+", " ", name).strip().casefold()


def load_font_list(path: str | Path = OUTPUT) -> list[str]:
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        raise ParseError(f"{path} must be a JSON array of strings")
    return data


def find_by_name(font_list: list[str], name: str) -> str | None:
    """Return the list's spelling of `name`, or None if it is not listed."""
    wanted = normalize(name)
    if not wanted:
        return None
    for font in font_list:
        if normalize(font) == wanted:
            return font
    return None


def search(font_list: list[str], query: str, limit: int | None = None) -> list[str]:
    q = normalize(query)
    if not q:
        return []
    words = q.split(" ")
    tiers: list[list[str]] = [[], [], [], []]
    for font in font_list:
        n = normalize(font)
        if n == q:
            tiers[0].append(font)
        elif n.startswith(q):
            tiers[1].append(font)
        elif q in n:
            tiers[2].append(font)
        elif len(words) > 1 and all(w in n for w in words):
            tiers[3].append(font)
    results = [font for tier in tiers for font in tier]
    if limit is not None:
        results = results[:limit]
    return results


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print("Usage: python scripts/search_fontlist.py <query...>", file=sys.stderr)
        return 2
    load_local_env()
    path = Path(env_str("FONTLIST_OUTPUT", OUTPUT))
    try:
        font_list = load_font_list(path)
    except FileNotFoundError:
        print(f"{path} not found; run scripts/build_fontlist.py first.", file=sys.stderr)
        return 2
    except ParseError as e:
        print(f"ParseError: {e}", file=sys.stderr)
        return 2
    query = " ".join(argv[1:])
    results = search(font_list, query)
    if not results:
        print(f"No font found matching '{query}'.", file=sys.stderr)
        return 1
    for font in results:
        print(font)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
