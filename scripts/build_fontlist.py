#!/usr/bin/env python3
"""
Build fontlist.json from the Google Fonts metadata feed.

Fetches the full catalog (~2MB JSON), sorts the families by their popularity
score (ascending, stable), and writes a JSON array of family name strings.

Configuration comes from the environment (or local.env in the repo root):
  FONTLIST_URL      metadata feed URL (default: https://fonts.google.com/metadata/fonts)
  FONTLIST_OUTPUT   output path, relative to the cwd (default: fontlist.json)
  FONTLIST_TIMEOUT  fetch timeout in seconds (default: 30)
  FONTLIST_DEBUG    set to 1 for extra diagnostics on stderr

Usage:
  python scripts/build_fontlist.py
"""

from __future__ import annotations

import json
import math
import os
import socket
import stat
import sys
import tempfile
from http.client import HTTPException
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from jsonschema import Draft7Validator

try:
    from .util_env import env_flag, env_positive_float, env_str, load_local_env  # type: ignore
except ImportError:
    from util_env import env_flag, env_positive_float, env_str, load_local_env  # type: ignore

METADATA_URL = "https://fonts.google.com/metadata/fonts"
OUTPUT = "fontlist.json"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "fontlist-builder/1.0 (+https://fonts.google.com)"

# The feed has been served behind an anti-XSSI guard line before
XSSI_PREFIX = ")]}'"

FEED_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["familyMetadataList"],
    "properties": {
        "familyMetadataList": {
            "type": "array",
            "items": {"type": "object"},
        },
    },
}


class FontListError(Exception):
    """Base class for failures while building the font list."""


class FetchError(FontListError):
    """Network failure, timeout, or non-success HTTP status."""


class ParseError(FontListError):
    """Malformed JSON or an unexpected feed shape."""


class WriteError(FontListError):
    """The output file could not be written."""


def _debug(msg: str) -> None:
    if env_flag("FONTLIST_DEBUG"):
        print(f"[debug] {msg}", file=sys.stderr)


def fetch_metadata(url: str = METADATA_URL, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    req = Request(
        url=url,
        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        method="GET",
    )
    try:
        with urlopen(req, timeout=timeout) as resp:
            return resp.read()
    except HTTPError as e:
        detail = ""
        try:
            detail = e.read().decode("utf-8", errors="ignore")[:500]
        except Exception:
            detail = ""
        if detail:
            _debug(f"HTTP error body: {detail}")
        raise FetchError(f"HTTP {e.code} fetching {url}: {e.reason}") from e
    except (socket.timeout, TimeoutError) as e:
        raise FetchError(f"Timed out after {timeout:g}s fetching {url}") from e
    except URLError as e:
        if isinstance(e.reason, (socket.timeout, TimeoutError)):
            raise FetchError(f"Timed out after {timeout:g}s fetching {url}") from e
        raise FetchError(f"Could not reach {url}: {e.reason}") from e
    except (OSError, HTTPException) as e:
        raise FetchError(f"Network error fetching {url}: {e}") from e


def _reject_constant(name: str):
    # json accepts NaN and Infinity, which are not JSON and break the ordering
    raise ParseError(f"Response contains non-standard JSON constant {name}")


def parse_metadata(raw: bytes | str) -> list[dict]:
    """Decode the feed body and return its familyMetadataList entries."""
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Response is not valid UTF-8: {e}") from e
    else:
        text = raw
    text = text.lstrip()
    if text.startswith(XSSI_PREFIX):
        text = text[len(XSSI_PREFIX):]
    try:
        doc = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e

    errors = sorted(Draft7Validator(FEED_SCHEMA).iter_errors(doc), key=lambda e: list(e.path))
    if errors:
        e = errors[0]
        path = "/".join(str(p) for p in e.path)
        raise ParseError(f"Unexpected metadata shape at {path or 'root'}: {e.message}")
    return doc["familyMetadataList"]


def sort_by_popularity(entries: list[dict]) -> list[dict]:
    """Ascending popularity; sorted() is stable so ties keep feed order."""
    for i, entry in enumerate(entries):
        val = entry.get("popularity")
        # bool is an int subclass; true/false is not a score
        if isinstance(val, bool) or not isinstance(val, (int, float)) or (isinstance(val, float) and not math.isfinite(val)):
            raise ParseError(f"Entry {i} has no finite numeric 'popularity' (got {val!r})")
    return sorted(entries, key=lambda x: x["popularity"])


def project_families(entries: list[dict]) -> list[str]:
    families = []
    for i, entry in enumerate(entries):
        family = entry.get("family")
        if not isinstance(family, str):
            raise ParseError(f"Entry {i} has no string 'family' (got {family!r})")
        families.append(family)
    return families


def _target_mode(out: Path) -> int:
    """Mode for the replacement file: keep the existing one, else what open() would give."""
    try:
        return stat.S_IMODE(out.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_fontlist(families: list[str], output: str | Path = OUTPUT) -> Path:
    """Write the names as a JSON array, replacing `output` only once fully written."""
    out = Path(output)
    payload = json.dumps(families, ensure_ascii=False, indent=2) + "\n"
    tmp_name = None
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{out.name}.", suffix=".tmp", dir=out.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_name, _target_mode(out))
        os.replace(tmp_name, out)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteError(f"Could not write {out}: {e}") from e
    return out


def build(url: str = METADATA_URL, output: str | Path = OUTPUT, timeout: float = DEFAULT_TIMEOUT) -> int:
    """Run the whole fetch/sort/write pass and return the number of fonts written."""
    print("Fetching Google Fonts metadata...")
    raw = fetch_metadata(url, timeout=timeout)
    _debug(f"Fetched {len(raw)} bytes from {url}")

    print("Sorting by popularity and extracting family names...")
    entries = parse_metadata(raw)
    families = project_families(sort_by_popularity(entries))

    out = write_fontlist(families, output)
    print(f"Wrote {out} with {len(families)} fonts")
    return len(families)


def main() -> int:
    load_local_env()
    url = env_str("FONTLIST_URL", METADATA_URL)
    output = env_str("FONTLIST_OUTPUT", OUTPUT)
    timeout = env_positive_float("FONTLIST_TIMEOUT", DEFAULT_TIMEOUT)
    _debug(f"url={url} output={output} timeout={timeout:g}")
    try:
        build(url, output, timeout)
    except FontListError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
