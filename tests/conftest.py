"""
pytest config: put scripts/ on sys.path so the scripts import as top-level modules.
"""
from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SCRIPTS = str(ROOT / "scripts")
if SCRIPTS not in sys.path:
    sys.path.insert(0, SCRIPTS)


@pytest.fixture
def feed_body():
    """Build a metadata response body from (family, popularity) pairs."""

    def _make(pairs):
        doc = {"familyMetadataList": [{"family": f, "popularity": p, "category": "Sans Serif"} for f, p in pairs]}
        return json.dumps(doc).encode("utf-8")

    return _make


@pytest.fixture
def fake_urlopen(monkeypatch):
    """Replace urlopen in build_fontlist; returns the list of (url, timeout) calls."""
    import build_fontlist

    calls = []

    def _install(body=None, exc=None):
        def _urlopen(req, timeout=None):
            calls.append((req.full_url, timeout))
            if exc is not None:
                raise exc
            return io.BytesIO(body)

        monkeypatch.setattr(build_fontlist, "urlopen", _urlopen)
        return calls

    return _install
