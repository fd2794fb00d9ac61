"""Shared pytest fixtures.

Keeps the probe cache inside the test's temporary directory and stubs the
``ffmpeg -version`` probe so tests never depend on the installed tool unless
they ask for it.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable
    from pathlib import Path

# Literal command from the single-filter example pipeline.
_HFLIP_COMMAND: list[str] = [
    "ffmpeg",
    "-hide_banner",
    "-i",
    "input.mp4",
    "-filter_complex",
    "[0]hflip=x=10:y=20[s0]",
    "-map",
    "[s0]",
    "output.mp4",
    "-y",
]

_HFLIP_PIPELINE: dict[str, object] = {
    "inputs": {"in": {"path": "input.mp4"}},
    "filters": {"flip": {"name": "hflip", "inputs": ["in"], "params": {"x": 10, "y": 20}}},
    "outputs": [{"path": "output.mp4", "inputs": ["flip"]}],
}


@pytest.fixture(autouse=True)
def _isolated_cache(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point the probe cache at a per-test directory."""
    monkeypatch.setenv("FFGRAPH_CACHE", str(tmp_path / "cache"))


@pytest.fixture(autouse=True)
def _tools_version_sanity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stub the ffmpeg version probe to avoid native calls in tests."""
    monkeypatch.setattr("ffgraph.tools.cli.get_ffmpeg_version", lambda _exe="ffmpeg": "ffmpeg version test")


@pytest.fixture
def write_pipeline(tmp_path: Path) -> Callable[[dict[str, object]], Path]:
    """Return a helper that writes a pipeline document and returns its path."""

    def _write(document: dict[str, object], name: str = "pipeline.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def hflip_command() -> list[str]:
    """Return the expected command for the single-filter pipeline."""
    return list(_HFLIP_COMMAND)


@pytest.fixture
def hflip_pipeline() -> dict[str, object]:
    """Return the single-filter pipeline document."""
    return json.loads(json.dumps(_HFLIP_PIPELINE))
