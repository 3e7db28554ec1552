"""Unit tests for the artifact sink (pagecapture.tester.artifacts)."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagecapture.tester.artifacts import ArtifactSink


class TestArtifactSink:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_persist_creates_directory_and_file(self, tmp_path: Path):
        sink = ArtifactSink(tmp_path / "out" / "artifacts")
        path = await sink.persist("capture.png", b"\x89PNG data")
        assert path == tmp_path / "out" / "artifacts" / "capture.png"
        assert path.read_bytes() == b"\x89PNG data"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_persist_overwrites(self, tmp_path: Path):
        sink = ArtifactSink(tmp_path)
        await sink.persist("a.png", b"first")
        await sink.persist("a.png", b"second")
        assert (tmp_path / "a.png").read_bytes() == b"second"

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["../escape.png", "sub/dir.png", ""])
    def test_rejects_non_plain_names(self, tmp_path: Path, name: str):
        with pytest.raises(ValueError, match="plain file name"):
            ArtifactSink(tmp_path).path_for(name)
