"""Tests for the posted-match cache."""

from __future__ import annotations

import json
from pathlib import Path

from cache import PostedCache


class TestPostedCache:
    def test_creates_empty_file_when_missing(self, tmp_path: Path) -> None:
        path = tmp_path / ".cache" / "ranked_posted.json"
        cache = PostedCache(path)
        assert len(cache) == 0
        assert json.loads(path.read_text()) == []

    def test_add_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "posted.json"
        cache = PostedCache(path)
        cache.add("m1")
        cache.add(42)

        reloaded = PostedCache(path)
        assert "m1" in reloaded
        assert 42 in reloaded
        assert sorted(json.loads(path.read_text()), key=str) == [42, "m1"]

    def test_add_is_idempotent(self, cache: PostedCache) -> None:
        cache.add("m1")
        cache.add("m1")
        assert len(cache) == 1

    def test_corrupt_file_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "posted.json"
        path.write_text("{not json")
        assert len(PostedCache(path)) == 0

    def test_non_array_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "posted.json"
        path.write_text('{"a": 1}')
        assert len(PostedCache(path)) == 0

    def test_save_failure_is_reported_not_raised(self, tmp_path: Path) -> None:
        path = tmp_path / "posted.json"
        cache = PostedCache(path)
        path.unlink()
        path.mkdir()

        assert cache.save() is False
        cache.add("m1")
        assert "m1" in cache
