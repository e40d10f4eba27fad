"""Shared fixtures: raw match records and in-memory collaborators."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from cache import PostedCache
from core.interface import MatchSource, Notifier
from core.model import MatchView

ALICE = "uuid-alice"
BRUNO = "uuid-bruno"
CARLA = "uuid-carla"


def make_match(
    match_id: Any = "m1",
    date: Any = 1_700_000_000,
    countries: tuple = ("BR", "BR"),
    winner: str | None = ALICE,
    forfeited: bool = False,
    changes: list | None = None,
    time: Any = 754,
    seed: dict | None = None,
) -> dict:
    return {
        "id": match_id,
        "date": date,
        "players": [
            {"uuid": ALICE, "nickname": "Alice", "country": countries[0], "eloRate": 1080},
            {"uuid": BRUNO, "nickname": "Bruno", "country": countries[1], "eloRate": 990},
        ],
        "result": {"uuid": winner, "time": time} if winner else {"time": time},
        "forfeited": forfeited,
        "changes": changes if changes is not None else [],
        "seed": seed if seed is not None else {"overworld": "VILLAGE", "nether": "BRIDGE"},
    }


class FakeSource(MatchSource):
    name = "fake"

    def __init__(self, matches: list):
        self.matches = matches
        self.calls = 0

    def fetch_latest(self) -> list:
        self.calls += 1
        return list(self.matches)


class FakeNotifier(Notifier):
    def __init__(self, fail_ids: set | None = None, delay: float = 0, destination: Any = "channel"):
        self.sent: list[MatchView] = []
        self.fail_ids = fail_ids or set()
        self.delay = delay
        self.destination = destination

    async def resolve(self) -> Any:
        return self.destination

    async def notify(self, destination: Any, view: MatchView) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if view.match_id in self.fail_ids:
            raise RuntimeError(f"send failed for {view.match_id}")
        self.sent.append(view)

    @property
    def sent_ids(self) -> list:
        return [view.match_id for view in self.sent]


@pytest.fixture
def cache(tmp_path) -> PostedCache:
    return PostedCache(tmp_path / ".cache" / "ranked_posted.json")
