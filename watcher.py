"""
Ranked match watcher

Every tick:
1. Fetch the latest matches from the ranked API (oldest first)
2. Skip matches without an id, already posted, or being posted by an
   overlapping tick
3. Skip matches with no player from the region of interest
4. Announce the rest and remember them in the posted cache

A failed announcement is not cached, so the match is retried on a later
tick while it is still in the feed. Ids other than strings and numbers are
treated as missing.

The posted cache file is rewritten synchronously on the event loop right
after each announcement; writes from overlapping ticks never interleave.
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Set

import discord

from cache import PostedCache
from config import DEFAULT_REGION_CODES, Settings
from core.interface import MatchSource, Notifier
from core.model import TickStats
from discord_notifier import DiscordNotifier
from jobs import IntervalJob
from normalizer import is_regional, normalize_match
from sources.ranked import RankedMatchSource

logger = logging.getLogger(__name__)

JOB_NAME = "rankedMatchesWatcher"

ID_TYPES = (str, int, float)


class InFlightGuard:
    """Ids being announced right now, shared by overlapping ticks"""

    def __init__(self):
        self._ids: Set[Any] = set()

    def __contains__(self, match_id: Any) -> bool:
        return match_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @contextmanager
    def hold(self, match_id: Any) -> Iterator[None]:
        self._ids.add(match_id)
        try:
            yield
        finally:
            self._ids.discard(match_id)


class RankedMatchWatcher:
    """Announcement pipeline for ranked matches"""

    def __init__(
        self,
        source: MatchSource,
        notifier: Notifier,
        cache: Optional[PostedCache] = None,
        region_codes: Sequence[str] = DEFAULT_REGION_CODES,
    ):
        """
        Args:
            source: feed of raw match records
            notifier: announcement destination
            cache: posted-id store, loaded from the default file when omitted
            region_codes: country codes that make a match worth announcing
        """
        self.source = source
        self.notifier = notifier
        self.cache = cache if cache is not None else PostedCache()
        self.region_codes = tuple(region_codes)
        self.in_flight = InFlightGuard()

    def _is_relevant(self, match: dict) -> bool:
        players = match.get("players")
        if not isinstance(players, list):
            return False
        return any(isinstance(p, dict) and is_regional(p.get("country"), self.region_codes) for p in players)

    async def run_once(self, context: Any = None) -> TickStats:
        """
        Run one tick

        Args:
            context: job context, unused

        Returns:
            TickStats for this tick
        """
        stats = TickStats()

        matches = await asyncio.to_thread(self.source.fetch_latest)
        if not matches:
            return stats

        destination = await self.notifier.resolve()
        if destination is None:
            logger.warning("[watcher] announcement channel unavailable; skipping tick")
            return stats

        for match in matches:
            match_id = match.get("id") if isinstance(match, dict) else None
            if not isinstance(match_id, ID_TYPES) or isinstance(match_id, bool):
                if match_id is not None:
                    logger.warning("[watcher] ignoring match with unusable id %r", match_id)
                continue
            stats.considered += 1

            # no await between this check and hold(): overlapping ticks see the claim
            if match_id in self.cache or match_id in self.in_flight:
                stats.skipped_duplicate += 1
                continue

            with self.in_flight.hold(match_id):
                if not self._is_relevant(match):
                    stats.skipped_region += 1
                    continue

                try:
                    view = normalize_match(match, self.region_codes)
                    await self.notifier.notify(destination, view)
                except Exception:
                    stats.failed += 1
                    logger.exception("[watcher] failed to send match %s", match_id)
                    continue

                self.cache.add(match_id)
                stats.posted += 1

        logger.info(
            "[watcher] done. considered=%d posted=%d skippedDup=%d",
            stats.considered, stats.posted, stats.skipped_duplicate,
        )
        return stats

    def close(self) -> None:
        self.source.close()


def build_watcher_job(settings: Settings, client: discord.Client) -> Optional[IntervalJob]:
    """
    Build the interval job for the watcher

    Args:
        settings: loaded settings
        client: Discord client used for delivery

    Returns:
        IntervalJob, or None when the API URL or channel is not configured
    """
    if not settings.watcher_enabled:
        logger.warning("[watcher] missing RANKED_API_URL or RANKED_ANNOUNCE_CHANNEL_ID; watcher disabled")
        return None

    watcher = RankedMatchWatcher(
        source=RankedMatchSource(settings.api_url, debug=settings.debug),
        notifier=DiscordNotifier(client, settings.channel_id, settings.glyphs, settings.footer_icon_url),
        region_codes=settings.region_codes,
    )
    return IntervalJob(name=JOB_NAME, interval_ms=settings.poll_ms, run=watcher.run_once, cleanup=watcher.close)
