"""
MCSR Ranked match feed

Pulls the latest matches from the configured ranked API. The endpoint is not
pinned to one response shape: it may return the array directly or wrap it as
`{"data": [...]}`, `{"items": [...]}`, `{"results": [...]}` or
`{"matches": [...]}`. Any failure yields an empty list so the tick simply
has nothing to do.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from core.interface import MatchSource
from timeutil import MISSING, timestamp_to_datetime

logger = logging.getLogger(__name__)

# wrapper keys tried in this order when the body is not an array
UNWRAP_ORDER = ("data", "items", "results", "matches")

PREVIEW_COUNT = 3
PREVIEW_CHARS = 1500


def unwrap_matches(body: Any) -> Optional[List[Any]]:
    """
    Find the match array inside a response body

    Args:
        body: parsed JSON body

    Returns:
        the array, or None when no array could be found
    """
    if isinstance(body, list):
        return body
    if not isinstance(body, dict):
        return None

    for key in UNWRAP_ORDER:
        value = body.get(key)
        if isinstance(value, list):
            logger.info("[fetch] unwrapped '%s' array from response object", key)
            return value
    return None


def _date_key(record: Any) -> float:
    date = record.get("date") if isinstance(record, dict) else None
    if isinstance(date, bool):
        return 0.0
    try:
        return float(date or 0)
    except (TypeError, ValueError):
        return 0.0


def sort_by_date(records: List[Any]) -> List[Any]:
    """Oldest first; records without a usable date sort as 0."""
    return sorted(records, key=_date_key)


def _iso(record: Any) -> str:
    date = record.get("date") if isinstance(record, dict) else None
    moment = timestamp_to_datetime(date)
    return moment.isoformat() if moment else MISSING


class RankedMatchSource(MatchSource):
    """HTTP source for recent ranked matches"""

    name = "ranked"

    def __init__(self, api_url: str, debug: bool = False, timeout: int = 10):
        """
        Args:
            api_url: full URL of the matches endpoint
            debug: log a preview of each payload
            timeout: request timeout in seconds
        """
        self.api_url = api_url
        self.debug = debug
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "accept": "application/json",
        })

    def fetch_latest(self) -> List[Dict[str, Any]]:
        """
        Fetch and normalize the feed

        Returns:
            raw match records sorted by date ascending, or [] when there is no data
        """
        logger.info("[fetch] GET %s", self.api_url)
        try:
            response = self.session.get(self.api_url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("[fetch] request failed: %s", e)
            return []

        if not response.ok:
            logger.warning("[fetch] non-OK status %s", response.status_code)
            return []
        logger.info("[fetch] OK %s", response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            logger.error("[fetch] failed to parse JSON: %s", e)
            return []

        matches = unwrap_matches(body)
        if not matches:
            logger.info("[fetch] response has no items after parsing")
            return []

        logger.info("[fetch] received %d items", len(matches))
        if self.debug:
            self._log_preview(matches)

        ordered = sort_by_date(matches)
        if self.debug:
            logger.info("[fetch] sorted. earliest=%s latest=%s", _iso(ordered[0]), _iso(ordered[-1]))
        return ordered

    def _log_preview(self, matches: List[Any]) -> None:
        try:
            preview = json.dumps(matches[:PREVIEW_COUNT], indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            return
        logger.info("[fetch] payload preview (first %d):\n%s", PREVIEW_COUNT, preview[:PREVIEW_CHARS])

    def close(self) -> None:
        self.session.close()
