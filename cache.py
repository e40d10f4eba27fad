"""
Posted-match cache

Keeps the ids of matches already announced so restarts do not repost them.
Stored as a JSON array in `.cache/ranked_posted.json` under the working
directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE = Path(".cache") / "ranked_posted.json"


class PostedCache:
    """Append-only set of announced match ids, persisted best-effort"""

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: cache file, relative to the working directory by default
        """
        self.path = Path(path) if path is not None else Path.cwd() / DEFAULT_CACHE_FILE
        self.posted: Set[Any] = self.load()

    def __contains__(self, match_id: Any) -> bool:
        return match_id in self.posted

    def __len__(self) -> int:
        return len(self.posted)

    def _ensure_file(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                logger.info("[cache] creating empty cache file: %s", self.path)
                self.path.write_text("[]", encoding="utf-8")
        except OSError as e:
            logger.warning("[cache] could not create %s: %s", self.path, e)

    def load(self) -> Set[Any]:
        """
        Read posted ids from disk

        Returns:
            set of ids; empty when the file is missing, unreadable or corrupt
        """
        self._ensure_file()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("[cache] failed to load %s: %s; starting empty", self.path, e)
            return set()

        if not isinstance(data, list):
            logger.warning("[cache] %s does not hold an array; starting empty", self.path)
            return set()

        ids = {item for item in data if not isinstance(item, (list, dict))}
        logger.info("[cache] loaded %d posted ids", len(ids))
        return ids

    def save(self, ids: Optional[Iterable[Any]] = None) -> bool:
        """
        Overwrite the cache file with the given ids (current set by default)

        Returns:
            True when written; write errors are logged and reported as False
        """
        snapshot = list(self.posted if ids is None else ids)
        self._ensure_file()
        try:
            self.path.write_text(json.dumps(snapshot), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.warning("[cache] failed to save %s: %s", self.path, e)
            return False
        return True

    def add(self, match_id: Any) -> None:
        if match_id in self.posted:
            return
        self.posted.add(match_id)
        self.save()
