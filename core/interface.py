from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.model import MatchView


class MatchSource(ABC):
    name: str

    @abstractmethod
    def fetch_latest(self) -> List[Dict[str, Any]]:
        """Return raw match records sorted by date, or an empty list when there is no data."""
        ...

    def close(self) -> None:
        """Release connections held by the source."""


class Notifier(ABC):
    @abstractmethod
    async def resolve(self) -> Optional[Any]:
        """
        Locate the announcement destination for the current tick.

        Returns None when the destination is missing or cannot receive
        messages; the tick is then abandoned without touching the cache.
        """
        ...

    @abstractmethod
    async def notify(self, destination: Any, view: MatchView) -> None:
        """Deliver one match announcement to a resolved destination. Raises on failure."""
        ...
