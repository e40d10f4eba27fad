from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple


class Outcome(str, Enum):
    WIN = "win"
    FORFEIT = "forfeit"
    DRAW = "draw"


@dataclass(frozen=True)
class RatingTransition:
    before: Any
    after: Any
    delta: Any

    @property
    def delta_label(self) -> str:
        return f"+{self.delta}" if self.delta > 0 else f"{self.delta}"


@dataclass(frozen=True)
class PlayerView:
    uuid: Optional[str]
    nickname: Optional[str]
    country: Optional[str]
    elo_rate: Any
    regional: bool
    winner: bool
    rating: Optional[RatingTransition]   # None when no change record matched


@dataclass(frozen=True)
class SeedInfo:
    overworld: Optional[str]
    nether: Optional[str]


@dataclass(frozen=True)
class MatchView:
    match_id: Any
    outcome: Outcome
    forfeited: bool
    winner_uuid: Optional[str]
    players: Tuple[PlayerView, ...]
    duration: str
    date: Optional[datetime]
    seed: SeedInfo

    @property
    def is_draw(self) -> bool:
        return self.outcome is Outcome.DRAW

    @property
    def any_regional(self) -> bool:
        return any(p.regional for p in self.players)

    @property
    def all_regional(self) -> bool:
        return len(self.players) == 2 and all(p.regional for p in self.players)

    @property
    def winner(self) -> Optional[PlayerView]:
        return next((p for p in self.players if p.winner), None)

    @property
    def loser(self) -> Optional[PlayerView]:
        if self.winner is None:
            return None
        return next((p for p in self.players if not p.winner), None)

    @property
    def regional_winner(self) -> bool:
        winner = self.winner
        return winner is not None and winner.regional


@dataclass
class TickStats:
    considered: int = 0
    posted: int = 0
    skipped_duplicate: int = 0
    skipped_region: int = 0
    failed: int = 0
