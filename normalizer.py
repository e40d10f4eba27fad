"""
Match normalizer

Turns one raw ranked match record into a `MatchView`: who won, in which
order the players are shown, rating transitions, region relevance, seed
labels and the formatted duration.

Rating changes: the `eloRate` recorded next to a change is taken as the
rating *after* the match, so the rating before is `eloRate - change`.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from config import DEFAULT_REGION_CODES
from core.model import MatchView, Outcome, PlayerView, RatingTransition, SeedInfo
from timeutil import MISSING, format_duration, timestamp_to_datetime

SEED_TYPE_NAMES = {
    "VILLAGE": "Village",
    "SHIPWRECK": "Shipwreck",
    "DESERT_TEMPLE": "Desert Temple",
    "RUINED_PORTAL": "Ruined Portal",
    "BURIED_TREASURE": "Buried Treasure",
    "BRIDGE": "Bridge",
    "HOUSING": "Housing",
    "STABLES": "Stables",
    "TREASURE": "Treasure",
}

# regional indicator symbol for "A"
_REGIONAL_A = 0x1F1E6


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _plain(value: Any) -> Any:
    # 1200.0 -> 1200 so ratings never render with a trailing .0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def is_regional(country: Any, region_codes: Sequence[str] = DEFAULT_REGION_CODES) -> bool:
    if not country:
        return False
    return str(country).lower() in region_codes


def country_flag(country: Any, globe: str = "🌐") -> str:
    """
    Flag for a country code

    Two-letter codes become a pair of regional indicator symbols, any other
    code is shown as-is and a missing country gets the globe glyph.
    """
    if not country:
        return globe
    code = str(country).upper()
    if len(code) != 2 or not ("A" <= code[0] <= "Z" and "A" <= code[1] <= "Z"):
        return code
    return "".join(chr(_REGIONAL_A + ord(ch) - ord("A")) for ch in code)


def translate_seed_type(seed_type: Optional[str]) -> Optional[str]:
    if not seed_type:
        return seed_type
    return SEED_TYPE_NAMES.get(str(seed_type).upper(), seed_type)


def seed_label(seed_type: Optional[str]) -> str:
    return translate_seed_type(seed_type) if seed_type else MISSING


def rating_for(changes: List[Dict[str, Any]], uuid: Optional[str]) -> Optional[RatingTransition]:
    """
    Rating transition of one player

    Args:
        changes: the match `changes` list
        uuid: player identity

    Returns:
        RatingTransition, or None when no usable change record exists
    """
    record = next(
        (c for c in changes if isinstance(c, dict) and c.get("uuid") == uuid),
        None,
    )
    if record is None:
        return None

    change = record.get("change")
    after = record.get("eloRate")
    if not (_is_number(change) and _is_number(after)):
        return None

    change, after = _plain(change), _plain(after)
    return RatingTransition(before=_plain(after - change), after=after, delta=change)


def rating_annotation(player: PlayerView) -> str:
    """Text after the player name: `1185 → 1200 (+15)`, `1200` or nothing."""
    if player.rating is not None:
        r = player.rating
        return f" `{r.before} → {r.after} ({r.delta_label})`"
    if _is_number(player.elo_rate):
        return f" `{_plain(player.elo_rate)}`"
    return ""


def _players(raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    players = raw.get("players")
    if not isinstance(players, list):
        return []
    return [p for p in players if isinstance(p, dict)][:2]


def _changes(raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    changes = raw.get("changes")
    return changes if isinstance(changes, list) else []


def normalize_match(raw: Dict[str, Any], region_codes: Sequence[str] = DEFAULT_REGION_CODES) -> MatchView:
    """
    Build the canonical view of a raw match record

    Args:
        raw: one record from the ranked feed
        region_codes: lower-case country codes treated as region-relevant

    Returns:
        MatchView
    """
    result = raw.get("result") if isinstance(raw.get("result"), dict) else {}
    winner_uuid = result.get("uuid") or None
    forfeited = bool(raw.get("forfeited"))

    if winner_uuid:
        outcome = Outcome.WIN
    elif forfeited:
        outcome = Outcome.FORFEIT
    else:
        outcome = Outcome.DRAW

    players = _players(raw)
    if winner_uuid:
        winner = next((p for p in players if p.get("uuid") == winner_uuid), None)
        loser = next((p for p in players if p.get("uuid") != winner_uuid), None)
        if winner is not None and loser is not None:
            players = [winner, loser]

    changes = _changes(raw)
    views = tuple(
        PlayerView(
            uuid=p.get("uuid"),
            nickname=p.get("nickname"),
            country=p.get("country"),
            elo_rate=p.get("eloRate"),
            regional=is_regional(p.get("country"), region_codes),
            winner=bool(winner_uuid) and p.get("uuid") == winner_uuid,
            rating=rating_for(changes, p.get("uuid")),
        )
        for p in players
    )

    seed = raw.get("seed") if isinstance(raw.get("seed"), dict) else {}
    return MatchView(
        match_id=raw.get("id"),
        outcome=outcome,
        forfeited=forfeited,
        winner_uuid=winner_uuid,
        players=views,
        duration=format_duration(result.get("time")),
        date=timestamp_to_datetime(raw.get("date")),
        seed=SeedInfo(
            overworld=seed.get("overworld") or None,
            nether=seed.get("nether") or seed.get("bastionType") or None,
        ),
    )
