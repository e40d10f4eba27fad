"""
Ranked score comparison API

Head-to-head scores between two players, all-time or per season. The API
answers with a `references` map (player name -> id) and scores keyed by id.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

BASE_URL = "https://ranked-score.vercel.app"

WINNER_EMOTE = "🏆"
LOSER_EMOTE = "💀"
TIE_EMOTE = "🤝"


class ScoreLookupError(Exception):
    """The score API could not answer the comparison"""


@dataclass(frozen=True)
class ScoreComparison:
    references: Dict[str, Any]
    scores: Dict[str, Any]

    def player_id(self, name: str) -> Any:
        return self.references.get(name)

    def score_of(self, name: str) -> Any:
        return self.scores.get(self.player_id(name))


def compare_scores(comparison: ScoreComparison, player_one: str, player_two: str) -> Tuple[Any, str, str]:
    """
    Decide who leads the head-to-head

    Returns:
        (winner id, emote for player one, emote for player two); ties keep
        player one as the shown winner
    """
    one_id = comparison.player_id(player_one)
    two_id = comparison.player_id(player_two)
    score1 = comparison.score_of(player_one) or 0
    score2 = comparison.score_of(player_two) or 0

    if score1 > score2:
        return one_id, WINNER_EMOTE, LOSER_EMOTE
    if score2 > score1:
        return two_id, LOSER_EMOTE, WINNER_EMOTE
    return one_id, TIE_EMOTE, TIE_EMOTE


class ScoreClient:
    """Client for the score comparison API"""

    def __init__(self, base_url: str = BASE_URL, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"accept": "application/json"})

    def details_url(self, player_one: str, player_two: str) -> str:
        return f"{self.base_url}/?runnerOne={quote(player_one)}&runnerTwo={quote(player_two)}"

    def _get(self, path: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.info("[scores] GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ScoreLookupError(f"failed to fetch {url}: {e}") from e
        except ValueError as e:
            raise ScoreLookupError(f"invalid JSON from {url}: {e}") from e

        if not isinstance(data, dict):
            raise ScoreLookupError(f"unexpected response from {url}")
        return data

    def get_scores(self, player_one: str, player_two: str) -> ScoreComparison:
        data = self._get(f"/api/getScoresFromVersusScores/{quote(player_one)}/{quote(player_two)}")
        return ScoreComparison(
            references=data.get("references") or {},
            scores=data.get("scores") or {},
        )

    def get_scores_per_season(self, player_one: str, player_two: str, season: int) -> ScoreComparison:
        """
        Scores for one season

        Args:
            season: 1-based season number

        Raises:
            ScoreLookupError: request failed or the season does not exist
        """
        data = self._get(f"/api/getScoresPerSeason/{quote(player_one)}/{quote(player_two)}")
        seasons = data.get("scoresPerSeason") or []
        if season < 1 or season > len(seasons):
            raise ScoreLookupError(f"season {season} not available ({len(seasons)} seasons)")
        return ScoreComparison(
            references=data.get("references") or {},
            scores=seasons[season - 1] or {},
        )
