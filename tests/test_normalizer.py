"""Tests for match normalization and timestamp handling."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.model import Outcome
from normalizer import (
    country_flag,
    is_regional,
    normalize_match,
    rating_annotation,
    translate_seed_type,
)
from timeutil import duration_to_ms, format_duration, timestamp_to_datetime

from conftest import ALICE, BRUNO, make_match


class TestTimestamps:
    def test_duration_below_threshold_is_seconds(self) -> None:
        assert duration_to_ms(99999) == 99999 * 1000

    def test_duration_at_threshold_is_milliseconds(self) -> None:
        assert duration_to_ms(100000) == 100000

    def test_format_boundary(self) -> None:
        assert format_duration(99999) == "27h 46m 39s"
        assert format_duration(100000) == "1m 40s"

    def test_format_minutes_only(self) -> None:
        assert format_duration(754) == "12m 34s"

    def test_format_missing(self) -> None:
        assert format_duration(None) == "—"
        assert format_duration("abc") == "—"

    def test_date_in_seconds(self) -> None:
        assert timestamp_to_datetime(1_700_000_000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_date_in_milliseconds(self) -> None:
        assert timestamp_to_datetime(1_700_000_000_000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_missing_date(self) -> None:
        assert timestamp_to_datetime(None) is None
        assert timestamp_to_datetime(0) is None


class TestHelpers:
    @pytest.mark.parametrize("country", ["br", "BR", "bra", "Bra"])
    def test_regional_codes(self, country: str) -> None:
        assert is_regional(country)

    @pytest.mark.parametrize("country", [None, "", "us", "brazil"])
    def test_not_regional(self, country) -> None:
        assert not is_regional(country)

    def test_flag_two_letters(self) -> None:
        assert country_flag("br") == "\U0001f1e7\U0001f1f7"

    def test_flag_other_length_verbatim(self) -> None:
        assert country_flag("bra") == "BRA"

    def test_flag_missing_uses_globe(self) -> None:
        assert country_flag(None, globe="G") == "G"

    def test_seed_translation(self) -> None:
        assert translate_seed_type("desert_temple") == "Desert Temple"
        assert translate_seed_type("UNKNOWN_THING") == "UNKNOWN_THING"
        assert translate_seed_type(None) is None


class TestNormalize:
    def test_win_puts_winner_first(self) -> None:
        view = normalize_match(make_match(winner=BRUNO))
        assert view.outcome is Outcome.WIN
        assert [p.uuid for p in view.players] == [BRUNO, ALICE]
        assert view.players[0].winner and not view.players[1].winner

    def test_forfeit_without_winner(self) -> None:
        view = normalize_match(make_match(winner=None, forfeited=True))
        assert view.outcome is Outcome.FORFEIT
        assert view.forfeited
        assert [p.uuid for p in view.players] == [ALICE, BRUNO]
        assert view.winner is None

    def test_forfeit_with_winner_keeps_flag(self) -> None:
        view = normalize_match(make_match(winner=BRUNO, forfeited=True))
        assert view.outcome is Outcome.WIN
        assert view.forfeited
        assert view.loser.uuid == ALICE

    def test_draw(self) -> None:
        view = normalize_match(make_match(winner=None))
        assert view.outcome is Outcome.DRAW
        assert view.is_draw

    def test_unknown_winner_keeps_original_order(self) -> None:
        view = normalize_match(make_match(winner="someone-else"))
        assert [p.uuid for p in view.players] == [ALICE, BRUNO]

    def test_region_flags(self) -> None:
        view = normalize_match(make_match(countries=("br", "us")))
        assert view.any_regional and not view.all_regional

    def test_rating_transition_from_post_match_rate(self) -> None:
        view = normalize_match(make_match(changes=[{"uuid": ALICE, "change": 15, "eloRate": 1200}]))
        rating = view.players[0].rating
        assert (rating.before, rating.after, rating.delta) == (1185, 1200, 15)
        assert rating_annotation(view.players[0]) == " `1185 → 1200 (+15)`"

    def test_negative_delta_keeps_sign(self) -> None:
        view = normalize_match(make_match(changes=[{"uuid": BRUNO, "change": -12, "eloRate": 978}]))
        assert rating_annotation(view.players[1]) == " `990 → 978 (-12)`"

    def test_rating_falls_back_to_static_rate(self) -> None:
        view = normalize_match(make_match())
        assert view.players[0].rating is None
        assert rating_annotation(view.players[0]) == " `1080`"

    def test_no_rating_at_all(self) -> None:
        raw = make_match()
        del raw["players"][0]["eloRate"]
        view = normalize_match(raw)
        assert rating_annotation(view.players[0]) == ""

    def test_seed_uses_bastion_type_fallback(self) -> None:
        view = normalize_match(make_match(seed={"overworld": "SHIPWRECK", "bastionType": "HOUSING"}))
        assert view.seed.overworld == "SHIPWRECK"
        assert view.seed.nether == "HOUSING"

    def test_duration_and_date(self) -> None:
        view = normalize_match(make_match(time=754_000))
        assert view.duration == "12m 34s"
        assert view.date.year == 2023

    def test_missing_fields(self) -> None:
        view = normalize_match({"id": "x"})
        assert view.players == ()
        assert view.outcome is Outcome.DRAW
        assert view.duration == "—"
        assert view.date is None
