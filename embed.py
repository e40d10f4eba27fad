"""
Announcement embed for a ranked match

Colors follow the region of interest: green when a regional player won, red
when they lost, light blue for a regional derby, yellow for draws and orange
for forfeits between non-regional players.
"""

from typing import Optional

import discord

from config import Glyphs
from core.model import MatchView, PlayerView
from normalizer import country_flag, rating_annotation, seed_label
from timeutil import MISSING

BRAND = "MCSR BR"

COLOR_DRAW = 0xF1C40F
COLOR_DERBY = 0x5DADE2
COLOR_REGIONAL_WIN = 0x2ECC71
COLOR_REGIONAL_LOSS = 0xE74C3C
COLOR_FORFEIT = 0xFFA500
COLOR_WIN = 0x2ECC71


def pick_color(view: MatchView) -> int:
    if view.is_draw and view.any_regional:
        return COLOR_DRAW
    if view.all_regional:
        return COLOR_DERBY
    if view.any_regional and view.winner_uuid:
        return COLOR_REGIONAL_WIN if view.regional_winner else COLOR_REGIONAL_LOSS
    if view.forfeited:
        return COLOR_FORFEIT
    if view.is_draw:
        return COLOR_DRAW
    return COLOR_WIN


def build_title(view: MatchView, glyphs: Glyphs) -> str:
    if view.is_draw:
        return "⚖️ MCSR Ranked (Empate)"
    if view.forfeited:
        return "🏳️ MCSR Ranked (forfeited)"
    return f"{glyphs.trophy} MCSR Ranked"


def _suffix(view: MatchView, player: PlayerView, glyphs: Glyphs) -> str:
    if view.is_draw:
        return ""
    if player.winner:
        return f" — {glyphs.win}"
    loser = view.loser
    if view.forfeited and loser is not None and loser.uuid == player.uuid:
        return f" — {glyphs.lose}{glyphs.forfeit}"
    return f" — {glyphs.lose}"


def player_line(view: MatchView, player: Optional[PlayerView], glyphs: Glyphs) -> str:
    if player is None:
        return MISSING

    name = player.nickname or "???"
    if player.winner:
        name = f"**{name}**"
    return (
        f"{country_flag(player.country, glyphs.globe)} {name}"
        f"{_suffix(view, player, glyphs)}{rating_annotation(player)}"
    )


def build_description(view: MatchView, glyphs: Glyphs) -> str:
    first = view.players[0] if len(view.players) > 0 else None
    second = view.players[1] if len(view.players) > 1 else None
    return f"• {player_line(view, first, glyphs)}\n• {player_line(view, second, glyphs)}"


def build_seed_field(view: MatchView, glyphs: Glyphs) -> str:
    overworld_glyph = glyphs.structure(view.seed.overworld)
    return (
        f"{overworld_glyph} Overworld: `{seed_label(view.seed.overworld)}`\n"
        f"{glyphs.bastion} Bastion: `{seed_label(view.seed.nether)}`"
    )


def build_match_embed(view: MatchView, glyphs: Glyphs, footer_icon_url: Optional[str] = None) -> discord.Embed:
    """
    Build the Discord embed announcing a match

    Args:
        view: normalized match
        glyphs: configured symbols
        footer_icon_url: optional icon shown next to the footer

    Returns:
        discord.Embed ready to send
    """
    embed = discord.Embed(
        title=build_title(view, glyphs),
        description=build_description(view, glyphs),
        color=pick_color(view),
        timestamp=view.date,
    )
    embed.add_field(name=f"{glyphs.clock} Tempo", value=view.duration, inline=True)
    embed.add_field(name=f"{glyphs.seed} Seed", value=build_seed_field(view, glyphs), inline=True)
    embed.set_footer(text=f"Match ID: {view.match_id} • {BRAND}", icon_url=footer_icon_url)
    return embed
