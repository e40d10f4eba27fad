"""
/compare: head-to-head ranked scores of two players
"""

import asyncio
import random
from datetime import datetime, timezone
from typing import Optional

import discord
from discord import app_commands

from sources.scores import ScoreClient, ScoreComparison, compare_scores

FOOTER_TEXT = "• MCSR BR"
FOOTER_ICON = (
    "https://media.discordapp.net/attachments/1003054589257465937/1414715516039205035/Cristal_Brasil.png"
)
HEAD_URL = "https://mc-heads.net/head/{}"

score_client = ScoreClient()


def build_compare_embed(
    comparison: ScoreComparison,
    player_one: str,
    player_two: str,
    season: Optional[int],
    details_url: str,
) -> discord.Embed:
    """
    Embed for a score comparison

    Args:
        comparison: scores returned by the API
        player_one: first player name as typed
        player_two: second player name as typed
        season: season number, None for all-time
        details_url: link to the comparison website
    """
    winner_id, emote1, emote2 = compare_scores(comparison, player_one, player_two)
    all_time = season is None

    embed = discord.Embed(
        title=f"{player_one} 🆚 {player_two}",
        description=(
            f"**Season: {'Todas' if all_time else season}**\n\n"
            f"{emote1} **{player_one}:** {comparison.score_of(player_one)}\n"
            f"{emote2} **{player_two}:** {comparison.score_of(player_two)}"
        ),
        color=random.randint(0, 0xFFFFFF),
        timestamp=datetime.now(timezone.utc),
    )
    embed.set_author(name="⚔ Ranked All-Time Scores" if all_time else "⚔ Ranked Season Scores")
    embed.add_field(name="📊 Visualizar detalhes", value=f"[Clique aqui]({details_url})", inline=False)
    embed.set_thumbnail(url=HEAD_URL.format(winner_id))
    embed.set_footer(text=FOOTER_TEXT, icon_url=FOOTER_ICON)
    return embed


@app_commands.command(name="compare", description="Visualize o score de dois jogadores")
@app_commands.describe(
    player_one="Nome do primeiro jogador",
    player_two="Nome do segundo jogador",
    season="Número da season para comparação (opcional, padrão: todas as seasons)",
)
@app_commands.default_permissions(send_messages=True)
async def compare(
    interaction: discord.Interaction,
    player_one: str,
    player_two: str,
    season: Optional[int] = None,
) -> None:
    await interaction.response.defer()

    # season 0 or omitted means all seasons
    season = season or None
    if season is None:
        comparison = await asyncio.to_thread(score_client.get_scores, player_one, player_two)
    else:
        comparison = await asyncio.to_thread(score_client.get_scores_per_season, player_one, player_two, season)

    embed = build_compare_embed(
        comparison, player_one, player_two, season,
        score_client.details_url(player_one, player_two),
    )
    await interaction.followup.send(embed=embed)
