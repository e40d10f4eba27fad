"""
Discord notifier

Posts match announcements as embeds into one text channel. The channel is
resolved again at the start of every tick so a deleted or re-permissioned
channel is noticed without a restart.
"""

import logging
from typing import Optional

import discord

from config import Glyphs
from core.interface import Notifier
from core.model import MatchView
from embed import build_match_embed

logger = logging.getLogger(__name__)


class DiscordNotifier(Notifier):
    """Discord channel notifier"""

    def __init__(
        self,
        client: discord.Client,
        channel_id: int,
        glyphs: Optional[Glyphs] = None,
        footer_icon_url: Optional[str] = None,
    ):
        """
        Args:
            client: logged-in Discord client
            channel_id: announcement channel
            glyphs: symbols used in the embed
            footer_icon_url: optional footer icon
        """
        self.client = client
        self.channel_id = channel_id
        self.glyphs = glyphs or Glyphs()
        self.footer_icon_url = footer_icon_url

    async def resolve(self) -> Optional[discord.abc.Messageable]:
        try:
            channel = await self.client.fetch_channel(self.channel_id)
        except (discord.NotFound, discord.Forbidden, discord.HTTPException, discord.InvalidData) as e:
            logger.warning("[channel] failed to fetch channel %s: %s", self.channel_id, e)
            return None

        type_name = type(channel).__name__
        guild = getattr(channel, "guild", None)
        guild_id = guild.id if guild is not None else "DM/none"
        logger.info("[channel] resolved channel id=%s type=%s guild=%s", channel.id, type_name, guild_id)

        if not isinstance(channel, discord.abc.Messageable):
            logger.warning("[channel] channel %s is not text-based (type=%s)", channel.id, type_name)
            return None
        return channel

    async def notify(self, destination: discord.abc.Messageable, view: MatchView) -> None:
        """
        Send one match embed

        Args:
            destination: channel returned by resolve()
            view: normalized match

        Raises:
            discord.HTTPException: when Discord rejects the message
        """
        embed = build_match_embed(view, self.glyphs, self.footer_icon_url)
        await destination.send(embed=embed)
        logger.info("[sent] match %s", view.match_id)
