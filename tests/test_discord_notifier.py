"""Tests for channel resolution and delivery through discord.py."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from config import Glyphs
from discord_notifier import DiscordNotifier
from normalizer import normalize_match

from conftest import make_match


def make_client(channel=None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.fetch_channel = AsyncMock(return_value=channel, side_effect=error)
    return client


class TestResolve:
    @pytest.mark.asyncio
    async def test_text_channel(self) -> None:
        channel = MagicMock(spec=discord.TextChannel)
        notifier = DiscordNotifier(make_client(channel), 123)

        assert await notifier.resolve() is channel

    @pytest.mark.asyncio
    async def test_channel_not_found(self) -> None:
        response = MagicMock(status=404, reason="Not Found")
        notifier = DiscordNotifier(make_client(error=discord.NotFound(response, "Unknown Channel")), 123)

        assert await notifier.resolve() is None

    @pytest.mark.asyncio
    async def test_channel_not_text_based(self) -> None:
        channel = MagicMock(spec=discord.CategoryChannel)
        notifier = DiscordNotifier(make_client(channel), 123)

        assert await notifier.resolve() is None


class TestNotify:
    @pytest.mark.asyncio
    async def test_sends_embed(self) -> None:
        channel = MagicMock(spec=discord.TextChannel)
        channel.send = AsyncMock()
        notifier = DiscordNotifier(make_client(channel), 123, Glyphs(), footer_icon_url=None)

        await notifier.notify(channel, normalize_match(make_match("m9")))

        embed = channel.send.await_args.kwargs["embed"]
        assert isinstance(embed, discord.Embed)
        assert embed.footer.text == "Match ID: m9 • MCSR BR"

    @pytest.mark.asyncio
    async def test_send_failure_propagates(self) -> None:
        channel = MagicMock(spec=discord.TextChannel)
        response = MagicMock(status=403, reason="Forbidden")
        channel.send = AsyncMock(side_effect=discord.Forbidden(response, "Missing Access"))
        notifier = DiscordNotifier(make_client(channel), 123)

        with pytest.raises(discord.Forbidden):
            await notifier.notify(channel, normalize_match(make_match("m9")))
