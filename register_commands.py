"""
Sync the slash commands to the configured guild and exit

Requires TOKEN, CLIENT_ID and GUILD_ID.
"""

import logging
import sys

import discord
from discord import app_commands

from commands.registry import register_commands
from config import Settings
from main import setup_logging

logger = logging.getLogger(__name__)


class CommandSyncClient(discord.Client):
    def __init__(self, guild_id: int, application_id: int):
        super().__init__(intents=discord.Intents.default(), application_id=application_id)
        self.guild = discord.Object(id=guild_id)
        self.tree = app_commands.CommandTree(self)
        self.synced = 0

    async def setup_hook(self) -> None:
        register_commands(self.tree)
        self.tree.copy_global_to(guild=self.guild)
        logger.info("Refreshing application (guild) commands...")
        self.synced = len(await self.tree.sync(guild=self.guild))
        logger.info("Successfully reloaded %d application (guild) commands.", self.synced)
        await self.close()


def main() -> int:
    setup_logging()
    settings = Settings.load()

    if not settings.token or not settings.client_id or settings.guild_id is None:
        logger.error("Missing env vars. Ensure TOKEN, CLIENT_ID, and GUILD_ID are set in .env")
        return 1

    try:
        client = CommandSyncClient(settings.guild_id, int(settings.client_id))
        client.run(settings.token, log_handler=None)
    except (ValueError, discord.DiscordException) as e:
        logger.error("Failed to register commands: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
