"""
Slash command registration and the shared error boundary
"""

import logging
from typing import List

import discord
from discord import app_commands

from commands.compare import compare
from commands.ping import ping
from commands.say import say
from commands.server import server
from commands.user import user

logger = logging.getLogger(__name__)

ERROR_REPLY = "There was an error while executing this command!"

ALL_COMMANDS: List[app_commands.Command] = [ping, say, server, user, compare]


async def handle_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError) -> None:
    """Log a failed command and tell the user, without ever raising."""
    name = interaction.command.name if interaction.command else "unknown"
    original = getattr(error, "original", error)
    logger.error("[command] /%s failed", name, exc_info=(type(original), original, original.__traceback__))

    try:
        if interaction.response.is_done():
            await interaction.followup.send(ERROR_REPLY, ephemeral=True)
        else:
            await interaction.response.send_message(ERROR_REPLY, ephemeral=True)
    except discord.HTTPException as e:
        logger.warning("[command] could not report error for /%s: %s", name, e)


def register_commands(tree: app_commands.CommandTree) -> List[str]:
    """
    Add every slash command to the tree and install the error handler

    Returns:
        names of the registered commands
    """
    for command in ALL_COMMANDS:
        tree.add_command(command)
        logger.info("[command] loaded /%s", command.name)
    tree.error(handle_command_error)
    return [command.name for command in ALL_COMMANDS]
