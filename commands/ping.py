import time

import discord
from discord import app_commands


@app_commands.command(name="ping", description="Replies with Pong! and latency")
async def ping(interaction: discord.Interaction) -> None:
    sent = time.monotonic()
    await interaction.response.send_message("Pinging...", ephemeral=True)
    latency = round((time.monotonic() - sent) * 1000)
    await interaction.edit_original_response(content=f"Pong! Latency: {latency}ms")
