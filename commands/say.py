import discord
from discord import app_commands


@app_commands.command(name="say", description="Make the bot say something")
@app_commands.describe(text="What should I say?", ephemeral="Only you can see the response?")
@app_commands.default_permissions(send_messages=True)
async def say(interaction: discord.Interaction, text: str, ephemeral: bool = False) -> None:
    await interaction.response.send_message(text, ephemeral=ephemeral)
