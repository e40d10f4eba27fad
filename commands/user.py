import discord
from discord import app_commands


@app_commands.command(name="user", description="Displays info about the user who invoked the command")
async def user(interaction: discord.Interaction) -> None:
    member = interaction.user
    await interaction.response.send_message(
        f"Your tag: {member}\nYour id: {member.id}",
        ephemeral=True,
    )
