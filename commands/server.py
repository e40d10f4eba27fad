import discord
from discord import app_commands


@app_commands.command(name="server", description="Displays info about this server")
async def server(interaction: discord.Interaction) -> None:
    guild = interaction.guild
    if guild is None:
        await interaction.response.send_message("This command can only be used in a server.", ephemeral=True)
        return
    await interaction.response.send_message(
        f"Server name: {guild.name}\nTotal members: {guild.member_count}",
        ephemeral=True,
    )
