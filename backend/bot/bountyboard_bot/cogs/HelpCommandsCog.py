from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands


class HelpCommandsCog(commands.Cog):
    """Basic help for the quest board."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @app_commands.command(name="help", description="Show how to use the quest board.")
    async def help(self, interaction: discord.Interaction) -> None:
        embed = build_help_embed()
        await interaction.response.send_message(embed=embed, ephemeral=True)


def build_help_embed() -> discord.Embed:
    embed = discord.Embed(
        title="Bounty Board Quickstart",
        description=(
            "Use `/quests` to open the board, optionally with a `category`.\n\n"
            "Pick another category from the menu to switch boards, press a quest's "
            "button to expand or collapse its rewards and requirements, and use "
            "Prev/Next when a category has more quests than fit on one page."
        ),
        colour=discord.Color.blurple(),
    )
    return embed


async def setup(bot: commands.Bot):
    await bot.add_cog(HelpCommandsCog(bot))
