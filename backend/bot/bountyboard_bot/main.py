import asyncio
from pathlib import Path
from typing import Any

import discord
from discord.ext import commands

from bountyboard_bot.config import BOT_TOKEN
from bountyboard_bot.utils.logging import get_logger


logger = get_logger(__name__)


class BountyBoard(commands.Bot):
    """Main bot class that initializes the Discord bot and loads cogs.
    The bot only serves read-only quest boards, so it needs no privileged
    intents and keeps no state beyond what each board view holds.
    """

    def __init__(self, intents: discord.Intents):
        super().__init__(
            command_prefix=commands.when_mentioned_or("bb!"), intents=intents
        )

    # Called before the bot logins to discord
    async def setup_hook(self):

        # Load every .py file under the cogs directory as an extension
        cogs_path = Path(__file__).parent / "cogs"
        loaded: list[str] = []
        failed: list[str] = []
        for file in sorted(cogs_path.glob("*.py")):
            if file.name.startswith("_"):
                continue  # skip __init__.py and private modules
            ext = f"bountyboard_bot.cogs.{file.stem}"
            try:
                await self.load_extension(ext)
                loaded.append(ext)
                logger.info("Loaded extension %s", ext)
            except Exception:
                logger.exception("Error loading extension %s", ext)
                failed.append(ext)

        logger.info("Cog loader audit: %d loaded, %d failed", len(loaded), len(failed))

        await super().setup_hook()

    # Called to login and connect the bot to Discord
    async def start(self, token: Any):
        normalized = (token or "").strip()
        placeholders = {"", "replace_me"}

        if normalized.lower() in placeholders:
            logger.error("BOT_TOKEN is missing or still set to the placeholder value.")
            raise SystemExit(1)

        await super().start(normalized)

    # Called when the bot is ready
    async def on_ready(self):
        await self._sync_application_commands()
        tree_commands = [cmd.qualified_name for cmd in self.tree.get_commands()]
        logger.info("Logged in as %s (ID: %s)", self.user, self.user.id)
        logger.info("Loaded cogs: %s", ", ".join(sorted(self.cogs.keys())))
        logger.info("Slash commands: %s", ", ".join(sorted(tree_commands)))

    async def _sync_application_commands(self) -> None:
        # Per-guild sync: copy globals to each guild so updates show up immediately.
        for guild in self.guilds:
            try:
                guild_obj = discord.Object(id=guild.id)
                self.tree.copy_global_to(guild=guild_obj)
                scoped_commands = await self.tree.sync(guild=guild_obj)
                logger.info(
                    "Synced %d slash commands to guild %s",
                    len(scoped_commands),
                    guild.id,
                )
            except discord.HTTPException:
                logger.exception(
                    "Failed to sync application commands for guild %s", guild.id
                )


def main() -> None:
    intents = discord.Intents.default()
    asyncio.run(BountyBoard(intents=intents).start(BOT_TOKEN))


if __name__ == "__main__":
    main()
