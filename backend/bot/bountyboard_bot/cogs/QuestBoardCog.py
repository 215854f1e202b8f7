from __future__ import annotations

from typing import Mapping, Optional

import discord
from discord import app_commands
from discord.ext import commands

from bountyboard_bot.config import (
    DEFAULT_QUEST_CATEGORY,
    QUEST_CARDS_PER_PAGE,
    QUEST_DATA_ROOT,
    QUEST_FETCH_TIMEOUT,
    CategoryConfig,
    get_category_configs,
)
from bountyboard_bot.quest.loader import QuestLoader
from bountyboard_bot.quest.views import QuestBoardView
from bountyboard_bot.services.document_fetcher import DocumentFetcher, build_fetcher
from bountyboard_bot.ui import send_ephemeral_message
from bountyboard_bot.utils.logging import get_logger

logger = get_logger(__name__)


class QuestBoardCog(commands.Cog):
    """Post interactive quest boards backed by static quest documents."""

    def __init__(
        self,
        bot: commands.Bot,
        *,
        fetcher: Optional[DocumentFetcher] = None,
        categories: Optional[Mapping[str, CategoryConfig]] = None,
    ) -> None:
        self.bot = bot
        self.categories = categories if categories is not None else get_category_configs()
        self.fetcher = fetcher or build_fetcher(QUEST_DATA_ROOT, timeout=QUEST_FETCH_TIMEOUT)
        self.loader = QuestLoader(self.fetcher, self.categories)

    async def cog_unload(self) -> None:
        await self.fetcher.close()

    def resolve_category(self, requested: Optional[str]) -> Optional[str]:
        if requested:
            return requested if requested in self.categories else None
        if DEFAULT_QUEST_CATEGORY in self.categories:
            return DEFAULT_QUEST_CATEGORY
        return next(iter(self.categories), None)

    def build_view(self) -> QuestBoardView:
        return QuestBoardView(self.loader, self.categories, per_page=QUEST_CARDS_PER_PAGE)

    @app_commands.command(name="quests", description="Show the quest board for a category.")
    @app_commands.describe(category="Quest category to open (defaults to the main board).")
    async def quests(
        self, interaction: discord.Interaction, category: Optional[str] = None
    ) -> None:
        resolved = self.resolve_category(category)
        if resolved is None:
            await send_ephemeral_message(
                interaction,
                f"Unknown quest category `{category}`. Pick one from the list.",
            )
            return

        await interaction.response.defer(thinking=True)
        view = self.build_view()
        view.bind(interaction)
        logger.board_event(
            "board_opened", resolved, user_id=getattr(interaction.user, "id", None)
        )
        await view.controller.select_category(resolved)

    @quests.autocomplete("category")
    async def quests_category_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        needle = current.lower()
        return [
            app_commands.Choice(name=config.display_name, value=key)
            for key, config in self.categories.items()
            if needle in key.lower() or needle in config.display_name.lower()
        ][:25]


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(QuestBoardCog(bot))
