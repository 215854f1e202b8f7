from __future__ import annotations

import discord
import pytest
import pytest_asyncio
from discord.ext import commands

from bountyboard_bot.cogs.HelpCommandsCog import build_help_embed
from bountyboard_bot.cogs.QuestBoardCog import QuestBoardCog


@pytest_asyncio.fixture
async def bot():
    intents = discord.Intents.none()
    client = commands.Bot(command_prefix="!", intents=intents)
    try:
        yield client
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_resolve_category(bot, categories, make_fetcher):
    cog = QuestBoardCog(bot, fetcher=make_fetcher({}), categories=categories)

    assert cog.resolve_category("event-bounty") == "event-bounty"
    assert cog.resolve_category(None) == "free-bounty"
    assert cog.resolve_category("nope") is None


@pytest.mark.asyncio
async def test_quests_command_posts_board(bot, categories, documents, make_fetcher, interaction):
    cog = QuestBoardCog(bot, fetcher=make_fetcher(documents), categories=categories)

    await cog.quests.callback(cog, interaction, "event-bounty")

    assert interaction.response.is_done()
    final = interaction.edits[-1]
    assert final["content"] == "📋 Event Bounty\n1 quest"
    assert [embed.title for embed in final["embeds"]] == ["Lantern Festival"]


@pytest.mark.asyncio
async def test_quests_command_rejects_unknown_category(bot, categories, make_fetcher, interaction):
    cog = QuestBoardCog(bot, fetcher=make_fetcher({}), categories=categories)

    await cog.quests.callback(cog, interaction, "platinum-prog")

    assert interaction.edits == []
    assert "platinum-prog" in interaction.ephemeral[0]


@pytest.mark.asyncio
async def test_category_autocomplete(bot, categories, make_fetcher, interaction):
    cog = QuestBoardCog(bot, fetcher=make_fetcher({}), categories=categories)

    choices = await cog.quests_category_autocomplete(interaction, "bounty")

    assert [choice.value for choice in choices] == ["free-bounty", "event-bounty"]


@pytest.mark.asyncio
async def test_cog_unload_closes_fetcher(bot, categories, make_fetcher):
    fetcher = make_fetcher({})
    cog = QuestBoardCog(bot, fetcher=fetcher, categories=categories)

    await cog.cog_unload()

    assert fetcher.closed is True


def test_help_embed_mentions_quests_command():
    embed = build_help_embed()
    assert "/quests" in embed.description
