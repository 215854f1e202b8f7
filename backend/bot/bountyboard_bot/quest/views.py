from __future__ import annotations

from typing import Mapping, Optional

import discord

from bountyboard_bot.config import CategoryConfig
from bountyboard_bot.quest.controller import BoardSnapshot, DisplayStatus, QuestBoardController
from bountyboard_bot.quest.embeds import (
    COLLAPSE_ICON,
    EXPAND_ICON,
    BoardMessage,
    build_board_message,
)
from bountyboard_bot.quest.loader import QuestLoader
from bountyboard_bot.ui import send_ephemeral_message
from bountyboard_bot.utils.logging import get_logger

logger = get_logger(__name__)

BUTTON_LABEL_LIMIT = 80
TOGGLES_PER_ROW = 5


class CategorySelect(discord.ui.Select):
    def __init__(self, board: "QuestBoardView", current: Optional[str]) -> None:
        options = [
            discord.SelectOption(
                label=config.display_name,
                value=key,
                default=key == current,
            )
            for key, config in list(board.categories.items())[:25]
        ]
        super().__init__(placeholder="Choose a quest category", options=options, row=0)
        self.board = board

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.board.switch_category(interaction, self.values[0])


class CardToggleButton(discord.ui.Button):
    def __init__(self, board: "QuestBoardView", index: int, label: str, expanded: bool, row: int) -> None:
        icon = COLLAPSE_ICON if expanded else EXPAND_ICON
        super().__init__(
            label=f"{icon} {label}"[:BUTTON_LABEL_LIMIT],
            style=discord.ButtonStyle.primary if expanded else discord.ButtonStyle.secondary,
            row=row,
        )
        self.board = board
        self.index = index

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.board.toggle_card(interaction, self.index)


class PageButton(discord.ui.Button):
    def __init__(self, board: "QuestBoardView", step: int, disabled: bool) -> None:
        super().__init__(
            label="◀ Prev" if step < 0 else "Next ▶",
            style=discord.ButtonStyle.secondary,
            disabled=disabled,
            row=3,
        )
        self.board = board
        self.step = step

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.board.turn_page(interaction, self.step)


class QuestBoardView(discord.ui.View):
    """Interactive board: one message showing a page of quest cards."""

    def __init__(
        self,
        loader: QuestLoader,
        categories: Mapping[str, CategoryConfig],
        *,
        per_page: int = 5,
        timeout: Optional[float] = 600,
    ) -> None:
        super().__init__(timeout=timeout)
        self.categories = categories
        self.per_page = min(max(per_page, 1), 2 * TOGGLES_PER_ROW)
        self.page = 0
        self.controller = QuestBoardController(loader, listener=self._on_snapshot)
        self._interaction: Optional[discord.Interaction] = None
        self._rendered_token: Optional[int] = None
        self._rebuild_items(None, None)

    def bind(self, interaction: discord.Interaction) -> None:
        """Use ``interaction`` to edit the board message from now on."""
        self._interaction = interaction

    def category_label(self, category: str) -> str:
        config = self.categories.get(category)
        if config is None:
            return category
        return config.display_name

    def render(self, snapshot: BoardSnapshot) -> BoardMessage:
        message = build_board_message(
            snapshot,
            category_label=self.category_label(snapshot.category),
            page=self.page,
            per_page=self.per_page,
        )
        self.page = message.page
        self._rebuild_items(snapshot, message)
        return message

    # ---------- Interaction entry points ----------

    async def switch_category(self, interaction: discord.Interaction, category: str) -> None:
        await interaction.response.defer()
        self.bind(interaction)
        await self.controller.select_category(category)

    async def toggle_card(self, interaction: discord.Interaction, index: int) -> None:
        await interaction.response.defer()
        self.bind(interaction)
        try:
            await self.controller.toggle_card(index)
        except IndexError:
            await send_ephemeral_message(
                interaction,
                "That quest is no longer on the board. Please pick the category again.",
            )

    async def turn_page(self, interaction: discord.Interaction, step: int) -> None:
        await interaction.response.defer()
        self.bind(interaction)
        snapshot = self.controller.snapshot
        if snapshot is None:
            return
        self.page += step
        await self._push(snapshot)

    # ---------- Rendering ----------

    async def _on_snapshot(self, snapshot: BoardSnapshot) -> None:
        if snapshot.token != self._rendered_token:
            self.page = 0
            self._rendered_token = snapshot.token
        await self._push(snapshot)

    async def _push(self, snapshot: BoardSnapshot) -> None:
        message = self.render(snapshot)
        if self._interaction is None:
            return
        try:
            await self._interaction.edit_original_response(
                content=message.content,
                embeds=message.embeds,
                view=self,
            )
        except discord.HTTPException as exc:
            logger.warning(
                "Failed to update quest board for %s: %s", snapshot.category, exc
            )

    def _rebuild_items(
        self, snapshot: Optional[BoardSnapshot], message: Optional[BoardMessage]
    ) -> None:
        self.clear_items()
        current = snapshot.category if snapshot is not None else None
        self.add_item(CategorySelect(self, current))

        if snapshot is None or message is None or snapshot.status is not DisplayStatus.POPULATED:
            return

        for position, index in enumerate(message.visible):
            card = snapshot.cards[index]
            label = card.header.quest_id or f"#{index + 1}"
            self.add_item(
                CardToggleButton(
                    self,
                    index,
                    label,
                    snapshot.is_expanded(index),
                    row=1 + position // TOGGLES_PER_ROW,
                )
            )

        if message.page_count > 1:
            self.add_item(PageButton(self, -1, disabled=message.page == 0))
            self.add_item(PageButton(self, 1, disabled=message.page >= message.page_count - 1))

    async def on_timeout(self) -> None:
        for item in self.children:
            item.disabled = True
        if self._interaction is None:
            return
        try:
            await self._interaction.edit_original_response(view=self)
        except discord.HTTPException as exc:
            logger.debug("Could not disable expired quest board: %s", exc)
