from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import discord

from bountyboard_bot.quest.cards import (
    ClaimSection,
    LabeledList,
    QuestCardData,
    RequirementsView,
)
from bountyboard_bot.quest.controller import BoardSnapshot, DisplayStatus

FIELD_VALUE_LIMIT = 1024
MESSAGE_EMBED_LIMIT = 6000
TITLE_LIMIT = 200
DESCRIPTION_LIMIT = 300
QUEST_ID_LIMIT = 80
EXPAND_ICON = "▼"
COLLAPSE_ICON = "▲"
COLLAPSED_TO_FIT_NOTE = (
    "Some expanded quests are shown collapsed to fit; collapse another quest to open them."
)


@dataclass
class BoardMessage:
    """Keyword arguments for sending or editing the board message."""

    content: Optional[str]
    embeds: list[discord.Embed] = field(default_factory=list)
    page: int = 0
    page_count: int = 1
    visible: Sequence[int] = field(default_factory=tuple)
    collapsed: Sequence[int] = field(default_factory=tuple)


def build_quest_embed(card: QuestCardData, *, expanded: bool = False) -> discord.Embed:
    """Return a quest card embed; the body fields only appear when expanded."""

    header = card.header
    lines: list[str] = []
    if header.subtitle:
        lines.append(f"*{header.subtitle}*")
    lines.append(f"Difficulty: {header.difficulty or '-'}")

    embed = discord.Embed(
        title=_truncate(header.name, TITLE_LIMIT),
        description=_truncate("\n".join(lines), DESCRIPTION_LIMIT),
        colour=discord.Color.gold() if expanded else discord.Color.blurple(),
    )
    if header.image_url:
        embed.set_thumbnail(url=header.image_url)

    if expanded:
        _add_body_fields(embed, card)

    icon = COLLAPSE_ICON if expanded else EXPAND_ICON
    quest_id = _truncate(str(header.quest_id), QUEST_ID_LIMIT)
    embed.set_footer(text=f"Quest ID: {quest_id} • {icon}")
    return embed


def _add_body_fields(embed: discord.Embed, card: QuestCardData) -> None:
    if card.rewards:
        embed.add_field(
            name="🎁 Rewards",
            value=_truncate("\n\n".join(_format_labeled_list(block) for block in card.rewards)),
            inline=False,
        )

    for block in card.currencies:
        embed.add_field(
            name=f"🪙 {block.label}",
            value=_truncate("\n".join(block.lines)),
            inline=True,
        )

    if card.requirements is not None:
        embed.add_field(
            name="📜 Requirements",
            value=_truncate(_format_requirements(card.requirements)),
            inline=False,
        )

    if card.claim:
        embed.add_field(
            name="📸 How to Claim",
            value=_truncate("\n\n".join(_format_claim_section(section) for section in card.claim)),
            inline=False,
        )


def _format_labeled_list(block: LabeledList) -> str:
    return _format_bullets(f"**{block.label}**", block.lines)


def _format_bullets(heading: str, items: Iterable[str]) -> str:
    lines = [heading]
    for item in items:
        lines.append(f"- {item}")
    return "\n".join(lines)


def _format_requirements(requirements: RequirementsView) -> str:
    blocks: list[str] = [f"**Mode:** {requirements.mode}"]

    if requirements.mode_notes:
        blocks[0] += "\n" + "\n".join(f"• {note}" for note in requirements.mode_notes)

    for block in requirements.restrictions:
        blocks.append(_format_bullets(f"**{block.label}:**", block.lines))

    if requirements.time_requirements:
        lines = ["**Time Requirements:**"]
        for entry in requirements.time_requirements:
            lines.append(f"**{entry.weapons}** {entry.time_limit}")
            if entry.note:
                lines.append(f"> {entry.note}")
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


def _format_claim_section(section: ClaimSection) -> str:
    if section.note is not None:
        return f"**{section.label}:** {section.note}"
    return _format_bullets(f"**{section.label}:**", section.items)


def _truncate(value: str, limit: int = FIELD_VALUE_LIMIT) -> str:
    if len(value) > limit:
        return value[: limit - 1] + "…"
    return value


def page_count(total: int, per_page: int) -> int:
    if total <= 0:
        return 1
    return (total + per_page - 1) // per_page


def build_board_message(
    snapshot: BoardSnapshot,
    *,
    category_label: str,
    page: int = 0,
    per_page: int = 5,
) -> BoardMessage:
    """Lay out one page of the board for the given snapshot."""

    title = f"📋 {category_label}"

    if snapshot.status is DisplayStatus.LOADING:
        return BoardMessage(content=f"{title}\n{snapshot.message}")

    if snapshot.status is DisplayStatus.EMPTY:
        return BoardMessage(content=f"{title}\n{snapshot.message}")

    total = len(snapshot.cards)
    pages = page_count(total, per_page)
    page = min(max(page, 0), pages - 1)
    start = page * per_page
    visible = tuple(range(start, min(start + per_page, total)))

    embeds, collapsed = _fit_page(snapshot, visible)
    summary = f"{total} quest{'s' if total != 1 else ''}"
    if pages > 1:
        summary += f" • Page {page + 1}/{pages}"
    if collapsed:
        summary += f"\n{COLLAPSED_TO_FIT_NOTE}"
    return BoardMessage(
        content=f"{title}\n{summary}",
        embeds=embeds,
        page=page,
        page_count=pages,
        visible=visible,
        collapsed=collapsed,
    )


def _fit_page(
    snapshot: BoardSnapshot, visible: Sequence[int]
) -> tuple[list[discord.Embed], tuple[int, ...]]:
    """Expand cards in page order while the embeds stay under the message limit.

    Header limits keep a full page of collapsed embeds under the limit, so only
    expanded cards can overflow; those are returned collapsed instead.
    """

    embeds = [build_quest_embed(snapshot.cards[index]) for index in visible]
    used = sum(len(embed) for embed in embeds)
    collapsed: list[int] = []
    for position, index in enumerate(visible):
        if not snapshot.is_expanded(index):
            continue
        expanded = build_quest_embed(snapshot.cards[index], expanded=True)
        extra = len(expanded) - len(embeds[position])
        if used + extra > MESSAGE_EMBED_LIMIT:
            collapsed.append(index)
            continue
        embeds[position] = expanded
        used += extra
    return embeds, tuple(collapsed)
