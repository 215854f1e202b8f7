"""Quest → card view-model mapping.

Everything here is pure: a :class:`QuestCardData` describes what a quest card
shows, independent of the backend that draws it (see ``quest/embeds.py``).
Sections whose source data is absent are omitted rather than rendered empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from bountyboard_bot.core.domain.models.QuestModel import (
    TRACK_ORDER,
    ClaimInstructions,
    CurrencyAward,
    Difficulty,
    Quest,
    Requirements,
    RewardEntry,
)

FULL_STAR = "⭐"
HALF_STAR = "🌟"


@dataclass(frozen=True)
class CardHeader:
    quest_id: str
    name: str
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    difficulty: str = ""


@dataclass(frozen=True)
class LabeledList:
    """A titled block of lines, e.g. one reward track or one currency."""

    label: str
    lines: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class TimeRequirementView:
    weapons: str
    time_limit: str
    note: Optional[str] = None


@dataclass(frozen=True)
class RequirementsView:
    mode: str
    mode_notes: Sequence[str] = field(default_factory=tuple)
    restrictions: Sequence[LabeledList] = field(default_factory=tuple)
    time_requirements: Sequence[TimeRequirementView] = field(default_factory=tuple)


@dataclass(frozen=True)
class ClaimSection:
    """One "How to Claim" block: either a bullet list or a single note."""

    label: str
    items: Sequence[str] = field(default_factory=tuple)
    note: Optional[str] = None


@dataclass(frozen=True)
class QuestCardData:
    header: CardHeader
    rewards: Sequence[LabeledList] = field(default_factory=tuple)
    currencies: Sequence[LabeledList] = field(default_factory=tuple)
    requirements: Optional[RequirementsView] = None
    claim: Sequence[ClaimSection] = field(default_factory=tuple)

    @property
    def has_body(self) -> bool:
        return bool(self.rewards or self.currencies or self.requirements or self.claim)


def build_quest_card(quest: Quest) -> QuestCardData:
    """Map one quest document onto its card view model."""

    return QuestCardData(
        header=_build_header(quest),
        rewards=tuple(_build_rewards(quest)),
        currencies=tuple(
            block
            for block in (
                build_currency("Bounty Coin", quest.bounty_coin),
                build_currency("Gacha Ticket", quest.gacha_ticket),
            )
            if block is not None
        ),
        requirements=_build_requirements(quest.requirements),
        claim=tuple(_build_claim(quest.how_to_claim)),
    )


def render_difficulty(difficulty: Difficulty) -> str:
    half = HALF_STAR if difficulty.half_stars > 0 else ""
    return FULL_STAR * max(difficulty.stars, 0) + half


def format_amount(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_currency(title: str, currency: CurrencyAward) -> Optional[LabeledList]:
    if not currency.is_awarded:
        return None
    lines = [
        f"{track.label}: {format_amount(currency.amount_for(track))}"
        for track in TRACK_ORDER
        if currency.amount_for(track)
    ]
    return LabeledList(label=title, lines=tuple(lines))


def _build_header(quest: Quest) -> CardHeader:
    quest_id = "" if quest.quest_id is None else format_amount(quest.quest_id)
    return CardHeader(
        quest_id=quest_id,
        name=quest.quest_name or "Untitled Quest",
        subtitle=quest.quest_subtitle or None,
        image_url=quest.image_url or None,
        difficulty=render_difficulty(quest.difficulty),
    )


def _build_rewards(quest: Quest) -> list[LabeledList]:
    sections: list[LabeledList] = []
    for track in TRACK_ORDER:
        entries = quest.rewards_for(track)
        if not entries:
            continue
        lines = tuple(_reward_line(entry) for entry in entries)
        sections.append(LabeledList(label=track.label, lines=lines))
    return sections


def _reward_line(entry: RewardEntry) -> str:
    if entry.quantity is None:
        return entry.item
    return f"{entry.item} x{format_amount(entry.quantity)}"


def _build_requirements(requirements: Optional[Requirements]) -> Optional[RequirementsView]:
    if requirements is None:
        return None

    restrictions: list[LabeledList] = []
    if requirements.restrictions:
        restrictions.append(LabeledList("Restrictions", tuple(requirements.restrictions)))
    if requirements.multiplayer_restrictions:
        restrictions.append(
            LabeledList("Multiplayer Restrictions", tuple(requirements.multiplayer_restrictions))
        )

    time_requirements = tuple(
        TimeRequirementView(
            weapons=f"[{', '.join(entry.weapons)}]",
            time_limit=f"Under {format_amount(entry.time_limit_minutes)} minutes",
            note=entry.submission_note,
        )
        for entry in requirements.weapon_time_requirements
    )

    return RequirementsView(
        mode=requirements.mode or "Unspecified",
        mode_notes=tuple(requirements.mode_notes),
        restrictions=tuple(restrictions),
        time_requirements=time_requirements,
    )


def _build_claim(claim: ClaimInstructions) -> list[ClaimSection]:
    sections: list[ClaimSection] = []
    if claim.screenshot_requirements:
        sections.append(
            ClaimSection("Screenshot Requirements", items=tuple(claim.screenshot_requirements))
        )
    if claim.multiplayer_requirements:
        sections.append(
            ClaimSection("Multiplayer Requirements", items=tuple(claim.multiplayer_requirements))
        )
    if claim.speedrun_submission_note:
        sections.append(ClaimSection("Note", note=claim.speedrun_submission_note))
    if claim.proof_required:
        sections.append(ClaimSection("Proof Required", items=tuple(claim.proof_required)))
    return sections
