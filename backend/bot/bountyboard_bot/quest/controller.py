from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Awaitable, Callable, FrozenSet, Optional, Sequence

from bountyboard_bot.quest.aggregator import EmptyReason, EmptyResult, aggregate
from bountyboard_bot.quest.cards import QuestCardData, build_quest_card
from bountyboard_bot.quest.loader import QuestLoader
from bountyboard_bot.utils.logging import get_logger

logger = get_logger(__name__)

LOADING_MESSAGE = "Loading quests..."
EMPTY_CATEGORY_MESSAGE = "No quests are available in this category yet. Check back soon!"
ALL_FAILED_MESSAGE = "No quests could be loaded. Please check the bot logs for details."
UNEXPECTED_ERROR_MESSAGE = "Error loading quests. Please check the bot logs for details."


class DisplayStatus(Enum):
    LOADING = "LOADING"
    POPULATED = "POPULATED"
    EMPTY = "EMPTY"


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything the board shows for one request at one moment."""

    category: str
    status: DisplayStatus
    token: int
    cards: Sequence[QuestCardData] = field(default_factory=tuple)
    message: Optional[str] = None
    expanded: FrozenSet[int] = frozenset()

    def is_expanded(self, index: int) -> bool:
        return index in self.expanded


SnapshotListener = Callable[[BoardSnapshot], Awaitable[None]]


class QuestBoardController:
    """Drive the Loading → Populated / Empty cycle for category switches.

    Every ``select_category`` call carries its own request token; a result is
    applied only when its token is still the active one, so a slow earlier
    request can never overwrite a later one.
    """

    def __init__(
        self,
        loader: QuestLoader,
        *,
        listener: Optional[SnapshotListener] = None,
    ) -> None:
        self.loader = loader
        self.listener = listener
        self._tokens = itertools.count(1)
        self._active_token = 0
        self._snapshot: Optional[BoardSnapshot] = None

    @property
    def snapshot(self) -> Optional[BoardSnapshot]:
        return self._snapshot

    @property
    def active_token(self) -> int:
        return self._active_token

    async def select_category(self, category: str) -> Optional[BoardSnapshot]:
        """Load and render ``category``; returns ``None`` if superseded."""

        token = next(self._tokens)
        self._active_token = token
        logger.board_event("board_loading", category, token=token)
        await self._publish(
            BoardSnapshot(
                category=category,
                status=DisplayStatus.LOADING,
                token=token,
                message=LOADING_MESSAGE,
            )
        )

        result = await self._build_result(category, token)

        if token != self._active_token:
            logger.board_event(
                "board_stale", category, token=token, active=self._active_token
            )
            return None

        logger.board_event(
            "board_ready",
            category,
            token=token,
            status=result.status.value,
            cards=len(result.cards),
        )
        await self._publish(result)
        return result

    async def _build_result(self, category: str, token: int) -> BoardSnapshot:
        try:
            batch = await self.loader.load(category)
            outcome = aggregate(batch)
            if isinstance(outcome, EmptyResult):
                return BoardSnapshot(
                    category=category,
                    status=DisplayStatus.EMPTY,
                    token=token,
                    message=empty_message(outcome.reason),
                )
            cards = tuple(build_quest_card(quest) for quest in outcome)
        except Exception:
            logger.exception("Error loading quests for %s", category)
            return BoardSnapshot(
                category=category,
                status=DisplayStatus.EMPTY,
                token=token,
                message=UNEXPECTED_ERROR_MESSAGE,
            )

        return BoardSnapshot(
            category=category,
            status=DisplayStatus.POPULATED,
            token=token,
            cards=cards,
        )

    async def toggle_card(self, index: int) -> bool:
        """Flip one card's body visibility and return the new state."""

        snapshot = self._snapshot
        if snapshot is None or snapshot.status is not DisplayStatus.POPULATED:
            raise IndexError("No quest cards are displayed")
        if not 0 <= index < len(snapshot.cards):
            raise IndexError(f"Card index {index} out of range")

        expanded = set(snapshot.expanded)
        if index in expanded:
            expanded.remove(index)
        else:
            expanded.add(index)
        await self._publish(replace(snapshot, expanded=frozenset(expanded)))
        return index in expanded

    async def _publish(self, snapshot: BoardSnapshot) -> None:
        self._snapshot = snapshot
        if self.listener is not None:
            await self.listener(snapshot)


def empty_message(reason: EmptyReason) -> str:
    if reason is EmptyReason.EMPTY_CATEGORY:
        return EMPTY_CATEGORY_MESSAGE
    return ALL_FAILED_MESSAGE
