from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Union

from bountyboard_bot.core.domain.models.QuestModel import Quest
from bountyboard_bot.quest.loader import LoadBatch, LoadResult


class EmptyReason(Enum):
    EMPTY_CATEGORY = "EMPTY_CATEGORY"
    ALL_FAILED = "ALL_FAILED"


@dataclass(frozen=True)
class EmptyResult:
    category: str
    reason: EmptyReason


def quest_sort_key(quest_id: Any) -> tuple:
    """Total order over quest ids.

    Numbers compare numerically and strings lexicographically ("10" < "2").
    Numbers sort before strings and missing ids sort last.
    """

    if quest_id is None:
        return (2, "")
    if isinstance(quest_id, (int, float)):
        return (0, quest_id)
    return (1, str(quest_id))


def sort_quests(quests: Iterable[Quest]) -> list[Quest]:
    # sorted() is stable: equal ids keep their configured order.
    return sorted(quests, key=lambda quest: quest_sort_key(quest.quest_id))


def aggregate(batch: LoadBatch | Iterable[LoadResult]) -> Union[list[Quest], EmptyResult]:
    """Drop failed loads and order the survivors by ``quest_id``.

    A bare iterable of results is accepted too and is treated as a configured
    batch, so re-aggregating a clean list returns the same quests.
    """

    if isinstance(batch, LoadBatch):
        category = batch.category
        nothing_configured = batch.nothing_configured
        results = batch.results
    else:
        results = list(batch)
        category = ""
        nothing_configured = not results

    quests = [result for result in results if isinstance(result, Quest)]
    if not quests:
        reason = EmptyReason.EMPTY_CATEGORY if nothing_configured else EmptyReason.ALL_FAILED
        return EmptyResult(category=category, reason=reason)

    return sort_quests(quests)
