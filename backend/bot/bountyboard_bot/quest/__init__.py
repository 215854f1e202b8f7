"""Quest board pipeline: load, aggregate, map to cards, render."""

from .aggregator import EmptyReason, EmptyResult, aggregate, quest_sort_key, sort_quests
from .cards import QuestCardData, build_quest_card, render_difficulty
from .controller import BoardSnapshot, DisplayStatus, QuestBoardController
from .embeds import build_board_message, build_quest_embed
from .loader import FailureKind, LoadBatch, LoadFailure, QuestLoader
from .views import QuestBoardView

__all__ = [
    "BoardSnapshot",
    "DisplayStatus",
    "EmptyReason",
    "EmptyResult",
    "FailureKind",
    "LoadBatch",
    "LoadFailure",
    "QuestBoardController",
    "QuestBoardView",
    "QuestCardData",
    "QuestLoader",
    "aggregate",
    "build_board_message",
    "build_quest_card",
    "build_quest_embed",
    "quest_sort_key",
    "render_difficulty",
    "sort_quests",
]
