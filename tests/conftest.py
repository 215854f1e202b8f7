from __future__ import annotations

import asyncio
import copy
from types import SimpleNamespace
from typing import Any

import pytest

from bountyboard_bot.config import CategoryConfig
from bountyboard_bot.services.document_fetcher import TransportError

_MISSING = object()


class FakeFetcher:
    """In-memory fetcher; locations missing from ``documents`` answer HTTP 404."""

    def __init__(
        self,
        documents: dict[str, Any] | None = None,
        *,
        gates: dict[str, asyncio.Event] | None = None,
    ) -> None:
        self.documents = documents or {}
        self.gates = gates or {}
        self.calls: list[str] = []
        self.completed: list[str] = []
        self.closed = False

    async def fetch(self, location: str) -> Any:
        self.calls.append(location)
        gate = self.gates.get(location)
        if gate is not None:
            await gate.wait()
        self.completed.append(location)
        value = self.documents.get(location, _MISSING)
        if value is _MISSING:
            raise TransportError(location, "HTTP 404")
        if isinstance(value, Exception):
            raise value
        return copy.deepcopy(value)

    async def close(self) -> None:
        self.closed = True


class FakeInteraction:
    """Just enough of ``discord.Interaction`` for board views and cogs."""

    def __init__(self, user_id: int = 42) -> None:
        self.user = SimpleNamespace(id=user_id)
        self.edits: list[dict[str, Any]] = []
        self.ephemeral: list[str] = []
        self.response = _FakeResponse(self)
        self.followup = _FakeFollowup(self)

    async def edit_original_response(self, **kwargs: Any) -> None:
        self.edits.append(kwargs)


class _FakeResponse:
    def __init__(self, interaction: FakeInteraction) -> None:
        self._interaction = interaction
        self._done = False

    def is_done(self) -> bool:
        return self._done

    async def defer(self, **kwargs: Any) -> None:
        self._done = True

    async def send_message(self, message: str, **kwargs: Any) -> None:
        self._done = True
        self._interaction.ephemeral.append(message)


class _FakeFollowup:
    def __init__(self, interaction: FakeInteraction) -> None:
        self._interaction = interaction

    async def send(self, message: str, **kwargs: Any) -> None:
        self._interaction.ephemeral.append(message)


def make_quest_doc(quest_id: Any, name: str | None = None, **overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "quest_id": quest_id,
        "quest_name": name or f"Quest {quest_id}",
        "quest_subtitle": "A short errand",
        "image_url": "https://example.com/quest.png",
        "difficulty": {"stars": 2, "half_stars": 0},
        "rewards": {"solo": [{"item": "Potion", "quantity": 2}]},
        "bounty_coin": {"solo": 5},
        "gacha_ticket": {},
        "requirements": {"mode": "Solo"},
        "how_to_claim": {"proof_required": ["Screenshot"]},
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def full_quest_doc() -> dict[str, Any]:
    return {
        "quest_id": "FB-01",
        "quest_name": "Slime Sweep",
        "quest_subtitle": "Clear the meadow",
        "image_url": "https://example.com/slime.png",
        "difficulty": {"stars": 3, "half_stars": 1},
        "rewards": {
            "solo": [{"item": "Potion", "quantity": 2}, {"item": "Slime Gel", "quantity": 5}],
            "multiplayer": [],
            "speedrun": [{"item": "Hourglass", "quantity": 1}],
        },
        "bounty_coin": {"solo": 5, "multiplayer": 0, "speedrun": 15},
        "gacha_ticket": {"solo": 0, "multiplayer": None},
        "requirements": {
            "mode": "Any",
            "mode_notes": ["Solo and multiplayer clears count"],
            "restrictions": ["No consumables"],
            "multiplayer_restrictions": ["Party of 2 max"],
            "weapon_time_requirements": [
                {
                    "weapons": ["Sword", "Spear"],
                    "time_limit_minutes": 10,
                    "submission_note": "Timer must be visible",
                },
                {"weapons": ["Bow"], "time_limit_minutes": 15},
            ],
        },
        "how_to_claim": {
            "screenshot_requirements": ["Quest complete screen"],
            "multiplayer_requirements": ["Each member submits"],
            "speedrun_submission_note": "Upload the full run.",
            "proof_required": ["Screenshot", "Video"],
        },
    }


@pytest.fixture
def categories() -> dict[str, CategoryConfig]:
    return {
        "free-bounty": CategoryConfig("free-bounty", "free-bounty/", ["01.json", "18.json", "07.json"]),
        "event-bounty": CategoryConfig("event-bounty", "event-bounty/", ["01.json"]),
        "gold-prog": CategoryConfig("gold-prog", "gold-prog/", []),
    }


@pytest.fixture
def documents() -> dict[str, Any]:
    return {
        "free-bounty/01.json": make_quest_doc("FB-01", "Slime Sweep"),
        "free-bounty/18.json": make_quest_doc("FB-18", "Wyvern Watch"),
        "free-bounty/07.json": make_quest_doc("FB-07", "Crab Clash"),
        "event-bounty/01.json": make_quest_doc("EV-01", "Lantern Festival"),
    }


@pytest.fixture
def make_doc():
    return make_quest_doc


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture
def interaction() -> FakeInteraction:
    return FakeInteraction()
