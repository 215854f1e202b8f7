from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

QuestIdentifier = Union[str, int, float]


class Track(Enum):
    SOLO = "solo"
    MULTIPLAYER = "multiplayer"
    SPEEDRUN = "speedrun"

    @property
    def label(self) -> str:
        return self.value.title()


# Fixed display order for rewards and currency
TRACK_ORDER: tuple[Track, ...] = (Track.SOLO, Track.MULTIPLAYER, Track.SPEEDRUN)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


@dataclass
class Difficulty:
    stars: int = 0
    half_stars: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Difficulty:
        data = _as_dict(data)
        return cls(stars=int(data.get("stars") or 0), half_stars=int(data.get("half_stars") or 0))


@dataclass
class RewardEntry:
    item: str
    quantity: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> RewardEntry:
        data = _as_dict(data)
        return cls(item=str(data.get("item", "")), quantity=data.get("quantity"))


@dataclass
class CurrencyAward:
    """Per-track amounts of a currency; a falsy amount means not awarded."""

    solo: Any = None
    multiplayer: Any = None
    speedrun: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> CurrencyAward:
        data = _as_dict(data)
        return cls(
            solo=data.get("solo"),
            multiplayer=data.get("multiplayer"),
            speedrun=data.get("speedrun"),
        )

    def amount_for(self, track: Track) -> Any:
        return getattr(self, track.value)

    @property
    def is_awarded(self) -> bool:
        return any(self.amount_for(track) for track in TRACK_ORDER)


@dataclass
class WeaponTimeRequirement:
    weapons: List[str] = field(default_factory=list)
    time_limit_minutes: Any = None
    submission_note: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> WeaponTimeRequirement:
        data = _as_dict(data)
        return cls(
            weapons=_as_str_list(data.get("weapons")),
            time_limit_minutes=data.get("time_limit_minutes"),
            submission_note=data.get("submission_note") or None,
        )


@dataclass
class Requirements:
    mode: Optional[str] = None
    mode_notes: List[str] = field(default_factory=list)
    restrictions: List[str] = field(default_factory=list)
    multiplayer_restrictions: List[str] = field(default_factory=list)
    weapon_time_requirements: List[WeaponTimeRequirement] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Requirements:
        data = _as_dict(data)
        raw_weapon_times = data.get("weapon_time_requirements")
        if not isinstance(raw_weapon_times, list):
            raw_weapon_times = []
        return cls(
            mode=data.get("mode"),
            mode_notes=_as_str_list(data.get("mode_notes")),
            restrictions=_as_str_list(data.get("restrictions")),
            multiplayer_restrictions=_as_str_list(data.get("multiplayer_restrictions")),
            weapon_time_requirements=[
                WeaponTimeRequirement.from_dict(entry) for entry in raw_weapon_times
            ],
        )


@dataclass
class ClaimInstructions:
    screenshot_requirements: List[str] = field(default_factory=list)
    multiplayer_requirements: List[str] = field(default_factory=list)
    speedrun_submission_note: Optional[str] = None
    proof_required: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ClaimInstructions:
        data = _as_dict(data)
        return cls(
            screenshot_requirements=_as_str_list(data.get("screenshot_requirements")),
            multiplayer_requirements=_as_str_list(data.get("multiplayer_requirements")),
            speedrun_submission_note=data.get("speedrun_submission_note") or None,
            proof_required=_as_str_list(data.get("proof_required")),
        )


@dataclass
class Quest:
    # Identity
    quest_id: Optional[QuestIdentifier] = None

    # Display
    quest_name: Optional[str] = None
    quest_subtitle: Optional[str] = None
    image_url: Optional[str] = None
    difficulty: Difficulty = field(default_factory=Difficulty)

    # Payouts
    rewards: Dict[Track, List[RewardEntry]] = field(default_factory=dict)
    bounty_coin: CurrencyAward = field(default_factory=CurrencyAward)
    gacha_ticket: CurrencyAward = field(default_factory=CurrencyAward)

    # Conditions
    requirements: Optional[Requirements] = None
    how_to_claim: ClaimInstructions = field(default_factory=ClaimInstructions)

    # ------- Property Helpers -------

    def rewards_for(self, track: Track) -> List[RewardEntry]:
        return self.rewards.get(track, [])

    @property
    def has_rewards(self) -> bool:
        return any(self.rewards_for(track) for track in TRACK_ORDER)

    # ---------- Helpers ----------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Quest:
        """Build a quest from a decoded document, treating missing fields as absent."""

        if not isinstance(data, dict):
            raise TypeError(f"Quest document must be a JSON object, got {type(data).__name__}")

        raw_rewards = _as_dict(data.get("rewards"))
        rewards: Dict[Track, List[RewardEntry]] = {}
        for track in TRACK_ORDER:
            entries = raw_rewards.get(track.value)
            if isinstance(entries, list) and entries:
                rewards[track] = [RewardEntry.from_dict(entry) for entry in entries]

        raw_requirements = data.get("requirements")
        requirements = (
            Requirements.from_dict(raw_requirements)
            if isinstance(raw_requirements, dict)
            else None
        )

        return cls(
            quest_id=data.get("quest_id"),
            quest_name=data.get("quest_name"),
            quest_subtitle=data.get("quest_subtitle"),
            image_url=data.get("image_url"),
            difficulty=Difficulty.from_dict(data.get("difficulty")),
            rewards=rewards,
            bounty_coin=CurrencyAward.from_dict(data.get("bounty_coin")),
            gacha_ticket=CurrencyAward.from_dict(data.get("gacha_ticket")),
            requirements=requirements,
            how_to_claim=ClaimInstructions.from_dict(data.get("how_to_claim")),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["rewards"] = {
            track.value: [asdict(entry) for entry in entries]
            for track, entries in self.rewards.items()
        }
        return payload
