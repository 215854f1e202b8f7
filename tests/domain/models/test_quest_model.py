# tests/domain/models/test_quest_model.py
import pytest

from bountyboard_bot.core.domain.models.QuestModel import (
    TRACK_ORDER,
    CurrencyAward,
    Quest,
    Track,
)


def test_from_dict_reads_nested_sections(full_quest_doc):
    q = Quest.from_dict(full_quest_doc)

    assert q.quest_id == "FB-01"
    assert q.difficulty.stars == 3
    assert q.difficulty.half_stars == 1
    assert [e.item for e in q.rewards_for(Track.SOLO)] == ["Potion", "Slime Gel"]
    assert q.rewards_for(Track.MULTIPLAYER) == []
    assert q.bounty_coin.amount_for(Track.SPEEDRUN) == 15
    assert q.requirements is not None
    assert q.requirements.weapon_time_requirements[0].weapons == ["Sword", "Spear"]
    assert q.requirements.weapon_time_requirements[1].submission_note is None
    assert q.how_to_claim.speedrun_submission_note == "Upload the full run."


def test_missing_optional_fields_are_absent_not_errors():
    q = Quest.from_dict({"quest_id": 7})

    assert q.quest_id == 7
    assert q.quest_name is None
    assert q.difficulty.stars == 0
    assert q.rewards == {}
    assert q.has_rewards is False
    assert q.bounty_coin.is_awarded is False
    assert q.requirements is None
    assert q.how_to_claim.proof_required == []


def test_unknown_reward_tracks_are_ignored():
    q = Quest.from_dict({"rewards": {"raid": [{"item": "Gem", "quantity": 1}]}})
    assert q.rewards == {}


def test_non_object_document_is_rejected():
    with pytest.raises(TypeError):
        Quest.from_dict(["not", "a", "quest"])


def test_currency_award_falsy_amounts_are_not_awarded():
    assert CurrencyAward(solo=0, multiplayer=None).is_awarded is False
    assert CurrencyAward(speedrun=2).is_awarded is True


def test_track_order_and_labels():
    assert [t.value for t in TRACK_ORDER] == ["solo", "multiplayer", "speedrun"]
    assert [t.label for t in TRACK_ORDER] == ["Solo", "Multiplayer", "Speedrun"]


def test_to_dict_uses_track_names(full_quest_doc):
    payload = Quest.from_dict(full_quest_doc).to_dict()
    assert set(payload["rewards"]) == {"solo", "speedrun"}
    assert payload["rewards"]["solo"][0] == {"item": "Potion", "quantity": 2}
