from __future__ import annotations

import json

import pytest

from bountyboard_bot.config import (
    QUEST_CATEGORIES,
    QUEST_FILES,
    CategoryConfig,
    build_category_configs,
    load_category_manifest,
)


def test_default_tables_cover_every_category():
    configs = build_category_configs(QUEST_CATEGORIES, QUEST_FILES)

    assert list(configs) == ["free-bounty", "event-bounty", "bronze-prog", "silver-prog", "gold-prog"]
    assert configs["free-bounty"].files == ["01.json", "18.json"]
    assert configs["gold-prog"].files == []
    assert configs["free-bounty"].base_path + configs["free-bounty"].files[0] == "free-bounty/01.json"


def test_display_name():
    assert CategoryConfig("bronze-prog", "bronze-prog/").display_name == "Bronze Prog"
    assert CategoryConfig("x", "x/", label="Special").display_name == "Special"


def test_load_manifest(tmp_path):
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps(
            {
                "categories": {
                    "weekly": {"label": "Weekly Bounties", "files": ["a.json", "b.json"]},
                    "archive": {"base_path": "old/archive/", "files": []},
                }
            }
        ),
        encoding="utf-8",
    )

    configs = load_category_manifest(manifest)

    assert configs["weekly"] == CategoryConfig(
        key="weekly", base_path="weekly/", files=["a.json", "b.json"], label="Weekly Bounties"
    )
    assert configs["archive"].base_path == "old/archive/"
    assert configs["archive"].files == []


def test_manifest_without_categories_is_rejected(tmp_path):
    manifest = tmp_path / "manifest.json"
    manifest.write_text(json.dumps({"weekly": []}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_category_manifest(manifest)
