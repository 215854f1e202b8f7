import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()

BOT_TOKEN = os.getenv("BOT_TOKEN")

# Base URL (http/https) or local directory holding the category folders
QUEST_DATA_ROOT = os.getenv("QUEST_DATA_ROOT", "data/")

# Optional JSON manifest replacing the built-in category tables
QUEST_MANIFEST_PATH = os.getenv("QUEST_MANIFEST_PATH") or None

DEFAULT_QUEST_CATEGORY = os.getenv("DEFAULT_QUEST_CATEGORY", "free-bounty")

timeout_raw = os.getenv("QUEST_FETCH_TIMEOUT")
try:
    QUEST_FETCH_TIMEOUT: float = float(timeout_raw) if timeout_raw else 10.0
except ValueError:
    QUEST_FETCH_TIMEOUT = 10.0

per_page_raw = os.getenv("QUEST_CARDS_PER_PAGE")
try:
    QUEST_CARDS_PER_PAGE: int = int(per_page_raw) if per_page_raw else 5
except ValueError:
    QUEST_CARDS_PER_PAGE = 5
# A Discord message carries at most ten embeds.
QUEST_CARDS_PER_PAGE = min(max(QUEST_CARDS_PER_PAGE, 1), 10)

# Quest categories and their data folder paths
QUEST_CATEGORIES: Dict[str, str] = {
    "free-bounty": "free-bounty/",
    "event-bounty": "event-bounty/",
    "bronze-prog": "bronze-prog/",
    "silver-prog": "silver-prog/",
    "gold-prog": "gold-prog/",
}

# Quest documents for each category, in display-independent order
QUEST_FILES: Dict[str, List[str]] = {
    "free-bounty": ["01.json", "18.json"],
    "event-bounty": ["01.json"],
    "bronze-prog": [],
    "silver-prog": [],
    "gold-prog": [],
}


@dataclass(frozen=True)
class CategoryConfig:
    key: str
    base_path: str
    files: List[str] = field(default_factory=list)
    label: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.label:
            return self.label
        return self.key.replace("-", " ").replace("_", " ").title()


def build_category_configs(
    categories: Dict[str, str], files: Dict[str, List[str]]
) -> Dict[str, CategoryConfig]:
    """Combine the path and filename tables into ordered category configs."""

    return {
        key: CategoryConfig(key=key, base_path=base_path, files=list(files.get(key) or []))
        for key, base_path in categories.items()
    }


def load_category_manifest(path: str | Path) -> Dict[str, CategoryConfig]:
    """Read a category manifest file.

    The manifest looks like ``{"categories": {"free-bounty": {"base_path":
    "free-bounty/", "files": ["01.json"], "label": "Free Bounty"}}}``.
    """

    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)

    raw_categories = payload.get("categories") if isinstance(payload, dict) else None
    if not isinstance(raw_categories, dict):
        raise ValueError(f"Manifest {path} has no 'categories' object")

    configs: Dict[str, CategoryConfig] = {}
    for key, entry in raw_categories.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Manifest entry for {key!r} must be an object")
        base_path = entry.get("base_path")
        if base_path is None:
            base_path = f"{key}/"
        files = entry.get("files") or []
        if not isinstance(files, list):
            raise ValueError(f"Manifest entry for {key!r} has a non-list 'files'")
        configs[key] = CategoryConfig(
            key=key,
            base_path=str(base_path),
            files=[str(name) for name in files],
            label=entry.get("label"),
        )
    return configs


def get_category_configs() -> Dict[str, CategoryConfig]:
    if QUEST_MANIFEST_PATH:
        return load_category_manifest(QUEST_MANIFEST_PATH)
    return build_category_configs(QUEST_CATEGORIES, QUEST_FILES)
