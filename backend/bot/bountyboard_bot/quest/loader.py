from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence, Union

from bountyboard_bot.config import CategoryConfig
from bountyboard_bot.core.domain.models.QuestModel import Quest
from bountyboard_bot.services.document_fetcher import (
    DocumentFetcher,
    DocumentParseError,
    TransportError,
)
from bountyboard_bot.utils.logging import get_logger

logger = get_logger(__name__)


class FailureKind(Enum):
    TRANSPORT = "TRANSPORT"
    PARSE = "PARSE"


@dataclass(frozen=True)
class LoadFailure:
    """Marker standing in for one document that could not be loaded."""

    filename: str
    location: str
    kind: FailureKind
    reason: str


LoadResult = Union[Quest, LoadFailure]


@dataclass(frozen=True)
class LoadBatch:
    category: str
    results: Sequence[LoadResult] = field(default_factory=tuple)
    configured_count: int = 0

    @property
    def nothing_configured(self) -> bool:
        return self.configured_count == 0

    @property
    def quests(self) -> list[Quest]:
        return [result for result in self.results if isinstance(result, Quest)]

    @property
    def failures(self) -> list[LoadFailure]:
        return [result for result in self.results if isinstance(result, LoadFailure)]


class QuestLoader:
    """Fan out one fetch per configured document and join on all of them."""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        categories: Mapping[str, CategoryConfig],
    ) -> None:
        self.fetcher = fetcher
        self.categories = categories

    async def load(self, category: str) -> LoadBatch:
        config = self.categories.get(category)
        if config is None:
            logger.warning("Unknown quest category %s; treating as empty", category)
            return LoadBatch(category=category)

        if not config.files:
            return LoadBatch(category=category)

        results = await asyncio.gather(
            *(self._load_one(config, filename) for filename in config.files)
        )

        batch = LoadBatch(
            category=category,
            results=tuple(results),
            configured_count=len(config.files),
        )
        logger.board_event(
            "quest_batch_loaded",
            category,
            configured=batch.configured_count,
            failed=len(batch.failures),
        )
        return batch

    async def _load_one(self, config: CategoryConfig, filename: str) -> LoadResult:
        location = config.base_path + filename
        try:
            document = await self.fetcher.fetch(location)
            return Quest.from_dict(document)
        except TransportError as exc:
            logger.warning("Could not load %s: %s", filename, exc.reason)
            return LoadFailure(filename, location, FailureKind.TRANSPORT, exc.reason)
        except DocumentParseError as exc:
            logger.warning("Could not parse %s: %s", filename, exc.reason)
            return LoadFailure(filename, location, FailureKind.PARSE, exc.reason)
        except (TypeError, ValueError) as exc:
            logger.warning("Could not read quest from %s: %s", filename, exc)
            return LoadFailure(filename, location, FailureKind.PARSE, str(exc))
        except Exception as exc:
            logger.exception("Unexpected error reading quest from %s", filename)
            return LoadFailure(
                filename, location, FailureKind.PARSE, f"{type(exc).__name__}: {exc}"
            )
