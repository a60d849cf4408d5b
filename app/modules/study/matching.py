"""Matching game: pair each term tile with its definition tile."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Sequence

from app.core.logging import get_logger
from app.modules.study.events import (
    CompleteCallback,
    NotificationKind,
    NotifyCallback,
    emit,
)
from app.modules.study.scheduling import Randomizer, default_randomizer
from app.modules.vocab.models import VocabularyRecord

logger = get_logger(__name__)

DEFAULT_PAIR_LIMIT = 6


class TileSide(str, Enum):
    TERM = "term"
    DEFINITION = "def"


@dataclass(frozen=True)
class MatchTile:
    id: str
    vocabulary_id: str
    side: TileSide
    display_text: str
    matched: bool = False

    def pairs_with(self, other: "MatchTile") -> bool:
        return self.vocabulary_id == other.vocabulary_id and self.side != other.side


def tile_id(side: TileSide, vocabulary_id: str) -> str:
    return f"{side.value}-{vocabulary_id}"


def build_tiles(
    vocabulary: Sequence[VocabularyRecord], pair_limit: int = DEFAULT_PAIR_LIMIT
) -> list[MatchTile]:
    """One term tile and one definition tile per record, unshuffled."""
    used = list(vocabulary[:pair_limit])
    terms = [
        MatchTile(
            id=tile_id(TileSide.TERM, v.id),
            vocabulary_id=v.id,
            side=TileSide.TERM,
            display_text=v.term,
        )
        for v in used
    ]
    definitions = [
        MatchTile(
            id=tile_id(TileSide.DEFINITION, v.id),
            vocabulary_id=v.id,
            side=TileSide.DEFINITION,
            display_text=v.definition,
        )
        for v in used
    ]
    return terms + definitions


@dataclass
class MatchingSession:
    pair_count: int
    tiles: list[MatchTile]
    rng: Randomizer = field(default_factory=default_randomizer, repr=False)
    notify: Optional[NotifyCallback] = None
    on_complete: Optional[CompleteCallback] = None
    selected: Optional[MatchTile] = None
    matched_pair_count: int = 0

    @classmethod
    def initialize(
        cls,
        vocabulary: Sequence[VocabularyRecord],
        *,
        rng: Optional[Randomizer] = None,
        notify: Optional[NotifyCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        pair_limit: int = DEFAULT_PAIR_LIMIT,
    ) -> "MatchingSession":
        rng = rng or default_randomizer()
        tiles = build_tiles(vocabulary, pair_limit)
        rng.shuffle(tiles)
        return cls(
            pair_count=len(tiles) // 2,
            tiles=tiles,
            rng=rng,
            notify=notify,
            on_complete=on_complete,
        )

    @property
    def is_empty(self) -> bool:
        return self.pair_count == 0

    @property
    def completed(self) -> bool:
        return not self.is_empty and self.matched_pair_count == self.pair_count

    def tile(self, tile_id: str) -> Optional[MatchTile]:
        for t in self.tiles:
            if t.id == tile_id:
                return t
        return None

    def select(self, tile_id: str) -> Optional[bool]:
        """Handle a tap on ``tile_id``.

        Returns True/False when the tap completed a pair attempt, and None
        when it only stored a selection or was ignored.
        """
        if self.completed:
            return None
        tapped = self.tile(tile_id)
        if tapped is None or tapped.matched:
            return None

        first = self.selected
        if first is None or first.id == tapped.id:
            self.selected = tapped
            return None

        self.selected = None
        if not first.pairs_with(tapped):
            emit(self.notify, NotificationKind.NOT_A_MATCH)
            return False

        self.tiles = [
            replace(t, matched=True) if t.id in (first.id, tapped.id) else t
            for t in self.tiles
        ]
        self.matched_pair_count += 1
        emit(self.notify, NotificationKind.MATCH_FOUND)
        if self.completed:
            logger.debug("Matching game completed with %d pairs", self.pair_count)
            emit(self.notify, NotificationKind.ALL_MATCHED)
        return True

    def restart(self) -> None:
        """Reshuffle every tile and clear matches, counters and selection."""
        tiles = [replace(t, matched=False) for t in self.tiles]
        self.rng.shuffle(tiles)
        self.tiles = tiles
        self.selected = None
        self.matched_pair_count = 0

    def finish(self) -> bool:
        """Continue past a completed game; returns False if not completed."""
        if not self.completed:
            return False
        if self.on_complete is not None:
            self.on_complete()
        return True
