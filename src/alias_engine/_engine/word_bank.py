# Area: Engine
"""
alias_engine._engine.word_bank — Word pool and per-session draw cursor
======================================================================

``WordList`` is the immutable, de-duplicated pool shared by every session
built from the same configuration. ``WordBank`` is one session's own
ordering over that pool plus a cursor; drawing consumes words
front-to-back so no word repeats within a session.

The order is fixed once, when the game starts. Words are grouped by
complexity tier, each tier is shuffled, and the tiers are interleaved by
weighted sampling, so easy words come up more often than hard ones.
With a single tier this is a plain shuffle.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

logger = logging.getLogger("alias_engine.word_bank")

EASY, MEDIUM, HARD = 1, 2, 3

DEFAULT_COMPLEXITY_WEIGHTS: Dict[int, float] = {EASY: 0.7, MEDIUM: 0.2, HARD: 0.1}


@dataclass(frozen=True)
class WordEntry:
    """One candidate word and the taboo words that go with it."""
    text: str
    complexity: int = EASY
    taboo_words: Tuple[str, ...] = field(default_factory=tuple)

    def pick_taboo_words(self, rng: random.Random, limit: int) -> List[str]:
        """Return up to ``limit`` taboo words in random order."""
        taboo = list(self.taboo_words)
        rng.shuffle(taboo)
        return taboo[:limit]


WordLike = Union[str, WordEntry, Mapping[str, object]]


def as_entry(word: WordLike) -> WordEntry:
    """Coerce a plain string or mapping into a WordEntry."""
    if isinstance(word, WordEntry):
        return word
    if isinstance(word, str):
        return WordEntry(text=word.strip())
    text = str(word.get("text", "")).strip()
    complexity = int(word.get("complexity") or EASY)
    taboo = tuple(str(t).strip() for t in (word.get("taboo_words") or ()) if str(t).strip())
    return WordEntry(text=text, complexity=complexity, taboo_words=taboo)


class WordList:
    """
    Immutable ordered pool of candidate words.

    Empty texts are dropped and duplicates collapse onto their first
    occurrence, so a bank built from this list can never yield the same
    word twice.
    """

    def __init__(self, words: Iterable[WordLike]):
        seen: Set[str] = set()
        entries: List[WordEntry] = []
        for raw in words:
            entry = as_entry(raw)
            if not entry.text or entry.text in seen:
                continue
            seen.add(entry.text)
            entries.append(entry)
        self._entries: Tuple[WordEntry, ...] = tuple(entries)

    @property
    def entries(self) -> Tuple[WordEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def texts(self) -> List[str]:
        return [entry.text for entry in self._entries]


class WordBank:
    """
    One session's draw order over a WordList.

    Single-writer: only the owning session's serialized mutation path
    calls ``draw()``, so the cursor needs no locking of its own.
    """

    def __init__(self, ordered: Sequence[WordEntry]):
        self._order: Tuple[WordEntry, ...] = tuple(ordered)
        self._cursor = 0
        self._used: Set[str] = set()

    @classmethod
    def shuffled(
        cls,
        word_list: WordList,
        rng: Optional[random.Random] = None,
        complexity_weights: Optional[Mapping[int, float]] = None,
    ) -> "WordBank":
        """Build a bank whose order is randomized exactly once."""
        rng = rng or random.Random()
        weights = dict(complexity_weights or DEFAULT_COMPLEXITY_WEIGHTS)
        order = _weighted_interleave(word_list.entries, rng, weights)
        logger.debug("Word bank shuffled: %d words", len(order))
        return cls(order)

    def draw(self) -> Optional[WordEntry]:
        """
        Take the next word, or None when the bank is exhausted.

        Exhaustion is a signal, not an error: the caller ends the game.
        """
        if self._cursor >= len(self._order):
            return None
        entry = self._order[self._cursor]
        self._cursor += 1
        self._used.add(entry.text)
        return entry

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._order)

    @property
    def remaining(self) -> int:
        return len(self._order) - self._cursor

    @property
    def used(self) -> Set[str]:
        return set(self._used)

    def __len__(self) -> int:
        return len(self._order)


def _weighted_interleave(
    entries: Sequence[WordEntry],
    rng: random.Random,
    weights: Mapping[int, float],
) -> List[WordEntry]:
    """Shuffle each complexity tier, then merge tiers by weighted sampling."""
    tiers: Dict[int, List[WordEntry]] = {}
    for entry in entries:
        tiers.setdefault(entry.complexity, []).append(entry)
    for tier in tiers.values():
        rng.shuffle(tier)

    if len(tiers) == 1:
        return next(iter(tiers.values()))

    order: List[WordEntry] = []
    while tiers:
        keys = sorted(tiers)
        tier_weights = [max(weights.get(key, 0.0), 0.0) for key in keys]
        if sum(tier_weights) <= 0:
            # Tiers without a configured weight are drawn uniformly
            tier_weights = [1.0] * len(keys)
        key = rng.choices(keys, weights=tier_weights, k=1)[0]
        order.append(tiers[key].pop())
        if not tiers[key]:
            del tiers[key]
    return order
