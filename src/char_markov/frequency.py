"""
Per-window character frequency tables.

A ``FrequencyTable`` collects the characters observed to follow one window of
the corpus, in the order they were first seen, and turns their counts into a
probability distribution with a matching cumulative distribution. Sampling
is inverse-CDF: the first record whose cumulative probability reaches the
uniform draw wins.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterator

import numpy as np


@dataclass
class CharacterRecord:
    """
    One character seen after a window.

    Attributes:
        character: The observed character
        count: Number of times it followed the owning window
        probability: count / total count of the owning table
        cumulative_probability: Running sum of probabilities up to this record
    """
    character: str
    count: int = 1
    probability: float = 0.0
    cumulative_probability: float = 0.0

    def __str__(self) -> str:
        return f"({self.character} {self.count} {self.probability} {self.cumulative_probability})"


class FrequencyTable:
    """
    Next-character distribution for a single window.

    Records keep first-seen order; that order is also the enumeration order
    of the cumulative distribution. Probabilities are derived lazily: any
    ``record`` call marks them stale and the next ``sample`` re-derives them.

    Usage:
        table = FrequencyTable()
        for ch in "abca":
            table.record(ch)
        table.derive_probabilities()
        table.sample(0.3)  # -> "a"
    """

    def __init__(self) -> None:
        self._records: dict[str, CharacterRecord] = {}
        self._total = 0
        # None while counts have changed since the last derivation
        self._cumulative: np.ndarray | None = None
        self._order: tuple[str, ...] = ()

    def record(self, character: str) -> None:
        """Count one more occurrence of ``character`` after this window."""
        if not isinstance(character, str) or len(character) != 1:
            raise ValueError(f"expected a single character, got {character!r}")

        existing = self._records.get(character)
        if existing is None:
            self._records[character] = CharacterRecord(character)
        else:
            existing.count += 1
        self._total += 1
        self._cumulative = None

    def derive_probabilities(self) -> None:
        """
        Recompute ``probability`` and ``cumulative_probability`` for every record.

        Raises:
            ValueError: If nothing has been recorded yet
        """
        if self._total == 0:
            raise ValueError("cannot derive probabilities for an empty frequency table")

        records = list(self._records.values())
        counts = np.fromiter((r.count for r in records), dtype=np.float64, count=len(records))
        probabilities = counts / self._total
        cumulative = np.cumsum(probabilities)

        for rec, p, cp in zip(records, probabilities, cumulative):
            rec.probability = float(p)
            rec.cumulative_probability = float(cp)
        self._cumulative = cumulative
        self._order = tuple(self._records)

    def sample(self, uniform_draw: float) -> str:
        """
        Pick a character by inverse-CDF lookup.

        Returns the character of the first record whose cumulative probability
        is >= ``uniform_draw``; equal values resolve to the earlier record. A
        draw above the last cumulative value (floating error) yields the last
        record.

        Args:
            uniform_draw: A value in [0, 1]

        Returns:
            The sampled character
        """
        if not self._records:
            raise ValueError("cannot sample from an empty frequency table")
        if not 0.0 <= uniform_draw <= 1.0:
            raise ValueError(f"uniform draw must lie in [0, 1], got {uniform_draw}")

        if self.is_stale:
            self.derive_probabilities()

        idx = int(np.searchsorted(self._cumulative, uniform_draw, side="left"))
        idx = min(idx, len(self._records) - 1)
        return self._order[idx]

    @property
    def is_stale(self) -> bool:
        """True when counts changed after the last derivation."""
        return self._cumulative is None

    @property
    def records(self) -> tuple[CharacterRecord, ...]:
        return tuple(self._records.values())

    @property
    def total_count(self) -> int:
        return self._total

    def count_of(self, character: str) -> int:
        rec = self._records.get(character)
        return rec.count if rec is not None else 0

    def to_dict(self) -> dict[str, dict]:
        """Records keyed by character, in enumeration order."""
        return {ch: asdict(rec) for ch, rec in self._records.items()}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, character: object) -> bool:
        return character in self._records

    def __iter__(self) -> Iterator[CharacterRecord]:
        return iter(self.records)

    def __str__(self) -> str:
        return "(" + " ".join(str(rec) for rec in self._records.values()) + ")"

    def __repr__(self) -> str:
        return f"FrequencyTable(total_count={self._total}, records={len(self._records)})"
