"""
Character-Level Markov Language Model

Training slides a window of ``window_length`` characters over the corpus and
counts, per window, which character came next. Generation starts from the
last window of a seed text and repeatedly samples the next character from the
matching frequency table until the requested length is reached or the chain
walks into a window that was never observed.

Usage:
    model = LanguageModel(window_length=7, seed=20)
    model.train_file("originofspecies.txt")
    print(model.generate("Natural", 172))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

import numpy as np
import pandas as pd

from .config import ModelConfig
from .frequency import FrequencyTable
from .sources import CharacterSource, FileSource, StringSource, as_source
from .text_cleaning import CleanTextConfig, clean_text

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["window", "character", "count", "probability", "cumulative_probability"]


class InsufficientInputError(ValueError):
    """The corpus ended before a full window could be read."""

    def __init__(self, required: int, received: int):
        super().__init__(
            f"corpus has {received} character(s) but a window needs {required}"
        )
        self.required = required
        self.received = received


class LanguageModel:
    """
    Fixed-order character Markov model.

    Owns the window -> FrequencyTable mapping and its own random source, so
    independent instances never share state. Pass ``seed`` for reproducible
    output; leave it as None to seed from OS entropy.
    """

    def __init__(self, window_length: int, seed: int | None = None):
        if isinstance(window_length, bool) or not isinstance(window_length, int):
            raise TypeError(f"window_length must be an integer, got {window_length!r}")
        if window_length < 1:
            raise ValueError(f"window_length must be >= 1, got {window_length}")
        self._window_length = window_length
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        self._tables: dict[str, FrequencyTable] = {}

    @classmethod
    def from_config(cls, config: ModelConfig) -> "LanguageModel":
        return cls(config.window_length, seed=config.seed)

    @property
    def window_length(self) -> int:
        return self._window_length

    @property
    def seed(self) -> int | None:
        return self._seed

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, source: CharacterSource | Iterable[str]) -> None:
        """
        Count next-character frequencies over a character source.

        Counts accumulate across calls; build a new model for a clean retrain.

        Args:
            source: A CharacterSource, or any string/iterable of strings

        Raises:
            InsufficientInputError: If the source holds fewer than
                ``window_length`` characters
        """
        src = as_source(source)

        first = []
        while len(first) < self._window_length:
            if not src.has_more():
                raise InsufficientInputError(self._window_length, len(first))
            first.append(src.read_char())
        window = "".join(first)

        logger.info("Training on corpus with window length %d", self._window_length)
        consumed = len(first)
        tables = self._tables
        while src.has_more():
            c = src.read_char()
            table = tables.get(window)
            if table is None:
                table = tables[window] = FrequencyTable()
            table.record(c)
            window = window[1:] + c
            consumed += 1

        for table in tables.values():
            table.derive_probabilities()

        logger.info(
            "Consumed %d characters; model now holds %d distinct windows",
            consumed, len(tables)
        )

    def train_text(self, text: str) -> None:
        self.train(StringSource(text))

    def train_file(
        self,
        path: str | Path,
        encoding: str = "utf-8",
        clean: CleanTextConfig | None = None,
    ) -> None:
        """
        Train on a text file.

        The file is streamed unless ``clean`` is given, in which case it is
        read whole, normalized with ``clean_text`` and trained on as a string.
        """
        logger.info("Loading corpus from %s", path)
        if clean is not None:
            text = Path(path).read_text(encoding=encoding)
            self.train_text(clean_text(text, clean))
            return

        with FileSource(path, encoding=encoding) as src:
            self.train(src)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, initial_text: str, target_length: int) -> str:
        """
        Extend ``initial_text`` by up to ``target_length`` sampled characters.

        Seed texts shorter than the window are returned unchanged. Generation
        stops early, without error, when the current window was never seen
        during training.

        Args:
            initial_text: Text to continue; its last window seeds the chain
            target_length: Maximum number of characters to append

        Returns:
            ``initial_text`` followed by the generated characters
        """
        if target_length < 0:
            raise ValueError(f"target_length must be >= 0, got {target_length}")
        if len(initial_text) < self._window_length:
            return initial_text

        window = initial_text[len(initial_text) - self._window_length:]
        generated = []
        for _ in range(target_length):
            table = self._tables.get(window)
            if table is None:
                logger.debug("No continuation for window %r after %d characters", window, len(generated))
                break
            c = table.sample(float(self._rng.random()))
            generated.append(c)
            window = window[1:] + c

        return initial_text + "".join(generated)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def windows(self) -> list[str]:
        return list(self._tables)

    def table_for(self, window: str) -> FrequencyTable | None:
        return self._tables.get(window)

    def iter_tables(self) -> Iterator[tuple[str, FrequencyTable]]:
        return iter(self._tables.items())

    def to_frame(self) -> pd.DataFrame:
        """One row per (window, character) pair, in mapping and record order."""
        rows = [
            {
                "window": window,
                "character": rec.character,
                "count": rec.count,
                "probability": rec.probability,
                "cumulative_probability": rec.cumulative_probability,
            }
            for window, table in self._tables.items()
            for rec in table.records
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def __contains__(self, window: object) -> bool:
        return window in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __str__(self) -> str:
        return "".join(f"{window} : {table}\n" for window, table in self._tables.items())

    def __repr__(self) -> str:
        return f"LanguageModel(window_length={self._window_length}, windows={len(self._tables)})"
