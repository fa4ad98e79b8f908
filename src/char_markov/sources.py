from __future__ import annotations

import itertools
from pathlib import Path
from typing import Iterable, Iterator, Protocol, runtime_checkable


DEFAULT_CHUNK_SIZE = 64 * 1024


class SourceExhaustedError(EOFError):
    """Raised by ``read_char`` when no characters remain."""


@runtime_checkable
class CharacterSource(Protocol):
    """A lazy, finite, forward-only stream of characters."""

    def read_char(self) -> str: ...

    def has_more(self) -> bool: ...


class IterableSource:
    """Character source over any iterable of strings.

    Strings yielded by the iterable are flattened, so a list of lines, a
    generator of chunks, or a plain string all work. Empty strings are skipped.
    """

    def __init__(self, chunks: Iterable[str]):
        self._chars: Iterator[str] = itertools.chain.from_iterable(chunks)
        self._pending: str | None = None
        self._advance()

    def _advance(self) -> None:
        self._pending = next(self._chars, None)

    def has_more(self) -> bool:
        return self._pending is not None

    def read_char(self) -> str:
        if self._pending is None:
            raise SourceExhaustedError("character source is exhausted")
        ch = self._pending
        self._advance()
        return ch


class StringSource(IterableSource):
    def __init__(self, text: str):
        super().__init__(text)


class FileSource(IterableSource):
    """Stream the characters of a text file in fixed-size chunks.

    The file is opened eagerly so that a missing or unreadable path fails at
    construction; it is closed once the last chunk has been read.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8", chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be >= 1")
        self.path = Path(path)
        self._handle = self.path.open("r", encoding=encoding)
        self._chunk_size = chunk_size
        super().__init__(self._read_chunks())

    def _read_chunks(self) -> Iterator[str]:
        with self._handle:
            while True:
                chunk = self._handle.read(self._chunk_size)
                if not chunk:
                    return
                yield chunk

    def close(self) -> None:
        self._handle.close()
        self._chars = iter(())
        self._pending = None

    def __enter__(self) -> "FileSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def as_source(obj: CharacterSource | Iterable[str]) -> CharacterSource:
    """Return ``obj`` unchanged if it already is a character source, else wrap it."""

    if isinstance(obj, CharacterSource):
        return obj
    if isinstance(obj, Iterable):
        return IterableSource(obj)
    raise TypeError(f"cannot read characters from {type(obj).__name__}")
