from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

import regex  # type: ignore


_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_ANY_WS_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n(?:\s*\n)+")

_SINGLE_QUOTES_RE = regex.compile(r"[‘’‚‛′]")
_DOUBLE_QUOTES_RE = regex.compile(r"[“”„‟″]")
# Control characters other than tab and newline
_CONTROL_RE = regex.compile(r"[^\P{Cc}\t\n]")


@dataclass(frozen=True)
class CleanTextConfig:
    lowercase: bool = False
    strip_accents: bool = False
    straighten_quotes: bool = True
    remove_control_chars: bool = True
    keep_newlines: bool = True
    normalize_whitespace: bool = True


def clean_text(text: str, config: CleanTextConfig | None = None) -> str:
    """Normalize a training corpus before it is fed to the model.

    Every distinct character becomes part of a window, so stray control
    characters, typographic quote variants and accent marks fragment the
    frequency tables. The defaults keep case and line structure.
    """

    cfg = config or CleanTextConfig()
    s = unicodedata.normalize("NFC", text.replace("\r\n", "\n").replace("\r", "\n"))

    if cfg.lowercase:
        s = s.lower()

    if cfg.strip_accents:
        s = unicodedata.normalize("NFC", regex.sub(r"\p{Mn}+", "", unicodedata.normalize("NFKD", s)))

    if cfg.straighten_quotes:
        s = _SINGLE_QUOTES_RE.sub("'", s)
        s = _DOUBLE_QUOTES_RE.sub('"', s)

    if cfg.remove_control_chars:
        s = _CONTROL_RE.sub(" ", s)

    if cfg.normalize_whitespace:
        if cfg.keep_newlines:
            s = _HORIZONTAL_WS_RE.sub(" ", s)
            s = _BLANK_LINES_RE.sub("\n\n", s)
            s = "\n".join(line.strip() for line in s.split("\n")).strip()
        else:
            s = _ANY_WS_RE.sub(" ", s).strip()

    return s
