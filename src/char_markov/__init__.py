"""Character-level Markov text generation.

Train a ``LanguageModel`` on a corpus, then ``generate`` text that follows
its local character statistics.
"""

from .config import ConfigurationError, ModelConfig
from .frequency import CharacterRecord, FrequencyTable
from .language_model import InsufficientInputError, LanguageModel
from .sources import CharacterSource, FileSource, IterableSource, SourceExhaustedError, StringSource
from .text_cleaning import CleanTextConfig, clean_text

__version__ = "0.1.0"

__all__ = [
    "CharacterRecord",
    "CharacterSource",
    "CleanTextConfig",
    "ConfigurationError",
    "FileSource",
    "FrequencyTable",
    "InsufficientInputError",
    "IterableSource",
    "LanguageModel",
    "ModelConfig",
    "SourceExhaustedError",
    "StringSource",
    "clean_text",
]
