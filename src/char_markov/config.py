from __future__ import annotations

from dataclasses import dataclass, fields


# Seed used for reproducible runs when the CLI mode is not "random"
FIXED_SEED = 20
RANDOM_MODE = "random"


class ConfigurationError(ValueError):
    """Invalid model or command-line settings."""


@dataclass(frozen=True)
class ModelConfig:
    """
    Settings for building one language model.

    Attributes:
        window_length: Characters per window (the Markov order)
        seed: Seed for the model's random source; None draws OS entropy
        clean: Normalize the corpus with ``clean_text`` before training
        encoding: Text encoding of corpus files
    """
    window_length: int
    seed: int | None = None
    clean: bool = False
    encoding: str = "utf-8"

    def __post_init__(self):
        if isinstance(self.window_length, bool) or not isinstance(self.window_length, int):
            raise ConfigurationError(f"window_length must be an integer, got {self.window_length!r}")
        if self.window_length < 1:
            raise ConfigurationError(f"window_length must be >= 1, got {self.window_length}")
        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0:
                raise ConfigurationError(f"seed must be a non-negative integer or None, got {self.seed!r}")

    @property
    def deterministic(self) -> bool:
        return self.seed is not None

    @classmethod
    def from_mode(cls, window_length: int, mode: str, **kwargs) -> "ModelConfig":
        """Map the command-line mode token to a seed: "random" is unseeded, anything else is fixed."""
        seed = None if mode == RANDOM_MODE else FIXED_SEED
        return cls(window_length=window_length, seed=seed, **kwargs)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ModelConfig":
        """Create a ModelConfig from a dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        if "window_length" not in config_dict:
            raise ConfigurationError("window_length is required")
        return cls(**{k: v for k, v in config_dict.items() if k in names})

    def to_dict(self) -> dict:
        return {
            "window_length": self.window_length,
            "seed": self.seed,
            "clean": self.clean,
            "encoding": self.encoding,
        }
