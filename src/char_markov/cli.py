"""
Command-line entry point.

Usage:
    char-markov 7 Natural 172 fixed originofspecies.txt
    char-markov 3 "the " 200 random corpus.txt --clean --dump-table tables.csv

The mode token "random" seeds the model from OS entropy; any other token
uses a fixed seed so repeated runs print the same text.
Seed text may start with "-"; use "--" before the positionals for seed text
that starts with "--".
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigurationError, ModelConfig
from .language_model import InsufficientInputError, LanguageModel
from .text_cleaning import CleanTextConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Long options that consume the following token as their value
VALUE_OPTIONS = {"--encoding", "--dump-table", "--log-level"}
FLAG_OPTIONS = {"--clean", "-h", "--help"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="char-markov",
        description="Generate text from a character-level Markov model trained on a corpus"
    )

    parser.add_argument("window_length", type=int, help="Characters per window")
    parser.add_argument("initial_text", help="Seed text; its last window starts the chain")
    parser.add_argument("generated_length", type=int, help="Maximum number of characters to generate")
    parser.add_argument("mode", help='"random" for unseeded output, anything else for a fixed seed')
    parser.add_argument("corpus_path", help="Path to the training corpus")

    parser.add_argument(
        "--clean",
        action="store_true",
        help="Normalize quotes, control characters and whitespace before training"
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Corpus encoding (default: utf-8)"
    )
    parser.add_argument(
        "--dump-table",
        metavar="CSV",
        help="Write the trained frequency tables to a CSV file"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)"
    )

    return parser


def separate_positionals(argv: list[str]) -> list[str]:
    """
    Reorder argv as options, then "--", then positionals.

    Seed text such as "-ab" would otherwise be parsed as an option. Tokens
    after an explicit "--" are always positional.
    """
    options: list[str] = []
    positionals: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
            break
        name = token.split("=", 1)[0]
        if token in FLAG_OPTIONS or (name in VALUE_OPTIONS and "=" in token):
            options.append(token)
        elif token in VALUE_OPTIONS:
            options.append(token)
            value = next(tokens, None)
            if value is not None:
                options.append(value)
        elif token.startswith("--") and len(token) > 2:
            # Unknown long option; argparse reports it
            options.append(token)
        else:
            positionals.append(token)
    return options + ["--"] + positionals


def train_model(config: ModelConfig, corpus_path: str) -> LanguageModel:
    """Build a model per ``config`` and train it on the corpus file."""
    model = LanguageModel.from_config(config)
    model.train_file(
        corpus_path,
        encoding=config.encoding,
        clean=CleanTextConfig() if config.clean else None,
    )
    return model


def dump_tables(model: LanguageModel, path: str) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    model.to_frame().to_csv(output_path, index=False)
    logger.info("Frequency tables written to %s", output_path)
    return output_path


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    raw = sys.argv[1:] if argv is None else list(argv)
    args = parser.parse_args(separate_positionals(raw))

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if args.generated_length < 0:
        parser.error(f"generatedTextLength must be >= 0, got {args.generated_length}")

    try:
        config = ModelConfig.from_mode(
            args.window_length, args.mode, clean=args.clean, encoding=args.encoding
        )
    except ConfigurationError as e:
        parser.error(str(e))

    try:
        model = train_model(config, args.corpus_path)
    except InsufficientInputError as e:
        print(f"char-markov: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError, LookupError) as e:
        # Unreadable corpus, unknown encoding name, or undecodable bytes
        parser.error(f"cannot read corpus {args.corpus_path!r}: {e}")

    if args.dump_table:
        try:
            dump_tables(model, args.dump_table)
        except OSError as e:
            parser.error(f"cannot write {args.dump_table!r}: {e}")

    print(model.generate(args.initial_text, args.generated_length))
    return 0


if __name__ == "__main__":
    sys.exit(main())
