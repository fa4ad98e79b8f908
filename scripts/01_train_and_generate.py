from __future__ import annotations

from char_markov import LanguageModel


def main() -> None:
    text = (
        "natural language processing (nlp) is fun. "
        "start small, iterate, and learn by coding. "
        "natural selection acts solely by accumulating slight variations. "
    )

    for window_length in (2, 4, 6):
        model = LanguageModel(window_length, seed=20)
        model.train_text(text)
        print(f"[window={window_length}, windows={len(model)}]")
        print(model.generate("natural", 120))
        print()


if __name__ == "__main__":
    main()
