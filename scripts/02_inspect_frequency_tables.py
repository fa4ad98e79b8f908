from __future__ import annotations

import sys

from char_markov import LanguageModel


def main() -> None:
    corpus = sys.argv[1] if len(sys.argv) > 1 else None
    model = LanguageModel(3, seed=20)
    if corpus:
        model.train_file(corpus)
    else:
        model.train_text("the cat sat on the mat. the rat ate the hat.")

    df = model.to_frame()
    busiest = df.groupby("window")["count"].sum().sort_values(ascending=False).head(10)

    print("Most frequent windows:")
    print(busiest.to_string())
    print()
    print("Distribution after 'the':")
    print(df[df["window"] == "the"].to_string(index=False))


if __name__ == "__main__":
    main()
