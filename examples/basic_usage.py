#!/usr/bin/env python3
"""
Basic digrams Usage Example

This example demonstrates the core workflow:
1. Cut a small sample out of a big corpus
2. Count words and digrams with the default Portuguese setup
3. Inspect corrections and diagnostics
4. Run a multi-worker pass with a Hunspell dictionary
5. Write the three tables of each pass
"""

from pathlib import Path

from digrams import (
    OracleConfig,
    PipelineConfig,
    count_digrams,
    create_pipeline,
    make_sample,
    write_result,
)


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Sample
    # ─────────────────────────────────────────────────────────────────────────

    sample = make_sample("path/to/europarl.pt", "europarl_small.pt", num_lines=1_000)

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Default pass (pyspellchecker, pt)
    # ─────────────────────────────────────────────────────────────────────────

    pipeline = create_pipeline()
    words = pipeline.run_file(sample, "unigram")

    print(words.stats.summary())
    for word, count in words.result.frequencies.most_common(10):
        print(f"  {word}: {count}")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Corrections and diagnostics
    # ─────────────────────────────────────────────────────────────────────────

    for word, entry in words.cache.entries():
        print(f"  {word} -> {entry.resolved_word or '(unresolved)'}")

    for key, count in words.result.unresolved.most_common(5):
        print(f"  unresolved {key} ({count}x)")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Hunspell dictionary, four workers sharing one cache
    # ─────────────────────────────────────────────────────────────────────────

    config = PipelineConfig(
        oracle=OracleConfig(backend="enchant", language="pt_PT"),
        workers=4,
        cache_policy="shared",
    )
    pairs = count_digrams(sample, config=config)
    print(pairs.stats.summary())

    # ─────────────────────────────────────────────────────────────────────────
    # 5. Output
    # ─────────────────────────────────────────────────────────────────────────

    out = Path("output")
    for role, path in write_result(words.result, out / "dic_corpus_unique_small.words").items():
        print(f"  {role}: {path}")
    write_result(pairs.result, out / "2_grams_small.words")


if __name__ == "__main__":
    main()
