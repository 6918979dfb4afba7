"""
Command line interface.

    python -m digrams words   corpus.txt dic_corpus.words
    python -m digrams digrams corpus.txt 2_grams.words --workers 4
    python -m digrams sample  europarl.pt small.pt --lines 1000

Each counting command writes the main table and its two diagnostic
tables next to it, then prints a summary with the elapsed time.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from digrams.config import OracleConfig, PipelineConfig, get_profile, load_config
from digrams.exceptions import DigramsError
from digrams.pipeline import create_pipeline
from digrams.readers.corpus import make_sample, read_corpus, write_result
from digrams.text.language import detect_language

logger = logging.getLogger(__name__)

MODE_BY_COMMAND = {"words": "unigram", "digrams": "bigram"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digrams",
        description="Word and digram frequency tables with orthographic correction",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    sub = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("words", "Count word frequencies"),
        ("digrams", "Count adjacent word pairs"),
    ):
        p = sub.add_parser(command, help=help_text)
        p.add_argument("corpus", type=Path, help="UTF-8 corpus file")
        p.add_argument("output", type=Path, help="Main output table")
        p.add_argument("--config", type=Path, help="YAML pipeline configuration")
        p.add_argument(
            "--language",
            help="Profile name (pt, en) or 'auto' to detect from the corpus",
        )
        p.add_argument("--oracle", choices=["spellchecker", "enchant"], help="Oracle backend")
        p.add_argument(
            "--dictionary",
            help="Oracle dictionary: pyspellchecker language or enchant tag (e.g. pt_PT)",
        )
        p.add_argument("--workers", type=int, help="Worker threads (sentence-aligned shards)")
        p.add_argument("--cache-policy", choices=["shared", "per_shard"])
        p.add_argument("--nfkc", action="store_true", help="Use NFKC instead of NFC")

    p = sub.add_parser("sample", help="Cut the first lines of a big corpus into a sample file")
    p.add_argument("source", type=Path)
    p.add_argument("destination", type=Path)
    p.add_argument("--lines", type=int, default=1_000)
    p.add_argument("--keep-newlines", action="store_true")

    return parser


def _config_from_args(args: argparse.Namespace, corpus_text: str) -> PipelineConfig:
    config = load_config(args.config) if args.config else PipelineConfig()

    profile = config.profile
    if args.language == "auto":
        profile = get_profile(detect_language(corpus_text))
    elif args.language:
        profile = get_profile(args.language)

    oracle = config.oracle
    if args.oracle or args.dictionary or args.language:
        backend = args.oracle or oracle.backend
        if args.dictionary:
            language = args.dictionary
        elif args.language or backend != oracle.backend:
            # OracleConfig maps the profile name to a Hunspell tag for enchant
            language = profile.name
        else:
            language = oracle.language
        oracle = OracleConfig(
            backend=backend,
            language=language,
            dictionary=oracle.dictionary,
            distance=oracle.distance,
            extra_words=oracle.extra_words,
        )

    return PipelineConfig(
        profile=profile,
        oracle=oracle,
        normalization_form="NFKC" if args.nfkc else config.normalization_form,
        muted_letters=config.muted_letters,
        accent_table=config.accent_table,
        workers=args.workers or config.workers,
        cache_policy=args.cache_policy or config.cache_policy,
    )


def _run_count(args: argparse.Namespace) -> int:
    corpus_text = read_corpus(args.corpus)
    config = _config_from_args(args, corpus_text)
    pipeline = create_pipeline(config)

    passed = pipeline.run(corpus_text, MODE_BY_COMMAND[args.command])
    written = write_result(passed.result, args.output)

    print(passed.stats.summary())
    for role, path in written.items():
        print(f"  {role}: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        if args.command == "sample":
            path = make_sample(
                args.source, args.destination, args.lines, keep_newlines=args.keep_newlines
            )
            print(f"Sample written: {path}")
            return 0
        return _run_count(args)
    except DigramsError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
