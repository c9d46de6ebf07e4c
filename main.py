"""Command-line entry point: analyze a document and print the result.

    python main.py contract.txt
    cat contract.txt | python main.py - --format text
"""
from __future__ import annotations
import argparse
import dataclasses
import sys

from plainlegal.analysis.analyzer import analyze
from plainlegal.llm.factory import PROVIDERS
from plainlegal.report.json_export import build_analysis_json
from plainlegal.report.text_report import full_report
from plainlegal.utils.config import AppConfig
from plainlegal.utils.exceptions import ValidationError
from plainlegal.utils.logger import logger, set_level

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plain-language analysis of a legal document.")
    parser.add_argument("source", help="path to a UTF-8 text file, or '-' for stdin")
    parser.add_argument("--format", choices=("json", "text"), default="json")
    parser.add_argument("--provider", choices=PROVIDERS, help="override LLM_PROVIDER")
    parser.add_argument("--model", help="override LLM_MODEL")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="override LOG_LEVEL",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = AppConfig.from_env()
    overrides = {k: v for k, v in (("provider", args.provider), ("model", args.model)) if v}
    if overrides:
        config = dataclasses.replace(config, **overrides)
    set_level(args.log_level or config.log_level)

    if args.source == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(args.source, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            logger.error("Cannot read %s: %s", args.source, e)
            print(f"error: cannot read {args.source}: {e.strerror or e}", file=sys.stderr)
            return 2

    try:
        result = analyze(text, config=config)
    except ValidationError as e:
        logger.error("Invalid input: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.format == "text":
        print(full_report(result))
    else:
        print(build_analysis_json(result, meta={"provider": config.provider, "model": config.model}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
