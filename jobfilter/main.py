"""Command line entry point for the jobfilter classifier."""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from jobfilter.adapters import SUPPORTED_SOURCES, AdapterError, project_many
from jobfilter.config.environment import EnvironmentConfig, load_environment_config
from jobfilter.config.exceptions import ConfigurationError
from jobfilter.config.loader import load_keyword_config
from jobfilter.config.models import KeywordConfig
from jobfilter.logging import get_logger
from jobfilter.logging.config import configure_logging
from jobfilter.matching.engine import RelevanceClassifier
from jobfilter.matching.utils import build_result_dict

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 2


class InputError(Exception):
    """The postings file could not be read or parsed."""

    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobfilter",
        description="Classify saved ATS job postings for LATAM remote relevance",
    )
    parser.add_argument(
        "postings",
        help="Path to a saved ATS JSON response ('-' reads stdin)",
    )
    parser.add_argument(
        "--source",
        required=True,
        choices=SUPPORTED_SOURCES,
        help="ATS the response came from",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to keyword configuration (default: JOBFILTER_CONFIG or config/filter_config.yaml)",
    )
    parser.add_argument("--company", default=None, help="Company name attached to every posting")
    parser.add_argument(
        "--score",
        action="store_true",
        help="Attach a relevance score to postings that are not rejected",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "key-value"],
        help="Log format (overrides config and environment)",
    )
    return parser


def resolve_log_settings(
    args: argparse.Namespace, env_config: EnvironmentConfig, config: KeywordConfig
) -> tuple:
    """Apply priority CLI > environment > configuration file."""
    level = args.log_level or env_config.log_level or config.logging.level or "INFO"
    log_format = args.log_format or env_config.log_format or config.logging.format or "key-value"
    return level, log_format


def read_postings_file(path: str) -> Any:
    """Read and parse a JSON postings file, or stdin for '-'.

    Raises:
        InputError: If the file is missing, unreadable or not JSON
    """
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise InputError(f"Cannot read postings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Postings file {path} is not valid JSON: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the jobfilter command.

    Prints one JSON line per posting on stdout; logs go to stderr.

    Returns:
        Exit code: 0 success, 1 configuration error, 2 input error
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)
    load_dotenv()

    try:
        env_config = load_environment_config()
        config = load_keyword_config(args.config or env_config.config_path)

        level, log_format = resolve_log_settings(args, env_config, config)
        configure_logging(level=level, format_type=log_format, environment=env_config.environment)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.info(
        "jobfilter starting",
        extra={
            "event": "service.starting",
            "source": args.source,
            "postings_path": args.postings,
            "scoring": args.score,
            "config_version": config.version,
        },
    )

    try:
        response = read_postings_file(args.postings)
        postings = project_many(args.source, response, company=args.company)
    except (InputError, AdapterError) as e:
        print(f"Input Error: {e}", file=sys.stderr)
        logger.error(
            f"Input error: {e}",
            extra={"event": "input.error", "error_type": type(e).__name__},
        )
        return EXIT_INPUT_ERROR

    classifier = RelevanceClassifier(config, enable_scoring=args.score)
    counts = {"RELEVANT": 0, "NEEDS_REVIEW": 0, "IRRELEVANT": 0}

    for posting in postings:
        result = classifier.classify(posting)
        counts[result.assessment.value] += 1
        print(json.dumps(build_result_dict(result, posting), ensure_ascii=False))

    logger.info(
        f"Classified {len(postings)} postings: "
        f"{counts['RELEVANT']} relevant, "
        f"{counts['NEEDS_REVIEW']} need review, "
        f"{counts['IRRELEVANT']} irrelevant",
        extra={
            "event": "service.completed",
            "total": len(postings),
            "relevant": counts["RELEVANT"],
            "needs_review": counts["NEEDS_REVIEW"],
            "irrelevant": counts["IRRELEVANT"],
            "duration_seconds": round(time.time() - start_time, 3),
        },
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
