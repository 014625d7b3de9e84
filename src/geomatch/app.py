"""Command line entry point for geomatch."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional

from art import tprint
from rich.console import Console
from rich.table import Table
from rich.text import Text

from geomatch.core.builder import DomainMatcherBuilder
from geomatch.core.errors import ConfigError, GeoMatchError
from geomatch.core.models import Classification
from geomatch.core.processor import HostnameClassifier
from geomatch.settings import Settings, load_settings

NAME = "GEOMATCH"
FONT = "tarty-1"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(settings: Settings) -> None:
    config = settings.logging or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file") or {}
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/geomatch.log")
        if not os.path.isabs(path):
            base_dir = os.path.dirname(os.path.abspath(settings.config_path)) if settings.config_path else os.getcwd()
            path = os.path.join(base_dir, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
            backupCount=int(file_cfg.get("backup_count", 5)),
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _read_hostnames(args: argparse.Namespace) -> Iterable[str]:
    if args.domains:
        return list(args.domains)
    if args.input and args.input != "-":
        with open(args.input, "r", encoding="utf-8") as handle:
            return handle.readlines()
    return sys.stdin.readlines()


def _render_table(console: Console, results: list[Classification]) -> None:
    table = Table("Domain", "Matches")
    for result in results:
        if result.matched:
            table.add_row(Text(result.domain), Text("\n".join(result.explanations)))
        else:
            table.add_row(Text(result.domain), Text("-", style="dim"))
    console.print(table)


def _render_json(results: list[Classification]) -> None:
    for result in results:
        print(json.dumps({"domain": result.domain, "matches": result.explanations}))


def _fail(message: str) -> None:
    print(f"[geomatch] error: {message}", file=sys.stderr)
    raise SystemExit(2)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geomatch",
        description="Explain which routing rules match each hostname.",
    )
    parser.add_argument("domains", nargs="*", help="Hostnames to classify")
    parser.add_argument("--config", help="Path to config.json (default: ./config.json or GEOMATCH_CONFIG)")
    parser.add_argument("--dataset", help="Path to geosite.dat or a JSON dataset")
    parser.add_argument(
        "--rule",
        action="append",
        default=[],
        help="Rule such as domain:example.com or group:google@ads (repeatable, replaces config rules)",
    )
    parser.add_argument("--input", help="File with one hostname per line ('-' for stdin)")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per hostname")
    parser.add_argument("--no-banner", action="store_true", help="Do not print the banner")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.domains and args.input:
        parser.error("hostnames and --input cannot be combined")

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        _fail(str(exc))

    if not (args.no_banner or args.json):
        _print_banner()
    _configure_logging(settings)
    logger = logging.getLogger(__name__)

    rules = args.rule or list(settings.rules)
    if not rules:
        _fail("no rules given (use --rule or the rules list in config.json)")
    dataset = args.dataset or settings.dataset

    builder = DomainMatcherBuilder().add_conditions(*rules)
    if dataset:
        builder.from_dataset(dataset)
    try:
        matcher = builder.build()
    except GeoMatchError as exc:
        _fail(str(exc))
    logger.info("%s rules are loaded", len(rules))

    try:
        hostnames = _read_hostnames(args)
    except OSError as exc:
        _fail(f"cannot read hostnames: {exc}")

    classifier = HostnameClassifier(matcher)
    results = list(classifier.classify_all(hostnames))
    classifier.log_summary()

    if args.json:
        _render_json(results)
    else:
        _render_table(Console(), results)


if __name__ == "__main__":
    main()
