"""
bootstrap/entrypoints.py - Command line entry points

Provides logging setup and the ``seatlayout`` CLI:

    seatlayout generate SPEC.json [--double-decker | --single-decker] [--summary]
    seatlayout validate SPACES.json [--spec SPEC.json] [--collect]
"""

from __future__ import annotations
from typing import Any, Optional
import argparse
import json
import logging
import sys

from seatlayout.bootstrap.config import EngineConfig, load_config
from seatlayout.errors.taxonomy import LayoutError
from seatlayout.layout.generator import LayoutGenerator, summarize_layout
from seatlayout.layout.models import LayoutSpec
from seatlayout.layout.validation import LayoutValidator

logger = logging.getLogger("bootstrap.entrypoints")

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json.dumps({
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        })


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    json_format: bool = False,
    fmt: str = DEFAULT_LOG_FORMAT,
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        fmt: Format string for plain-text logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt)

    # Logs go to stderr; stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)


def _read_json(path: str) -> Any:
    with open(path) as f:
        return json.load(f)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _generate(parsed: argparse.Namespace, config: EngineConfig) -> int:
    layout_spec = LayoutSpec.from_dict(_read_json(parsed.spec))
    spaces = LayoutGenerator(config.layout).generate(layout_spec, parsed.double_decker)

    if parsed.summary:
        _print_json({str(floor): counts for floor, counts in summarize_layout(spaces).items()})
    else:
        _print_json([space.to_record() for space in spaces])
    return 0


def _validate(parsed: argparse.Namespace, config: EngineConfig) -> int:
    space_configs = _read_json(parsed.spaces)
    layout_spec = LayoutSpec.from_dict(_read_json(parsed.spec)) if parsed.spec else None
    validator = LayoutValidator(config.validation)

    if parsed.collect:
        result = validator.check(space_configs, layout_spec)
        if result.is_valid:
            print("ok")
            return 0
        _print_json(result.to_dict())
        return 1

    validator.validate(space_configs, layout_spec)
    print("ok")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle seating layout engine",
        prog="seatlayout",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (defaults to the configured level)",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )

    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate the default layout for a spec")
    generate.add_argument("spec", help="Layout spec JSON file")
    decker = generate.add_mutually_exclusive_group()
    decker.add_argument(
        "--double-decker",
        dest="double_decker",
        action="store_true",
        default=None,
        help="Put stairs on floor 1 (default: when the spec has more than one floor)",
    )
    decker.add_argument(
        "--single-decker",
        dest="double_decker",
        action="store_false",
        help="Never put stairs on floor 1",
    )
    generate.add_argument(
        "--summary",
        action="store_true",
        help="Print space counts per floor instead of the records",
    )
    generate.set_defaults(handler=_generate, double_decker=None)

    validate = commands.add_parser("validate", help="Validate a list of space configurations")
    validate.add_argument("spaces", help="Space configurations JSON file")
    validate.add_argument("--spec", help="Layout spec JSON file for bounds checks", default=None)
    validate.add_argument(
        "--collect",
        action="store_true",
        help="Report every violation instead of the first",
    )
    validate.set_defaults(handler=_validate)

    return parser


def cli_main(args: list = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = build_parser()
    parsed = parser.parse_args(args)

    config = load_config(parsed.config)

    log_level = "DEBUG" if parsed.verbose else (parsed.log_level or config.logging.level)
    setup_logging(
        level=log_level,
        log_file=parsed.log_file or config.logging.log_file,
        json_format=config.logging.json_logs,
        fmt=config.logging.format,
    )

    try:
        return parsed.handler(parsed, config)
    except LayoutError as e:
        logger.error(str(e))
        _print_json(e.to_dict())
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read input: {e}")
        return 1


def main(argv: Optional[list] = None) -> None:
    """Main entry point for the package."""
    sys.exit(cli_main(argv if argv is not None else sys.argv[1:]))
