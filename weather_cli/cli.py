"""
Command-line entry point: print current weather conditions for a location.
"""

import argparse
import logging
import os
import sys
from typing import Mapping, Optional, Sequence, TextIO

from dotenv import find_dotenv, load_dotenv

from weather_cli.config import CLIConfig, ConfigError, load_settings
from weather_cli.external_api import FetchError, fetch_weather
from weather_cli.formatting import format_report
from weather_cli.log_setup import attached_handler, is_valid_level, open_log_file
from weather_cli.validation import LocationValidationError, validate_location

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

MISSING_LOCATION_MESSAGE = "Please provide a location as a command-line argument."
INVALID_LOCATION_MESSAGE = "Please provide a valid location."
FETCH_FAILED_MESSAGE = (
    "Unable to retrieve weather data. Please check your location and try again."
)


def build_parser(
    environ: Optional[Mapping[str, str]] = None,
) -> argparse.ArgumentParser:
    env = os.environ if environ is None else environ
    parser = argparse.ArgumentParser(
        prog="weather",
        description="Print current weather conditions for a location",
    )
    parser.add_argument(
        "location", nargs="?", help="Place name, e.g. 'London' or 'Los Angeles'"
    )
    parser.add_argument(
        "--config",
        default=env.get(CLIConfig.CONFIG_FILE_ENV_VAR, CLIConfig.DEFAULT_CONFIG_FILE),
        help="YAML file holding api_key (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        default=env.get(CLIConfig.LOG_FILE_ENV_VAR, CLIConfig.DEFAULT_LOG_FILE),
        help="Append-only log file (default: %(default)s)",
    )
    return parser


def run(
    location: Optional[str],
    config_path: str,
    stdout: TextIO,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Run one lookup with logging already in place."""
    if location is None:
        logger.warning("No location provided")
        print(MISSING_LOCATION_MESSAGE, file=stdout)
        return EXIT_FAILURE

    try:
        settings = load_settings(config_path, environ)
    except ConfigError as e:
        logger.critical("Error reading configuration: %s", e)
        return EXIT_FAILURE

    try:
        query = validate_location(location)
    except LocationValidationError as e:
        logger.warning("%s", e)
        print(INVALID_LOCATION_MESSAGE, file=stdout)
        return EXIT_FAILURE

    try:
        report = fetch_weather(query, settings.api_key)
    except FetchError as e:
        logger.error("Error getting weather data: %s", e)
        print(FETCH_FAILED_MESSAGE, file=stdout)
        return EXIT_FAILURE

    logger.info("Fetched weather for %s", report.name)
    for line in format_report(report):
        print(line, file=stdout)
    return EXIT_OK


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdout: Optional[TextIO] = None,
    log_handler: Optional[logging.Handler] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Parse arguments, set up the log sink and run one lookup.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        stdout: Console stream (defaults to sys.stdout)
        log_handler: Handler replacing the log file, e.g. in tests
        environ: Environment mapping; when omitted, .env is loaded into os.environ

    Returns:
        int: Process exit code
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
    env = os.environ if environ is None else environ

    args = build_parser(env).parse_args(argv)
    if stdout is None:
        stdout = sys.stdout

    log_level = env.get(CLIConfig.LOG_LEVEL_ENV_VAR, CLIConfig.DEFAULT_LOG_LEVEL)
    if not is_valid_level(log_level):
        print(f"Invalid log level: {log_level!r}", file=sys.stderr)
        return EXIT_FAILURE

    if log_handler is None:
        try:
            log_handler = open_log_file(args.log_file)
        except OSError as e:
            print(f"Error opening log file: {e}", file=sys.stderr)
            return EXIT_FAILURE

    with attached_handler(log_handler, log_level):
        return run(args.location, args.config, stdout, environ)


if __name__ == "__main__":
    sys.exit(main())
