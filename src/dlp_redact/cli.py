"""CLI interface for dlp-redact.

Usage:
    # Redact a string (stdout: redacted text)
    dlp-redact -s "call me at 555-1234" -infoTypes PHONE_NUMBER -r "[hidden]"

    # Redact an image (matched regions are cleared)
    dlp-redact -f photo.png -o out.png -infoTypes FACE -minLikelihood LIKELY

    # Same, with settings from a file
    dlp-redact --config ~/.dlp-redact.yaml -f photo.png -o out.png

Exactly one of -s / -f is accepted.  Usage errors exit with status 2 before
anything is sent; errors from the service propagate.
"""

from __future__ import annotations
import argparse
import logging
import sys
from contextlib import closing
from typing import Callable

from .config import RedactSettings, load_settings
from .errors import ConfigError
from .redact import redact_image, redact_string
from .service import DlpService, RedactionService
from .types import Likelihood

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[RedactSettings], RedactionService]


def _likelihood(value: str) -> Likelihood:
    try:
        return Likelihood.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _info_type(value: str) -> str:
    name = value.strip()
    if not name:
        raise argparse.ArgumentTypeError("info type name must not be empty")
    return name


def _dlp_service(settings: RedactSettings) -> RedactionService:
    return DlpService(settings.project, location=settings.location)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dlp-redact",
        description="Redact sensitive data from a string or an image using Cloud DLP",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-s", "--string", help="Redact this string")
    mode.add_argument("-f", "--file", help="Redact the image at this path")

    parser.add_argument(
        "-minLikelihood", "--min-likelihood", dest="min_likelihood", type=_likelihood,
        metavar="NAME",
        help="Minimum likelihood of a match (default: LIKELIHOOD_UNSPECIFIED)",
    )
    parser.add_argument(
        "-r", "--replace", dest="replacement",
        help="Replacement string for redacted text (default: _REDACTED_)",
    )
    parser.add_argument(
        "-infoTypes", "--info-types", dest="info_types", nargs="*", type=_info_type,
        metavar="NAME",
        help="Info types to redact, e.g. EMAIL_ADDRESS PHONE_NUMBER (default: all)",
    )
    parser.add_argument("-o", "--output", help="Output path for the redacted file")
    parser.add_argument("--project", help="Google Cloud project ID")
    parser.add_argument("--location", help="DLP location (default: global)")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log to stderr (-vv for debug)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate arguments.  Exits with status 2 on usage errors."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.file is not None and not args.output:
        parser.error("argument -o/--output is required with -f/--file")
    return args


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("dlp_redact").setLevel(level)


def _settings(args: argparse.Namespace) -> RedactSettings:
    """Settings file and environment, overridden by command-line flags."""
    return load_settings(args.config).merge(
        project=args.project,
        location=args.location,
        replacement=args.replacement,
        min_likelihood=args.min_likelihood,
        info_types=args.info_types,
    )


def cmd_redact_string(
    args: argparse.Namespace, settings: RedactSettings, service: RedactionService,
) -> None:
    """Redact a literal string, printing the result."""
    redact_string(
        service,
        args.string,
        replacement=settings.replacement,
        min_likelihood=settings.min_likelihood,
        info_types=settings.info_types,
    )


def cmd_redact_file(
    args: argparse.Namespace, settings: RedactSettings, service: RedactionService,
) -> None:
    """Redact an image file, writing the result to the output path."""
    redact_image(
        service,
        args.file,
        args.output,
        min_likelihood=settings.min_likelihood,
        info_types=settings.info_types,
    )


def main(
    argv: list[str] | None = None,
    service_factory: ServiceFactory | None = None,
) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    factory = service_factory or _dlp_service

    try:
        settings = _settings(args)
        logger.info(
            "redacting %s (min_likelihood=%s, info_types=%s)",
            "string" if args.string is not None else args.file,
            settings.min_likelihood.name,
            ",".join(settings.info_types) or "all",
        )
        with closing(factory(settings)) as service:
            if args.string is not None:
                cmd_redact_string(args, settings, service)
            else:
                cmd_redact_file(args, settings, service)
    except ConfigError as e:
        build_parser().error(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
