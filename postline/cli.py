"""Command-line entry point: build a request from arguments, send it, print the response."""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError

from postline import __version__
from postline.client import RequestClient
from postline.core.config import PostlineSettings, get_settings
from postline.core.exceptions import ConfigurationError, InvalidHeaderError, RequestError, UsageError
from postline.core.logging import configure_logging, get_logger
from postline.http import ContentType, HttpMethod, guess_content_type
from postline.models import RequestSpec
from postline.render import render_response

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_USAGE = 2

_SUPPORTED_METHODS = ", ".join(method.value for method in HttpMethod)


def _argument_type(parse):
    """Adapt a postline parser so argparse reports its errors as usage errors."""

    def convert(text: str):
        try:
            return parse(text)
        except UsageError as exc:
            raise argparse.ArgumentTypeError(exc.message) from exc

    convert.__name__ = parse.__name__
    return convert


def parse_header(text: str) -> tuple[str, str]:
    """Split a ``Name: value`` header argument.

    Header names and values are sent as ASCII, so other characters are rejected.
    """
    name, sep, value = text.partition(":")
    name = name.strip()
    if not sep or not name or not text.isascii():
        raise InvalidHeaderError(text)
    return name, value.strip()


def _positive_seconds(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {text}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive: {text}")
    return value


def normalize_url(url: str, default_scheme: str = "http") -> str:
    """Prefix ``default_scheme`` to URLs that do not start with http:// or https://."""
    if url.startswith(("http://", "https://")):
        return url
    return f"{default_scheme}://{url}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="postline",
        description="Send a single HTTP request and print the response.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "-m",
        "--method",
        type=_argument_type(HttpMethod.parse),
        default=HttpMethod.GET,
        help=f"The HTTP method to use (case-insensitive, default: GET).\nSupported methods: {_SUPPORTED_METHODS}",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="content_type",
        type=_argument_type(ContentType.parse),
        default=None,
        help=(
            "Value for the Content-Type header, can be:\n"
            "- text: for text/plain\n"
            "- json: for application/json\n"
            "- form: for application/x-www-form-urlencoded\n"
            "- multipart: for multipart/form-data\n"
            "By default the content type is guessed from the request body,\n"
            "but the guess may be wrong, so setting it explicitly is recommended."
        ),
    )
    parser.add_argument(
        "-d",
        "--data",
        default=None,
        help=(
            "The request body.\n"
            "Bodies starting with '-' (such as multipart bodies) must be\n"
            "attached with '=': --data='-----boundary...'"
        ),
    )
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        type=_argument_type(parse_header),
        default=[],
        metavar="'NAME: VALUE'",
        help="Extra request header (repeatable)",
    )
    parser.add_argument(
        "-i",
        "--include",
        action="store_true",
        help="Print the status line and response headers before the body",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_seconds,
        default=None,
        help="Request timeout in seconds (default: POSTLINE_TIMEOUT_MS, 5000 ms)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request details to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("url", help="The URL to send the request to")
    return parser


def request_from_args(args: argparse.Namespace, settings: PostlineSettings | None = None) -> RequestSpec:
    """Turn parsed arguments into a request, guessing the content type when a body has none."""
    settings = settings or get_settings()
    content_type = args.content_type
    if args.data is not None and content_type is None:
        content_type = guess_content_type(args.data)
        logger.debug("request.content_type_guessed", content_type=str(content_type))

    return RequestSpec(
        url=normalize_url(args.url, settings.default_scheme),
        method=args.method,
        content_type=content_type,
        data=args.data,
        headers=list(args.headers),
        include=args.include,
    )


def parse_args(argv: list[str] | None = None, settings: PostlineSettings | None = None) -> RequestSpec:
    """Parse the command line into a ``RequestSpec``."""
    args = build_parser().parse_args(argv)
    return request_from_args(args, settings)


def _write(text: str) -> None:
    sys.stdout.write(text)
    if text and not text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"postline: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else settings.log_level, settings.log_json_output)

    spec = request_from_args(args, settings)
    client = RequestClient(timeout=args.timeout, settings=settings)
    try:
        summary = asyncio.run(client.send(spec))
    except ConfigurationError as exc:
        print(f"postline: {exc.message}", file=sys.stderr)
        return EXIT_USAGE
    except RequestError as exc:
        print(f"postline: {exc.message}", file=sys.stderr)
        return EXIT_REQUEST_FAILED

    _write(render_response(summary, include=spec.include))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
