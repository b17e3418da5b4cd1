"""
=============================================================================
CLI ENTRY POINT
=============================================================================

Writes one complete HTTP/1.1 response to stdout. Handy for CGI-style
scripts and for checking what a given call will put on the wire.

    python -m httpemit status 404
    python -m httpemit body '{"a": 1}' --type text
    python -m httpemit message ok --code 201 --message created
    python -m httpemit error "bad input" --code 400 --type problem

Configuration comes from HTTPEMIT_* environment variables (see
EmitterConfig.from_env) and is overridden by the flags below.

=============================================================================
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import EmitterConfig
from .core.sink import StreamSink
from .emitter import ResponseEmitter
from .errors import EmitError
from .http.content_types import ContentTypeIntent


INTENT_CHOICES = [intent.value for intent in ContentTypeIntent]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpemit",
        description="Emit a single HTTP/1.1 response on stdout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpemit status 204
  python -m httpemit body '{"items": [1, 2, 3]}'
  python -m httpemit body null                    # no-content completion
  python -m httpemit message ok --message done
  python -m httpemit error "not allowed" --code 403
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # GLOBAL OPTIONS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--default-status",
        type=int,
        default=None,
        help="Fallback status for unknown codes (default: HTTPEMIT_DEFAULT_STATUS or 200)"
    )

    parser.add_argument(
        "--etag-algorithm",
        default=None,
        help="hashlib algorithm for ETags (default: sha1)"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level, logs go to stderr (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpemit {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # ─────────────────────────────────────────────────────────────────────
    # SUBCOMMANDS
    # ─────────────────────────────────────────────────────────────────────

    status = commands.add_parser("status", help="Send a status line with no body")
    status.add_argument("code", type=int)

    body = commands.add_parser("body", help="Send a JSON-decoded payload")
    body.add_argument("payload", help="Payload as JSON text; 'null' terminates without content")
    body.add_argument("--code", type=int, default=None, help="Status to send first")
    body.add_argument("--type", "-t", choices=INTENT_CHOICES, default=None)
    body.add_argument("--etag", default=None, help="Use this ETag instead of the digest")

    message = commands.add_parser("message", help="Send a {result, message, code} envelope")
    message.add_argument("result")
    message.add_argument("--code", type=int, default=200)
    message.add_argument("--message", "-m", default="")
    message.add_argument("--type", "-t", choices=INTENT_CHOICES, default=None)

    error = commands.add_parser("error", help="Send an error envelope with matching status")
    error.add_argument("message")
    error.add_argument("--code", type=int, default=500)
    error.add_argument("--type", "-t", choices=INTENT_CHOICES, default=None)

    return parser


def setup_logging(config: EmitterConfig) -> None:
    """Configure logging based on config. Logs go to stderr."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    logging.getLogger("httpemit").setLevel(level)


def run(args: argparse.Namespace, emitter: ResponseEmitter) -> None:
    """Dispatch a parsed command to the emitter."""
    if args.command == "status":
        emitter.send_status(args.code)
        emitter.send_body(None)

    elif args.command == "body":
        payload = json.loads(args.payload)
        if args.code is not None:
            emitter.send_status(args.code)
        override = (lambda: args.etag) if args.etag else None
        emitter.send_body(payload, args.type, etag_override=override)

    elif args.command == "message":
        emitter.send_message(args.result, args.code, args.message, args.type)

    elif args.command == "error":
        emitter.send_error(args.message, args.code, args.type)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code: 0 on success, 1 when the response could not be
        emitted, 2 on a malformed payload argument.
    """
    args = build_parser().parse_args(argv)

    config = EmitterConfig.from_env()
    if args.default_status is not None:
        config.default_status = args.default_status
    if args.etag_algorithm is not None:
        config.etag_algorithm = args.etag_algorithm
    if args.log_level is not None:
        config.log_level = args.log_level

    try:
        config.validate()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config)

    sink = StreamSink(sys.stdout.buffer.write, version=config.http_version)
    emitter = ResponseEmitter(sink, config)

    try:
        run(args, emitter)
    except json.JSONDecodeError as e:
        print(f"Payload is not valid JSON: {e}", file=sys.stderr)
        return 2
    except EmitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
