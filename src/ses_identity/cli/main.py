"""Command-line interface for ses-verify-identity."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Sequence

from ses_identity.cli.config import ConfigError, load_cli_config
from ses_identity.client import SESClient
from ses_identity.credentials import load_credentials, resolve_credentials_path
from ses_identity.dispatch import (
    EXIT_INTERNAL_ERROR,
    EXIT_SERVICE_ERROR,
    EXIT_UNKNOWN_STATUS,
    Dispatcher,
)
from ses_identity.errors import CredentialsError, RenderError, SESUnavailableError
from ses_identity.params import (
    Attributes,
    Delete,
    ListIdentities,
    Operation,
    Verify,
    parse_identity_list,
)

# Local setup failures share the generic failure code.
EXIT_SETUP_ERROR = EXIT_UNKNOWN_STATUS

_SENSITIVE_FIELDS = (
    "AWSSecretKey",
    "Signature",
    "secret",
)

_DESCRIPTION = "Verify, list, delete and retrieve verification attributes for SES identities."

_EPILOG = """\
exit codes:
  0   success
  1   bad input (HTTP 400)
  2   usage error
  30  service unavailable (HTTP 503 or endpoint unreachable)
  31  service access error (HTTP 403)
  32  service execution error (HTTP 500)
  70  malformed service response
  75  throttled; retry later
  255 unrecognized response status or local setup failure

The credentials file holds AWSAccessKeyId=... and AWSSecretKey=... lines.
Without -k the AWS_CREDENTIALS_FILE environment variable is used.
"""


def _sdk_version() -> str:
    try:
        return pkg_version("ses-identity")
    except PackageNotFoundError:
        return "0.0.0+local"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ses-verify-identity",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ses-verify-identity {_sdk_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.ses_identity/config.toml)",
    )
    parser.add_argument(
        "-e",
        dest="endpoint",
        metavar="URL",
        default=None,
        help="SES endpoint URL (default: https://email.us-east-1.amazonaws.com/)",
    )
    parser.add_argument(
        "-k",
        dest="credentials_file",
        metavar="FILE",
        default=None,
        help="AWS credentials file (default: $AWS_CREDENTIALS_FILE)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log request and response details to stderr",
    )

    operation = parser.add_mutually_exclusive_group(required=True)
    operation.add_argument("-v", dest="verify", metavar="IDENTITY", help="Verify an email address or domain")
    operation.add_argument("-l", dest="list", action="store_true", help="List all identities")
    operation.add_argument("-d", dest="delete", metavar="IDENTITY", help="Delete an identity")
    operation.add_argument(
        "-a",
        dest="attributes",
        metavar="IDENTITY[,IDENTITY...]",
        help="Retrieve verification attributes for a comma-separated list of identities",
    )
    return parser


def _operation_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Operation:
    if args.verify is not None:
        if not args.verify.strip():
            parser.error("argument -v: identity must not be empty")
        return Verify(identity=args.verify.strip())
    if args.list:
        return ListIdentities()
    if args.delete is not None:
        if not args.delete.strip():
            parser.error("argument -d: identity must not be empty")
        return Delete(identity=args.delete.strip())
    if args.attributes is not None:
        identities = parse_identity_list(args.attributes)
        if not identities:
            parser.error("argument -a: at least one identity is required")
        return Attributes(identities=identities)
    parser.error("one of the arguments -v -l -d -a is required")
    raise AssertionError("unreachable")  # pragma: no cover


def _configure_logging(*, verbose: bool, stderr) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    logging.getLogger("urllib3").setLevel(level)


def _sanitize_error_text(value: str) -> str:
    redacted = value
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({field}\s*[=:]\s*)([^,&\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def _report(stderr, prefix: str, exc: Exception, *, code: int) -> int:
    print(f"{prefix}: {_sanitize_error_text(str(exc))}", file=stderr)
    return code


def main(argv: Sequence[str] | None = None, *, stdout=sys.stdout, stderr=sys.stderr) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    operation = _operation_from_args(parser, args)

    _configure_logging(verbose=args.verbose, stderr=stderr)

    try:
        config = load_cli_config(args.config)
    except ConfigError as exc:
        return _report(stderr, "config error", exc, code=EXIT_SETUP_ERROR)

    try:
        credentials_path = resolve_credentials_path(args.credentials_file, config.credentials_file)
        credentials = load_credentials(credentials_path)
    except CredentialsError as exc:
        return _report(stderr, "credentials error", exc, code=EXIT_SETUP_ERROR)

    try:
        client = SESClient(
            credentials=credentials,
            endpoint=args.endpoint or config.endpoint,
            timeout=config.timeout,
        )
        return Dispatcher(client, stdout=stdout).run(operation)
    except SESUnavailableError as exc:
        return _report(stderr, "service error", exc, code=EXIT_SERVICE_ERROR)
    except RenderError as exc:
        return _report(stderr, "internal error", exc, code=EXIT_INTERNAL_ERROR)


if __name__ == "__main__":
    raise SystemExit(main())
