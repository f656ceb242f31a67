"""
Command-line interface for the Freebox API client.

Logs in with an existing app token and prints the JSON result of each
requested API path.
"""

import argparse
import json
import sys

import requests

from fbx_exporter.auth import Authenticator, RetryPolicy, SessionManager
from fbx_exporter.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, ENV_APP_TOKEN
from fbx_exporter.exceptions import FbxError
from fbx_exporter.identity import ApplicationIdentity, load_app_token
from fbx_exporter.logging_setup import log, setup_logging
from fbx_exporter.network import Transport, api_url


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Query the Freebox API with an authenticated session.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"The app token can also be provided via the {ENV_APP_TOKEN} env var.\n"
            "Retry delays are read from FBX_RETRY_MIN_DELAY / FBX_RETRY_MAX_DELAY."
        ),
    )
    parser.add_argument(
        "paths", nargs="+", metavar="PATH",
        help="API path relative to the versioned root (e.g. system/)",
    )
    parser.add_argument(
        "--base-url", default=DEFAULT_BASE_URL,
        help=f"Scheme and host of the box (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--api-version", type=int, default=DEFAULT_API_VERSION,
        help=f"API major version (default: {DEFAULT_API_VERSION})",
    )
    parser.add_argument(
        "--token-file", default=None,
        help=f"File holding the app token (overrides {ENV_APP_TOKEN})",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    setup_logging(debug=args.debug)

    transport = Transport()
    try:
        identity = ApplicationIdentity.from_environment()
        app_token = load_app_token(args.token_file)
        authenticator = Authenticator.for_api(
            transport, app_token, identity, args.base_url, args.api_version,
        )
        session = SessionManager(transport, authenticator, RetryPolicy.from_environment())
        for path in args.paths:
            result = session.get(api_url(args.base_url, args.api_version, path))
            print(json.dumps(result, indent=2, sort_keys=True))
    except (FbxError, requests.RequestException, OSError, ValueError) as exc:
        log.error("%s", exc)
        sys.exit(1)
    finally:
        transport.close()


if __name__ == "__main__":
    main()
