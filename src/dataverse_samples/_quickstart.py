# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
``dataverse-quickstart``: authenticate with client credentials and call WhoAmI.

Authentication and Web API failures are reported on the console; the program
still exits normally.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from .common.constants import ENV_CLIENT_ID, ENV_CLIENT_SECRET, ENV_TENANT_ID, ENV_URL
from .core._auth import Authenticator
from .core._logging import configure_logging
from .core.config import QuickStartSettings
from .core.errors import AuthError, ConfigError, HttpError
from .operations.whoami import ApiCaller

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dataverse-quickstart",
        description="Authenticate to Dataverse with an app registration and print your user id",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  {ENV_CLIENT_SECRET}=... dataverse-quickstart \\
    --resource https://org.crm.dynamics.com --client-id <app-id> --tenant-id <tenant-id>

Environment:
  {ENV_CLIENT_SECRET}  client secret (required)
  {ENV_URL}, {ENV_CLIENT_ID}, {ENV_TENANT_ID}  defaults for the options
        """,
    )
    parser.add_argument("--resource", help=f"Environment URL (default: ${ENV_URL})")
    parser.add_argument("--client-id", help=f"Application (client) id (default: ${ENV_CLIENT_ID})")
    parser.add_argument("--tenant-id", help=f"Directory (tenant) id (default: ${ENV_TENANT_ID})")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Increase log output (-v, -vv)")
    return parser


def main(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = build_parser().parse_args(argv)
    env = os.environ if environ is None else environ
    configure_logging(args.verbose)

    try:
        settings = QuickStartSettings.from_env(
            env,
            resource=args.resource,
            client_id=args.client_id,
            tenant_id=args.tenant_id,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc.message}")
        return 1

    authenticator = Authenticator(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        tenant_id=settings.tenant_id,
        resource=settings.resource,
        authority_host=settings.authority_host,
    )
    caller = ApiCaller(settings.resource)
    try:
        token = authenticator.acquire_token()
        print("Successfully authenticated!")
        caller.call(token)
    except AuthError as exc:
        _logger.debug("Token request failed: %s", exc.to_dict())
        print(f"Authentication error: {exc.message}")
    except HttpError as exc:
        print(f"HTTP error: {exc.message}")
    except Exception as exc:
        _logger.debug("Unexpected failure", exc_info=True)
        print(f"Unexpected error: {exc}")
    finally:
        caller.close()
        authenticator.close()
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
