# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
``dataverse-tablecreator``: create a Dataverse table from a JSON definition file.

The connection comes from the ``default`` connection string in
``appsettings.json`` (or the file named by ``DATAVERSE_APPSETTINGS``).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from .common.constants import DEFAULT_CONNECTION_STRING_NAME, ENV_APPSETTINGS, ENV_CLIENT_SECRET
from .core._logging import configure_logging
from .core.config import AppSettings, DataverseConfig
from .data._metadata import MetadataServiceClient
from .models.table_definition import load_table_definition
from .operations.tables import TableBuilder

_logger = logging.getLogger(__name__)

USAGE_HINT = "Please provide the path to the JSON file."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dataverse-tablecreator",
        description="Create a Dataverse table, its columns and relationships from a JSON definition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  dataverse-tablecreator examples/project_table.json

  {ENV_APPSETTINGS}=./dev.appsettings.json dataverse-tablecreator project.json

Settings:
  The settings file must define ConnectionStrings.{DEFAULT_CONNECTION_STRING_NAME}, e.g.
  "AuthType=ClientSecret;Url=https://org.crm.dynamics.com;ClientId=...;TenantId=...;ClientSecret=..."
  When the connection string has no ClientSecret, {ENV_CLIENT_SECRET} is used.
        """,
    )
    parser.add_argument("path", nargs="?", help="Path to the table definition JSON file")
    parser.add_argument(
        "--settings",
        help=f"Settings file (default: ${ENV_APPSETTINGS} or appsettings.json)",
    )
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Increase log output (-v, -vv)")
    return parser


def main(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """Entry point. Errors from table creation propagate to the caller."""
    parser = build_parser()
    args = parser.parse_args(argv)
    env = os.environ if environ is None else environ
    configure_logging(args.verbose)

    if not args.path:
        parser.print_usage()
        print(USAGE_HINT)
        return 0

    definition = load_table_definition(args.path)

    settings_path = args.settings or AppSettings.resolve_path(env)
    _logger.info("Using settings file %s", settings_path)
    connection = AppSettings.load(settings_path).connection_string(DEFAULT_CONNECTION_STRING_NAME)
    config = DataverseConfig.from_env()

    with MetadataServiceClient.from_connection_string(
        connection,
        client_secret=env.get(ENV_CLIENT_SECRET),
        config=config,
    ) as service:
        result = TableBuilder(service, language_code=config.language_code).build(definition)

    print(
        f"Table '{definition.name}' created with {len(result.fields)} field(s) "
        f"and {len(result.relationships)} relationship(s)."
    )
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
