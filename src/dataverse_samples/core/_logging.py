# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Console logging setup shared by the command-line entry points."""

from __future__ import annotations

import logging

LOGGER_NAME = "dataverse_samples"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int = 0) -> None:
    """
    Route package logs to stderr.

    ``0`` keeps warnings only, ``1`` enables INFO, ``2`` or more enables DEBUG.
    Third-party loggers (requests, azure) stay at WARNING unless verbosity is 3+.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger(LOGGER_NAME).setLevel(level)
    if verbosity >= 3:
        logging.getLogger().setLevel(logging.DEBUG)
