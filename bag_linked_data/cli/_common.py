"""Argument parsing and logging setup shared by the command-line tools."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class CliArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that leaves exit codes to the caller.

    The tools document their own exit codes for bad usage, so parse errors
    are raised as ``UsageError`` rather than ending the process with
    argparse's fixed status 2. Help is handled by the tools themselves.
    """

    def __init__(self, prog: str) -> None:
        super().__init__(prog=prog, add_help=False, allow_abbrev=False)

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send log records to standard error; standard output carries data only."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
