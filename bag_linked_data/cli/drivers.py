"""``bag-drivers``: list the OGR drivers available on this system.

Exit codes:
    0  success, or ``-h``
    1  ``-e`` and ``-p`` combined
    2  unknown option or malformed usage
    3  runtime failure (driver query or export)
    4  any other error
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from bag_linked_data.cli._common import CliArgumentParser, UsageError, configure_logging
from bag_linked_data.conversion import list_driver_names
from bag_linked_data.core.config import ConversionConfig
from bag_linked_data.core.exceptions import PipelineError
from bag_linked_data.utils.sink import open_sink

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

logger = logging.getLogger("bag_linked_data.cli.drivers")

HELP = (
    "$ bag-drivers [options]\n"
    "\t-e <output-file>\t\tExport the driver names to <output-file>.\n"
    "\t-h\t\t\tDisplay this help message.\n"
    "\t-p\t\t\tPrint the driver names to standard output (default behavior).\n\n"
    "Prints or exports the GDAL drivers that are supported on the current system.\n"
)

EXIT_OK = 0
EXIT_CONFLICTING_FLAGS = 1
EXIT_USAGE = 2
EXIT_RUNTIME_ERROR = 3
EXIT_UNKNOWN_ERROR = 4


def build_parser() -> CliArgumentParser:
    parser = CliArgumentParser("bag-drivers")
    parser.add_argument("-e", dest="export_file", metavar="<output-file>")
    parser.add_argument("-h", dest="show_help", action="store_true")
    parser.add_argument("-p", dest="print_names", action="store_true")
    return parser


def print_driver_names(stream: TextIO) -> int:
    """Write one driver name per line, sorted. Returns the number written."""
    names = list_driver_names()
    for name in names:
        stream.write(f"{name}\n")
    return len(names)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except UsageError as exc:
        print(f"Unknown option. ({exc})", file=sys.stderr)
        return EXIT_USAGE

    if args.show_help:
        print(HELP)
        return EXIT_OK

    if args.export_file is not None and args.print_names:
        print("The export and print flags cannot be combined.", file=sys.stderr)
        return EXIT_CONFLICTING_FLAGS

    try:
        config = ConversionConfig.from_env()
        configure_logging(config.log_level_value)
        if args.export_file is None:
            count = print_driver_names(sys.stdout)
        else:
            with open_sink(args.export_file) as sink:
                count = print_driver_names(sink)
        logger.info("Listed %d driver(s) | export=%s", count, args.export_file or "stdout")
    except (PipelineError, OSError, RuntimeError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception:
        logger.exception("Driver listing failed")
        print("An unknown error occurred.", file=sys.stderr)
        return EXIT_UNKNOWN_ERROR
    return EXIT_OK


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
