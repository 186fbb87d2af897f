"""``bag-gml2wkt``: convert BAG buildings in RD into GeoSPARQL Linked Data.

Exit codes:
    0  success, or ``-h``
    1  unknown option
    2  missing input and/or output file name
    3  any failure during conversion
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from bag_linked_data.cli._common import CliArgumentParser, UsageError, configure_logging
from bag_linked_data.conversion import convert_file
from bag_linked_data.core.config import ConversionConfig
from bag_linked_data.core.exceptions import PipelineError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("bag_linked_data.cli.gml2wkt")

HELP = (
    "$ bag-gml2wkt [options] <input-file> <output-file>\n"
    "\t-h\t\t\tDisplay this help message.\n\n"
    "Converts the GML <input-file> with BAG buildings in RD into the <output-file> "
    "containing Linked Data, using both GML and WKT, and using both RD and WGS84.\n"
    "Use '-' as <output-file> to write to standard output.\n"
)

EXIT_OK = 0
EXIT_UNKNOWN_OPTION = 1
EXIT_MISSING_ARGUMENTS = 2
EXIT_CONVERSION_FAILED = 3


def build_parser() -> CliArgumentParser:
    parser = CliArgumentParser("bag-gml2wkt")
    parser.add_argument("-h", dest="show_help", action="store_true")
    parser.add_argument("input_file", nargs="?")
    parser.add_argument("output_file", nargs="?")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args, extras = build_parser().parse_known_args(argv)
    except UsageError as exc:
        print(f"Unknown option. ({exc})", file=sys.stderr)
        return EXIT_UNKNOWN_OPTION

    unknown_options = [arg for arg in extras if arg.startswith("-") and arg != "-"]
    if unknown_options:
        print(f"Unknown option: {' '.join(unknown_options)}", file=sys.stderr)
        return EXIT_UNKNOWN_OPTION

    if args.show_help:
        print(HELP)
        return EXIT_OK

    if not args.input_file or not args.output_file:
        print("Missing input and/or output file name.", file=sys.stderr)
        return EXIT_MISSING_ARGUMENTS

    try:
        config = ConversionConfig.from_env()
        configure_logging(config.log_level_value)
        if extras:
            logger.warning("Ignoring extra arguments: %s", " ".join(extras))
        convert_file(args.input_file, args.output_file, config)
    except PipelineError as exc:
        logger.error("Conversion failed | %s", exc.to_error_dict())
        print(exc.message, file=sys.stderr)
        return EXIT_CONVERSION_FAILED
    except Exception:
        logger.exception("Conversion failed with an unexpected error")
        print("An unknown error occurred.", file=sys.stderr)
        return EXIT_CONVERSION_FAILED
    return EXIT_OK


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
