"""CLI entry point for the DICOM data dictionary generator."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from pydantic import ValidationError

from dicom_dict_gen.api.pipeline import DictionaryPipeline
from dicom_dict_gen.config import get_app_config
from dicom_dict_gen.exceptions import ArgumentError, DictGenError

logger = logging.getLogger(__name__)

USAGE = """\
usage: dicom-dict-gen input_dir output_file [header_file]
  input_dir: directory with xml files from DICOM standard
  output_file: output file name
  header_file: file with custom header for output_file"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad arguments."""

    def error(self, message: str) -> None:
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="dicom-dict-gen",
        description="Generate a DICOM data dictionary from the standard's DocBook XML."
    )
    parser.add_argument("input_dir", help="directory with xml files from DICOM standard")
    parser.add_argument("output_file", help="output file name")
    parser.add_argument("header_file", nargs="?", default=None,
                        help="file with custom header for output_file")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except ArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE)
        return 1

    try:
        config = get_app_config()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, args.log_level or config.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    start = time.monotonic()
    print("Start")

    try:
        DictionaryPipeline(config=config).execute(args.input_dir, args.output_file, args.header_file)
    except (DictGenError, OSError) as e:
        logger.debug("Generation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Finish for {int((time.monotonic() - start) * 1000)} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
