#!/usr/bin/env python3
# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for validating pod documents."""

import argparse
import json
import logging
import sys
from typing import List

from ..config import OUTPUT_FORMATS, ValidatorConfig
from ..exceptions import PodValidatorError, UsageError
from ..file_io.source_location import format_source
from . import validate_file
from .report import ValidationResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1


def _print_human(result: ValidationResult) -> None:
    if result.valid:
        print("YAML is valid")
        return
    print("Validation errors:")
    for violation in result.violations:
        print(f"- {violation.message}")


def _print_github_actions(result: ValidationResult) -> None:
    for violation in result.violations:
        loc = result.locate(violation)
        print(f"::error file={result.file_path},line={loc.line or 1},col={loc.column or 1}::{violation.message}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pod-validator',
        description='Validate a pod YAML document against the fixed pod rules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        metavar='path',
        help='Path to the YAML document to validate',
    )
    parser.add_argument(
        '--format',
        choices=list(OUTPUT_FORMATS),
        default=None,
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level, e.g. DEBUG or INFO (default: WARNING)',
    )
    return parser


def run(argv: List[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = _build_parser().parse_args(argv)

    config = ValidatorConfig.from_env()
    if args.format:
        config.output_format = args.format
    if args.log_level:
        config.log_level = args.log_level
    config.set_logging()

    try:
        if len(args.paths) != 1:
            raise UsageError("Usage: pod-validator <path_to_yaml>")
        result = validate_file(args.paths[0])
    except PodValidatorError as exc:
        logger.debug(f"Aborting: {type(exc).__name__}")
        print(str(exc), file=sys.stderr)
        return exc.exit_code

    for violation in result.violations:
        logger.debug(f"{violation.code}: {violation.message}{format_source(result.locate(violation))}")

    if config.output_format == 'json':
        print(json.dumps(result.to_dict(), indent=2))
    elif config.output_format == 'github-actions':
        _print_github_actions(result)
    else:
        _print_human(result)

    return EXIT_OK if result.valid else EXIT_VIOLATIONS


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    sys.exit(run(argv))


if __name__ == '__main__':
    main()
