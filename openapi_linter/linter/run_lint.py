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

"""CLI entry point for linting OpenAPI documents."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List

from ..config import linter_config
from ..file_io.source_location import SourceLocation, format_source
from . import lint_files, LintResult

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 60


def find_spec_files(paths: List[str], extensions=None) -> List[Path]:
    """Expand files and directories into the list of documents to lint.

    Explicit files are kept whatever their extension; directories are
    searched recursively for files with one of *extensions*.
    """
    extensions = tuple(extensions or linter_config.file_extensions)
    spec_files = []

    for path_str in paths:
        path = Path(path_str)

        if path.is_dir():
            for candidate in sorted(path.rglob('*')):
                if candidate.is_file() and candidate.name.lower().endswith(extensions):
                    spec_files.append(candidate)
        else:
            # Missing files are reported as load failures by the linter
            spec_files.append(path)

    seen = set()
    unique = []
    for path in spec_files:
        if path not in seen:
            seen.add(path)
            unique.append(path)
    return unique


def _located(finding, file_path) -> str:
    if finding.line is None:
        return finding.message
    src = SourceLocation(file_path=file_path, yaml_path=finding.yaml_path, line=finding.line, column=finding.column)
    return f"{finding.message}{format_source(src)}"


def print_human(result: LintResult) -> None:
    print(f"Validating OpenAPI spec: {result.file_path}")
    print(SEPARATOR)

    if result.errors:
        print(f"\nFound {result.error_count} error(s):")
        for error in result.errors:
            print(f"  • {_located(error, result.file_path)}")

    if result.warnings:
        print(f"\nFound {result.warning_count} warning(s):")
        for warning in result.warnings:
            print(f"  • {_located(warning, result.file_path)}")

    if not result.errors and not result.warnings:
        print("\nOpenAPI spec is valid!")

    print("\n" + SEPARATOR)
    print(f"Summary: {result.error_count} errors, {result.warning_count} warnings\n")


def print_github_actions(result: LintResult) -> None:
    for error in result.errors:
        print(f"::error file={result.file_path},line={error.line or 1}::{error.message}")
    for warning in result.warnings:
        print(f"::warning file={result.file_path},line={warning.line or 1}::{warning.message}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='openapi-lint',
        description='Check OpenAPI documents for dangling references, discriminator, '
                    'required-property and unused-schema problems',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        help='Spec files or directories to lint',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Treat warnings as errors',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help=f'Diagnostic log level (default: {linter_config.log_level})',
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    """Main entry point for the linter CLI.

    Returns the process exit status: 0 when every file passed, 1 otherwise.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    config = linter_config
    if args.log_level:
        config = replace(config, log_level=args.log_level)
    config.set_logging()

    if not args.paths:
        print("Usage: openapi-lint <spec-file> [<spec-file>...]", file=sys.stderr)
        print("Options:", file=sys.stderr)
        print("  --strict    Treat warnings as errors", file=sys.stderr)
        return 1

    spec_files = find_spec_files(args.paths, config.file_extensions)
    if not spec_files:
        print("No OpenAPI spec files found.", file=sys.stderr)
        return 1

    results = lint_files(spec_files, config=config)
    all_valid = all(r.passed_strict(args.strict) for r in results)
    logger.info("Linted %d file(s), overall %s", len(results), "passed" if all_valid else "failed")

    if args.format == 'json':
        output = {
            'files': len(results),
            'errors': sum(r.error_count for r in results),
            'warnings': sum(r.warning_count for r in results),
            'strict': args.strict,
            'passed': all_valid,
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif args.format == 'github-actions':
        for result in results:
            print_github_actions(result)
    else:  # human-readable
        for result in results:
            print_human(result)

    return 0 if all_valid else 1


def run() -> None:
    """Console-script wrapper that exits with :func:`main`'s status."""
    sys.exit(main())


if __name__ == '__main__':
    run()
