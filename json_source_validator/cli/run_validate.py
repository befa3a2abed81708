#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
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

"""CLI entry point for validating JSON files against a JSON Schema file."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Tuple

from ..config import validator_config
from ..exceptions import SchemaLoadError
from ..models.json_schema_loader import load_schema
from ..parsing.json_parser import ParseOptions
from ..report.summary import create_error_summary
from ..utils.source_location import SourceLocation, format_source
from ..validation.issues import ValidationResult
from ..validation.validator import validate_json_file

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SCHEMA_ERROR = 2


def find_json_files(paths: List[str]) -> List[Path]:
    """Find JSON files in the given paths; directories are searched recursively."""
    json_files = []

    for path_str in paths:
        path = Path(path_str)

        if path.is_file():
            json_files.append(path)
        elif path.is_dir():
            json_files.extend(p for p in path.rglob('*.json') if p.is_file())
        elif not path.exists():
            # Reported as a file error by the validator.
            json_files.append(path)
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(json_files))


def _print_human(results: List[Tuple[Path, ValidationResult]], show_summary: bool) -> None:
    for file_path, result in results:
        if result.valid:
            continue
        print(f"\n{file_path}:")
        for issue in result.errors:
            # Position goes in the prefix, so the suffix carries only the pointer.
            line_info = f":{issue.line}:{issue.column}" if issue.line and issue.column else ""
            loc = SourceLocation(json_pointer=issue.json_pointer)
            print(f"  ERROR{line_info}: {issue.message}{format_source(loc)}")
            if issue.suggestion:
                print(f"    hint: {issue.suggestion}")
        if show_summary:
            print(create_error_summary(result.errors))


def _print_json(results: List[Tuple[Path, ValidationResult]]) -> None:
    output = {
        'files': len(results),
        'invalid': sum(1 for _, r in results if not r.valid),
        'errors': sum(len(r.errors) for _, r in results),
        'results': [
            {
                'file': str(file_path),
                'valid': result.valid,
                'errors': [issue.to_dict() for issue in result.errors],
            }
            for file_path, result in results
        ],
    }
    print(json.dumps(output, indent=2))


def _escape_annotation_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_annotation_property(value: str) -> str:
    return _escape_annotation_data(value).replace(":", "%3A").replace(",", "%2C")


def _print_github_actions(results: List[Tuple[Path, ValidationResult]]) -> None:
    for file_path, result in results:
        for issue in result.errors:
            line = issue.line or 1
            column = issue.column or 1
            file_prop = _escape_annotation_property(str(file_path))
            message = _escape_annotation_data(issue.message)
            print(f"::error file={file_prop},line={line},col={column}::{message}")


def main(argv: List[str] = None) -> None:
    """Main entry point for the validator CLI."""
    parser = argparse.ArgumentParser(
        description='Validate JSON files against a JSON Schema and report source locations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('schema', help='JSON Schema file (.json, .yaml or .yml)')
    parser.add_argument('paths', nargs='+', help='JSON files or directories to validate')
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument('--summary', action='store_true', help='Print a grouped summary per invalid file')
    parser.add_argument(
        '--allow-trailing-comma',
        action='store_true',
        default=validator_config.allow_trailing_comma,
        help='Do not report trailing commas',
    )
    parser.add_argument(
        '--disallow-comments',
        action='store_true',
        default=validator_config.disallow_comments,
        help='Report comments as syntax errors',
    )
    parser.add_argument('--encoding', default=validator_config.encoding, help='Encoding of the JSON files')

    args = parser.parse_args(argv)
    validator_config.set_logging()

    try:
        schema = load_schema(args.schema)
    except SchemaLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_SCHEMA_ERROR)

    json_files = find_json_files(args.paths)
    if not json_files:
        print("No JSON files found.", file=sys.stderr)
        sys.exit(EXIT_INVALID)

    options = ParseOptions(
        disallow_comments=args.disallow_comments,
        allow_trailing_comma=args.allow_trailing_comma,
    )
    results = [
        (file_path, validate_json_file(file_path, schema, encoding=args.encoding, parse_options=options))
        for file_path in json_files
    ]

    if args.format == 'json':
        _print_json(results)
    elif args.format == 'github-actions':
        _print_github_actions(results)
    else:  # human-readable
        _print_human(results, args.summary)

    if any(not result.valid for _, result in results):
        sys.exit(EXIT_INVALID)
    if args.format == 'human':
        print(f"Validated {len(results)} file(s) with no errors.")
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
