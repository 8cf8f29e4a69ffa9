"""Command-line entry point: compile a DAL schema file.

Usage:
    dalgen -i schema.dal -f postgres -o schema.sql
    dalgen -i schema.dal -f rust --serde --sqlite > models.rs
    dalgen -i schema.dal --check

Exit status: 0 on success, 1 on a parse/read failure (nothing is written to
the output), 2 on invalid arguments.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from dalgen.config import get_config, get_settings
from dalgen.errors import InvalidFormat
from dalgen.generators import FORMAT_NAMES, RustOptions
from dalgen.utils.dsl import CompileResult, check_source, compile_source, render_diagnostics
from dalgen.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dalgen",
        description="Compile DAL schema declarations into SQL DDL or Rust types.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="DAL schema file to read",
    )
    parser.add_argument(
        "-o", "--output",
        help="File to write the generated code to (default: stdout)",
    )
    parser.add_argument(
        "-f", "--format",
        choices=FORMAT_NAMES,
        help="Output format (default: output.default_format from config.yaml)",
    )
    parser.add_argument(
        "-c", "--check",
        action="store_true",
        help="Only check the schema for syntax errors",
    )
    parser.add_argument("--serde", action="store_true", help="rust: derive serde traits")
    parser.add_argument("--juniper", action="store_true", help="rust: derive juniper GraphQL traits")
    parser.add_argument("--sqlite", action="store_true", help="rust: emit rusqlite row-mapping impls")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: DALGEN_LOG_LEVEL or ERROR)",
    )
    return parser


def _rust_options(args: argparse.Namespace) -> RustOptions:
    defaults = get_config("rust") or {}
    return RustOptions(
        serde=args.serde or bool(defaults.get("serde", False)),
        juniper=args.juniper or bool(defaults.get("juniper", False)),
        sqlite=args.sqlite or bool(defaults.get("sqlite", False)),
    )


def _report_failure(result: CompileResult, source: str) -> None:
    message = (result.error or {}).get("error", {}).get("message", "compilation failed")
    print(f"error: {message}", file=sys.stderr)
    if result.diagnostics:
        print(render_diagnostics(result.diagnostics, source, result.file_name), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.check and (args.output or args.format):
        parser.error("--check cannot be combined with --output or --format")

    settings = get_settings()
    setup_logging(
        level=args.log_level or settings.log_level,
        format_type=settings.log_format,
        log_to_file=settings.log_to_file,
        log_file=settings.log_file,
    )

    input_path = Path(args.input)
    try:
        source = input_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {input_path}: {e}", file=sys.stderr)
        return 1

    if args.check:
        result = check_source(source, file_name=str(input_path))
        if not result.success:
            _report_failure(result, source)
            return 1
        logger.info(result.get_summary())
        return 0

    try:
        fmt = args.format or (get_config("output") or {}).get("default_format", "postgres")
        options = _rust_options(args)
        result = compile_source(source, fmt, file_name=str(input_path), options=options)
    except (FileNotFoundError, yaml.YAMLError) as e:
        print(f"error: cannot load configuration: {e}", file=sys.stderr)
        return 1
    except InvalidFormat as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not result.success:
        _report_failure(result, source)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result.output)
    else:
        sys.stdout.write(result.output)

    logger.info(result.get_summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
