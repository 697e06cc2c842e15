"""
Command-line interface for winch drum calculations.
"""

import argparse
import logging
import sys
from pathlib import Path

from ..io.loaders import load_config_json
from ..calculator.core import compute
from ..calculator.validation import validate_model
from ..calculator.output import to_json, to_markdown, to_summary

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Compute drum spooling and drivetrain performance for a winch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Text summary of a configuration
  winchdrum-calc drum.json

  # Markdown report with the per-layer tables
  winchdrum-calc drum.json --format markdown --output report.md

  # Full JSON model, hydraulic drivetrain only
  winchdrum-calc drum.json --format json --no-electric --hydraulic

  # Fail (exit 1) when validation reports errors, e.g. drum capacity exceeded
  winchdrum-calc drum.json --strict
        """
    )

    parser.add_argument(
        'config_file',
        type=str,
        help='JSON configuration file'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['summary', 'markdown', 'json'],
        default='summary',
        help='Output format (default: summary)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Write output to this file instead of stdout'
    )

    parser.add_argument(
        '--electric',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Enable/disable the electric drivetrain (default: from config)'
    )

    parser.add_argument(
        '--hydraulic',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Enable/disable the hydraulic drivetrain (default: from config)'
    )

    parser.add_argument(
        '--no-rows',
        action='store_true',
        help='Omit per-wrap rows from JSON output'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit with status 1 if validation reports errors'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    try:
        config = load_config_json(args.config_file)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    model = compute(config, electric_enabled=args.electric, hydraulic_enabled=args.hydraulic)
    validation = validate_model(model)

    if args.format == 'json':
        text = to_json(model, validation, include_rows=not args.no_rows)
    elif args.format == 'markdown':
        text = to_markdown(model, validation)
    else:
        text = to_summary(model, validation)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(text + "\n")
        logger.info(f"Wrote {args.format} output to {output_path}")
    else:
        print(text)

    for msg in validation.warnings:
        print(f"Warning [{msg.code}]: {msg.message}", file=sys.stderr)

    if args.strict and not validation.valid:
        for msg in validation.errors:
            print(f"Error [{msg.code}]: {msg.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
