"""
Command-line interface for converting AsciiDoc files to located text AST trees.
"""

import argparse
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import List

from txtast.adoc_txt_ast_converter import AdocTxtASTConverter
from txtast.converter_config import AdocConverterConfig
from txtast.txt_ast_errors import AdocConverterConfigError, TxtASTConversionError, TxtASTValidationError
from txtast.txt_ast_printer import TxtASTPrinter
from txtast.txt_ast_serializer import to_json
from txtast.txt_ast_validator import TxtASTValidator


def setup_logging(verbose: bool, log_file: str | None) -> None:
    """
    Configure logging for the command-line tool.

    Args:
        verbose: Log debug messages rather than only warnings and errors
        log_file: Optional file to log to instead of stderr
    """
    handler: logging.Handler
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,  # 1MB
            backupCount=4,
            encoding='utf-8'
        )

    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler],
        force=True
    )


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Convert AsciiDoc to a text AST with exact source locations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s README.adoc                      # Print the AST as JSON
  %(prog)s README.adoc --format tree        # Print an indented tree
  %(prog)s README.adoc -c txtast.yaml       # Use a configuration file
        """
    )

    parser.add_argument('file', help='AsciiDoc file to convert')
    parser.add_argument('--config', '-c', help='Configuration file path')
    parser.add_argument('--format', '-f', choices=['json', 'tree'], default='json', help='Output format')
    parser.add_argument('--no-validate', action='store_true', help='Skip structural validation of the result')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose logging')
    parser.add_argument('--log-file', help='Write log messages to this file')

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    if not os.path.exists(args.file):
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1

    try:
        config = AdocConverterConfig.load_from_file(args.config) if args.config else AdocConverterConfig.create_default()

    except (FileNotFoundError, AdocConverterConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with open(args.file, 'r', encoding='utf-8') as f:
        text = f.read()

    try:
        tree = AdocTxtASTConverter(config).convert(text)
        if not args.no_validate:
            TxtASTValidator(text).validate(tree)

    except (TxtASTConversionError, TxtASTValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == 'tree':
        TxtASTPrinter().visit(tree)

    else:
        print(to_json(tree))

    return 0
