#!/usr/bin/env python3
"""
StructWrangler

This script reads a Go source file, finds one struct declaration and turns it into an
equivalent protobuf (proto3) message definition. Structs referenced by the target are
expanded into nested messages, and fields whose names share leading PascalCase words can be
folded into their own sub-messages.

Usage:
    python struct_wrangler.py --file <input.go> --struct <StructName> [--output <file.proto>] [--group <n>] [--package <name>] [--verbose]

Arguments:
    --file, -f      : Path to the Go source file containing the struct declaration
    --struct, -s    : Name of the struct to convert
    --output, -o    : Optional file the generated definition is written to
                      (the definition is always printed to stdout)
    --group, -g     : Grouping threshold. Fields whose names have at least this many
                      PascalCase words are grouped by their first <n> words; groups with a
                      single field are dissolved. 0 is invalid. Default: grouping disabled
    --package, -p   : Package name written in the file preamble (default: my_package)
    --verbose, -v   : Print debug information
    --help, -h      : Show this help message

Environment overrides:
    SW_INPUT_FILE, SW_STRUCT_NAME, SW_OUTPUT_FILE, SW_GROUP_THRESHOLD, SW_PACKAGE, SW_VERBOSE

Example:
    python struct_wrangler.py -f models.go -s Customer
    python struct_wrangler.py -f models.go -s Customer -g 1 -o customer.proto
"""

import argparse
import os
import sys
from typing import Optional

from field_grouping import GROUPING_DISABLED, validate_grouping_threshold
from go_file_loader import load_go_file, load_go_source
from model_debug import format_declaration, format_proto_tree
from proto_generator import DEFAULT_PACKAGE, generate_proto_file_content, generate_proto_message, write_proto_file
from proto_model_builder import ProtoModelBuilder
from struct_errors import InvalidConfigurationError, StructConversionError
from struct_model import GoSourceFile
from struct_resolver import find_struct_declaration


def _convert(source_file: GoSourceFile, struct_name: str, threshold: int) -> str:
    declaration = find_struct_declaration(source_file, struct_name)
    message = ProtoModelBuilder(threshold).build(declaration)
    return generate_proto_message(message)


def generate_protobuf_definition(file_path: str, struct_name: str, threshold: int = GROUPING_DISABLED) -> str:
    """
    Read a Go file and return the message definition for struct_name (without preamble).
    The threshold is checked before the file is touched.
    """
    validate_grouping_threshold(threshold)
    return _convert(load_go_file(file_path), struct_name, threshold)


def convert_struct_source(text: str, struct_name: str, threshold: int = GROUPING_DISABLED) -> str:
    """Same as generate_protobuf_definition, for Go source already in memory."""
    validate_grouping_threshold(threshold)
    return _convert(load_go_source(text), struct_name, threshold)


class StructToProtoConverter:
    """
    Handles the conversion of one struct from a Go source file into a protobuf definition.
    Errors are collected in `errors` instead of being raised.
    """

    def __init__(self, input_file: str, struct_name: str, threshold: int = GROUPING_DISABLED,
                 package_name: str = DEFAULT_PACKAGE, verbose: bool = False):
        """
        Initialize the converter.

        Args:
            input_file: Path to the Go source file
            struct_name: Name of the struct to convert
            threshold: Grouping threshold (GROUPING_DISABLED turns grouping off)
            package_name: Package written in the file preamble
            verbose: Whether to print debug information (default: False)
        """
        self.input_file = input_file
        self.struct_name = struct_name
        self.threshold = threshold
        self.package_name = package_name
        self.verbose = verbose
        self.source_file: Optional[GoSourceFile] = None
        self.errors = []
        self.warnings = []

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    def log_error(self, error: str) -> None:
        self.errors.append(error)
        if self.verbose:
            print(f"[ERROR] {error}")

    def log_warning(self, warning: str) -> None:
        self.warnings.append(warning)
        if self.verbose:
            print(f"[WARNING] {warning}")

    def parse_input_file(self) -> bool:
        """
        Validate the configuration, then parse the input file.

        Returns:
            bool: True if parsing was successful, False otherwise
        """
        try:
            validate_grouping_threshold(self.threshold)
        except InvalidConfigurationError as e:
            self.log_error(str(e))
            return False

        self.debug_print(f"Parsing {self.input_file}")
        try:
            self.source_file = load_go_file(self.input_file)
        except OSError as e:
            self.log_error(f"Cannot read input file '{self.input_file}': {e}")
            return False
        except StructConversionError as e:
            self.log_error(str(e))
            return False

        self.debug_print(f"Found declarations: {[d.name for d in self.source_file.declarations]}")
        return True

    def generate_proto_definition(self) -> Optional[str]:
        """
        Build the message definition for the configured struct.

        Returns:
            The message text, or None if the struct could not be converted
        """
        if self.source_file is None:
            self.log_error("No Go source available. Parse input file first.")
            return None

        try:
            declaration = find_struct_declaration(self.source_file, self.struct_name)
            self.debug_print(f"Located declaration:\n{format_declaration(declaration)}")
            builder = ProtoModelBuilder(self.threshold, self.verbose)
            message = builder.build(declaration)
        except StructConversionError as e:
            self.log_error(str(e))
            return None

        for opaque in builder.opaque_types:
            self.log_warning(f"Type '{opaque}' has no declaration in scope; passed through unchanged")
        self.debug_print(f"Message tree:\n{format_proto_tree(message)}")
        return generate_proto_message(message)

    def generate_proto_file(self) -> Optional[str]:
        """
        Returns:
            The full .proto content including the preamble, or None on failure
        """
        message_text = self.generate_proto_definition()
        if message_text is None:
            return None
        return generate_proto_file_content(message_text, self.package_name)

    def save_output(self, output_file: str, content: str) -> bool:
        try:
            write_proto_file(output_file, content)
        except OSError as e:
            self.log_error(f"Failed to save protobuf to file: {e}")
            return False
        return True


def _parse_threshold(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid grouping threshold: '{value}'")


def parse_arguments(argv=None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Convert a Go struct declaration into a protobuf message definition",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument('--file', '-f', required='SW_INPUT_FILE' not in os.environ,
                        help='Path to the Go source file containing the struct')
    parser.add_argument('--struct', '-s', dest='struct_name', required='SW_STRUCT_NAME' not in os.environ,
                        help='Name of the struct to convert')
    parser.add_argument('--output', '-o', help='Output file (optional)')
    parser.add_argument('--group', '-g', type=_parse_threshold, default=GROUPING_DISABLED,
                        help='Groups threshold to parse PascalCase names into specific groups.\n'
                             'Fields are grouped into separate messages when their names have `g` or more words.')
    parser.add_argument('--package', '-p', default=DEFAULT_PACKAGE,
                        help='Package name written to the proto preamble (default: my_package)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')

    return parser.parse_args(argv)


def main(argv=None):
    """
    Main entry point of the script.
    """
    args = parse_arguments(argv)

    # Override with environment variables if set
    input_file = os.environ.get('SW_INPUT_FILE', args.file)
    struct_name = os.environ.get('SW_STRUCT_NAME', args.struct_name)
    output_file = os.environ.get('SW_OUTPUT_FILE', args.output)
    package_name = os.environ.get('SW_PACKAGE', args.package)
    verbose = args.verbose or os.environ.get('SW_VERBOSE', '').lower() in ('1', 'true', 'yes')

    threshold = args.group
    if 'SW_GROUP_THRESHOLD' in os.environ:
        try:
            threshold = int(os.environ['SW_GROUP_THRESHOLD'])
        except ValueError:
            print(f"Error: invalid SW_GROUP_THRESHOLD '{os.environ['SW_GROUP_THRESHOLD']}'", file=sys.stderr)
            sys.exit(1)

    converter = StructToProtoConverter(input_file, struct_name, threshold, package_name, verbose)

    content = None
    if converter.parse_input_file():
        content = converter.generate_proto_file()

    if content is None:
        for error in converter.errors:
            print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)

    print(content)
    if output_file:
        if not converter.save_output(output_file, content):
            print(f"Error: {converter.errors[-1]}", file=sys.stderr)
            sys.exit(1)
        print(f"Protobuf definition generated and saved to {output_file}")


if __name__ == '__main__':
    main()
