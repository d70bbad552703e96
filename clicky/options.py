"""Output format options and command-line flag binding."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields

# Boolean format flags, in the order in which they are resolved.
FORMAT_FLAGS: tuple[str, ...] = ("json", "yaml", "csv", "markdown", "pretty", "html", "pdf")

_FLAG_HELP = {
    "json": "Output in JSON format",
    "yaml": "Output in YAML format",
    "csv": "Output in CSV format",
    "markdown": "Output in Markdown format",
    "pretty": "Output in pretty format (default)",
    "html": "Output in HTML format",
    "pdf": "Output in PDF format",
}


class FormatConflictError(ValueError):
    """Raised when more than one format flag is set."""


@dataclass
class FormatOptions:
    """Options controlling how data is formatted and where it goes."""

    format: str = ""
    no_color: bool = False
    output: str = ""
    verbose: bool = False
    dump_schema: bool = False

    # Format-specific flags; at most one may be set.
    json: bool = False
    yaml: bool = False
    csv: bool = False
    markdown: bool = False
    pretty: bool = False
    html: bool = False
    pdf: bool = False

    def selected_flags(self) -> list[str]:
        """Names of the format flags that are set, in resolution order."""
        return [name for name in FORMAT_FLAGS if getattr(self, name)]

    def resolve_format(self) -> str:
        """Let a single format flag override ``format`` and return the result.

        Raises FormatConflictError when several format flags are set.
        """
        selected = self.selected_flags()
        if len(selected) > 1:
            raise FormatConflictError(
                "multiple format flags specified; please use only one format flag"
            )
        if selected:
            self.format = selected[0]
        return self.format


def merge_options(*options: FormatOptions) -> FormatOptions:
    """Merge several option sets; later values win, flags only ever turn on.

    From each option set only the first format flag that is set is taken.
    """
    merged = FormatOptions()
    for opt in options:
        if opt.format:
            merged.format = opt.format
        if opt.no_color:
            merged.no_color = True
        if opt.output:
            merged.output = opt.output
        if opt.verbose:
            merged.verbose = True
        if opt.dump_schema:
            merged.dump_schema = True
        first_flag = next((name for name in FORMAT_FLAGS if getattr(opt, name)), None)
        if first_flag is not None:
            setattr(merged, first_flag, True)
    return merged


def add_format_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add the formatting flags to an argparse parser and return it."""
    parser.add_argument(
        "--format",
        default="pretty",
        help="Output format: pretty, json, yaml, csv, html, pdf, markdown",
    )
    parser.add_argument(
        "--output",
        default="",
        help="Output file pattern (optional, uses stdout if not specified)",
    )
    parser.add_argument(
        "--no-color", dest="no_color", action="store_true", help="Disable colored output"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument(
        "--dump-schema",
        dest="dump_schema",
        action="store_true",
        help="Dump the schema to stderr for debugging",
    )
    for name in FORMAT_FLAGS:
        parser.add_argument(f"--{name}", dest=name, action="store_true", help=_FLAG_HELP[name])
    return parser


def options_from_namespace(namespace: argparse.Namespace) -> FormatOptions:
    """Build FormatOptions from parsed arguments, ignoring missing attributes."""
    defaults = FormatOptions()
    values = {
        f.name: getattr(namespace, f.name, getattr(defaults, f.name)) for f in fields(FormatOptions)
    }
    return FormatOptions(**values)