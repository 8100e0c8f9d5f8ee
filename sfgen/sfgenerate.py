"""Command-line entry point: generate Swift accessors for the SF Symbols catalog."""

from __future__ import annotations

import sys
from pathlib import Path

from . import __version__
from .frontend.catalog import DEFAULT_RESOURCES, CatalogError, load_catalog
from .frontend.generate import EXTENSIONS, GenerateError, GenerateOptions, generate, select_symbols
from .frontend.localization import LocalizationFlag, LocalizationOption, transform
from .ir import ACCESS_MODIFIERS, AccessModifier

USAGE: str = """\
sfgenerate [OPTIONS] [-o OUTPUT]

Options:
  -a, --export-all, --export-all-localizations
                          Export symbols with language code or right-to-left
                          variants
  -l, --export-lang, --export-language-code
                          Export symbols with language code variants
  -r, --export-rtl, --export-right-to-left
                          Export symbols with right-to-left variants
  -s, --export-semantic-symbols
                          Export semantic names as aliases of their
                          descriptive symbols (default)
  --no-export-semantic-symbols
                          Do not export semantic aliases
  --enabled-extensions NAME
                          Companion extension to generate: SwiftUI, UIKit,
                          AppKit (repeatable; default all)
  --access-modifier MOD   public, package, internal, fileprivate, private
                          (default internal)
  --resources DIR         CoreGlyphs resource directory
  -o, --output FILE       Write output to FILE instead of stdout
  -v, --version           Show the version
  -h, --help              Show this help message
"""

LOCALIZATION_FLAGS: dict[str, LocalizationFlag] = {
    "-a": "both",
    "--export-all": "both",
    "--export-all-localizations": "both",
    "-l": "language_code",
    "--export-lang": "language_code",
    "--export-language-code": "language_code",
    "-r": "right_to_left",
    "--export-rtl": "right_to_left",
    "--export-right-to-left": "right_to_left",
}


def _require_value(args: list[str], i: int) -> str:
    if i + 1 >= len(args):
        print("error: " + args[i] + " requires an argument", file=sys.stderr)
        sys.exit(2)
    return args[i + 1]


def parse_args(argv: list[str] | None = None) -> tuple[GenerateOptions, Path, str | None]:
    """Parse command-line arguments. Returns (options, resources, output_file)."""
    args = sys.argv[1:] if argv is None else argv
    localization = LocalizationOption.NONE
    export_semantic_symbols = True
    extensions: list[str] = []
    access_modifier = "internal"
    resources = DEFAULT_RESOURCES
    output_file: str | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--version" or arg == "-v":
            print(__version__)
            sys.exit(0)
        elif arg in LOCALIZATION_FLAGS:
            localization |= transform(LOCALIZATION_FLAGS[arg])
            i += 1
        elif arg == "-s" or arg == "--export-semantic-symbols":
            export_semantic_symbols = True
            i += 1
        elif arg == "--no-export-semantic-symbols":
            export_semantic_symbols = False
            i += 1
        elif arg == "--enabled-extensions":
            name = _require_value(args, i)
            if name not in EXTENSIONS:
                print("error: unknown extension '" + name + "'", file=sys.stderr)
                sys.exit(2)
            extensions.append(name)
            i += 2
        elif arg == "--access-modifier":
            access_modifier = _require_value(args, i)
            if access_modifier not in ACCESS_MODIFIERS:
                print("error: unknown access modifier '" + access_modifier + "'", file=sys.stderr)
                sys.exit(2)
            i += 2
        elif arg == "--resources":
            resources = Path(_require_value(args, i))
            i += 2
        elif arg == "-o" or arg == "--output":
            output_file = _require_value(args, i)
            i += 2
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            print("error: unexpected argument '" + arg + "'", file=sys.stderr)
            sys.exit(2)
    modifier: AccessModifier = access_modifier  # type: ignore[assignment]
    options = GenerateOptions(
        access_modifier=modifier,
        enabled_extensions=tuple(extensions) if extensions else EXTENSIONS,
        export_semantic_symbols=export_semantic_symbols,
        localization=localization,
    )
    return (options, resources, output_file)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    options, resources, output_file = parse_args(argv)
    try:
        catalog = load_catalog(resources)
        if not select_symbols(catalog, options):
            print("warning: no symbols selected for export", file=sys.stderr)
        output = generate(catalog, options)
    except (CatalogError, GenerateError) as e:
        print("error: " + str(e), file=sys.stderr)
        return 1
    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
