"""
Command Line Interface for Theme Toolkit

Provides entry points for:
- theme-inspect: Parse a theme archive and report what it contains
- theme-convert: Convert any supported theme archive to the canonical format
"""

import sys
import json
import logging
import argparse
from typing import Optional

from .config import load_config, DEFAULT_CONFIG, ImportConfig
from .export import export_theme_file
from .models import ParseResult
from .upload import parse_theme_file


def _load_config(args: argparse.Namespace) -> ImportConfig:
    if getattr(args, 'config', None):
        return load_config(args.config)
    return DEFAULT_CONFIG


def _print_error(result: ParseResult) -> None:
    error = result.error
    print(f"Error ({error.type}): {error.message}")
    if error.path:
        print(f"  Path: {error.path}")
    for message in error.errors or []:
        print(f"  - {message}")


def inspect_command(args: argparse.Namespace) -> int:
    """Execute inspect command."""
    try:
        result = parse_theme_file(args.input, _load_config(args))
    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    if args.json:
        if result.ok:
            print(json.dumps({'ok': True, 'theme': result.theme.summary()}, indent=2))
        else:
            print(json.dumps({'ok': False, 'error': result.error.model_dump(exclude_none=True)}, indent=2))
        return 0 if result.ok else 1

    print("=" * 60)
    print("Theme Inspection")
    print("=" * 60)

    if not result.ok:
        _print_error(result)
        return 1

    theme = result.theme
    print(f"Name: {theme.name}")
    if theme.author:
        print(f"Author: {theme.author}")
    if theme.description:
        print(f"Description: {theme.description}")
    print(f"Type: {theme.type}")
    print(f"CSS: {len(theme.css)} characters")
    print(f"Template: {'yes' if theme.template else 'no'}")

    presets = theme.presets or []
    print(f"Presets: {len(presets)}")
    for preset in presets:
        print(f"  - {preset.name} ({preset.appearance}): "
              f"bg {preset.colors.background}, fg {preset.colors.foreground}, "
              f"accent {preset.colors.accent}")

    print(f"Fonts: {len(theme.assets)}")
    for asset in theme.assets:
        print(f"  - {asset.name} [{asset.mime_type}, {asset.size} bytes]")

    if theme.thumbnail:
        print(f"Thumbnail: {theme.thumbnail.mime_type}, {theme.thumbnail.size} bytes")

    return 0


def convert_command(args: argparse.Namespace) -> int:
    """Execute convert command."""
    print("=" * 60)
    print("Theme Conversion")
    print("=" * 60)

    try:
        result = parse_theme_file(args.input, _load_config(args))
        if not result.ok:
            _print_error(result)
            return 1

        output_path = export_theme_file(result.theme, args.output)
        print(f"Theme: {result.theme.name} ({result.theme.type})")
        print(f"Written: {output_path}")
        return 0

    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Theme Toolkit - Import and convert theme archives',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s inspect theme.zip
  %(prog)s inspect Writer.zip --json
  %(prog)s convert presenter-theme.zip canonical-theme.zip --config limits.yaml
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Inspect command
    inspect_parser = subparsers.add_parser('inspect', help='Parse a theme archive and report its contents')
    inspect_parser.add_argument('input', help='Theme archive (.zip)')
    inspect_parser.add_argument('--config', '-c', help='Import configuration file (YAML/JSON)')
    inspect_parser.add_argument('--json', action='store_true', help='Output result as JSON')
    inspect_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                                help='Show detailed output')

    # Convert command
    convert_parser = subparsers.add_parser('convert', help='Convert a theme archive to the canonical format')
    convert_parser.add_argument('input', help='Theme archive (.zip)')
    convert_parser.add_argument('output', help='Output zip file or directory')
    convert_parser.add_argument('--config', '-c', help='Import configuration file (YAML/JSON)')
    convert_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                                help='Show detailed output')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if args.command == 'inspect':
        return inspect_command(args)
    elif args.command == 'convert':
        return convert_command(args)
    else:
        parser.print_help()
        return 1


# Entry points for direct script execution
def theme_inspect():
    """Entry point for theme-inspect command."""
    sys.argv = ['theme-inspect', 'inspect'] + sys.argv[1:]
    return main()


def theme_convert():
    """Entry point for theme-convert command."""
    sys.argv = ['theme-convert', 'convert'] + sys.argv[1:]
    return main()


if __name__ == '__main__':
    sys.exit(main())
