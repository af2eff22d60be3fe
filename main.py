#!/usr/bin/env python3
"""
release-parser: extract artist, album, year and group from release titles.

Titles are parsed offline with an ordered cascade of heuristic patterns;
results are printed as JSON, one object (or null) per input.
"""

import argparse
import json
import sys
from pathlib import Path

from parsing.engine import TitleParser
from parsing.patterns import build_tables
from pipeline.orchestrator import BatchParser
from utils.config_loader import get_config_template, load_config
from utils.exceptions import FilesystemError, ReleaseParserError
from utils.logging_config import configure_library_logging, setup_logging


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Parse music release titles into structured metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "Artist Name - Album Title (2016)"
  %(prog)s --mode track "01 - Will.I.Am - Song"
  %(prog)s --mode group "Artist-Album-WEB-2017-FURY"
  %(prog)s --path /music/Artist/Album
        """
    )

    parser.add_argument(
        "titles",
        nargs="*",
        help="Release titles to parse"
    )

    parser.add_argument(
        "--mode",
        choices=["album", "track", "artist", "group"],
        default="album",
        help="What to extract from each title (default: album)"
    )

    parser.add_argument(
        "--path",
        type=Path,
        action="append",
        default=[],
        help="Media file or directory to parse (repeatable)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: ./config.yaml)"
    )

    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print a configuration template and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def _to_json(result):
    if result is None or isinstance(result, str):
        return result
    return result.model_dump(mode="json")


def main(argv=None) -> int:
    """Main entry point."""
    try:
        args = parse_arguments(argv)

        if args.print_config:
            print(get_config_template())
            return 0

        config_path = args.config or Path.cwd() / "config.yaml"
        config = load_config(config_path)

        log_level = "DEBUG" if args.verbose else config['logging']['level']
        log_file = config['logging'].get('file')
        setup_logging(
            log_level,
            Path(log_file).expanduser() if log_file else None,
            log_format=config['logging']['format']
        )
        configure_library_logging()

        parser = TitleParser(tables=build_tables(config))
        batch = BatchParser(config, parser)

        output = {}

        if args.titles:
            if args.mode == "track":
                results = batch.parse_music_titles(args.titles)
            elif args.mode == "group":
                results = batch.parse_release_groups(args.titles)
            elif args.mode == "artist":
                results = [parser.parse_artist_name(title) for title in args.titles]
            else:
                results = batch.parse_album_titles(args.titles)
            output.update(zip(args.titles, (_to_json(r) for r in results)))

        for path in args.path:
            if path.is_dir():
                parsed = batch.parse_directory(path)
            elif path.is_file():
                parsed = dict(zip([path], batch.parse_paths([path])))
            else:
                raise FilesystemError(str(path), "read", "Path does not exist")
            output.update((str(p), _to_json(r)) for p, r in parsed.items())

        if not output:
            print("Nothing to parse. Pass titles or --path.", file=sys.stderr)
            return 1

        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except ReleaseParserError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        try:
            error_msg = str(e)
        except (UnicodeDecodeError, UnicodeEncodeError):
            error_msg = repr(e).encode('utf-8', errors='replace').decode('utf-8')

        print(f"Unexpected error: {error_msg}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
