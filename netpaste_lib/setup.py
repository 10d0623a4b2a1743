"""Server setup helper for netpaste.

Provides CLI parsing for the entry point and the startup step that turns
argv into a loaded Config. The module only contains CLI and I/O logic;
composing servers is left to `netpaste_lib.main`.
"""
from __future__ import annotations
import argparse
import sys
from typing import Iterable, Optional, Tuple

from netpaste_lib.config import DEFAULT_CONFIG_PATH, Config, ConfigError, config_template, load_config


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="netpaste", add_help=False)
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to the YAML server configuration")
    p.add_argument("--print-template", action="store_true", help="Print the default YAML template to stdout and exit")
    p.add_argument("--help", action="store_true", help="Show this help")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """Parse setup-related args from argv.

    Returns a Namespace with attributes: config, print_template, help
    """
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    args, _ = parser.parse_known_args(argv)
    return args


def setup(argv: Optional[Iterable[str]]) -> Tuple[int, Optional[Config]]:
    """High-level helper used by the application entrypoint.

    - `--help` and `--print-template` write to stdout and return (0, None).
    - Otherwise the configuration is loaded and returned as (0, config).
    - A broken configuration is reported on stderr and returns (1, None).
    """
    args = parse_args(list(argv) if argv else [])

    if args.help:
        get_parser().print_help()
        return 0, None

    if args.print_template:
        sys.stdout.write(config_template())
        return 0, None

    try:
        return 0, load_config(args.config)
    except ConfigError as e:
        print(f"Invalid server configuration in {args.config}: {e}", file=sys.stderr)
        return 1, None
