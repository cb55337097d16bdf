"""CLI entrypoint for the bindata generator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, BindataConfig, load_config
from .convert import translate
from .discovery import InputConfig
from .errors import BindataError
from .logging import configure_logging


def _parse_int(value: str) -> int:
    try:
        return int(value, 8) if value.startswith("0") and value.isdigit() else int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bindata",
        description="Embed files into Go source that reproduces their bytes at runtime.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a DEBUG-level log to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to a {CONFIG_FILENAME} file (defaults to ./{CONFIG_FILENAME} when present).",
    )
    parser.add_argument("--pkg", dest="package", default=None, help="Go package name of the output.")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output file or directory.")
    parser.add_argument("--prefix", default=None, help="Path prefix stripped from asset names.")
    parser.add_argument(
        "--no-compress",
        action="store_true",
        default=None,
        help="Embed raw bytes instead of gzip streams.",
    )
    parser.add_argument(
        "--no-memcopy",
        action="store_true",
        default=None,
        help="Embed string literals read through a zero-copy view.",
    )
    parser.add_argument("--tags", default=None, help="Build constraint written as //go:build.")
    parser.add_argument(
        "--ignore",
        action="append",
        default=None,
        metavar="REGEX",
        help="Skip paths matching this regular expression (repeatable).",
    )
    parser.add_argument("--mode", type=_parse_int, default=None, help="Override every asset's mode bits.")
    parser.add_argument(
        "--modtime", type=_parse_int, default=None, help="Override every asset's modification time."
    )
    registry = parser.add_mutually_exclusive_group()
    registry.add_argument(
        "--registry",
        default=None,
        metavar="IMPORT_PATH",
        help="Package whose Asset/AssetDir/AssetNames variables Register() assigns.",
    )
    registry.add_argument(
        "--no-registry",
        action="store_true",
        default=False,
        help="Do not generate a Register() function.",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="Files or directories to embed; append /... to walk a directory recursively.",
    )
    return parser


def build_config(args: argparse.Namespace) -> BindataConfig:
    """Merge the optional config file with command-line overrides."""
    if args.config is not None:
        config = load_config(args.config)
    else:
        config = load_config(Path.cwd())

    if args.package:
        config.package = args.package
    if args.output is not None:
        config.output = args.output
    if args.prefix is not None:
        config.prefix = args.prefix
    if args.no_compress:
        config.no_compress = True
    if args.no_memcopy:
        config.no_memcopy = True
    if args.tags is not None:
        config.tags = args.tags
    if args.ignore:
        config.ignore = [*config.ignore, *args.ignore]
    if args.inputs:
        config.inputs = [InputConfig.parse(raw) for raw in args.inputs]
    if args.mode is not None:
        config.mode = args.mode
    if args.modtime is not None:
        config.modtime = args.modtime
    if args.no_registry:
        config.registry = None
    elif args.registry is not None:
        config.registry = args.registry
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for bindata."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(
            verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
        )
    except OSError as exc:
        parser.exit(1, f"bindata failed: cannot open log file {args.log_file}: {exc}\n")

    try:
        config = build_config(args)
        toc = translate(config)
    except BindataError as exc:
        parser.exit(1, f"bindata failed: {exc}\nRun with --verbose for more details.\n")
    print(f"Wrote {len(toc)} assets to {_relativize(config.output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
