"""CLI entrypoints for assetroots commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, OUTPUT_FORMATS, load_config
from .errors import AssetResolutionError, ManifestError
from .logging import configure_logging
from .manifest import load_manifest
from .paths import render
from .resolver import AssetCollection


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_manifest_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("manifest", help="Path to the rule manifest (YAML or JSON).")
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .assetroots.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetroots",
        description="Resolve a rule's declared assets into files and asset roots.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print every asset file with the root its bundle path starts at.",
    )
    _add_verbose_option(resolve_parser, suppress_default=True)
    _add_manifest_arguments(resolve_parser)
    resolve_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (defaults to the configured output_format).",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Validate the manifest's asset declaration without printing results.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_manifest_arguments(check_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing /resolve and /check.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetroots commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        configure_logging(verbose=bool(args.verbose))
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

    try:
        manifest = load_manifest(Path(args.manifest), output_root=config.output_root)
        collection = manifest.resolve()
    except ManifestError as exc:
        parser.exit(1, f"Invalid manifest: {exc}\n")
    except AssetResolutionError as exc:
        parser.exit(1, f"assetroots {args.command} failed: {exc}\n")

    if args.command == "check":
        print(f"ok ({len(collection)} assets)")
        return

    output_format = args.format or config.output_format
    print(_format_collection(collection, output_format))


def _format_collection(collection: AssetCollection, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(collection.to_dict(), indent=2)
    lines = []
    for file, root in collection.pairs():
        lines.append(f"{render(root)}\t{render(file.exec_path.relative_to(root))}")
    return "\n".join(lines)


if __name__ == "__main__":
    main(sys.argv[1:])
