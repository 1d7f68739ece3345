"""CLI entrypoints for apipages commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import NEWLINES, ConfigError, DocumenterConfig, load_config
from .documenter import DocumenterError, PageWriter
from .loader import ModelLoadError, load_model
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apipages",
        description="Render an API model into cross-linked markdown pages.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    markdown_parser = subparsers.add_parser(
        "markdown",
        help="Write one markdown page per package, class and interface.",
    )
    _add_verbose_option(markdown_parser, suppress_default=True)
    markdown_parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to the API model JSON file.",
    )
    markdown_parser.add_argument(
        "-o",
        "--output-folder",
        default="docs/api",
        help="Folder that receives the generated pages (defaults to docs/api).",
    )
    markdown_parser.add_argument(
        "--config",
        default=".",
        help="Path to .apipages.yml or the folder containing it (defaults to current directory).",
    )
    markdown_parser.add_argument(
        "--uri-root",
        default=None,
        help="Prefix prepended to every page link (defaults to '/').",
    )
    markdown_parser.add_argument(
        "--only-packages-starting-with",
        action="append",
        default=None,
        metavar="PREFIX",
        help="Only render packages whose name starts with PREFIX; may be repeated.",
    )
    markdown_parser.add_argument(
        "--newline-kind",
        choices=sorted(NEWLINES),
        default=None,
        help="Line endings for written pages (defaults to crlf).",
    )
    markdown_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    markdown_parser.add_argument(
        "--validate-links",
        action="store_true",
        default=None,
        help="Report links that point at missing pages or anchors after writing.",
    )
    return parser


def _apply_overrides(config: DocumenterConfig, args: argparse.Namespace) -> DocumenterConfig:
    if args.uri_root is not None:
        config.uri_root = args.uri_root
    if args.only_packages_starting_with:
        config.only_packages_starting_with = list(args.only_packages_starting_with)
    if args.newline_kind is not None:
        config.newline_kind = args.newline_kind
    if args.validate_links:
        config.validate_links = True
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for apipages commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(getattr(args, "quiet", False)))

    if args.command == "markdown":
        try:
            config = _apply_overrides(load_config(Path(args.config)), args)
            model = load_model(Path(args.input).expanduser())
            writer = PageWriter(model, Path(args.output_folder).expanduser(), config)
            written = writer.generate()
        except (ConfigError, ModelLoadError) as exc:
            parser.exit(1, f"{exc}\n")
        except DocumenterError as exc:
            parser.exit(1, f"apipages markdown failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Wrote {len(written)} pages to {_relativize(writer.output_folder)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
