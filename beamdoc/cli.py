"""CLI entrypoints for beamdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .container import list_chunks
from .context import DocContext
from .errors import BeamDocError, ChunkNotFound
from .config import ConfigError
from .info import NodeNotFound
from .logging import configure_logging, get_logger
from .projector import summarize


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


def _add_target_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "target",
        help="Path to a .beam file, or a module name looked up in the search paths.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beamdoc",
        description="Render documentation embedded in BEAM files as Info hypertext.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Directory containing .beamdoc.yml, or the file itself.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser(
        "info",
        help="Print the Info unit for a module, or a single node of it.",
    )
    _add_verbose_option(info_parser, suppress_default=True)
    _add_target_argument(info_parser)
    info_parser.add_argument(
        "--node",
        help="Render only this node (for example `map/2` or `Top`).",
    )
    info_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the Info text to this file instead of stdout.",
    )

    summary_parser = subparsers.add_parser(
        "summary",
        help="List the documented entities of a module with one-line summaries.",
    )
    _add_verbose_option(summary_parser, suppress_default=True)
    _add_target_argument(summary_parser)

    chunks_parser = subparsers.add_parser(
        "chunks",
        help="List the chunk table of a BEAM file.",
    )
    _add_verbose_option(chunks_parser, suppress_default=True)
    chunks_parser.add_argument("path", type=Path, help="Path to a .beam file.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve rendered documentation over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", help="Bind address (defaults to config).")
    serve_parser.add_argument("--port", type=int, help="Bind port (defaults to config).")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for beamdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        context = DocContext.from_config_path(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    try:
        if args.command == "info":
            _run_info(context, args)
        elif args.command == "summary":
            _run_summary(context, args.target)
        elif args.command == "chunks":
            _run_chunks(args.path)
        elif args.command == "serve":
            from .service import run_service

            run_service(
                host=args.host or context.config.service.host,
                port=args.port or context.config.service.port,
                context=context,
            )
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ChunkNotFound as exc:
        logger.warning("%s", exc)
        parser.exit(1, f"No documentation in {exc.path}\n")
    except BeamDocError as exc:
        logger.warning("%s", exc)
        parser.exit(1, f"beamdoc {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    except NodeNotFound as exc:
        parser.exit(1, f"{exc.args[0]}\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")


def _run_info(context: DocContext, args: argparse.Namespace) -> None:
    if args.node:
        text = context.render_node(args.target, args.node)
    else:
        text = context.render_unit(args.target)
    if args.output is None:
        sys.stdout.write(text)
        return
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text, encoding="utf-8")
    print(f"Info written to {_relativize(args.output)}")


def _run_summary(context: DocContext, target: str) -> None:
    model = context.load(target)
    limit = context.config.summary_max_length
    print(f"{model.module}: {summarize(model.module_doc, limit) or ''}".rstrip())
    entities = list(model.visible())
    width = max((len(entity.key) for entity in entities), default=0)
    for entity in entities:
        summary = summarize(entity.doc, limit) or ""
        print(f"  {entity.key.ljust(width)}  {entity.kind:<8} {summary}".rstrip())


def _run_chunks(path: Path) -> None:
    for record in list_chunks(path.read_bytes(), path=path):
        name = record.identifier.decode("latin-1")
        print(f"{name:<6} offset={record.start:<8} length={record.declared_length}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
