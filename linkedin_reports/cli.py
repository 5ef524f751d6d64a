"""Command-line entry point.

Usage:
    linkedin-reports consolidate                     # excel/ -> output/
    linkedin-reports consolidate --input-dir exports --output-dir out --sqlite
    linkedin-reports serve --port 8050               # HTTP upload API
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from linkedin_reports.config import settings
from linkedin_reports.export import write_outputs
from linkedin_reports.ingest import IngestError, consolidate_directory

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _banner(title: str) -> None:
    rule = "=" * len(title)
    print(rule)
    print(title)
    print(rule)
    print("")


def run_consolidate(args: argparse.Namespace) -> int:
    overrides: dict = {}
    if args.input_dir:
        overrides["input_dir"] = Path(args.input_dir)
    if args.output_dir:
        overrides["output_dir"] = Path(args.output_dir)
    if args.sqlite:
        overrides["write_sqlite"] = True
    cfg = settings.model_copy(update=overrides)

    try:
        result = consolidate_directory(cfg.input_dir)
    except IngestError as exc:
        logger.error("%s", exc)
        return 1

    if result.documents:
        _banner("Example row:")
        print(json.dumps(result.documents[0].record.to_dict(), indent=2))
        print("")

    written = write_outputs(
        result,
        csv_path=cfg.csv_path,
        xlsx_path=cfg.xlsx_path,
        database_url=cfg.database_url if cfg.write_sqlite else None,
    )

    _banner("New files created:")
    for path in written:
        print(f"• {path}")
    print("")

    for warning in result.warnings:
        print(f"! {warning}")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "linkedin_reports.main:app",
        host=args.host,
        port=args.port or settings.app_port,
        log_level=settings.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkedin-reports",
        description="Consolidate LinkedIn per-post analytics exports into one list.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (debug, info, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_cons = sub.add_parser("consolidate", help="Merge a directory of .xlsx exports")
    p_cons.add_argument("--input-dir", default=None, help=f"Directory of exports (default: {settings.input_dir})")
    p_cons.add_argument("--output-dir", default=None, help=f"Output directory (default: {settings.output_dir})")
    p_cons.add_argument("--sqlite", action="store_true", help="Also write a SQLite database")
    p_cons.set_defaults(func=run_consolidate)

    p_serve = sub.add_parser("serve", help="Run the HTTP upload API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=run_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or settings.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
