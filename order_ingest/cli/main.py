from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..geocoding.nominatim import NominatimGeocoder
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import ImportConfig
from ..models.processing_result import ImportResult
from ..parsing.template import write_template
from ..services.orchestrator import process_file
from ..services.preview import page_frame, total_pages, validation_counts
from ..services.single_order import create_single_order
from ..services.summary import render_summary_line
from ..storage import build_store

"""CLI entrypoint.

Subcommands:
- check FILE         parse, validate and triage an order CSV (optionally strip / submit)
- template PATH      write the sample CSV template
- create-order       validate one coordinate pair (with reverse geocoding) and create it
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_BLOCKED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; its values win over the existing environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="order-ingest", description="Order CSV validation & import")
    p.add_argument("--config", type=Path, default=None,
                   help=f"YAML config (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate an order CSV")
    check.add_argument("file", type=Path)
    check.add_argument("--strip-invalid", action="store_true", help="Remove invalid rows")
    check.add_argument("--output", type=Path, default=None, help="Write cleaned CSV here")
    check.add_argument("--submit", action="store_true", help="Submit when the upload gate allows it")
    check.add_argument("--inspect-data", action="store_true", help="Print one page of the triaged rows")
    check.add_argument("--page", type=int, default=1)

    tmpl = sub.add_parser("template", help="Write the sample CSV template")
    tmpl.add_argument("path", type=Path)

    create = sub.add_parser("create-order", help="Create a single order")
    create.add_argument("--latitude", required=True)
    create.add_argument("--longitude", required=True)
    create.add_argument("--subtotal", required=True)
    create.add_argument("--id", dest="order_id", default=None)
    create.add_argument("--timestamp", default=None)
    return p.parse_args(argv)


def _load(args: argparse.Namespace) -> ImportConfig:
    if args.config is not None:
        return load_config(args.config)
    return load_config(DEFAULT_CONFIG_PATH, required=False)


def _print_page(result: ImportResult, page: int, page_size: int) -> None:
    dataset = result.dataset
    if dataset is None:
        print("inspect: no rows")
        return
    counts = validation_counts(dataset)
    pages = total_pages(counts.total, page_size)
    print(f"ROWS valid={counts.valid}/{counts.total} invalid={counts.invalid} page={min(max(page, 1), pages)}/{pages}")
    frame = page_frame(dataset, page, page_size)
    if not frame.empty:
        print(frame.to_string())


def _run_check(args: argparse.Namespace, cfg: ImportConfig) -> int:
    logger = setup_logging()
    if args.output is not None and not args.strip_invalid:
        logger.error("--output requires --strip-invalid")
        return EXIT_FATAL
    store = build_store(cfg) if args.submit else None
    error_log = ErrorLogBuffer(Path(cfg.error_log_dir))
    result = process_file(
        args.file,
        store,
        strip=args.strip_invalid,
        output=args.output,
        submit=args.submit,
        error_log=error_log,
        show_progress=True,
    )
    if args.inspect_data:
        _print_page(result, args.page, cfg.page_size)

    # "SUMMARY " は log_summary 側で付与される
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.fatal:
        return EXIT_FATAL
    if result.submitted or (result.ready and not args.submit):
        return EXIT_SUCCESS
    return EXIT_BLOCKED


def _run_create(args: argparse.Namespace, cfg: ImportConfig) -> int:
    logger = setup_logging()
    result = create_single_order(
        args.latitude,
        args.longitude,
        args.subtotal,
        geocoder=NominatimGeocoder(cfg.geocoder),
        store=build_store(cfg),
        order_id=args.order_id,
        timestamp=args.timestamp,
        target_state=cfg.geocoder.target_state,
    )
    if result.record is None:
        logger.error(f"order rejected: {result.validation.reason}")
        return EXIT_BLOCKED
    if not result.ok:
        logger.error(result.outcome.message if result.outcome else "order not created")
        return EXIT_FATAL
    logger.info(f"order created: {result.record.id}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([...]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    try:
        cfg = _load(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.command == "template":
        path = write_template(args.path)
        logger.info(f"template written: {path}")
        return EXIT_SUCCESS
    if args.command == "create-order":
        return _run_create(args, cfg)
    return _run_check(args, cfg)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
