from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from debit_notes.config.loader import AppConfig, ConfigError, apply_env_overrides, load_config
from debit_notes.export.writer import EXPORT_FORMATS, ExportError, write_debit_notes
from debit_notes.logging.error_log import ErrorLogBuffer
from debit_notes.logging.init import log_summary, set_debug, setup_logging
from debit_notes.models.error_record import ErrorRecord
from debit_notes.models.processing_result import ProcessingResult
from debit_notes.services.orchestrator import ProcessingError, process_file
from debit_notes.services.progress import ProgressTracker
from debit_notes.services.summary import (
    render_status_line,
    render_summary_line,
    render_supplier_line,
)

"""CLI entrypoint.

Flow per input file: decode -> map headers -> compute debits -> group by
supplier -> (optional) export debit notes. One SUMMARY line at the end.

Exit codes: 0 every file processed, 2 at least one file failed, 1 fatal
(bad config, no input files).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so DEBIT_NOTES_* overrides are visible to the config layer."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="debit-notes",
        description="Detect debit-bearing rows in procurement sheets and group them by supplier",
    )
    p.add_argument("files", nargs="*", type=Path, help="CSV / XLSX files to process")
    p.add_argument("--config", type=Path, default=None, help="YAML config (default: config/debit_notes.yml if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-headers", action="store_true", help="Print the detected header map per file then exit")
    p.add_argument("--export-dir", type=Path, default=None, help="Write debit notes for every supplier into this directory")
    p.add_argument("--format", choices=EXPORT_FORMATS, default=None, help="Export format (default from config, csv)")
    return p.parse_args(argv)


def _inspect_headers(files: list[Path], cfg: AppConfig, logger: logging.Logger) -> int:
    for f in files:
        try:
            result = process_file(f, cfg)
        except ProcessingError as e:
            logger.error(f"{f.name}: {e}")
            continue
        print(f"FILE: {f.name}")
        for name, header in result.header_map.as_dict().items():
            print(f"  {name:<20} {header if header is not None else '-'}")
    return EXIT_SUCCESS_ALL


def _export(result: ProcessingResult, args: argparse.Namespace, cfg: AppConfig) -> None:
    fmt = args.format or cfg.export_format
    out_dir = args.export_dir
    if len(args.files) > 1 and result.source:
        # 複数ファイル時はファイルごとにサブディレクトリ
        out_dir = out_dir / Path(result.source).stem
    write_debit_notes(result, out_dir, fmt=fmt, currency=cfg.currency)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([]) を許容)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    try:
        cfg = apply_env_overrides(load_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.files:
        logger.error("No file selected.")
        return EXIT_FATAL

    if args.inspect_headers:
        return _inspect_headers(args.files, cfg, logger)

    results: list[ProcessingResult] = []
    error_log = ErrorLogBuffer()
    failed = 0
    with ProgressTracker(len(args.files)) as progress:
        for path in args.files:
            progress.start_file(path)
            try:
                result = process_file(path, cfg)
                if args.export_dir is not None:
                    _export(result, args, cfg)
            except (ProcessingError, ExportError) as e:
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, e.error_type, str(e)))
                failed += 1
                progress.finish_file(success=False)
                continue
            results.append(result)
            logger.info(render_status_line(result))
            for name in result.aggregation.order:
                logger.info(render_supplier_line(result, name, cfg.currency))
            progress.finish_file(success=True)

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"error log written: {log_path}")

    # log_summary が "SUMMARY " ラベルを付与するため先頭を除去
    log_summary(render_summary_line(results, failed_files=failed)[len("SUMMARY "):])

    if failed:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
