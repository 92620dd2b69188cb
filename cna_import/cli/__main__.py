from __future__ import annotations

import argparse
import sys
from pathlib import Path

from cna_import.config.loader import ConfigError, load_config
from cna_import.logging.init import enable_debug, log_summary, setup_logging
from cna_import.services.orchestrator import ProcessingError, process_all
from cna_import.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load config (default config/import.yml)
- Import every officer / establishment file of the configured directories
- Print one SUMMARY line and exit with the contract exit code

Exit codes: 0 all files imported, 2 at least one file failed, 1 fatal
(configuration error or missing directory).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/import.yml")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="cna-import",
        description="Normalize workforce capability survey and establishment spreadsheets",
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Run configuration (YAML)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print headers, resolved fields and rating codes per file then exit",
    )
    return p.parse_args(argv)


def _inspect_data(cfg) -> int:
    from cna_import.excel.reader import grid_to_rows, read_workbook
    from cna_import.services.capability import extract_rating_columns
    from cna_import.services.header_resolver import resolve_fields
    from cna_import.services.orchestrator import OFFICER_SUFFIXES, scan_source_files

    try:
        files = scan_source_files(Path(cfg.source_directory), OFFICER_SUFFIXES)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no .xlsx / .tsv files")
        return EXIT_SUCCESS_ALL
    mappings = cfg.header_mappings
    for f in files:
        print(f"FILE: {f.name}")
        try:
            if f.suffix.lower() == ".tsv":
                first_line = f.read_text(encoding="utf-8-sig").split("\n", 1)[0]
                headers = [h.strip() for h in first_line.rstrip("\r").split("\t")]
                sheets = {"<pasted>": headers}
            else:
                sheets = {name: grid_to_rows(grid, name)[0] for name, grid in read_workbook(f).items() if grid}
        except Exception as e:  # pragma: no cover
            print(f"  read_error: {e}")
            continue
        for sname, headers in sheets.items():
            fields = resolve_fields(headers, mappings.officer_fields)
            codes = extract_rating_columns(headers, mappings.rating_code_pattern)
            print(f"  SHEET: {sname} cols={len(headers)}")
            print(f"    fields={fields}")
            print(f"    rating_codes={sorted(set(codes.values()))}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None reads sys.argv; an explicit [] (tests) must not pick up pytest's own args
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Importing files from: {cfg.source_directory} agency={cfg.agency_type.value}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
