"""
CTAB Cleaner – command-line interface
=====================================

Usage
-----
::

    python -m ctab_cleaner.cli SOURCE [OPTIONS]

Options
-------
--output, -o          Output file path (default: stdout).
--format, -f          Output format: ``sdf`` (default) or ``json``.
--encoding            Input text encoding (default: utf-8).
--verbose, -v         Enable DEBUG logging (one line per repair).

``SOURCE`` is a Mol / SD file, optionally gzip-compressed (``.gz``), or ``-``
for standard input.

Examples
--------
::

    python -m ctab_cleaner.cli messy.sdf -o clean.sdf
    python -m ctab_cleaner.cli library.sdf.gz -f json -o summary.json
    cat broken.mol | python -m ctab_cleaner.cli - -v
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .errors import CtabError
from .info import MolFileInfo
from .pipeline.ctab_cleaner import CtabCleaner


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ctab_cleaner",
        description="CTAB Cleaner – repair malformed Mol / SD records",
    )
    p.add_argument("source", help="Mol / SD file to clean ('-' for stdin)")
    p.add_argument(
        "--output", "-o",
        default="-",
        metavar="FILE",
        help="Output file (default: stdout)",
    )
    p.add_argument(
        "--format", "-f",
        choices=["sdf", "json"],
        default="sdf",
        help="Output format (default: sdf)",
    )
    p.add_argument(
        "--encoding",
        default="utf-8",
        help="Input text encoding (default: utf-8)",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def _format_json(records: list[str]) -> str:
    entries = []
    for index, record in enumerate(records):
        entry: dict = {"index": index}
        entry.update(MolFileInfo.parse(record).to_dict())
        entry["molfile"] = record
        entries.append(entry)
    return json.dumps(entries, indent=2)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cleaner = CtabCleaner(encoding=args.encoding)

    try:
        if args.source == "-":
            records_iter = cleaner.clean_stream(sys.stdin.buffer)
        else:
            records_iter = cleaner.clean_file(args.source)
        with records_iter:
            records = list(records_iter)

        if args.format == "json":
            output_text = _format_json(records)
        else:
            output_text = "".join(records)

        if args.output == "-":
            print(output_text)
        else:
            Path(args.output).write_text(output_text + "\n", encoding="utf-8")
            print(
                f"{len(records)} record(s) written to {args.output}",
                file=sys.stderr,
            )
    except (CtabError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
