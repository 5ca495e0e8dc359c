"""
clean_sdf_dir.py
================
Clean every Mol / SD file in a directory and write the cleaned records to a
file of the same name under ``--output-dir``.

A file that cannot be cleaned is reported on stderr and skipped; the rest of
the batch carries on.  Compressed inputs (``.gz``) are written uncompressed,
without the ``.gz`` suffix.

Usage
-----
    python scripts/clean_sdf_dir.py \\
        --input-dir tests/fixtures \\
        --output-dir outputs/clean \\
        --pattern "*.sdf"
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Allow running from the repo root without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ctab_cleaner.errors import CtabError
from ctab_cleaner.pipeline.ctab_cleaner import CtabCleaner


def _output_name(path: Path) -> str:
    """Return the output file name for *path* (``x.sdf.gz`` -> ``x.sdf``)."""
    return path.stem if path.suffix == ".gz" else path.name


def clean_file(cleaner: CtabCleaner, source: Path, output_dir: Path) -> int:
    """Clean *source* into *output_dir* and return the number of records."""
    with cleaner.clean_file(source) as records_iter:
        records = list(records_iter)
    out_file = output_dir / _output_name(source)
    out_file.write_text("".join(records) + "\n", encoding="utf-8")
    print(f"  wrote {out_file} ({len(records)} record(s))")
    return len(records)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Clean every Mol / SD file in a directory"
    )
    parser.add_argument("--input-dir", "-i", required=True, metavar="DIR")
    parser.add_argument("--output-dir", "-o", required=True, metavar="DIR")
    parser.add_argument("--pattern", "-p", default="*.sdf", metavar="GLOB")
    args = parser.parse_args(argv)

    out = Path(args.output_dir)
    out.mkdir(parents=True, exist_ok=True)

    cleaner = CtabCleaner()
    failures = 0
    for src in sorted(Path(args.input_dir).glob(args.pattern)):
        if not src.is_file():
            continue
        try:
            clean_file(cleaner, src, out)
        except (CtabError, OSError) as exc:
            failures += 1
            print(f"  FAILED {src}: {exc}", file=sys.stderr)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
