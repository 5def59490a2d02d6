#!/usr/bin/env python3
"""Small CLI to decode a store snapshot file and print or save its content.

Warning: the pickle serializer can execute arbitrary code while loading.
Use `-s pickle` only on files you trust.
"""

from __future__ import annotations

import argparse
import json
import os
import pprint
import sys
from pathlib import Path
from typing import Optional, Sequence

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from memstore_lib.storage.serializer import get_serializer  # noqa: E402


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Decode a memstore snapshot and show its entries")
    p.add_argument("path", help="Path to the snapshot file")
    p.add_argument("-s", "--serializer", default="json", choices=["json", "yaml", "pickle", "encrypted"],
                   help="Serializer the snapshot was written with (default: json)")
    p.add_argument("--password", help="Password for the encrypted serializer")
    p.add_argument("--key", help="Fernet key for the encrypted serializer (instead of --password)")
    p.add_argument("-o", "--output", help="Write textual representation to file instead of stdout")
    p.add_argument("-j", "--json", action="store_true", help="Dump the mapping as JSON (fallbacks to repr on failure)")
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print the summary to stderr")
    return p.parse_args(argv)


def safe_json_dumps(obj):
    try:
        return json.dumps(obj, indent=2, default=str, sort_keys=True)
    except Exception:
        # Fallback: JSON can't represent this object; use repr
        return json.dumps({"repr": repr(obj)}, indent=2)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    path = args.path

    if not os.path.exists(path):
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 2

    options = {}
    if args.serializer == "encrypted":
        options = {"password": args.password, "key": args.key.encode("ascii") if args.key else None}
    try:
        serializer = get_serializer(args.serializer, **options)
        with open(path, "rb") as fh:
            obj = serializer.load(fh.read())
    except Exception as exc:
        print(f"Failed to decode '{path}': {exc}", file=sys.stderr)
        return 3

    out_text = safe_json_dumps(obj) if args.json else pprint.pformat(obj, width=120)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as of:
                of.write(out_text)
        except OSError as exc:
            print(f"Failed to write output file '{args.output}': {exc}", file=sys.stderr)
            return 4
    else:
        print(out_text)

    if not args.quiet:
        summary = f"Snapshot type: {type(obj).__name__}"
        if isinstance(obj, dict):
            summary += f", entries: {len(obj)}"
        print(summary, file=sys.stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
