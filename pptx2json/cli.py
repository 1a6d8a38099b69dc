from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

import pptx2json
from pptx2json.config import ConverterOptions


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pptx2json",
        description="Convert a .pptx presentation and emit its JSON document model to stdout.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the .pptx file to convert.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the JSON with the given indentation.",
    )
    parser.add_argument(
        "--no-media",
        action="store_true",
        help="Omit image, video and audio payloads (elements keep their geometry).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"pptx2json: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    try:
        if args.indent is not None and args.indent < 0:
            raise ValueError("--indent must not be negative")
        options = ConverterOptions(include_media=not args.no_media)
        presentation = pptx2json.read_file(args.path, options)
        json.dump(presentation.to_dict(), sys.stdout, indent=args.indent)
        sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"pptx2json: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
