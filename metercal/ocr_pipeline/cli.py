# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Command-line entry for meter-face field extraction.

Takes either recognised text directly or meter photos (recognised through
Tesseract, or scripted mocks for smoke tests) and emits one JSON record of
extracted fields per input.
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable, List, Sequence

from PIL import Image

from ..logging_utils import get_logger, log_event
from .barcode import parse_barcode_arg
from .hybrid import PreprocessingTextSource
from .interfaces import TextSource
from .mocks import MockTextSource
from .models import BarcodeResult
from .pipeline import ExtractionPipeline
from .tesseract import TesseractTextSource

MOCK_TEXT = "Neptune 5/8\" Reading: 123.45 gal, serial AB12345"


def _load_images(paths: Iterable[str]) -> List[Image.Image]:
    return [Image.open(Path(p).as_posix()) for p in paths]


def build_text_source(*, use_mocks: bool = False) -> TextSource:
    if use_mocks:
        return MockTextSource(default=MOCK_TEXT)
    return PreprocessingTextSource(base=TesseractTextSource())


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract reading, manufacturer, size and serial from meter text")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Recognised text to mine directly")
    source.add_argument("--text-file", help="File containing recognised text")
    source.add_argument("--images", nargs="*", help="One or more meter photos to recognise and mine")
    parser.add_argument(
        "--barcode",
        action="append",
        default=[],
        help="Decoded barcode as SYMBOLOGY:PAYLOAD (repeatable)",
    )
    parser.add_argument("--out", default="-", help="Output file path or '-' for stdout")
    parser.add_argument(
        "--use-mocks",
        action="store_true",
        help="Use a scripted text source instead of Tesseract for fast smoke tests",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _parse_barcodes(values: Sequence[str]) -> List[BarcodeResult]:
    try:
        return [parse_barcode_arg(value) for value in values]
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)

    if args.text is None and not args.text_file and not args.images:
        raise SystemExit("Provide --text, --text-file or --images")

    pipeline = ExtractionPipeline()
    barcodes = _parse_barcodes(args.barcode)
    logger = get_logger("ocr_pipeline.cli")

    if args.images:
        text_source = build_text_source(use_mocks=args.use_mocks)
        texts = [text_source.recognize(image) for image in _load_images(args.images)]
    elif args.text_file:
        texts = [Path(args.text_file).read_text(encoding="utf-8")]
    else:
        texts = [args.text]

    outputs = [pipeline.run(text, barcodes) for text in texts]
    for fields in outputs:
        if fields.needs_manual_entry:
            log_event(logger, "manual_entry_required", {"raw_chars": len(fields.raw_text)}, level="debug")

    payload = [
        {**fields.model_dump(mode="json"), "needs_manual_entry": fields.needs_manual_entry}
        for fields in outputs
    ]

    if args.out == "-":
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        path = Path(args.out)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
