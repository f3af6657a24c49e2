#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Unified CLI entry point for metercal."""
from __future__ import annotations

import runpy
import sys
from textwrap import dedent

_COMMAND_TO_MODULE = {
    "extract": "metercal.ocr_pipeline.cli",
    "ocr": "metercal.ocr_pipeline.cli",
    "judge": "metercal.calibration.cli",
    "tolerance": "metercal.calibration.cli",
}


def _print_help() -> None:
    msg = dedent(
        """
        Usage:
          python -m metercal [command] [args...]

        Commands:
          extract | ocr       Mine reading/manufacturer/size/serial from meter text or photos
          judge | tolerance   Judge an accuracy percentage against its tolerance band
          help                Show this message

        Examples:
          python -m metercal extract --text "Neptune 5/8\\" 0123.45 gal"
          python -m metercal judge --class Multi-Jet --phase low --accuracy 98.2
          python -m metercal judge --table
        """
    ).strip()
    print(msg)


def _run_module(module: str, argv: list[str]) -> None:
    old_argv = sys.argv
    try:
        sys.argv = [module, *argv]
        runpy.run_module(module, run_name="__main__")
    finally:
        sys.argv = old_argv


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    if not argv or argv[0] in {"-h", "--help", "help"}:
        _print_help()
        return
    module = _COMMAND_TO_MODULE.get(argv[0])
    if module is None:
        raise SystemExit(f"Unknown command {argv[0]!r}; run 'python -m metercal help'")
    _run_module(module, argv[1:])


if __name__ == "__main__":
    main()
