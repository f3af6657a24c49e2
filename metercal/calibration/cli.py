# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Command-line entry for judging a calibration test against its band.

Prints the judgement (or the whole tolerance table with ``--table``) as
JSON so export and analytics collaborators can consume it directly.
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from ..logging_utils import get_logger, log_event
from .models import FlowPhase
from .tolerance import ToleranceTable, judge


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Judge a meter accuracy percentage against its tolerance band")
    parser.add_argument("--class", dest="construction", default="Other", help="Meter construction class label")
    parser.add_argument("--phase", help="Flow phase (low, mid, high or 'Low Flow', ...)")
    parser.add_argument("--accuracy", type=float, help="Accuracy percentage computed upstream")
    parser.add_argument(
        "--pd-low-flow-max",
        type=float,
        default=None,
        help="Override the PD/Single-Jet low-flow maximum (101.0 or 101.5)",
    )
    parser.add_argument("--table", action="store_true", help="Print the full tolerance table instead")
    parser.add_argument("--out", default="-", help="Output file path or '-' for stdout")
    return parser.parse_args(list(argv) if argv is not None else None)


def _build_table(pd_low_flow_max: float | None) -> ToleranceTable:
    if pd_low_flow_max is None:
        return ToleranceTable.from_settings()
    try:
        return ToleranceTable(pd_low_flow_max=pd_low_flow_max)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    table = _build_table(args.pd_low_flow_max)

    if args.table:
        payload = [
            {"class": construction.value, "phase": phase.value, **band.model_dump()}
            for construction, phase, band in table.rows()
        ]
    else:
        if args.phase is None or args.accuracy is None:
            raise SystemExit("Provide --phase and --accuracy, or --table")
        try:
            phase = FlowPhase.from_label(args.phase)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
        judgement = judge(args.accuracy, args.construction, phase, table)
        log_event(
            get_logger("calibration"),
            "judgement",
            {"class": args.construction, "phase": phase.value, "passes": judgement.passes},
            level="debug",
        )
        payload = judgement.model_dump(mode="json")

    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.out == "-":
        print(text)
    else:
        Path(args.out).write_text(text, encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
