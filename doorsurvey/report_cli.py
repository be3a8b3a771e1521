from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .domain_models import ReportGenerationError, ReportRequest, ReportRequestError
from .report.pdf_builder import build_report_pdf, report_filename
from .routes._helpers import safe_filename


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a door measurement PDF report from a JSON request"
    )
    parser.add_argument("input", type=Path, help="Input report request (.json)")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output PDF path (default: door-measurements-<site>-<building>.pdf next to input)",
    )
    parser.add_argument(
        "--accurate",
        action="store_true",
        help="Apply the accurate-size correction regardless of the request flag",
    )
    parser.add_argument("--lang", choices=("en", "nl"), default=None, help="Report language")
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(f"Error: invalid config: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=config.logging.level, format="%(levelname)s: %(message)s")

    if not args.input.exists():
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        return 1
    try:
        payload = json.loads(args.input.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print(f"Error: input file contains invalid JSON: {exc}", file=sys.stderr)
        return 1
    if isinstance(payload, dict):
        payload.setdefault("lang", config.report.lang)
        if args.lang:
            payload["lang"] = args.lang
        if args.accurate:
            payload["use_accurate_values"] = True
    try:
        request = ReportRequest.from_dict(payload)
    except ReportRequestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    out_pdf = args.output or args.input.with_name(safe_filename(report_filename(request)))
    out_pdf.parent.mkdir(parents=True, exist_ok=True)
    try:
        pdf = build_report_pdf(
            request,
            config.report.geometry,
            height_offset=config.report.height_offset_digit,
            width_offset=config.report.width_offset_digit,
        )
    except ReportGenerationError as exc:
        print(f"Error: PDF generation failed: {exc.__cause__ or exc}", file=sys.stderr)
        return 1
    out_pdf.write_bytes(pdf)
    print(f"wrote report: {out_pdf}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
