"""Campaign Insights entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Sequence

from campaign_insights.application import InvalidBatchError, run_analysis_report
from campaign_insights.application.reporting.metrics import fmt_pct, fmt_roas
from campaign_insights.config import Settings
from campaign_insights.infrastructure import (
    LlmRequestError,
    load_campaign_batch,
    save_summary_excel,
    save_summary_json,
)

DEFAULT_OUTPUT_JSON = Path("output") / "analysis.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Analyze ad campaign performance and A/B tests")
    parser.add_argument("input", help="Campaign table (CSV, TSV or XLSX) with a header row")
    parser.add_argument("--sheet", default=None, help="Worksheet name for Excel input")
    parser.add_argument("--focus", default=None, help="Analysis focus passed to the brief")
    parser.add_argument("--question", default=None, help="User question passed to the brief")
    parser.add_argument("--model", default=None, help="Override the text-generation model")
    parser.add_argument("--output-json", default=str(DEFAULT_OUTPUT_JSON), help="Where to save the JSON report")
    parser.add_argument("--output-excel", default=None, help="Optional Excel workbook output")
    parser.add_argument("--no-llm", action="store_true", help="Build the brief without calling the LLM")
    return parser


def _summary_lines(report_dict: dict) -> List[str]:
    overall = report_dict["overall_summary"]
    lines = [
        f"Rows: {len(report_dict['computed_campaigns'])}",
        f"Platforms: {', '.join(report_dict['platform_summary']) or 'none'}",
        f"Overall CTR {fmt_pct(overall['CTR'])}, ROAS {fmt_roas(overall['ROAS'])}",
        f"A/B tests: {len(report_dict['ab_tests'])}",
    ]
    for test in report_dict["ab_tests"]:
        verdict = "significant" if test["significant"] else "not significant"
        lines.append(
            f"  {test['platform']}/{test['campaign_name']}: "
            f"{test['A']['name']} vs {test['B']['name']} p={test['p_value']:.4f} ({verdict})"
        )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    started = perf_counter()
    try:
        batch = load_campaign_batch(Path(args.input), sheet_name=args.sheet)
        report = run_analysis_report(
            batch,
            settings,
            analysis_focus=args.focus,
            analysis_question=args.question,
            model=args.model,
            call_llm=not args.no_llm,
        )
    except (FileNotFoundError, ValueError) as exc:
        # InvalidBatchError is a ValueError.
        label = "Invalid batch" if isinstance(exc, InvalidBatchError) else "Input error"
        print(f"{label}: {exc}", file=sys.stderr)
        return 1
    except LlmRequestError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1

    report_dict = report.to_dict()
    output_json_path = Path(args.output_json)
    save_summary_json(output_json_path, report_dict)

    for line in _summary_lines(report_dict):
        print(line)
    print(f"Total Elapsed: {perf_counter() - started:.3f}s")
    print(f"Saved JSON: {output_json_path}")

    if args.output_excel:
        excel_saved, excel_error_message = save_summary_excel(Path(args.output_excel), report.analysis)
        if excel_saved:
            print(f"Saved Excel: {args.output_excel}")
        else:
            print(f"Excel save skipped (file may be open/locked): {excel_error_message}")

    print()
    print(report.llm_response)
    return 0


if __name__ == "__main__":
    sys.exit(main())
