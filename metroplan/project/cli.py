# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""CLI for metroplan project files."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from metroplan.connections.classifier import validate_connections
from metroplan.layout.engine import build_diagram_layout
from metroplan.pricing.calculator import calculate_pricing_summary, format_currency
from metroplan.pricing.csv_export import generate_csv
from metroplan.topology.models import ProjectConfig

from .serializer import load_project_file, write_project_file

LOGGER = logging.getLogger(__name__)


def _load(path: str) -> Optional[ProjectConfig]:
    result = load_project_file(Path(path))
    if not result.ok:
        print(f"{path}: {result.error}", file=sys.stderr)
        return None
    return result.project


def _handle_validate(args: argparse.Namespace) -> int:
    failures = 0
    for path in args.paths:
        project = _load(path)
        if project is None:
            failures += 1
            continue
        print(
            f"{path}: OK ({len(project.metros)} metro(s), "
            f"{len(project.connections)} connection(s))"
        )
    return 1 if failures else 0


def _handle_price(args: argparse.Namespace) -> int:
    project = _load(args.path)
    if project is None:
        return 1
    summary = calculate_pricing_summary(project.metros, project.connections)

    if args.csv:
        csv_text = generate_csv(summary, project.name, project.connections)
        Path(args.csv).write_text(csv_text, encoding="utf-8-sig")
        LOGGER.info("Wrote CSV to %s", args.csv)

    for subtotal in summary.metro_subtotals:
        print(f"{subtotal.metro_code} - {subtotal.metro_name}")
        for item in subtotal.line_items:
            flag = " (estimate)" if item.is_estimate else ""
            print(
                f"  {item.service_name:<28} x{item.quantity}  "
                f"{format_currency(item.mrc):>12}/mo{flag}"
            )
        print(f"  {'Subtotal':<28}     {format_currency(subtotal.mrc):>12}/mo")
    print(f"Total MRC:         {format_currency(summary.total_mrc)}")
    print(f"Total NRC:         {format_currency(summary.total_nrc)}")
    print(f"Total Annual Cost: {format_currency(summary.total_annual_cost)}")
    return 0


def _handle_layout(args: argparse.Namespace) -> int:
    project = _load(args.path)
    if project is None:
        return 1
    layout = build_diagram_layout(
        project.metros,
        project.connections,
        pricing_visible=args.pricing_visible,
        text_boxes=project.text_boxes,
        local_sites=project.local_sites,
        annotation_markers=project.annotation_markers,
    )
    text = json.dumps(layout.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Wrote {len(layout.nodes)} node(s) and {len(layout.edges)} edge(s) to {args.output}")
    else:
        print(text)
    return 0


def _handle_check(args: argparse.Namespace) -> int:
    project = _load(args.path)
    if project is None:
        return 1
    issues = validate_connections(project)
    for issue in issues:
        print(f"{issue.connection_id}: {issue.reason}")
    print(f"Checked {len(project.connections)} connection(s), {len(issues)} issue(s).")
    return 1 if issues else 0


def _handle_export(args: argparse.Namespace) -> int:
    project = _load(args.path)
    if project is None:
        return 1
    write_project_file(project, Path(args.output))
    print(f"Exported {project.id} to {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="metroplan project utilities")
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.getenv("METROPLAN_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate project file(s)")
    validate.add_argument("paths", nargs="+", help="Project JSON file(s)")
    validate.set_defaults(func=_handle_validate)

    price = subparsers.add_parser("price", help="Print the pricing summary")
    price.add_argument("path", type=str, help="Project JSON file")
    price.add_argument("--csv", type=str, default=None, help="Also write the summary as CSV")
    price.set_defaults(func=_handle_price)

    layout = subparsers.add_parser("layout", help="Compute the diagram layout as JSON")
    layout.add_argument("path", type=str, help="Project JSON file")
    layout.add_argument("--pricing-visible", action="store_true", help="Add price labels to edges")
    layout.add_argument("--output", type=str, default=None, help="Write layout JSON to a file")
    layout.set_defaults(func=_handle_layout)

    check = subparsers.add_parser("check", help="Validate connections")
    check.add_argument("path", type=str, help="Project JSON file")
    check.set_defaults(func=_handle_check)

    export = subparsers.add_parser("export", help="Re-export a project with pricing stripped")
    export.add_argument("path", type=str, help="Project JSON file")
    export.add_argument("--output", type=str, required=True, help="Output file")
    export.set_defaults(func=_handle_export)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
