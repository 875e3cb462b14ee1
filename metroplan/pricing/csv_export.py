# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Tabular (CSV) export of a pricing summary."""

from __future__ import annotations

import csv
import io
from typing import Dict, List, Optional

from metroplan.topology.models import VirtualConnection

from .calculator import MONTHS_PER_YEAR, PricingSummary, format_currency

CSV_COLUMNS = [
    "Metro",
    "Service Type",
    "Service Name",
    "Configuration Details",
    "Term",
    "Qty",
    "MRC (Monthly)",
    "NRC (One-Time)",
    "Annual Cost",
]

# Symbols that break spreadsheet readers in Latin-1 mode.
_ASCII_REPLACEMENTS = {"→": "->", "←": "<-", "►": ">", "◄": "<"}


def _blank_row() -> Dict[str, object]:
    return {column: "" for column in CSV_COLUMNS}


def _price_table_rows(connection: VirtualConnection) -> List[Dict[str, object]]:
    z_name = connection.z_side.service_profile_name or connection.z_side.metro_code
    rows = [
        _blank_row(),
        {
            **_blank_row(),
            "Metro": "BANDWIDTH PRICE TABLE",
            "Service Type": connection.name or connection.type.value,
            "Service Name": f"{connection.a_side.metro_code} -> {z_name}",
        },
        {**_blank_row(), "Metro": "Bandwidth", "MRC (Monthly)": "MRC", "Annual Cost": "Annual Cost"},
    ]
    for entry in connection.price_table or []:
        selected = "> " if entry.bandwidth_mbps == connection.bandwidth_mbps else ""
        rows.append({
            **_blank_row(),
            "Metro": f"{selected}{entry.label}",
            "MRC (Monthly)": format_currency(entry.mrc),
            "Annual Cost": format_currency(entry.mrc * MONTHS_PER_YEAR),
        })
    return rows


def generate_csv(summary: PricingSummary, project_name: str,
                 connections: Optional[List[VirtualConnection]] = None) -> str:
    """
    Render a pricing summary as CSV text.

    One row per line item, then a blank separator row and the summary block.
    Connections with a visible, non-empty price table add a bandwidth price
    table block at the end.
    """
    rows: List[Dict[str, object]] = []

    for metro in summary.metro_subtotals:
        for item in metro.line_items:
            rows.append({
                "Metro": f"{item.metro} - {item.metro_name}",
                "Service Type": item.service_type,
                "Service Name": item.service_name,
                "Configuration Details": item.description,
                "Term": item.term,
                "Qty": item.quantity,
                "MRC (Monthly)": format_currency(item.mrc),
                "NRC (One-Time)": format_currency(item.nrc),
                "Annual Cost": format_currency(item.annual_cost),
            })

    rows.append(_blank_row())
    rows.append({**_blank_row(), "Metro": "SUMMARY", "Service Type": project_name})
    rows.append({**_blank_row(), "Metro": "Total MRC", "MRC (Monthly)": format_currency(summary.total_mrc)})
    rows.append({**_blank_row(), "Metro": "Total NRC", "NRC (One-Time)": format_currency(summary.total_nrc)})
    rows.append({
        **_blank_row(),
        "Metro": "Total Annual Cost",
        "Annual Cost": format_currency(summary.total_annual_cost),
    })

    for connection in connections or []:
        if connection.show_price_table and connection.price_table:
            rows.extend(_price_table_rows(connection))

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\r\n")
    writer.writeheader()
    writer.writerows(rows)

    text = buffer.getvalue()
    for symbol, replacement in _ASCII_REPLACEMENTS.items():
        text = text.replace(symbol, replacement)
    return text
