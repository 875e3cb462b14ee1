# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Pricing rollup and tabular export."""

from .calculator import (
    MetroSubtotal,
    PriceLineItem,
    PricingSummary,
    build_line_item_from_connection,
    build_line_item_from_service,
    calculate_pricing_summary,
    format_bandwidth,
    format_currency,
)
from .csv_export import CSV_COLUMNS, generate_csv

__all__ = [
    "CSV_COLUMNS",
    "MetroSubtotal",
    "PriceLineItem",
    "PricingSummary",
    "build_line_item_from_connection",
    "build_line_item_from_service",
    "calculate_pricing_summary",
    "format_bandwidth",
    "format_currency",
    "generate_csv",
]
