# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Diagram layout."""

from .engine import build_diagram_layout, edge_labels, edge_style, service_node_height
from .types import (
    DiagramEdge,
    DiagramNode,
    EdgeStyle,
    LayoutConfig,
    LayoutResult,
    NodeId,
    NodeKind,
)

__all__ = [
    "DiagramEdge",
    "DiagramNode",
    "EdgeStyle",
    "LayoutConfig",
    "LayoutResult",
    "NodeId",
    "NodeKind",
    "build_diagram_layout",
    "edge_labels",
    "edge_style",
    "service_node_height",
]
