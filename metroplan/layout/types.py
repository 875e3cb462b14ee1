# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Diagram node/edge types and layout geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from metroplan.topology.models import ServiceType


class NodeKind(Enum):
    """Visual node categories. The value is the id prefix."""
    METRO = "metro"
    SERVICE = "service"
    CONNECTION_PRICE_TABLE = "pricetable"
    NETWORK_EDGE_PRICE_TABLE = "ne-pricetable"
    INTERNET_ACCESS_PRICE_TABLE = "eia-pricetable"
    CLOUD = "cloud"
    TEXT_BOX = "textbox"
    LOCAL_SITE = "localsite"
    ANNOTATION_MARKER = "marker"

    @property
    def render_type(self) -> str:
        return _RENDER_TYPES[self]

    @property
    def is_overlay(self) -> bool:
        return self in OVERLAY_KINDS


_RENDER_TYPES = {
    NodeKind.METRO: "metroNode",
    NodeKind.SERVICE: "serviceNode",
    NodeKind.CONNECTION_PRICE_TABLE: "priceTableNode",
    NodeKind.NETWORK_EDGE_PRICE_TABLE: "nePriceTableNode",
    NodeKind.INTERNET_ACCESS_PRICE_TABLE: "eiaPriceTableNode",
    NodeKind.CLOUD: "cloudNode",
    NodeKind.TEXT_BOX: "textBoxNode",
    NodeKind.LOCAL_SITE: "localSiteNode",
    NodeKind.ANNOTATION_MARKER: "annotationMarkerNode",
}

# Nodes whose automatic position may be replaced by a stored override.
OVERLAY_KINDS = frozenset({
    NodeKind.CONNECTION_PRICE_TABLE,
    NodeKind.NETWORK_EDGE_PRICE_TABLE,
    NodeKind.INTERNET_ACCESS_PRICE_TABLE,
    NodeKind.CLOUD,
})


@dataclass(frozen=True)
class NodeId:
    """Typed node identity: category plus the owning entity reference.

    ``scope`` disambiguates entities whose ids are only unique within a
    metro (services).
    """

    kind: NodeKind
    ref: str
    scope: str = ""

    def __str__(self) -> str:
        parts = [self.kind.value]
        if self.scope:
            parts.append(self.scope)
        parts.append(self.ref)
        return "-".join(parts)


@dataclass
class DiagramNode:
    id: NodeId
    x: float
    y: float
    width: float
    height: float
    parent: Optional[NodeId] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        return self.id.kind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "type": self.kind.render_type,
            "position": {"x": self.x, "y": self.y},
            "width": self.width,
            "height": self.height,
            "parentId": str(self.parent) if self.parent else None,
            "data": self.data,
        }


@dataclass(frozen=True)
class EdgeStyle:
    stroke: str
    stroke_width: float
    dash_array: Optional[str] = None
    double_line: bool = False
    inner_stroke: Optional[str] = None
    inner_stroke_width: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
            "strokeDasharray": self.dash_array,
            "doubleLine": self.double_line,
            "innerStroke": self.inner_stroke,
            "innerStrokeWidth": self.inner_stroke_width,
        }


@dataclass
class DiagramEdge:
    id: str
    source: NodeId
    target: NodeId
    style: EdgeStyle
    label_line1: str
    label_line2: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": str(self.source),
            "target": str(self.target),
            "style": self.style.to_dict(),
            "data": {
                "labelLine1": self.label_line1,
                "labelLine2": self.label_line2,
                **self.data,
            },
        }


@dataclass
class LayoutResult:
    nodes: List[DiagramNode] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[DiagramNode]:
        for node in self.nodes:
            if str(node.id) == node_id:
                return node
        return None

    def nodes_of_kind(self, kind: NodeKind) -> List[DiagramNode]:
        return [n for n in self.nodes if n.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


SERVICE_NODE_HEIGHTS: Dict[ServiceType, int] = {
    ServiceType.FABRIC_PORT: 72,
    ServiceType.NETWORK_EDGE: 80,
    ServiceType.INTERNET_ACCESS: 72,
    ServiceType.CLOUD_ROUTER: 64,
    ServiceType.COLOCATION: 64,
    ServiceType.NSP: 64,
    ServiceType.CROSS_CONNECT: 56,
}

# Edge-provider-facing services sit in the left column, devices in the right.
RIGHT_COLUMN_TYPES = frozenset({ServiceType.NETWORK_EDGE, ServiceType.CLOUD_ROUTER})


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry used by the layout engine (pixels)."""

    metro_header_height: int = 48
    metro_padding: int = 16
    min_metro_height: int = 120
    service_width: int = 220
    service_gap: int = 12
    redundant_network_edge_height: int = 112
    metros_per_row: int = 2
    metro_gap_x: int = 80
    metro_gap_y: int = 60
    overlay_gap: int = 40
    overlay_spacing: int = 24
    max_overlay_row_width: int = 1200
    price_table_width: int = 240
    price_table_header_height: int = 36
    price_table_row_height: int = 22
    cloud_width: int = 140
    cloud_height: int = 70
    cloud_offset_x: int = 40
    local_site_width: int = 160
    local_site_height: int = 80
    marker_size: int = 28
    service_heights: Dict[ServiceType, int] = field(
        default_factory=lambda: dict(SERVICE_NODE_HEIGHTS)
    )

    @property
    def single_column_width(self) -> int:
        return self.service_width + 2 * self.metro_padding

    @property
    def two_column_width(self) -> int:
        return 2 * self.service_width + 3 * self.metro_padding

    def price_table_height(self, rows: int) -> int:
        return self.price_table_header_height + rows * self.price_table_row_height


Position = Tuple[float, float]
