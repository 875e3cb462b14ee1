# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
Diagram layout engine.

Turns metros, services, connections and free-form decorations into positioned
and sized diagram nodes plus styled edges. The engine is a total function:
missing inputs default to empty collections and unknown data degrades to
zero-sized or absent visuals.

Pipeline:
  1. Split each metro's services into a left and right column.
  2. Size each metro container from its column heights.
  3. Arrange metros in a grid sized by per-column / per-row maxima.
  4. Place services inside their metro.
  5. Pack price-table overlays in a wrapping strip below the grid.
  6. Add one cloud node per distinct cloud provider, stacked in a column
     right of the grid and overlays.
  7. Copy text boxes, local sites and annotation markers verbatim.
  8. Style one edge per connection.
  9. Apply stored position overrides to overlay nodes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from metroplan.pricing.calculator import format_bandwidth, format_currency
from metroplan.topology.models import (
    AnnotationMarker,
    ConnectionEndpoint,
    ConnectionType,
    EndpointType,
    LocalSite,
    MetroSelection,
    ServiceSelection,
    ServiceType,
    TextBox,
    VirtualConnection,
)

from .types import (
    RIGHT_COLUMN_TYPES,
    DiagramEdge,
    DiagramNode,
    EdgeStyle,
    LayoutConfig,
    LayoutResult,
    NodeId,
    NodeKind,
    Position,
)

LOGGER = logging.getLogger(__name__)

COLOR_SAME_METRO = "#33A85C"
COLOR_CROSS_METRO = "#000000"
COLOR_LOCAL_SITE = "#9CA3AF"
COLOR_GAP = "#FFFFFF"

LAYER3_DASH = "8 4"
EDGE_WIDTH = 2.0
DOUBLE_LINE_OUTER_WIDTH = 6.0
DOUBLE_LINE_INNER_WIDTH = 2.0

_WHITESPACE = re.compile(r"\s+")


@dataclass
class _MetroBox:
    metro: MetroSelection
    left: List[ServiceSelection]
    right: List[ServiceSelection]
    width: float = 0.0
    height: float = 0.0
    x: float = 0.0
    y: float = 0.0
    service_offsets: Dict[str, Position] = field(default_factory=dict)

    @property
    def node_id(self) -> NodeId:
        return NodeId(NodeKind.METRO, self.metro.metro_code)


def service_node_height(service: ServiceSelection, config: LayoutConfig) -> float:
    """Node height for a service; redundant Network Edge renders a taller card."""
    if service.type == ServiceType.NETWORK_EDGE and getattr(service.config, "redundant", False):
        return config.redundant_network_edge_height
    return config.service_heights.get(service.type, 0)


def column_height(services: Iterable[ServiceSelection], config: LayoutConfig) -> float:
    heights = [service_node_height(s, config) for s in services]
    if not heights:
        return 0
    return sum(heights) + config.service_gap * (len(heights) - 1)


def cloud_provider(endpoint: ConnectionEndpoint) -> str:
    """Provider name of a cloud endpoint; the service id when no profile name is set."""
    return (endpoint.service_profile_name or "").strip() or (endpoint.service_id or "").strip()


def cloud_node_id(provider: str) -> NodeId:
    return NodeId(NodeKind.CLOUD, _WHITESPACE.sub("-", provider.strip()))


def endpoint_node_id(endpoint: ConnectionEndpoint) -> NodeId:
    if endpoint.type == EndpointType.SERVICE_PROFILE:
        return cloud_node_id(cloud_provider(endpoint))
    if endpoint.type == EndpointType.LOCAL_SITE:
        return NodeId(NodeKind.LOCAL_SITE, endpoint.service_id)
    return NodeId(NodeKind.SERVICE, endpoint.service_id, endpoint.metro_code)


def _size_metro(metro: MetroSelection, config: LayoutConfig) -> _MetroBox:
    left = [s for s in metro.services if s.type not in RIGHT_COLUMN_TYPES]
    right = [s for s in metro.services if s.type in RIGHT_COLUMN_TYPES]
    box = _MetroBox(metro=metro, left=left, right=right)

    tallest = max(column_height(left, config), column_height(right, config))
    box.width = config.two_column_width if left and right else config.single_column_width
    box.height = max(
        config.min_metro_height,
        config.metro_header_height + tallest + config.metro_padding,
    )
    return box


def _arrange_grid(boxes: List[_MetroBox], config: LayoutConfig) -> Tuple[float, float]:
    """Position metro boxes on the grid; returns total (width, height)."""
    per_row = max(1, config.metros_per_row)
    col_widths: Dict[int, float] = {}
    row_heights: Dict[int, float] = {}
    for index, box in enumerate(boxes):
        col, row = index % per_row, index // per_row
        col_widths[col] = max(col_widths.get(col, 0), box.width)
        row_heights[row] = max(row_heights.get(row, 0), box.height)

    x_offsets: Dict[int, float] = {}
    x = 0.0
    for col in sorted(col_widths):
        x_offsets[col] = x
        x += col_widths[col] + config.metro_gap_x

    y_offsets: Dict[int, float] = {}
    y = 0.0
    for row in sorted(row_heights):
        y_offsets[row] = y
        y += row_heights[row] + config.metro_gap_y

    for index, box in enumerate(boxes):
        box.x = x_offsets[index % per_row]
        box.y = y_offsets[index // per_row]

    if not boxes:
        return 0.0, 0.0
    return x - config.metro_gap_x, y - config.metro_gap_y


def _place_services(box: _MetroBox, config: LayoutConfig, pricing_visible: bool) -> List[DiagramNode]:
    nodes: List[DiagramNode] = []
    both = bool(box.left and box.right)
    columns = [
        (box.left, config.metro_padding),
        (box.right, 2 * config.metro_padding + config.service_width if both else config.metro_padding),
    ]
    for services, x in columns:
        y = float(config.metro_header_height)
        for service in services:
            height = service_node_height(service, config)
            box.service_offsets[service.id] = (x, y)
            nodes.append(DiagramNode(
                id=NodeId(NodeKind.SERVICE, service.id, box.metro.metro_code),
                x=x,
                y=y,
                width=config.service_width,
                height=height,
                parent=box.node_id,
                data={
                    "serviceId": service.id,
                    "serviceType": service.type.value,
                    "metroCode": box.metro.metro_code,
                    "config": service.config.to_dict(),
                    "pricing": service.pricing.to_dict() if service.pricing else None,
                    "showPricing": pricing_visible,
                },
            ))
            y += height + config.service_gap
    return nodes


def _overlay_requests(metros: List[MetroSelection],
                      connections: List[VirtualConnection]) -> List[Tuple[NodeId, int, Dict]]:
    """Collect (node id, row count, data) for every visible price table."""
    requests = []
    for connection in connections:
        if connection.show_price_table and connection.price_table:
            requests.append((
                NodeId(NodeKind.CONNECTION_PRICE_TABLE, connection.id),
                len(connection.price_table),
                {
                    "connectionId": connection.id,
                    "selectedBandwidthMbps": connection.bandwidth_mbps,
                    "entries": [e.to_dict() for e in connection.price_table],
                },
            ))
    for metro in metros:
        for service in metro.services:
            table = getattr(service.config, "price_table", None)
            if not (getattr(service.config, "show_price_table", False) and table):
                continue
            if service.type == ServiceType.NETWORK_EDGE:
                kind = NodeKind.NETWORK_EDGE_PRICE_TABLE
            elif service.type == ServiceType.INTERNET_ACCESS:
                kind = NodeKind.INTERNET_ACCESS_PRICE_TABLE
            else:
                continue
            requests.append((
                NodeId(kind, service.id, metro.metro_code),
                len(table),
                {
                    "serviceId": service.id,
                    "metroCode": metro.metro_code,
                    "entries": [e.to_dict() for e in table],
                },
            ))
    return requests


def _pack_overlays(requests: List[Tuple[NodeId, int, Dict]], top: float,
                   config: LayoutConfig) -> List[DiagramNode]:
    """Pack overlays left to right, wrapping rows at the maximum row width."""
    nodes: List[DiagramNode] = []
    x, y = 0.0, top
    row_height = 0.0
    for node_id, rows, data in requests:
        width = config.price_table_width
        height = config.price_table_height(rows)
        if x > 0 and x + width > config.max_overlay_row_width:
            x = 0.0
            y += row_height + config.overlay_spacing
            row_height = 0.0
        nodes.append(DiagramNode(id=node_id, x=x, y=y, width=width, height=height, data=data))
        x += width + config.overlay_spacing
        row_height = max(row_height, height)
    return nodes


def _free_slot(desired: float, height: float, taken: List[Tuple[float, float]],
               spacing: float) -> float:
    """First top >= desired whose span keeps ``spacing`` clear of every taken span."""
    y = desired
    for top, bottom in sorted(taken):
        if top < y + height + spacing and y < bottom + spacing:
            y = bottom + spacing
    return y


def _cloud_nodes(connections: List[VirtualConnection], boxes: Dict[str, _MetroBox],
                 right_edge: float, config: LayoutConfig) -> List[DiagramNode]:
    """
    One node per distinct cloud provider, in a column right of all other nodes.

    Each cloud is level with the service on the other side of the first
    connection reaching it, moved down where needed so clouds never overlap.
    Unanchored clouds start at the top of the column.
    """
    nodes: Dict[NodeId, DiagramNode] = {}
    taken: List[Tuple[float, float]] = []
    x = right_edge + config.cloud_offset_x
    for connection in connections:
        pairs = ((connection.z_side, connection.a_side), (connection.a_side, connection.z_side))
        for cloud_side, anchor in pairs:
            if cloud_side.type != EndpointType.SERVICE_PROFILE:
                continue
            provider = cloud_provider(cloud_side)
            if not provider:
                continue
            node_id = cloud_node_id(provider)
            if node_id in nodes:
                continue

            box = boxes.get(anchor.metro_code)
            offset = box.service_offsets.get(anchor.service_id) if box else None
            desired = box.y + offset[1] if box is not None and offset is not None else 0.0
            y = _free_slot(desired, config.cloud_height, taken, config.overlay_spacing)
            taken.append((y, y + config.cloud_height))

            nodes[node_id] = DiagramNode(
                id=node_id,
                x=x,
                y=y,
                width=config.cloud_width,
                height=config.cloud_height,
                data={"provider": provider},
            )
    return list(nodes.values())


def _decoration_nodes(text_boxes: List[TextBox], local_sites: List[LocalSite],
                      markers: List[AnnotationMarker], config: LayoutConfig) -> List[DiagramNode]:
    nodes = [
        DiagramNode(
            id=NodeId(NodeKind.TEXT_BOX, tb.id),
            x=tb.x, y=tb.y, width=tb.width, height=tb.height,
            data={"text": tb.text},
        )
        for tb in text_boxes
    ]
    nodes.extend(
        DiagramNode(
            id=NodeId(NodeKind.LOCAL_SITE, site.id),
            x=site.x, y=site.y,
            width=config.local_site_width, height=config.local_site_height,
            data={"name": site.name, "description": site.description, "icon": site.icon},
        )
        for site in local_sites
    )
    nodes.extend(
        DiagramNode(
            id=NodeId(NodeKind.ANNOTATION_MARKER, marker.id),
            x=marker.x, y=marker.y,
            width=config.marker_size, height=config.marker_size,
            data={"number": marker.number, "color": marker.color, "text": marker.text},
        )
        for marker in markers
    )
    return nodes


def edge_style(connection: VirtualConnection) -> EdgeStyle:
    """Stroke pattern, color and doubling derived from connection attributes."""
    a_side, z_side = connection.a_side, connection.z_side
    if EndpointType.LOCAL_SITE in (a_side.type, z_side.type):
        color = COLOR_LOCAL_SITE
    elif a_side.metro_code == z_side.metro_code:
        color = COLOR_SAME_METRO
    else:
        color = COLOR_CROSS_METRO

    dash = LAYER3_DASH if connection.type == ConnectionType.IP_VC else None
    if connection.redundant:
        return EdgeStyle(
            stroke=color,
            stroke_width=DOUBLE_LINE_OUTER_WIDTH,
            dash_array=dash,
            double_line=True,
            inner_stroke=COLOR_GAP,
            inner_stroke_width=DOUBLE_LINE_INNER_WIDTH,
        )
    return EdgeStyle(stroke=color, stroke_width=EDGE_WIDTH, dash_array=dash)


def edge_labels(connection: VirtualConnection, pricing_visible: bool) -> Tuple[str, Optional[str]]:
    line1 = format_bandwidth(connection.bandwidth_mbps, short=True)
    if connection.redundant:
        line1 = f"{line1} ×2"
    line2 = None
    if pricing_visible and connection.pricing is not None:
        line2 = f"{format_currency(connection.pricing.mrc, connection.pricing.currency)}/mo"
    return line1, line2


def _edges(connections: List[VirtualConnection], pricing_visible: bool) -> List[DiagramEdge]:
    edges = []
    for connection in connections:
        line1, line2 = edge_labels(connection, pricing_visible)
        edges.append(DiagramEdge(
            id=f"edge-{connection.id}",
            source=endpoint_node_id(connection.a_side),
            target=endpoint_node_id(connection.z_side),
            style=edge_style(connection),
            label_line1=line1,
            label_line2=line2,
            data={
                "connectionId": connection.id,
                "connectionType": connection.type.value,
                "redundant": connection.redundant,
                "isSameMetro": connection.a_side.metro_code == connection.z_side.metro_code,
                "showPricing": pricing_visible,
            },
        ))
    return edges


def _apply_overrides(nodes: List[DiagramNode], overrides: Mapping[str, Position]) -> None:
    for node in nodes:
        if not node.kind.is_overlay:
            continue
        position = overrides.get(str(node.id))
        if position is not None:
            node.x, node.y = float(position[0]), float(position[1])


def build_diagram_layout(
    metros: Optional[List[MetroSelection]],
    connections: Optional[List[VirtualConnection]],
    pricing_visible: bool = False,
    text_boxes: Optional[List[TextBox]] = None,
    local_sites: Optional[List[LocalSite]] = None,
    annotation_markers: Optional[List[AnnotationMarker]] = None,
    position_overrides: Optional[Mapping[str, Position]] = None,
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """
    Lay out a project diagram.

    Service nodes are positioned relative to their metro container (their
    ``parent``); every other node is absolute.

    Args:
        metros: Metros with their services
        connections: Virtual connections
        pricing_visible: Add a price label line to edges with resolved pricing
        text_boxes: Free-form text annotations
        local_sites: Customer local sites
        annotation_markers: Numbered markers
        position_overrides: Node id -> (x, y) for manually moved overlay nodes
        config: Layout geometry

    Returns:
        LayoutResult with nodes (metros first, then their services) and edges
    """
    config = config or LayoutConfig()
    metros = list(metros or [])
    connections = list(connections or [])

    boxes = [_size_metro(metro, config) for metro in metros]
    grid_width, grid_height = _arrange_grid(boxes, config)

    nodes: List[DiagramNode] = []
    for box in boxes:
        nodes.append(DiagramNode(
            id=box.node_id,
            x=box.x,
            y=box.y,
            width=box.width,
            height=box.height,
            data={
                "metroCode": box.metro.metro_code,
                "metroName": box.metro.metro_name,
                "region": box.metro.region,
            },
        ))
        nodes.extend(_place_services(box, config, pricing_visible))

    overlay_top = grid_height + config.overlay_gap if boxes else 0.0
    overlays = _pack_overlays(_overlay_requests(metros, connections), overlay_top, config)
    nodes.extend(overlays)

    boxes_by_code: Dict[str, _MetroBox] = {}
    for box in boxes:
        boxes_by_code.setdefault(box.metro.metro_code, box)
    right_edge = max([grid_width] + [n.x + n.width for n in overlays])
    nodes.extend(_cloud_nodes(connections, boxes_by_code, right_edge, config))

    nodes.extend(_decoration_nodes(
        list(text_boxes or []), list(local_sites or []), list(annotation_markers or []), config
    ))

    edges = _edges(connections, pricing_visible)

    if position_overrides:
        _apply_overrides(nodes, position_overrides)

    LOGGER.debug("Laid out %d node(s) and %d edge(s)", len(nodes), len(edges))
    return LayoutResult(nodes=nodes, edges=edges)
