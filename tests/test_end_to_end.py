# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""End-to-end scenario: build a two-metro project, price it, lay it out, save and restore it."""

from metroplan import (
    build_diagram_layout,
    calculate_pricing_summary,
    classify_connection,
    parse_project_file,
    serialize_project,
)
from metroplan.connections.classifier import ConnectionKind, resolve_endpoint
from metroplan.topology.models import EndpointType, ServiceType

from factories import endpoint, make_connection, make_metro, make_project, make_service


def _scenario():
    return make_project(
        make_metro("DC", make_service("p1", ServiceType.FABRIC_PORT, mrc=1500)),
        make_metro("LD", make_service("cr1", ServiceType.CLOUD_ROUTER, mrc=450)),
        connections=[make_connection(
            "c1", endpoint("DC", EndpointType.PORT, "p1"),
            endpoint("LD", EndpointType.CLOUD_ROUTER, "cr1"), mrc=1500,
        )],
    )


def test_two_metro_project():
    project = _scenario()

    conn = project.connections[0]
    result = classify_connection(resolve_endpoint(conn.a_side), resolve_endpoint(conn.z_side))
    assert result.valid
    assert result.kind == ConnectionKind.VIRTUAL_CIRCUIT

    summary = calculate_pricing_summary(project.metros, project.connections)
    by_metro = {s.metro_code: s for s in summary.metro_subtotals}
    assert by_metro["DC"].mrc == 3000
    assert by_metro["LD"].mrc == 450
    assert summary.total_mrc == 3450
    assert summary.total_annual_cost == 41400

    layout = build_diagram_layout(project.metros, project.connections)
    dc = layout.get_node("metro-DC")
    ld = layout.get_node("metro-LD")
    assert dc.x + dc.width <= ld.x
    assert str(layout.edges[0].source) == "service-DC-p1"
    assert str(layout.edges[0].target) == "service-LD-cr1"

    restored = parse_project_file(serialize_project(project))
    assert restored.ok
    assert len(restored.project.metros) == 2
    assert len(restored.project.connections) == 1
    # pricing is re-fetched after import, so the restored summary is empty
    assert calculate_pricing_summary(restored.project.metros, restored.project.connections).total_mrc == 0
