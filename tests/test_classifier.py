# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for connection classification."""

import pytest

from metroplan.connections.classifier import (
    CROSS_METRO_REASON,
    ConnectionKind,
    Endpoint,
    classify_connection,
    endpoint_category_for_service,
    resolve_endpoint,
    validate_connections,
)
from metroplan.topology.graph import TopologyGraph
from metroplan.topology.models import EndpointType, ServiceType

from factories import endpoint, make_connection, make_metro, make_project, make_service


ALL_CATEGORIES = [t.value for t in ServiceType] + ["LOCAL_SITE", "SERVICE_PROFILE"]


class TestClassifyConnection:
    """Rule-by-rule checks for classify_connection."""

    @pytest.mark.parametrize("other", ALL_CATEGORIES)
    def test_local_site_is_always_diagram_link(self, other):
        for source, target in [
            (Endpoint("LOCAL_SITE"), Endpoint(other, "DC")),
            (Endpoint(other, "DC"), Endpoint("LOCAL_SITE")),
        ]:
            result = classify_connection(source, target)
            assert result.valid
            assert result.kind == ConnectionKind.DIAGRAM_LINK
            assert result.bundled is False

    def test_cloud_profile_is_virtual_circuit(self):
        result = classify_connection(Endpoint("COLOCATION", "DC"), Endpoint("SERVICE_PROFILE", "LD"))
        assert result.valid
        assert result.kind == ConnectionKind.VIRTUAL_CIRCUIT

    def test_physical_pair_same_metro_is_cross_connect(self):
        result = classify_connection(Endpoint("COLOCATION", "DC"), Endpoint("NSP", "DC"))
        assert result.valid
        assert result.kind == ConnectionKind.CROSS_CONNECT
        assert result.bundled is False

    def test_physical_pair_cross_metro_is_invalid(self):
        result = classify_connection(Endpoint("COLOCATION", "DC"), Endpoint("CROSS_CONNECT", "NY"))
        assert not result.valid
        assert result.reason == CROSS_METRO_REASON

    def test_fabric_pair_is_virtual_circuit_across_metros(self):
        result = classify_connection(Endpoint("FABRIC_PORT", "DC"), Endpoint("CLOUD_ROUTER", "LD"))
        assert result.valid
        assert result.kind == ConnectionKind.VIRTUAL_CIRCUIT
        assert result.bundled is False

    @pytest.mark.parametrize("device", ["NETWORK_EDGE", "CLOUD_ROUTER"])
    def test_physical_to_fabric_only_device_is_invalid(self, device):
        result = classify_connection(Endpoint("COLOCATION", "DC"), Endpoint(device, "DC"))
        assert not result.valid
        assert "Fabric Port" in result.reason

        reversed_result = classify_connection(Endpoint(device, "DC"), Endpoint("NSP", "DC"))
        assert not reversed_result.valid

    @pytest.mark.parametrize("fabric", ["FABRIC_PORT", "INTERNET_ACCESS"])
    def test_port_to_physical_same_metro_is_bundled_cross_connect(self, fabric):
        result = classify_connection(Endpoint(fabric, "DC"), Endpoint("COLOCATION", "DC"))
        assert result.valid
        assert result.kind == ConnectionKind.CROSS_CONNECT
        assert result.bundled is True

    def test_port_to_physical_cross_metro_is_invalid(self):
        result = classify_connection(Endpoint("FABRIC_PORT", "DC"), Endpoint("COLOCATION", "NY"))
        assert not result.valid
        assert result.reason == CROSS_METRO_REASON

    def test_unknown_categories_fall_back_to_virtual_circuit(self):
        result = classify_connection(Endpoint("SOMETHING", "DC"), Endpoint("ELSE", "NY"))
        assert result.valid
        assert result.kind == ConnectionKind.VIRTUAL_CIRCUIT

    def test_to_dict_shapes(self):
        ok = classify_connection(Endpoint("FABRIC_PORT", "DC"), Endpoint("COLOCATION", "DC"))
        assert ok.to_dict() == {"valid": True, "kind": "CROSS_CONNECT", "bundled": True}
        bad = classify_connection(Endpoint("NSP", "DC"), Endpoint("NSP", "SV"))
        assert bad.to_dict() == {"valid": False, "reason": CROSS_METRO_REASON}


class TestEndpointResolution:

    def test_endpoint_category_for_service(self):
        assert endpoint_category_for_service(ServiceType.FABRIC_PORT) == EndpointType.PORT
        for service_type in ServiceType:
            # every service type has an endpoint tag
            assert isinstance(endpoint_category_for_service(service_type), EndpointType)

    def test_resolve_uses_referenced_service_type(self):
        project = make_project(make_metro("DC", make_service("ia1", ServiceType.INTERNET_ACCESS)))
        topology = TopologyGraph.from_project(project)
        resolved = resolve_endpoint(endpoint("DC", EndpointType.PORT, "ia1"), topology)
        assert resolved == Endpoint("INTERNET_ACCESS", "DC")

    def test_resolve_falls_back_to_endpoint_tag(self):
        resolved = resolve_endpoint(endpoint("DC", EndpointType.PORT, "missing"))
        assert resolved == Endpoint("FABRIC_PORT", "DC")
        cloud = resolve_endpoint(endpoint("DC", EndpointType.SERVICE_PROFILE, "aws", "AWS"))
        assert cloud.category == "SERVICE_PROFILE"


class TestValidateConnections:

    def test_reports_invalid_pairing_and_dangling_reference(self):
        project = make_project(
            make_metro(
                "DC",
                make_service("colo", ServiceType.COLOCATION),
                make_service("ne", ServiceType.NETWORK_EDGE),
                make_service("p1", ServiceType.FABRIC_PORT),
            ),
            connections=[
                make_connection("bad", endpoint("DC", EndpointType.COLOCATION, "colo"),
                                endpoint("DC", EndpointType.NETWORK_EDGE, "ne")),
                make_connection("good", endpoint("DC", EndpointType.PORT, "p1"),
                                endpoint("DC", EndpointType.COLOCATION, "colo")),
                make_connection("dangling", endpoint("DC", EndpointType.PORT, "p1"),
                                endpoint("NY", EndpointType.PORT, "ghost")),
            ],
        )
        issues = validate_connections(project)
        ids = [issue.connection_id for issue in issues]
        assert "bad" in ids
        assert "dangling" in ids
        assert "good" not in ids

    def test_empty_project_has_no_issues(self):
        assert validate_connections(make_project()) == []
