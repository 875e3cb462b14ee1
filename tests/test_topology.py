# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the topology model and TopologyGraph class."""

import pytest

from metroplan.topology.defaults import SERVICE_TYPE_LABELS, default_config
from metroplan.topology.graph import TopologyGraph, cloud_key, local_site_key, service_key
from metroplan.topology.models import (
    ConnectionType,
    EndpointType,
    FabricPortConfig,
    LocalSite,
    MetroSelection,
    NetworkEdgeConfig,
    PricingResult,
    ProjectConfig,
    ServiceSelection,
    ServiceType,
)

from factories import endpoint, make_connection, make_metro, make_project, make_service


class TestModels:
    """Test cases for entity construction and persistence."""

    def test_every_service_type_has_default_and_label(self):
        for service_type in ServiceType:
            config = default_config(service_type)
            ServiceSelection(id="s", type=service_type, config=config)
            assert SERVICE_TYPE_LABELS[service_type]

    def test_config_must_match_service_type(self):
        with pytest.raises(ValueError):
            ServiceSelection(id="s", type=ServiceType.NETWORK_EDGE, config=FabricPortConfig())

    def test_duplicate_service_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate service id"):
            make_metro(
                "DC",
                make_service("p1", ServiceType.FABRIC_PORT),
                make_service("p1", ServiceType.COLOCATION),
            )

    def test_negative_pricing_rejected(self):
        with pytest.raises(ValueError):
            PricingResult(mrc=-1)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_pricing_rejected(self, value):
        with pytest.raises(ValueError):
            PricingResult(mrc=value)
        with pytest.raises(ValueError):
            PricingResult(mrc=0, nrc=value)

    def test_unknown_service_type(self):
        with pytest.raises(ValueError, match="Unknown service type"):
            ServiceSelection.from_dict({"id": "s", "type": "BOGUS", "config": {}})

    def test_metro_requires_code(self):
        with pytest.raises(ValueError):
            MetroSelection.from_dict({"metroName": "Nowhere"})

    def test_project_dict_round_trip(self):
        project = make_project(
            make_metro(
                "DC",
                make_service("p1", ServiceType.FABRIC_PORT, mrc=100, speed="100G"),
                make_service("ne1", ServiceType.NETWORK_EDGE, redundant=True),
            ),
            connections=[make_connection(
                "c1", endpoint("DC", EndpointType.PORT, "p1"),
                endpoint("DC", EndpointType.NETWORK_EDGE, "ne1"),
                circuit=ConnectionType.IP_VC,
            )],
            local_sites=[LocalSite(id="hq", name="HQ")],
        )
        restored = ProjectConfig.from_dict(project.to_dict())
        assert restored == project

    def test_persisted_keys_are_camel_case(self):
        service = make_service("ne1", ServiceType.NETWORK_EDGE, device_type_code="C8000V")
        data = service.to_dict()
        assert data["config"]["deviceTypeCode"] == "C8000V"
        assert "priceTable" in data["config"]
        assert isinstance(ServiceSelection.from_dict(data).config, NetworkEdgeConfig)

    def test_get_lookups(self):
        project = make_project(make_metro("DC", make_service("p1", ServiceType.FABRIC_PORT)))
        assert project.get_metro("DC").get_service("p1").id == "p1"
        assert project.get_metro("NY") is None
        assert project.get_metro("DC").get_service("zz") is None


class TestTopologyGraph:
    """Test cases for TopologyGraph class."""

    def test_create_empty_graph(self):
        topology = TopologyGraph()
        assert len(topology) == 0
        assert topology.get_dangling_connections() == []

    def test_from_project(self):
        project = make_project(
            make_metro("DC", make_service("p1", ServiceType.FABRIC_PORT)),
            make_metro("LD", make_service("cr1", ServiceType.CLOUD_ROUTER)),
            connections=[
                make_connection("c1", endpoint("DC", EndpointType.PORT, "p1"),
                                endpoint("LD", EndpointType.CLOUD_ROUTER, "cr1")),
                make_connection("c2", endpoint("DC", EndpointType.PORT, "p1"),
                                endpoint("", EndpointType.SERVICE_PROFILE, "x", "AWS Direct Connect")),
            ],
        )
        topology = TopologyGraph.from_project(project)

        assert len(topology) == 3
        assert service_key("DC", "p1") in topology
        assert cloud_key("AWS Direct Connect") in topology
        assert topology.get_node_info(service_key("LD", "cr1"))["category"] == "CLOUD_ROUTER"
        assert topology.get_connections_for_service("DC", "p1") == ["c1", "c2"]

    def test_same_service_id_in_two_metros(self):
        topology = TopologyGraph()
        topology.add_service("DC", "p1", ServiceType.FABRIC_PORT)
        topology.add_service("NY", "p1", ServiceType.FABRIC_PORT)
        assert len(topology) == 2

    def test_dangling_endpoint_not_added(self):
        topology = TopologyGraph()
        topology.add_service("DC", "p1", ServiceType.FABRIC_PORT)
        added = topology.add_connection(
            "c1", endpoint("DC", EndpointType.PORT, "p1"), endpoint("DC", EndpointType.PORT, "gone"),
        )
        assert added is False
        assert topology.get_dangling_connections() == ["c1"]
        assert topology.get_connections_for_service("DC", "p1") == []

    def test_local_site_endpoint(self):
        topology = TopologyGraph()
        topology.add_service("DC", "p1", ServiceType.FABRIC_PORT)
        topology.add_local_site("hq")
        assert topology.add_connection(
            "c1", endpoint("", EndpointType.LOCAL_SITE, "hq"), endpoint("DC", EndpointType.PORT, "p1"),
        )
        assert local_site_key("hq") in topology

    def test_isolated_services_and_groups(self):
        project = make_project(
            make_metro(
                "DC",
                make_service("p1", ServiceType.FABRIC_PORT),
                make_service("p2", ServiceType.FABRIC_PORT),
                make_service("alone", ServiceType.COLOCATION),
            ),
            connections=[make_connection("c1", endpoint("DC", EndpointType.PORT, "p1"),
                                         endpoint("DC", EndpointType.PORT, "p2"))],
        )
        topology = TopologyGraph.from_project(project)
        assert topology.get_isolated_services() == [service_key("DC", "alone")]
        groups = topology.connected_groups()
        assert len(groups) == 2
        assert groups[0] == [service_key("DC", "p1"), service_key("DC", "p2")]

    def test_get_node_info_missing(self):
        with pytest.raises(ValueError):
            TopologyGraph().get_node_info(service_key("DC", "p1"))
