# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
Topology graph representation using NetworkX.

This module provides the TopologyGraph class that represents a project as an
undirected multigraph with service, local-site and cloud-profile nodes joined
by connection edges.
"""

from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

from .models import ConnectionEndpoint, EndpointType, ProjectConfig, ServiceType


NodeKey = Tuple[str, str, str]

LOCAL_SITE = "LOCAL_SITE"
SERVICE_PROFILE = "SERVICE_PROFILE"


def service_key(metro_code: str, service_id: str) -> NodeKey:
    return ("service", metro_code, service_id)


def local_site_key(site_id: str) -> NodeKey:
    return ("localsite", "", site_id)


def cloud_key(profile_name: str) -> NodeKey:
    return ("cloud", "", profile_name)


class TopologyGraph:
    """
    Project topology as a NetworkX multigraph.

    Nodes are keyed by ``(kind, metro_code, id)`` tuples and carry:
    - category: service type value, 'LOCAL_SITE' or 'SERVICE_PROFILE'
    - metro_code: owning metro ('' for metro-agnostic nodes)

    Edges are keyed by connection id and carry the connection's bandwidth,
    redundancy and circuit type. Connections whose endpoints do not exist are
    recorded as dangling instead of being added.
    """

    def __init__(self):
        """Initialize empty topology graph."""
        self.graph = nx.MultiGraph()
        self.dangling: List[Tuple[str, ConnectionEndpoint]] = []

    @classmethod
    def from_project(cls, project: ProjectConfig) -> "TopologyGraph":
        """Build a graph from a project snapshot."""
        topology = cls()
        for metro in project.metros:
            for service in metro.services:
                topology.add_service(metro.metro_code, service.id, service.type)
        for site in project.local_sites:
            topology.add_local_site(site.id)
        for connection in project.connections:
            topology.add_connection(
                connection.id,
                connection.a_side,
                connection.z_side,
                bandwidth_mbps=connection.bandwidth_mbps,
                redundant=connection.redundant,
                circuit_type=connection.type.value,
            )
        return topology

    def add_service(self, metro_code: str, service_id: str, service_type: ServiceType) -> None:
        self.graph.add_node(
            service_key(metro_code, service_id),
            category=service_type.value,
            metro_code=metro_code,
        )

    def add_local_site(self, site_id: str) -> None:
        self.graph.add_node(local_site_key(site_id), category=LOCAL_SITE, metro_code="")

    def endpoint_key(self, endpoint: ConnectionEndpoint) -> Optional[NodeKey]:
        """
        Resolve a connection endpoint to a graph node key.

        Cloud profile endpoints always resolve (a node is created on demand
        when the connection is added). Service and local site endpoints
        resolve only when the referenced node exists.

        Args:
            endpoint: Connection endpoint to resolve

        Returns:
            Node key, or None for a dangling reference
        """
        if endpoint.type == EndpointType.SERVICE_PROFILE:
            return cloud_key(endpoint.service_profile_name or endpoint.service_id)
        if endpoint.type == EndpointType.LOCAL_SITE:
            key = local_site_key(endpoint.service_id)
        else:
            key = service_key(endpoint.metro_code, endpoint.service_id)
        return key if key in self.graph else None

    def add_connection(self, connection_id: str, a_side: ConnectionEndpoint,
                       z_side: ConnectionEndpoint, bandwidth_mbps: int = 1000,
                       redundant: bool = False, circuit_type: str = "EVPL_VC") -> bool:
        """
        Add a connection between two endpoints.

        Args:
            connection_id: Unique connection identifier (edge key)
            a_side: A-side endpoint
            z_side: Z-side endpoint
            bandwidth_mbps: Connection bandwidth in Mbps
            redundant: Whether the connection is a redundant pair
            circuit_type: Circuit type tag

        Returns:
            True if the edge was added, False if an endpoint is dangling
        """
        keys = []
        for endpoint in (a_side, z_side):
            key = self.endpoint_key(endpoint)
            if key is None:
                self.dangling.append((connection_id, endpoint))
                continue
            if key[0] == "cloud" and key not in self.graph:
                self.graph.add_node(key, category=SERVICE_PROFILE, metro_code="")
            keys.append(key)

        if len(keys) != 2:
            return False

        self.graph.add_edge(
            keys[0], keys[1], key=connection_id,
            bandwidth_mbps=bandwidth_mbps,
            redundant=redundant,
            circuit_type=circuit_type,
        )
        return True

    def get_node_info(self, key: NodeKey) -> Dict[str, Any]:
        """Get node information."""
        if key not in self.graph:
            raise ValueError(f"Node {key} not found")
        return dict(self.graph.nodes[key])

    def get_connections_for_service(self, metro_code: str, service_id: str) -> List[str]:
        """Get ids of all connections touching a service."""
        key = service_key(metro_code, service_id)
        if key not in self.graph:
            return []
        return sorted(k for _, _, k in self.graph.edges(key, keys=True))

    def get_dangling_connections(self) -> List[str]:
        """Get ids of connections with at least one unresolved endpoint."""
        seen: List[str] = []
        for connection_id, _ in self.dangling:
            if connection_id not in seen:
                seen.append(connection_id)
        return seen

    def get_isolated_services(self) -> List[NodeKey]:
        """Services with no connections."""
        return [
            node for node in nx.isolates(self.graph)
            if node[0] == "service"
        ]

    def connected_groups(self) -> List[List[NodeKey]]:
        """Connected components, each sorted, largest first."""
        groups = [sorted(c) for c in nx.connected_components(self.graph)]
        groups.sort(key=lambda g: (-len(g), g))
        return groups

    def __len__(self) -> int:
        """Return number of nodes in the topology."""
        return self.graph.number_of_nodes()

    def __contains__(self, key: NodeKey) -> bool:
        return key in self.graph
