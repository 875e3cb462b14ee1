# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
Connection classification.

Decides whether two endpoints may interconnect and, if so, whether the link is
a physical cross connect, a fabric virtual circuit, or a zero-cost diagram
link. Physical cabling is metro-local; fabric circuits are not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from metroplan.topology.graph import LOCAL_SITE, SERVICE_PROFILE, TopologyGraph
from metroplan.topology.models import (
    ConnectionEndpoint,
    EndpointType,
    ProjectConfig,
    ServiceType,
)

LOGGER = logging.getLogger(__name__)


class ConnectionKind(Enum):
    CROSS_CONNECT = "CROSS_CONNECT"
    VIRTUAL_CIRCUIT = "VIRTUAL_CIRCUIT"
    DIAGRAM_LINK = "DIAGRAM_LINK"


PHYSICAL_TYPES = frozenset({"COLOCATION", "NSP", "CROSS_CONNECT"})
FABRIC_TYPES = frozenset({"FABRIC_PORT", "NETWORK_EDGE", "CLOUD_ROUTER", "INTERNET_ACCESS"})

CROSS_METRO_REASON = "Cross Connects cannot span metros"

_FABRIC_ONLY_REASONS = {
    "NETWORK_EDGE": (
        "Network Edge devices connect via the fabric, not Cross Connect. "
        "Use a Fabric Port as an intermediary."
    ),
    "CLOUD_ROUTER": (
        "Cloud Router connects via the fabric, not Cross Connect. "
        "Use a Fabric Port as an intermediary."
    ),
}

# Endpoint tags that name a category different from the service type value.
_ENDPOINT_CATEGORIES: Dict[EndpointType, str] = {
    EndpointType.PORT: ServiceType.FABRIC_PORT.value,
    EndpointType.SERVICE_PROFILE: SERVICE_PROFILE,
    EndpointType.LOCAL_SITE: LOCAL_SITE,
}


@dataclass(frozen=True)
class Endpoint:
    """Classifier view of one side of a connection."""

    category: str
    metro_code: str = ""


@dataclass(frozen=True)
class ClassifyResult:
    """Outcome of classifying an endpoint pair.

    Valid results carry ``kind`` and ``bundled``; invalid ones carry ``reason``.
    """

    valid: bool
    kind: Optional[ConnectionKind] = None
    bundled: bool = False
    reason: Optional[str] = None

    @classmethod
    def ok(cls, kind: ConnectionKind, bundled: bool = False) -> "ClassifyResult":
        return cls(valid=True, kind=kind, bundled=bundled)

    @classmethod
    def invalid(cls, reason: str) -> "ClassifyResult":
        return cls(valid=False, reason=reason)

    def to_dict(self) -> Dict[str, object]:
        if self.valid:
            return {"valid": True, "kind": self.kind.value, "bundled": self.bundled}
        return {"valid": False, "reason": self.reason}


@dataclass(frozen=True)
class ConnectionIssue:
    connection_id: str
    reason: str


def endpoint_category_for_service(service_type: ServiceType) -> EndpointType:
    """Map a service type to the endpoint tag a connection uses for it."""
    if service_type == ServiceType.FABRIC_PORT:
        return EndpointType.PORT
    return EndpointType(service_type.value)


def classify_connection(source: Endpoint, target: Endpoint) -> ClassifyResult:
    """
    Classify a connection between two endpoints.

    Rules are evaluated in order and the first match wins.

    Args:
        source: Source endpoint (category + metro code)
        target: Target endpoint (category + metro code)

    Returns:
        ClassifyResult with kind and bundled flag, or an invalid result with
        a user-facing reason
    """
    a = source.category
    b = target.category
    same_metro = source.metro_code == target.metro_code

    if a == LOCAL_SITE or b == LOCAL_SITE:
        return ClassifyResult.ok(ConnectionKind.DIAGRAM_LINK)

    if a == SERVICE_PROFILE or b == SERVICE_PROFILE:
        return ClassifyResult.ok(ConnectionKind.VIRTUAL_CIRCUIT)

    if a in PHYSICAL_TYPES and b in PHYSICAL_TYPES:
        if not same_metro:
            return ClassifyResult.invalid(CROSS_METRO_REASON)
        return ClassifyResult.ok(ConnectionKind.CROSS_CONNECT)

    if a in FABRIC_TYPES and b in FABRIC_TYPES:
        return ClassifyResult.ok(ConnectionKind.VIRTUAL_CIRCUIT)

    if a in PHYSICAL_TYPES and b in FABRIC_TYPES:
        fabric = b
    elif b in PHYSICAL_TYPES and a in FABRIC_TYPES:
        fabric = a
    else:
        return ClassifyResult.ok(ConnectionKind.VIRTUAL_CIRCUIT)

    if fabric in _FABRIC_ONLY_REASONS:
        return ClassifyResult.invalid(_FABRIC_ONLY_REASONS[fabric])

    if not same_metro:
        return ClassifyResult.invalid(CROSS_METRO_REASON)
    return ClassifyResult.ok(ConnectionKind.CROSS_CONNECT, bundled=True)


def resolve_endpoint(endpoint: ConnectionEndpoint,
                     topology: Optional[TopologyGraph] = None) -> Endpoint:
    """
    Resolve a stored connection endpoint to a classifier endpoint.

    When the endpoint references a service present in ``topology``, the
    service's actual type is used (a PORT-tagged endpoint may point at an
    Internet Access service). Otherwise the endpoint tag decides.
    """
    if topology is not None:
        key = topology.endpoint_key(endpoint)
        if key is not None and key in topology:
            info = topology.get_node_info(key)
            return Endpoint(category=info["category"], metro_code=endpoint.metro_code)

    category = _ENDPOINT_CATEGORIES.get(endpoint.type, endpoint.type.value)
    return Endpoint(category=category, metro_code=endpoint.metro_code)


def validate_connections(project: ProjectConfig) -> List[ConnectionIssue]:
    """
    Classify every connection of a project and collect the problems.

    Dangling service references and invalid pairings are both reported; the
    function never raises.
    """
    topology = TopologyGraph.from_project(project)
    issues: List[ConnectionIssue] = []

    for connection_id, endpoint in topology.dangling:
        issues.append(ConnectionIssue(
            connection_id=connection_id,
            reason=(
                f"Endpoint {endpoint.service_id or '?'} in metro "
                f"{endpoint.metro_code or '?'} does not exist"
            ),
        ))

    for connection in project.connections:
        result = classify_connection(
            resolve_endpoint(connection.a_side, topology),
            resolve_endpoint(connection.z_side, topology),
        )
        if not result.valid:
            issues.append(ConnectionIssue(connection_id=connection.id, reason=result.reason))

    LOGGER.debug(
        "Validated %d connection(s), %d issue(s)", len(project.connections), len(issues)
    )
    return issues
