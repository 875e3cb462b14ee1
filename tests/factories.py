# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Builders for topology entities used across the test suite."""

from typing import Optional

from metroplan.topology.defaults import default_config
from metroplan.topology.models import (
    ConnectionEndpoint,
    ConnectionType,
    EndpointType,
    MetroSelection,
    PricingResult,
    ProjectConfig,
    ServiceSelection,
    ServiceType,
    VirtualConnection,
)


def make_service(service_id: str, service_type: ServiceType,
                 mrc: Optional[float] = None, **config_overrides) -> ServiceSelection:
    config = default_config(service_type)
    for key, value in config_overrides.items():
        setattr(config, key, value)
    pricing = PricingResult(mrc=mrc, nrc=0.0) if mrc is not None else None
    return ServiceSelection(id=service_id, type=service_type, config=config, pricing=pricing)


def make_metro(code: str, *services: ServiceSelection) -> MetroSelection:
    return MetroSelection(
        metro_code=code,
        metro_name=f"Metro {code}",
        region="AMER",
        services=list(services),
    )


def endpoint(metro_code: str, endpoint_type: EndpointType, service_id: str,
             profile: Optional[str] = None) -> ConnectionEndpoint:
    return ConnectionEndpoint(
        metro_code=metro_code,
        type=endpoint_type,
        service_id=service_id,
        service_profile_name=profile,
    )


def make_connection(connection_id: str, a_side: ConnectionEndpoint, z_side: ConnectionEndpoint,
                    mrc: Optional[float] = None, redundant: bool = False,
                    circuit: ConnectionType = ConnectionType.EVPL_VC,
                    bandwidth_mbps: int = 1000) -> VirtualConnection:
    return VirtualConnection(
        id=connection_id,
        name=f"Conn {connection_id}",
        type=circuit,
        a_side=a_side,
        z_side=z_side,
        bandwidth_mbps=bandwidth_mbps,
        redundant=redundant,
        pricing=PricingResult(mrc=mrc, nrc=0.0) if mrc is not None else None,
    )


def make_project(*metros: MetroSelection, connections=None, **kwargs) -> ProjectConfig:
    return ProjectConfig(
        id=kwargs.pop("project_id", "proj-1"),
        name=kwargs.pop("name", "Test Project"),
        metros=list(metros),
        connections=list(connections or []),
        **kwargs,
    )
