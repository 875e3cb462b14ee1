# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Service defaults and display labels."""

from typing import Dict

from .models import (
    CONFIG_TYPES,
    ServiceConfig,
    ServiceType,
)


SERVICE_TYPE_LABELS: Dict[ServiceType, str] = {
    ServiceType.FABRIC_PORT: "Fabric Port",
    ServiceType.NETWORK_EDGE: "Network Edge",
    ServiceType.INTERNET_ACCESS: "Internet Access",
    ServiceType.CLOUD_ROUTER: "Fabric Cloud Router",
    ServiceType.COLOCATION: "Colocation",
    ServiceType.NSP: "Network Service Provider",
    ServiceType.CROSS_CONNECT: "Cross Connect",
}

VIRTUAL_CONNECTION_LABEL = "Virtual Connection"


def default_config(service_type: ServiceType) -> ServiceConfig:
    """Return a fresh default config for a service type."""
    return CONFIG_TYPES[service_type]()
