# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Topology entity model and graph."""

from .models import (
    AnnotationMarker,
    BandwidthPriceEntry,
    CloudRouterConfig,
    ColocationConfig,
    ConnectionEndpoint,
    ConnectionType,
    CorePriceEntry,
    CrossConnectConfig,
    EndpointType,
    FabricPortConfig,
    InternetAccessConfig,
    LocalSite,
    MetroSelection,
    NetworkEdgeConfig,
    NspConfig,
    PricingBreakdownItem,
    PricingResult,
    ProjectConfig,
    ServiceSelection,
    ServiceType,
    TextBox,
    VirtualConnection,
)
from .graph import TopologyGraph

__all__ = [
    "AnnotationMarker",
    "BandwidthPriceEntry",
    "CloudRouterConfig",
    "ColocationConfig",
    "ConnectionEndpoint",
    "ConnectionType",
    "CorePriceEntry",
    "CrossConnectConfig",
    "EndpointType",
    "FabricPortConfig",
    "InternetAccessConfig",
    "LocalSite",
    "MetroSelection",
    "NetworkEdgeConfig",
    "NspConfig",
    "PricingBreakdownItem",
    "PricingResult",
    "ProjectConfig",
    "ServiceSelection",
    "ServiceType",
    "TextBox",
    "TopologyGraph",
    "VirtualConnection",
]
