# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
Topology entity model.

This module defines the metros, services, connections and diagram decorations
that make up a project. Every entity converts to and from the persisted
dictionary shape (camelCase keys) via ``to_dict`` / ``from_dict``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class ServiceType(Enum):
    """Closed set of service categories a metro can hold."""
    FABRIC_PORT = "FABRIC_PORT"
    NETWORK_EDGE = "NETWORK_EDGE"
    INTERNET_ACCESS = "INTERNET_ACCESS"
    CLOUD_ROUTER = "CLOUD_ROUTER"
    COLOCATION = "COLOCATION"
    NSP = "NSP"
    CROSS_CONNECT = "CROSS_CONNECT"


class EndpointType(Enum):
    """Endpoint category tags carried by a connection side."""
    PORT = "PORT"
    NETWORK_EDGE = "NETWORK_EDGE"
    CLOUD_ROUTER = "CLOUD_ROUTER"
    SERVICE_PROFILE = "SERVICE_PROFILE"
    COLOCATION = "COLOCATION"
    NSP = "NSP"
    CROSS_CONNECT = "CROSS_CONNECT"
    INTERNET_ACCESS = "INTERNET_ACCESS"
    LOCAL_SITE = "LOCAL_SITE"


class ConnectionType(Enum):
    """Circuit layer of a virtual connection."""
    EVPL_VC = "EVPL_VC"  # layer 2
    IP_VC = "IP_VC"      # layer 3


def _coerce_enum(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _number(value: Any) -> float:
    """Convert a persisted number, rejecting NaN and infinities."""
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return number


def _integer(value: Any) -> int:
    return int(_number(value))


def _known_kwargs(cls, data: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    """Pick the persisted keys of ``data`` that map onto dataclass fields."""
    names = {f.name for f in fields(cls)}
    kwargs = {}
    for key, attr in mapping.items():
        if key in data and attr in names:
            kwargs[attr] = data[key]
    return kwargs


# ─── Pricing ──────────────────────────────────────────────────────────────────


@dataclass
class PricingBreakdownItem:
    description: str
    mrc: float = 0.0
    nrc: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"description": self.description, "mrc": self.mrc, "nrc": self.nrc}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PricingBreakdownItem":
        return cls(
            description=str(data.get("description", "")),
            mrc=_number(data.get("mrc", 0.0)),
            nrc=_number(data.get("nrc", 0.0)),
        )


@dataclass
class PricingResult:
    """Resolved price quote for a service or connection."""

    mrc: float = 0.0
    nrc: float = 0.0
    currency: str = "USD"
    is_estimate: bool = False
    breakdown: List[PricingBreakdownItem] = field(default_factory=list)

    def __post_init__(self):
        if not (math.isfinite(self.mrc) and math.isfinite(self.nrc)):
            raise ValueError("Pricing values must be finite")
        if self.mrc < 0 or self.nrc < 0:
            raise ValueError("Pricing values must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mrc": self.mrc,
            "nrc": self.nrc,
            "currency": self.currency,
            "isEstimate": self.is_estimate,
            "breakdown": [item.to_dict() for item in self.breakdown],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["PricingResult"]:
        if not data:
            return None
        return cls(
            mrc=_number(data.get("mrc", 0.0)),
            nrc=_number(data.get("nrc", 0.0)),
            currency=str(data.get("currency", "USD")),
            is_estimate=bool(data.get("isEstimate", False)),
            breakdown=[PricingBreakdownItem.from_dict(b) for b in data.get("breakdown") or []],
        )


@dataclass
class BandwidthPriceEntry:
    bandwidth_mbps: int
    label: str
    mrc: float
    nrc: Optional[float] = None
    currency: str = "USD"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "bandwidthMbps": self.bandwidth_mbps,
            "label": self.label,
            "mrc": self.mrc,
            "currency": self.currency,
        }
        if self.nrc is not None:
            data["nrc"] = self.nrc
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BandwidthPriceEntry":
        return cls(
            bandwidth_mbps=_integer(data.get("bandwidthMbps", 0)),
            label=str(data.get("label", "")),
            mrc=_number(data.get("mrc", 0.0)),
            nrc=_number(data["nrc"]) if data.get("nrc") is not None else None,
            currency=str(data.get("currency", "USD")),
        )


@dataclass
class CorePriceEntry:
    cores: int
    mrc: float
    nrc: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"cores": self.cores, "mrc": self.mrc, "nrc": self.nrc}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CorePriceEntry":
        return cls(
            cores=_integer(data.get("cores", 0)),
            mrc=_number(data.get("mrc", 0.0)),
            nrc=_number(data.get("nrc", 0.0)),
        )


def _table_from(data: Optional[List[Dict[str, Any]]], entry_cls) -> Optional[list]:
    if data is None:
        return None
    return [entry_cls.from_dict(entry) for entry in data]


def _table_to(table: Optional[list]) -> Optional[List[Dict[str, Any]]]:
    if table is None:
        return None
    return [entry.to_dict() for entry in table]


# ─── Service configs ──────────────────────────────────────────────────────────


@dataclass
class FabricPortConfig:
    speed: str = "10G"
    port_product: str = "STANDARD"
    type: str = "PRIMARY"
    encapsulation: str = "DOT1Q"
    quantity: int = 1

    _KEYS = {
        "speed": "speed",
        "portProduct": "port_product",
        "type": "type",
        "encapsulation": "encapsulation",
        "quantity": "quantity",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for key, attr in self._KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FabricPortConfig":
        config = cls(**_known_kwargs(cls, data, cls._KEYS))
        config.quantity = _integer(config.quantity)
        return config


@dataclass
class NetworkEdgeConfig:
    device_type_code: str = ""
    device_type_name: str = ""
    vendor_name: str = ""
    package_code: str = ""
    software_version: str = ""
    license_type: str = "SUBSCRIPTION"
    redundant: bool = False
    term_length: int = 1
    show_price_table: bool = False
    price_table: Optional[List[CorePriceEntry]] = None

    _KEYS = {
        "deviceTypeCode": "device_type_code",
        "deviceTypeName": "device_type_name",
        "vendorName": "vendor_name",
        "packageCode": "package_code",
        "softwareVersion": "software_version",
        "licenseType": "license_type",
        "redundant": "redundant",
        "termLength": "term_length",
        "showPriceTable": "show_price_table",
    }

    def to_dict(self) -> Dict[str, Any]:
        data = {key: getattr(self, attr) for key, attr in self._KEYS.items()}
        data["priceTable"] = _table_to(self.price_table)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkEdgeConfig":
        config = cls(**_known_kwargs(cls, data, cls._KEYS))
        config.term_length = _integer(config.term_length)
        config.price_table = _table_from(data.get("priceTable"), CorePriceEntry)
        return config


@dataclass
class InternetAccessConfig:
    bandwidth_mbps: int = 100
    routing_protocol: str = "BGP"
    connection_type: str = "SINGLE"
    delivery_method: str = "FABRIC_PORT"
    show_price_table: bool = False
    price_table: Optional[List[BandwidthPriceEntry]] = None

    _KEYS = {
        "bandwidthMbps": "bandwidth_mbps",
        "routingProtocol": "routing_protocol",
        "connectionType": "connection_type",
        "deliveryMethod": "delivery_method",
        "showPriceTable": "show_price_table",
    }

    def to_dict(self) -> Dict[str, Any]:
        data = {key: getattr(self, attr) for key, attr in self._KEYS.items()}
        data["priceTable"] = _table_to(self.price_table)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InternetAccessConfig":
        config = cls(**_known_kwargs(cls, data, cls._KEYS))
        config.bandwidth_mbps = _integer(config.bandwidth_mbps)
        config.price_table = _table_from(data.get("priceTable"), BandwidthPriceEntry)
        return config


@dataclass
class CloudRouterConfig:
    package: str = "STANDARD"

    def to_dict(self) -> Dict[str, Any]:
        return {"package": self.package}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CloudRouterConfig":
        return cls(package=str(data.get("package", "STANDARD")))


@dataclass
class ColocationConfig:
    description: str = "Cage / Cabinet"
    mrc_price: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"description": self.description, "mrcPrice": self.mrc_price}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColocationConfig":
        return cls(
            description=str(data.get("description", "Cage / Cabinet")),
            mrc_price=_number(data.get("mrcPrice", 0.0)),
        )


@dataclass
class NspConfig:
    provider_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"providerName": self.provider_name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NspConfig":
        return cls(provider_name=str(data.get("providerName", "")))


@dataclass
class CrossConnectConfig:
    description: str = ""
    connector_type: str = "SMF"
    patch_panel_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "connectorType": self.connector_type,
            "patchPanelId": self.patch_panel_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CrossConnectConfig":
        return cls(
            description=str(data.get("description", "")),
            connector_type=str(data.get("connectorType", "SMF")),
            patch_panel_id=str(data.get("patchPanelId", "")),
        )


ServiceConfig = Union[
    FabricPortConfig,
    NetworkEdgeConfig,
    InternetAccessConfig,
    CloudRouterConfig,
    ColocationConfig,
    NspConfig,
    CrossConnectConfig,
]

CONFIG_TYPES: Dict[ServiceType, type] = {
    ServiceType.FABRIC_PORT: FabricPortConfig,
    ServiceType.NETWORK_EDGE: NetworkEdgeConfig,
    ServiceType.INTERNET_ACCESS: InternetAccessConfig,
    ServiceType.CLOUD_ROUTER: CloudRouterConfig,
    ServiceType.COLOCATION: ColocationConfig,
    ServiceType.NSP: NspConfig,
    ServiceType.CROSS_CONNECT: CrossConnectConfig,
}


# ─── Topology entities ────────────────────────────────────────────────────────


@dataclass
class ServiceSelection:
    """A service placed in a metro, with its type-specific config."""

    id: str
    type: ServiceType
    config: ServiceConfig
    pricing: Optional[PricingResult] = None

    def __post_init__(self):
        expected = CONFIG_TYPES[self.type]
        if not isinstance(self.config, expected):
            raise ValueError(
                f"Service {self.id} of type {self.type.value} requires {expected.__name__}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "config": self.config.to_dict(),
            "pricing": self.pricing.to_dict() if self.pricing else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceSelection":
        type_tag = data.get("type")
        try:
            service_type = ServiceType(type_tag)
        except ValueError:
            raise ValueError(f"Unknown service type {type_tag!r}") from None
        config_cls = CONFIG_TYPES[service_type]
        return cls(
            id=str(data.get("id", "")),
            type=service_type,
            config=config_cls.from_dict(data.get("config") or {}),
            pricing=PricingResult.from_dict(data.get("pricing")),
        )


@dataclass
class MetroSelection:
    """A metro and the ordered services selected in it."""

    metro_code: str
    metro_name: str = ""
    region: str = ""
    services: List[ServiceSelection] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for service in self.services:
            if service.id in seen:
                raise ValueError(
                    f"Duplicate service id {service.id} in metro {self.metro_code}"
                )
            seen.add(service.id)

    def get_service(self, service_id: str) -> Optional[ServiceSelection]:
        for service in self.services:
            if service.id == service_id:
                return service
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metroCode": self.metro_code,
            "metroName": self.metro_name,
            "region": self.region,
            "services": [s.to_dict() for s in self.services],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetroSelection":
        code = data.get("metroCode")
        if not isinstance(code, str) or not code:
            raise ValueError("Metro is missing metroCode")
        return cls(
            metro_code=code,
            metro_name=str(data.get("metroName", code)),
            region=str(data.get("region", "")),
            services=[ServiceSelection.from_dict(s) for s in data.get("services") or []],
        )


@dataclass
class ConnectionEndpoint:
    metro_code: str
    type: EndpointType
    service_id: str
    service_profile_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "metroCode": self.metro_code,
            "type": self.type.value,
            "serviceId": self.service_id,
        }
        if self.service_profile_name is not None:
            data["serviceProfileName"] = self.service_profile_name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionEndpoint":
        return cls(
            metro_code=str(data.get("metroCode", "")),
            type=_coerce_enum(EndpointType, data.get("type"), EndpointType.PORT),
            service_id=str(data.get("serviceId", "")),
            service_profile_name=data.get("serviceProfileName"),
        )


@dataclass
class VirtualConnection:
    """A circuit between an A-side and a Z-side endpoint."""

    id: str
    a_side: ConnectionEndpoint
    z_side: ConnectionEndpoint
    name: str = ""
    type: ConnectionType = ConnectionType.EVPL_VC
    bandwidth_mbps: int = 1000
    redundant: bool = False
    pricing: Optional[PricingResult] = None
    show_price_table: bool = False
    price_table: Optional[List[BandwidthPriceEntry]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "aSide": self.a_side.to_dict(),
            "zSide": self.z_side.to_dict(),
            "bandwidthMbps": self.bandwidth_mbps,
            "redundant": self.redundant,
            "pricing": self.pricing.to_dict() if self.pricing else None,
            "showPriceTable": self.show_price_table,
            "priceTable": _table_to(self.price_table),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VirtualConnection":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=_coerce_enum(ConnectionType, data.get("type"), ConnectionType.EVPL_VC),
            a_side=ConnectionEndpoint.from_dict(data.get("aSide") or {}),
            z_side=ConnectionEndpoint.from_dict(data.get("zSide") or {}),
            bandwidth_mbps=_integer(data.get("bandwidthMbps", 1000)),
            redundant=bool(data.get("redundant", False)),
            pricing=PricingResult.from_dict(data.get("pricing")),
            show_price_table=bool(data.get("showPriceTable", False)),
            price_table=_table_from(data.get("priceTable"), BandwidthPriceEntry),
        )


@dataclass
class TextBox:
    id: str
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 200.0
    height: float = 60.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextBox":
        return cls(
            id=str(data.get("id", "")),
            text=str(data.get("text", "")),
            x=_number(data.get("x", 0.0)),
            y=_number(data.get("y", 0.0)),
            width=_number(data.get("width", 200.0)),
            height=_number(data.get("height", 60.0)),
        )


@dataclass
class LocalSite:
    id: str
    name: str = ""
    description: str = ""
    icon: str = "building-corporate"
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "x": self.x,
            "y": self.y,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocalSite":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            icon=str(data.get("icon", "building-corporate")),
            x=_number(data.get("x", 0.0)),
            y=_number(data.get("y", 0.0)),
        )


@dataclass
class AnnotationMarker:
    id: str
    number: int = 1
    x: float = 0.0
    y: float = 0.0
    color: str = "#E91C24"
    text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "x": self.x,
            "y": self.y,
            "color": self.color,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnnotationMarker":
        return cls(
            id=str(data.get("id", "")),
            number=_integer(data.get("number", 1)),
            x=_number(data.get("x", 0.0)),
            y=_number(data.get("y", 0.0)),
            color=str(data.get("color", "#E91C24")),
            text=str(data.get("text", "")),
        )


@dataclass
class ProjectConfig:
    """A complete topology: metros, connections and diagram decorations."""

    id: str
    name: str = "Untitled Project"
    metros: List[MetroSelection] = field(default_factory=list)
    connections: List[VirtualConnection] = field(default_factory=list)
    text_boxes: List[TextBox] = field(default_factory=list)
    local_sites: List[LocalSite] = field(default_factory=list)
    annotation_markers: List[AnnotationMarker] = field(default_factory=list)

    def get_metro(self, metro_code: str) -> Optional[MetroSelection]:
        for metro in self.metros:
            if metro.metro_code == metro_code:
                return metro
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "metros": [m.to_dict() for m in self.metros],
            "connections": [c.to_dict() for c in self.connections],
            "textBoxes": [t.to_dict() for t in self.text_boxes],
            "localSites": [s.to_dict() for s in self.local_sites],
            "annotationMarkers": [a.to_dict() for a in self.annotation_markers],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectConfig":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "Untitled Project")),
            metros=[MetroSelection.from_dict(m) for m in data.get("metros") or []],
            connections=[VirtualConnection.from_dict(c) for c in data.get("connections") or []],
            text_boxes=[TextBox.from_dict(t) for t in data.get("textBoxes") or []],
            local_sites=[LocalSite.from_dict(s) for s in data.get("localSites") or []],
            annotation_markers=[
                AnnotationMarker.from_dict(a) for a in data.get("annotationMarkers") or []
            ],
        )
