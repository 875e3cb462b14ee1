# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
Pricing rollup for a project.

Turns the resolved price quotes embedded in services and connections into
line items, per-metro subtotals and grand totals. Absent pricing becomes a
$0 estimate line item.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List

from metroplan.topology.defaults import SERVICE_TYPE_LABELS, VIRTUAL_CONNECTION_LABEL
from metroplan.topology.models import (
    MetroSelection,
    ServiceSelection,
    ServiceType,
    VirtualConnection,
)

LOGGER = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}


@dataclass
class PriceLineItem:
    metro: str
    metro_name: str
    service_type: str
    service_name: str
    description: str
    term: str
    quantity: int
    mrc: float
    nrc: float
    annual_cost: float
    is_estimate: bool

    @property
    def quote_required(self) -> bool:
        return self.is_estimate and self.mrc == 0 and self.nrc == 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["quote_required"] = self.quote_required
        return data


@dataclass
class MetroSubtotal:
    metro_code: str
    metro_name: str
    mrc: float = 0.0
    nrc: float = 0.0
    annual_cost: float = 0.0
    line_items: List[PriceLineItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metro_code": self.metro_code,
            "metro_name": self.metro_name,
            "mrc": self.mrc,
            "nrc": self.nrc,
            "annual_cost": self.annual_cost,
            "line_items": [item.to_dict() for item in self.line_items],
        }


@dataclass
class PricingSummary:
    metro_subtotals: List[MetroSubtotal] = field(default_factory=list)
    total_mrc: float = 0.0
    total_nrc: float = 0.0
    total_annual_cost: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metro_subtotals": [m.to_dict() for m in self.metro_subtotals],
            "total_mrc": self.total_mrc,
            "total_nrc": self.total_nrc,
            "total_annual_cost": self.total_annual_cost,
        }


def format_bandwidth(mbps: int, short: bool = False) -> str:
    """Render a bandwidth: ``1 Gbps`` / ``500 Mbps``, or ``1G`` / ``500M`` when short."""
    if mbps >= 1000:
        value = f"{mbps / 1000:g}"
        return f"{value}G" if short else f"{value} Gbps"
    return f"{mbps}M" if short else f"{mbps} Mbps"


def format_currency(amount: float, currency: str = "USD") -> str:
    """Format an amount as ``$1,500.00``."""
    symbol = CURRENCY_SYMBOLS.get(currency)
    formatted = f"{abs(amount):,.2f}"
    sign = "-" if amount < 0 else ""
    if symbol is None:
        return f"{sign}{currency} {formatted}"
    return f"{sign}{symbol}{formatted}"


# ─── Per-type description / term / quantity rules ─────────────────────────────


def _describe_fabric_port(service: ServiceSelection) -> str:
    c = service.config
    kind = "Redundant" if c.type == "REDUNDANT" else "Single"
    return f"{c.speed} {kind} Port, {c.encapsulation}"


def _describe_network_edge(service: ServiceSelection) -> str:
    c = service.config
    ha = " (HA Pair)" if c.redundant else ""
    return f"{c.device_type_name or 'Device'}{ha}, {c.license_type}"


def _describe_internet_access(service: ServiceSelection) -> str:
    c = service.config
    dual = "Dual" if c.connection_type == "DUAL" else "Single"
    return f"{format_bandwidth(c.bandwidth_mbps)} {c.routing_protocol}, {dual}"


def _describe_cloud_router(service: ServiceSelection) -> str:
    return f"{service.config.package} Package"


def _describe_colocation(service: ServiceSelection) -> str:
    return service.config.description or "Colocation"


def _describe_nsp(service: ServiceSelection) -> str:
    return service.config.provider_name or "Network Service Provider"


def _describe_cross_connect(service: ServiceSelection) -> str:
    c = service.config
    if c.description:
        return f"{c.description}, {c.connector_type}"
    return f"Cross Connect, {c.connector_type}"


_DESCRIBERS: Dict[ServiceType, Callable[[ServiceSelection], str]] = {
    ServiceType.FABRIC_PORT: _describe_fabric_port,
    ServiceType.NETWORK_EDGE: _describe_network_edge,
    ServiceType.INTERNET_ACCESS: _describe_internet_access,
    ServiceType.CLOUD_ROUTER: _describe_cloud_router,
    ServiceType.COLOCATION: _describe_colocation,
    ServiceType.NSP: _describe_nsp,
    ServiceType.CROSS_CONNECT: _describe_cross_connect,
}


def describe_service(service: ServiceSelection) -> str:
    return _DESCRIBERS[service.type](service)


def term_label(service: ServiceSelection) -> str:
    if service.type == ServiceType.NETWORK_EDGE:
        months = service.config.term_length
        if months <= 1:
            return "Monthly"
        return f"{months // 12}yr"
    return "Monthly"


def service_quantity(service: ServiceSelection) -> int:
    if service.type == ServiceType.FABRIC_PORT:
        return service.config.quantity
    if service.type == ServiceType.NETWORK_EDGE and service.config.redundant:
        return 2
    if service.type == ServiceType.INTERNET_ACCESS and service.config.connection_type == "DUAL":
        return 2
    return 1


# ─── Line items ───────────────────────────────────────────────────────────────


def build_line_item_from_service(metro: MetroSelection, service: ServiceSelection) -> PriceLineItem:
    pricing = service.pricing
    quantity = service_quantity(service)
    mrc = pricing.mrc if pricing else 0.0
    nrc = pricing.nrc if pricing else 0.0
    # Internet Access has no catalog price; it is always a quote.
    is_estimate = (
        pricing is None
        or pricing.is_estimate
        or service.type == ServiceType.INTERNET_ACCESS
    )
    label = SERVICE_TYPE_LABELS[service.type]

    return PriceLineItem(
        metro=metro.metro_code,
        metro_name=metro.metro_name,
        service_type=label,
        service_name=label,
        description=describe_service(service),
        term=term_label(service),
        quantity=quantity,
        mrc=mrc,
        nrc=nrc,
        annual_cost=mrc * MONTHS_PER_YEAR * quantity,
        is_estimate=is_estimate,
    )


def build_line_item_from_connection(connection: VirtualConnection,
                                    metros: List[MetroSelection]) -> PriceLineItem:
    pricing = connection.pricing
    a_code = connection.a_side.metro_code
    a_metro = next((m for m in metros if m.metro_code == a_code), None)
    z_name = connection.z_side.service_profile_name or connection.z_side.metro_code
    quantity = 2 if connection.redundant else 1
    mrc = pricing.mrc if pricing else 0.0
    redundant = " (Redundant)" if connection.redundant else ""

    return PriceLineItem(
        metro=a_code,
        metro_name=a_metro.metro_name if a_metro else a_code,
        service_type=VIRTUAL_CONNECTION_LABEL,
        service_name=f"{connection.type.value} Connection",
        description=f"{format_bandwidth(connection.bandwidth_mbps)} to {z_name}{redundant}",
        term="Monthly",
        quantity=quantity,
        mrc=mrc,
        nrc=pricing.nrc if pricing else 0.0,
        annual_cost=mrc * MONTHS_PER_YEAR * quantity,
        is_estimate=pricing.is_estimate if pricing else True,
    )


def calculate_pricing_summary(metros: List[MetroSelection],
                              connections: List[VirtualConnection]) -> PricingSummary:
    """
    Roll service and connection pricing into metro subtotals and totals.

    Connections are attributed to their A-side metro; a connection whose
    A-side metro is not in ``metros`` is not counted.

    Args:
        metros: Metros with their services
        connections: Virtual connections

    Returns:
        PricingSummary with one subtotal per metro, in metro order
    """
    subtotals: List[MetroSubtotal] = []

    for metro in metros:
        items = [build_line_item_from_service(metro, s) for s in metro.services]
        items.extend(
            build_line_item_from_connection(c, metros)
            for c in connections
            if c.a_side.metro_code == metro.metro_code
        )
        mrc = sum(item.mrc * item.quantity for item in items)
        nrc = sum(item.nrc * item.quantity for item in items)
        subtotals.append(MetroSubtotal(
            metro_code=metro.metro_code,
            metro_name=metro.metro_name,
            mrc=mrc,
            nrc=nrc,
            annual_cost=mrc * MONTHS_PER_YEAR,
            line_items=items,
        ))

    total_mrc = sum(s.mrc for s in subtotals)
    total_nrc = sum(s.nrc for s in subtotals)

    metro_codes = {m.metro_code for m in metros}
    unattributed = [c.id for c in connections if c.a_side.metro_code not in metro_codes]
    if unattributed:
        LOGGER.debug("Connections without an A-side metro left out of totals: %s", unattributed)

    return PricingSummary(
        metro_subtotals=subtotals,
        total_mrc=total_mrc,
        total_nrc=total_nrc,
        total_annual_cost=total_mrc * MONTHS_PER_YEAR,
    )
