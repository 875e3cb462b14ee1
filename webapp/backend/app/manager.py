# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Project Manager for the metroplan web backend.

Holds the working project for the demo session and provides JSON-serializable
views (pricing, connection issues) for the FastAPI layer; ``layout_for``
lays out any project, working or inline. Pricing
results arrive from the external price-fetch collaborator through
``set_service_pricing`` / ``set_connection_pricing``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging
import threading

from metroplan.connections.classifier import validate_connections
from metroplan.layout.engine import build_diagram_layout
from metroplan.pricing.calculator import PricingSummary, calculate_pricing_summary
from metroplan.project.serializer import parse_project_file
from metroplan.topology.models import PricingResult, ProjectConfig

LOGGER = logging.getLogger(__name__)


class _Singleton(type):
    _instances: Dict[type, Any] = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):  # type: ignore[override]
        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super(_Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]


class ProjectManager(metaclass=_Singleton):
    """Singleton manager holding a single working project for the demo.

    For production/multi-user setups, introduce session IDs and per-session projects.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._project: Optional[ProjectConfig] = None

    # --------------------------- Public API ---------------------------

    def clear(self) -> None:
        with self._lock:
            self._project = None

    def set_project(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the working project. Raises ValueError on malformed data."""
        project = ProjectConfig.from_dict(data)
        if not project.id:
            raise ValueError("Project is missing an id.")
        with self._lock:
            self._project = project
        LOGGER.info("Loaded project %s (%d metros)", project.id, len(project.metros))
        return project.to_dict()

    def get_project(self) -> Dict[str, Any]:
        return self._require().to_dict()

    def import_project(self, text: str) -> Dict[str, Any]:
        result = parse_project_file(text)
        if not result.ok:
            raise ValueError(result.error)
        with self._lock:
            self._project = result.project
        return result.project.to_dict()

    def get_pricing(self) -> PricingSummary:
        project = self._require()
        return calculate_pricing_summary(project.metros, project.connections)

    def get_issues(self) -> List[Dict[str, str]]:
        return [
            {"connection_id": issue.connection_id, "reason": issue.reason}
            for issue in validate_connections(self._require())
        ]

    def set_service_pricing(self, metro_code: str, service_id: str,
                            pricing: Optional[PricingResult]) -> None:
        with self._lock:
            project = self._require()
            metro = project.get_metro(metro_code)
            service = metro.get_service(service_id) if metro else None
            if service is None:
                raise KeyError(f"Service {service_id} not found in metro {metro_code}")
            service.pricing = pricing

    def set_connection_pricing(self, connection_id: str, pricing: Optional[PricingResult]) -> None:
        with self._lock:
            project = self._require()
            for connection in project.connections:
                if connection.id == connection_id:
                    connection.pricing = pricing
                    return
            raise KeyError(f"Connection {connection_id} not found")

    # --------------------------- Internals ----------------------------

    def _require(self) -> ProjectConfig:
        if self._project is None:
            raise RuntimeError("No project loaded. Import or set a project first.")
        return self._project


def layout_for(project: ProjectConfig, pricing_visible: bool = False,
               position_overrides: Optional[Mapping[str, Tuple[float, float]]] = None) -> Dict[str, Any]:
    return build_diagram_layout(
        project.metros,
        project.connections,
        pricing_visible=pricing_visible,
        text_boxes=project.text_boxes,
        local_sites=project.local_sites,
        annotation_markers=project.annotation_markers,
        position_overrides=position_overrides,
    ).to_dict()
