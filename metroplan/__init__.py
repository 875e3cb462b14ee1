# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""
metroplan: multi-metro network topology planning.

Lays out topology diagrams, classifies interconnections, rolls up pricing and
saves/restores projects.
"""

from .connections.classifier import classify_connection
from .layout.engine import build_diagram_layout
from .pricing.calculator import calculate_pricing_summary
from .project.serializer import parse_project_file, serialize_project
from .topology.models import ProjectConfig

__version__ = "0.1.0"
__all__ = [
    "ProjectConfig",
    "build_diagram_layout",
    "calculate_pricing_summary",
    "classify_connection",
    "parse_project_file",
    "serialize_project",
]
