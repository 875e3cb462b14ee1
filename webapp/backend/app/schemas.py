# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Pydantic request schemas for the metroplan web API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field


class ProjectRequest(BaseModel):
    project: Dict[str, Any] = Field(..., description="Project in its persisted shape")


class LayoutRequest(BaseModel):
    project: Optional[Dict[str, Any]] = Field(
        default=None, description="Project to lay out; the working project if omitted"
    )
    pricing_visible: bool = False
    position_overrides: Dict[str, Tuple[float, float]] = Field(default_factory=dict)


class EndpointModel(BaseModel):
    category: str = Field(..., description="Service type, LOCAL_SITE or SERVICE_PROFILE")
    metro_code: str = ""


class ClassifyRequest(BaseModel):
    source: EndpointModel
    target: EndpointModel


class ImportProjectRequest(BaseModel):
    text: str = Field(..., description="Exported project file contents")


class PricingUpdate(BaseModel):
    mrc: float = Field(..., ge=0, allow_inf_nan=False)
    nrc: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    currency: str = "USD"
    is_estimate: bool = False
    breakdown: List[Dict[str, Any]] = Field(default_factory=list)


class ServicePricingRequest(BaseModel):
    metro_code: str
    service_id: str
    pricing: Optional[PricingUpdate] = None


class ConnectionPricingRequest(BaseModel):
    connection_id: str
    pricing: Optional[PricingUpdate] = None


class PricingRequest(BaseModel):
    project: Optional[Dict[str, Any]] = Field(
        default=None, description="Project to price; the working project if omitted"
    )
