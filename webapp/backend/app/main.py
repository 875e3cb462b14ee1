# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""FastAPI application for the metroplan web backend.

Endpoints:
- GET  /api/health: liveness
- POST /api/layout: diagram layout for a project (or the working project)
- POST /api/classify: classify an endpoint pair
- POST /api/pricing: pricing summary
- POST /api/pricing/csv: pricing summary as CSV
- GET  /api/project, PUT /api/project: working project
- POST /api/project/export, POST /api/project/import: save/restore
- GET  /api/project/issues: invalid or dangling connections
- PUT  /api/project/pricing/service, PUT /api/project/pricing/connection:
  store resolved price quotes from the pricing collaborator
"""
from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from metroplan.connections.classifier import Endpoint, classify_connection
from metroplan.pricing.calculator import calculate_pricing_summary
from metroplan.pricing.csv_export import generate_csv
from metroplan.project.serializer import serialize_project
from metroplan.topology.models import PricingBreakdownItem, PricingResult, ProjectConfig

from .manager import ProjectManager, layout_for
from .schemas import (
    ClassifyRequest,
    ConnectionPricingRequest,
    ImportProjectRequest,
    LayoutRequest,
    PricingRequest,
    PricingUpdate,
    ProjectRequest,
    ServicePricingRequest,
)

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="metroplan", version="0.1.0")

# CORS (allow localhost and file-based dev)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _project_from(data: Optional[Dict[str, Any]]) -> ProjectConfig:
    """Parse a request project, or fall back to the working project."""
    if data is None:
        mgr = ProjectManager()
        try:
            return ProjectConfig.from_dict(mgr.get_project())
        except RuntimeError as e:
            raise HTTPException(status_code=400, detail=str(e))
    try:
        return ProjectConfig.from_dict(data)
    except (ValueError, TypeError, AttributeError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid project: {e}")


def _pricing_from(update: Optional[PricingUpdate]) -> Optional[PricingResult]:
    if update is None:
        return None
    return PricingResult(
        mrc=update.mrc,
        nrc=update.nrc,
        currency=update.currency,
        is_estimate=update.is_estimate,
        breakdown=[PricingBreakdownItem.from_dict(b) for b in update.breakdown],
    )


@app.get("/api/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok"}


@app.post("/api/layout")
async def api_layout(payload: LayoutRequest) -> JSONResponse:
    project = _project_from(payload.project)
    return JSONResponse(layout_for(project, payload.pricing_visible, payload.position_overrides))


@app.post("/api/classify")
async def api_classify(payload: ClassifyRequest) -> JSONResponse:
    result = classify_connection(
        Endpoint(payload.source.category, payload.source.metro_code),
        Endpoint(payload.target.category, payload.target.metro_code),
    )
    return JSONResponse(result.to_dict())


@app.post("/api/pricing")
async def api_pricing(payload: PricingRequest) -> JSONResponse:
    project = _project_from(payload.project)
    summary = calculate_pricing_summary(project.metros, project.connections)
    return JSONResponse(summary.to_dict())


@app.post("/api/pricing/csv")
async def api_pricing_csv(payload: PricingRequest) -> PlainTextResponse:
    project = _project_from(payload.project)
    summary = calculate_pricing_summary(project.metros, project.connections)
    return PlainTextResponse(
        generate_csv(summary, project.name, project.connections),
        media_type="text/csv",
    )


@app.get("/api/project")
async def api_get_project() -> JSONResponse:
    mgr = ProjectManager()
    try:
        project = mgr.get_project()
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse(project)


@app.put("/api/project")
async def api_set_project(payload: ProjectRequest) -> JSONResponse:
    mgr = ProjectManager()
    try:
        project = mgr.set_project(payload.project)
    except (ValueError, TypeError, AttributeError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid project: {e}")
    return JSONResponse(project)


@app.post("/api/project/export")
async def api_export(payload: PricingRequest) -> PlainTextResponse:
    """Export a project (or the working project) with pricing stripped."""
    project = _project_from(payload.project)
    return PlainTextResponse(serialize_project(project), media_type="application/json")


@app.post("/api/project/import")
async def api_import(payload: ImportProjectRequest) -> JSONResponse:
    """Import a previously exported project as the working project."""
    mgr = ProjectManager()
    try:
        project = mgr.import_project(payload.text)
    except ValueError as e:
        LOGGER.info("Rejected project import: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse(project)


@app.get("/api/project/issues")
async def api_issues() -> JSONResponse:
    mgr = ProjectManager()
    try:
        issues = mgr.get_issues()
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse({"issues": issues})


@app.put("/api/project/pricing/service")
async def api_service_pricing(payload: ServicePricingRequest) -> JSONResponse:
    mgr = ProjectManager()
    try:
        mgr.set_service_pricing(payload.metro_code, payload.service_id, _pricing_from(payload.pricing))
    except (RuntimeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))
    return JSONResponse(mgr.get_pricing().to_dict())


@app.put("/api/project/pricing/connection")
async def api_connection_pricing(payload: ConnectionPricingRequest) -> JSONResponse:
    mgr = ProjectManager()
    try:
        mgr.set_connection_pricing(payload.connection_id, _pricing_from(payload.pricing))
    except (RuntimeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))
    return JSONResponse(mgr.get_pricing().to_dict())


# Convenience: run with `uvicorn webapp.backend.app.main:app --reload`
