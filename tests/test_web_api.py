# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""API tests for the metroplan FastAPI backend.

These tests validate the working-project lifecycle over HTTP:
- set/import -> stores the working project
- layout/pricing/issues -> views computed from it
- pricing updates -> flow into the summary

Run with: pytest tests/test_web_api.py -q
"""
from __future__ import annotations

import json
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from metroplan.project.serializer import serialize_project
from metroplan.topology.models import EndpointType, ServiceType
from webapp.backend.app.main import app
from webapp.backend.app.manager import ProjectManager

from factories import endpoint, make_connection, make_metro, make_project, make_service


client = TestClient(app)


@pytest.fixture(autouse=True)
def _fresh_manager():
    ProjectManager().clear()
    yield
    ProjectManager().clear()


def _sample_project() -> Dict[str, Any]:
    return make_project(
        make_metro("DC", make_service("p1", ServiceType.FABRIC_PORT, mrc=1500)),
        make_metro("LD", make_service("cr1", ServiceType.CLOUD_ROUTER, mrc=450)),
        connections=[make_connection(
            "c1", endpoint("DC", EndpointType.PORT, "p1"),
            endpoint("LD", EndpointType.CLOUD_ROUTER, "cr1"), mrc=1500,
        )],
    ).to_dict()


def test_health():
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"


def test_project_before_set_returns_400():
    r = client.get("/api/project")
    assert r.status_code == 400
    r = client.get("/api/project/issues")
    assert r.status_code == 400


def test_set_and_get_project():
    r = client.put("/api/project", json={"project": _sample_project()})
    assert r.status_code == 200, r.text
    r = client.get("/api/project")
    assert r.status_code == 200
    assert [m["metroCode"] for m in r.json()["metros"]] == ["DC", "LD"]


def test_set_invalid_project_returns_400():
    r = client.put("/api/project", json={"project": {"id": "x", "metros": [{"name": "no code"}]}})
    assert r.status_code == 400


def test_layout_for_inline_project():
    payload = {"project": _sample_project(), "pricing_visible": True}
    r = client.post("/api/layout", json=payload)
    assert r.status_code == 200, r.text
    layout = r.json()
    ids = {node["id"] for node in layout["nodes"]}
    assert {"metro-DC", "metro-LD", "service-DC-p1", "service-LD-cr1"} <= ids
    assert layout["edges"][0]["data"]["labelLine2"] == "$1,500.00/mo"


def test_layout_without_project_uses_working_project():
    r = client.post("/api/layout", json={})
    assert r.status_code == 400
    client.put("/api/project", json={"project": _sample_project()})
    r = client.post("/api/layout", json={})
    assert r.status_code == 200


def test_classify():
    r = client.post("/api/classify", json={
        "source": {"category": "FABRIC_PORT", "metro_code": "DC"},
        "target": {"category": "COLOCATION", "metro_code": "DC"},
    })
    assert r.status_code == 200
    assert r.json() == {"valid": True, "kind": "CROSS_CONNECT", "bundled": True}

    r = client.post("/api/classify", json={
        "source": {"category": "NSP", "metro_code": "DC"},
        "target": {"category": "NSP", "metro_code": "NY"},
    })
    assert r.json()["valid"] is False


def test_pricing_summary_and_csv():
    payload = {"project": _sample_project()}
    r = client.post("/api/pricing", json=payload)
    assert r.status_code == 200, r.text
    summary = r.json()
    assert summary["total_mrc"] == 3450
    assert summary["total_annual_cost"] == 41400

    r = client.post("/api/pricing/csv", json=payload)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "SUMMARY" in r.text


def test_export_import_flow():
    r = client.post("/api/project/export", json={"project": _sample_project()})
    assert r.status_code == 200
    exported = r.json()
    assert exported["schemaVersion"] == 1
    assert exported["project"]["connections"][0]["pricing"] is None

    r = client.post("/api/project/import", json={"text": r.text})
    assert r.status_code == 200, r.text
    assert client.get("/api/project").json()["id"] == "proj-1"


def test_import_rejects_future_version():
    text = serialize_project(make_project()).replace('"schemaVersion": 1', '"schemaVersion": 2')
    r = client.post("/api/project/import", json={"text": text})
    assert r.status_code == 400
    assert "Unsupported schema version" in r.json()["detail"]


def test_import_and_layout_reject_infinite_bandwidth():
    project = _sample_project()
    project["connections"][0]["bandwidthMbps"] = float("inf")
    text = json.dumps({"schemaVersion": 1, "exportedAt": "2026-01-01T00:00:00+00:00", "project": project})

    r = client.post("/api/project/import", json={"text": text})
    assert r.status_code == 400
    assert "invalid entry" in r.json()["detail"]

    r = client.post(
        "/api/layout",
        content=json.dumps({"project": project}),
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400


def test_issues_report_invalid_connection():
    project = make_project(
        make_metro("DC", make_service("colo", ServiceType.COLOCATION)),
        make_metro("NY", make_service("nsp", ServiceType.NSP)),
        connections=[make_connection(
            "xc", endpoint("DC", EndpointType.COLOCATION, "colo"), endpoint("NY", EndpointType.NSP, "nsp"),
        )],
    )
    client.put("/api/project", json={"project": project.to_dict()})
    r = client.get("/api/project/issues")
    assert r.status_code == 200
    assert r.json()["issues"] == [
        {"connection_id": "xc", "reason": "Cross Connects cannot span metros"},
    ]


def test_pricing_updates_flow_into_summary():
    project = _sample_project()
    project["metros"][0]["services"][0]["pricing"] = None
    client.put("/api/project", json={"project": project})

    r = client.put("/api/project/pricing/service", json={
        "metro_code": "DC", "service_id": "p1", "pricing": {"mrc": 100},
    })
    assert r.status_code == 200, r.text
    assert r.json()["total_mrc"] == 100 + 450 + 1500

    r = client.put("/api/project/pricing/connection", json={"connection_id": "c1", "pricing": None})
    assert r.status_code == 200
    assert r.json()["total_mrc"] == 100 + 450

    r = client.put("/api/project/pricing/connection", json={"connection_id": "nope", "pricing": None})
    assert r.status_code == 404

    r = client.put("/api/project/pricing/service", json={
        "metro_code": "DC", "service_id": "p1", "pricing": {"mrc": -5},
    })
    assert r.status_code == 422
