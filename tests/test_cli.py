# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the metroplan project CLI."""

import json

from metroplan.project import cli
from metroplan.project.cli import main
from metroplan.project.serializer import write_project_file
from metroplan.topology.models import EndpointType, ServiceType

from factories import endpoint, make_connection, make_metro, make_project, make_service


def _write_sample(tmp_path, connections=None):
    project = make_project(
        make_metro("DC", make_service("p1", ServiceType.FABRIC_PORT),
                   make_service("colo", ServiceType.COLOCATION)),
        make_metro("LD", make_service("cr1", ServiceType.CLOUD_ROUTER)),
        connections=connections if connections is not None else [
            make_connection("c1", endpoint("DC", EndpointType.PORT, "p1"),
                            endpoint("LD", EndpointType.CLOUD_ROUTER, "cr1")),
        ],
    )
    return write_project_file(project, tmp_path / "project.json")


def test_validate_ok(tmp_path, capsys):
    path = _write_sample(tmp_path)
    assert main(["validate", str(path)]) == 0
    out = capsys.readouterr().out
    assert "OK (2 metro(s), 1 connection(s))" in out


def test_validate_reports_bad_file(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    assert main(["validate", str(bad)]) == 1
    assert "Invalid JSON file." in capsys.readouterr().err


def test_price_prints_totals_and_writes_csv(tmp_path, capsys):
    path = _write_sample(tmp_path)
    csv_path = tmp_path / "pricing.csv"
    assert main(["price", str(path), "--csv", str(csv_path)]) == 0
    out = capsys.readouterr().out
    assert "Total Annual Cost: $0.00" in out
    assert csv_path.read_text(encoding="utf-8-sig").startswith("Metro,")


def test_layout_writes_json(tmp_path):
    path = _write_sample(tmp_path)
    out_path = tmp_path / "layout.json"
    assert main(["layout", str(path), "--output", str(out_path)]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    ids = {node["id"] for node in data["nodes"]}
    assert {"metro-DC", "metro-LD", "service-DC-p1", "service-LD-cr1"} <= ids
    assert len(data["edges"]) == 1


def test_check_flags_invalid_connection(tmp_path, capsys):
    path = _write_sample(tmp_path, connections=[
        make_connection("bad", endpoint("DC", EndpointType.COLOCATION, "colo"),
                        endpoint("LD", EndpointType.CLOUD_ROUTER, "cr1")),
    ])
    assert main(["check", str(path)]) == 1
    assert "bad:" in capsys.readouterr().out


def test_export_round_trip(tmp_path):
    path = _write_sample(tmp_path)
    out_path = tmp_path / "exported.json"
    assert main(["export", str(path), "--output", str(out_path)]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["schemaVersion"] == 1
    assert data["project"]["id"] == "proj-1"


def test_logger_follows_module_name():
    assert cli.LOGGER.name == cli.__name__ == "metroplan.project.cli"


def test_validate_reports_non_finite_number(tmp_path, capsys):
    path = _write_sample(tmp_path)
    text = path.read_text(encoding="utf-8").replace('"bandwidthMbps": 1000', '"bandwidthMbps": Infinity')
    path.write_text(text, encoding="utf-8")
    assert main(["validate", str(path)]) == 1
    assert "invalid entry" in capsys.readouterr().err
