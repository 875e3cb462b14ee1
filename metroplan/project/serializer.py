# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Project save/restore in a schema-versioned JSON envelope."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from metroplan.topology.models import ProjectConfig

LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION = 1

DEFAULT_PROJECT_NAME = "Imported Project"

_OPTIONAL_ARRAYS = ("textBoxes", "localSites", "annotationMarkers")


@dataclass
class ParseResult:
    """Outcome of importing a project file: a project or an error reason."""

    ok: bool
    project: Optional[ProjectConfig] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, project: ProjectConfig) -> "ParseResult":
        return cls(ok=True, project=project)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(ok=False, error=error)


def strip_pricing(project: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a deep copy of a project dict with all fetched pricing removed.

    Service and connection pricing, price tables and their visibility
    toggles are recomputed after import and must never be restored stale.
    """
    clone = copy.deepcopy(project)
    for metro in clone.get("metros") or []:
        for service in metro.get("services") or []:
            service["pricing"] = None
            config = service.get("config")
            if isinstance(config, dict):
                if "priceTable" in config:
                    config["priceTable"] = None
                if "showPriceTable" in config:
                    config["showPriceTable"] = False
    for connection in clone.get("connections") or []:
        connection["pricing"] = None
        connection["priceTable"] = None
        connection["showPriceTable"] = False
    return clone


def serialize_project(project: Union[ProjectConfig, Dict[str, Any]],
                      exported_at: Optional[datetime] = None) -> str:
    """
    Serialize a project into the versioned envelope as pretty-printed JSON.

    Args:
        project: Project to export (model or persisted dict)
        exported_at: Export timestamp (defaults to now, UTC)

    Returns:
        JSON text with ``schemaVersion``, ``exportedAt`` and ``project``
    """
    data = project.to_dict() if isinstance(project, ProjectConfig) else project
    timestamp = exported_at or datetime.now(timezone.utc)
    envelope = {
        "schemaVersion": SCHEMA_VERSION,
        "exportedAt": timestamp.isoformat(),
        "project": strip_pricing(data),
    }
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def parse_project_file(text: str) -> ParseResult:
    """
    Parse and validate an exported project file.

    Never raises; every problem is reported as a failure result.
    """
    try:
        envelope = json.loads(text)
    except (TypeError, ValueError):
        return ParseResult.failure("Invalid JSON file.")

    if not isinstance(envelope, dict):
        return ParseResult.failure("File does not contain a valid object.")

    version = envelope.get("schemaVersion")
    if isinstance(version, bool) or not isinstance(version, (int, float)):
        return ParseResult.failure("Missing schemaVersion field.")
    if version > SCHEMA_VERSION:
        return ParseResult.failure(
            f"Unsupported schema version {version}. "
            f"This app supports up to version {SCHEMA_VERSION}."
        )

    project = envelope.get("project")
    if not isinstance(project, dict):
        return ParseResult.failure("Missing project data.")

    if not isinstance(project.get("id"), str) or not project["id"]:
        return ParseResult.failure("Project is missing an id.")
    if not isinstance(project.get("metros"), list):
        return ParseResult.failure("Project is missing metros array.")
    if not isinstance(project.get("connections"), list):
        return ParseResult.failure("Project is missing connections array.")

    project = dict(project)
    for key in _OPTIONAL_ARRAYS:
        if not isinstance(project.get(key), list):
            project[key] = []
    if not isinstance(project.get("name"), str):
        project["name"] = DEFAULT_PROJECT_NAME

    try:
        model = ProjectConfig.from_dict(project)
    except (TypeError, ValueError, AttributeError, OverflowError) as exc:
        LOGGER.debug("Rejected project %s: %s", project["id"], exc)
        return ParseResult.failure(f"Project contains an invalid entry: {exc}")

    return ParseResult.success(model)


def project_filename(name: str, on: Optional[date] = None) -> str:
    """Suggested download filename, e.g. ``Project_My_Net_2026-10-19.json``."""
    on = on or datetime.now(timezone.utc).date()
    safe = "_".join(name.split()) or "Project"
    return f"Project_{safe}_{on.isoformat()}.json"


def write_project_file(project: ProjectConfig, path: Path) -> Path:
    path = Path(path)
    path.write_text(serialize_project(project), encoding="utf-8")
    LOGGER.info("Wrote project %s to %s", project.id, path)
    return path


def load_project_file(path: Path) -> ParseResult:
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        return parse_project_file(handle.read())
