# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Project save/restore helpers."""

from .serializer import (
    SCHEMA_VERSION,
    ParseResult,
    load_project_file,
    parse_project_file,
    project_filename,
    serialize_project,
    strip_pricing,
    write_project_file,
)

__all__ = [
    "SCHEMA_VERSION",
    "ParseResult",
    "load_project_file",
    "parse_project_file",
    "project_filename",
    "serialize_project",
    "strip_pricing",
    "write_project_file",
]
