# Copyright 2026 Cisco Systems, Inc. and its affiliates
#
# SPDX-License-Identifier: Apache-2.0

"""Connection classification and validation."""

from .classifier import (
    ClassifyResult,
    ConnectionIssue,
    ConnectionKind,
    Endpoint,
    classify_connection,
    endpoint_category_for_service,
    resolve_endpoint,
    validate_connections,
)

__all__ = [
    "ClassifyResult",
    "ConnectionIssue",
    "ConnectionKind",
    "Endpoint",
    "classify_connection",
    "endpoint_category_for_service",
    "resolve_endpoint",
    "validate_connections",
]
