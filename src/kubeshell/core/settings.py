#!/usr/bin/env python3
"""
KUBESHELL SETTINGS
------------------
Static configuration shared by the projections. Per-kind column maps live
with their kind in kubeshell.resources.columns.

Author: KubeShell Team
Date: 2026-10-19
"""

from typing import FrozenSet

# Title of the synthetic leading index column in list output
INDEX_TITLE = "####"

# Keys never printed by key/value dumps in describe output
DESCRIBE_SKIP_KEYS: FrozenSet[str] = frozenset({
    "kubectl.kubernetes.io/last-applied-configuration",
})

# Built-in columns resolved from metadata, bypassing extractor registries
BUILTIN_COLUMNS = ("Name", "Namespace", "Age", "Labels")

SERVICE_ACCOUNT_TOKEN_TYPE = "kubernetes.io/service-account-token"
