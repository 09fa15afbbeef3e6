#!/usr/bin/env python3
"""
KUBESHELL REDACTION POLICY
--------------------------
Decides how one value of a key/value dump is shown by describe.

Secret data is base64 encoded and is only ever summarised by its decoded
size. The single exception is the bearer token of a service account token
secret, which users routinely need to copy verbatim.

Author: KubeShell Team
Date: 2026-10-19
"""

import base64
import binascii
from typing import Any, Optional

from kubeshell.core.settings import SERVICE_ACCOUNT_TOKEN_TYPE

UNDECODABLE = "Could not decode secret"
INVALID_UTF8 = "Invalid utf-8 data"
UNKNOWN = "<unknown>"


def _decode(value: Any) -> Optional[bytes]:
    if not isinstance(value, str):
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


def is_service_token(key: str, secret: bool, resource_type: Optional[str]) -> bool:
    return secret and key == "token" and resource_type == SERVICE_ACCOUNT_TOKEN_TYPE


def render_value(key: str, value: Any, secret: bool, resource_type: Optional[str]) -> str:
    """
    Renders `value` under the policy:
    - service account token: the decoded text
    - any other secret value: "<n> bytes"
    - non-secret maps (labels, annotations): the value as-is
    """
    if not secret:
        return value if isinstance(value, str) else UNKNOWN

    decoded = _decode(value)
    if decoded is None:
        return UNDECODABLE

    if is_service_token(key, secret, resource_type):
        try:
            return decoded.decode("utf-8")
        except UnicodeDecodeError:
            return INVALID_UTF8

    return f"{len(decoded)} bytes"
